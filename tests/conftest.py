"""Pytest configuration for tests.

Sets up Python path and fixtures for all tests.
"""

import sys
from pathlib import Path

import pytest

# Add project root to Python path so imports work correctly
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


@pytest.fixture(autouse=True)
def reset_config_cache():
    """Drop cached configuration so environment patches in one test never leak."""
    from application.services.config_service import get_config_service

    get_config_service().clear_cache()
    yield
    get_config_service().clear_cache()
