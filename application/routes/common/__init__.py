"""
Common utilities for route handlers.

Provides shared functionality to reduce code duplication:
- Rate limiting utilities
- Response formatting
- Request validation
- Constants
"""
