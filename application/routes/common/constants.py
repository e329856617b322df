"""
Constants used across route handlers.

Centralizes magic numbers and configuration values to improve maintainability.
"""

# ============================================================================
# Rate Limiting Defaults
# ============================================================================

# Rate limit for read endpoints (requests per minute)
RATE_LIMIT_STANDARD = 100

# Rate limit for batch commits (requests per minute, per user)
RATE_LIMIT_BATCH_COMMIT = 10

# ============================================================================
# GitHub Actions
# ============================================================================

# Number of jobs listed for the latest workflow run
ACTIONS_JOBS_PER_PAGE = 20
