"""
Authentication helpers.
"""

from hellobooks_e2e.auth.login import (
    DASHBOARD_URL_PATTERN,
    LOGIN_URL_PATTERN,
    login_with_retry,
    seed_login,
)

__all__ = [
    "DASHBOARD_URL_PATTERN",
    "LOGIN_URL_PATTERN",
    "login_with_retry",
    "seed_login",
]
