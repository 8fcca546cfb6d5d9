"""
Error handling and recovery for the end-to-end suite.
"""

from .exceptions import (
    ApiResponseError,
    BrowserError,
    E2EError,
    LoginError,
    NonRetryableError,
    RecoveryError,
    RetryableError,
)

from .recovery import LinearBackoffStrategy, RecoveryManager

__all__ = [
    # Exceptions
    "E2EError",
    "RetryableError",
    "NonRetryableError",
    "BrowserError",
    "LoginError",
    "ApiResponseError",
    "RecoveryError",

    # Recovery
    "LinearBackoffStrategy",
    "RecoveryManager",
]
