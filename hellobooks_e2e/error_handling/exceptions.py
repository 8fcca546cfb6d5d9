"""
Custom exception hierarchy for the end-to-end suite.

Separates errors worth retrying (flaky browser or network behaviour) from
errors that no amount of retrying will fix (bad credentials, an API that
answered with the wrong status).
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional


class E2EError(Exception):
    """Base exception for all suite errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        self.cause = cause
        self.timestamp = datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
            "timestamp": self.timestamp.isoformat(),
            "cause": str(self.cause) if self.cause else None
        }


class RetryableError(E2EError):
    """Base class for errors that can be retried."""

    def __init__(
        self,
        message: str,
        max_retries: int = 3,
        retry_delay_ms: int = 1000,
        **kwargs
    ):
        super().__init__(message, **kwargs)
        self.max_retries = max_retries
        self.retry_delay_ms = retry_delay_ms
        self.retry_count = 0

    def increment_retry(self) -> None:
        """Increment retry counter."""
        self.retry_count += 1

    def can_retry(self) -> bool:
        """Check if error can be retried."""
        return self.retry_count < self.max_retries


class NonRetryableError(E2EError):
    """Base class for errors that should not be retried."""
    pass


class BrowserError(RetryableError):
    """Error related to browser automation."""

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        selector: Optional[str] = None,
        action: Optional[str] = None,
        **kwargs
    ):
        super().__init__(message, **kwargs)
        self.url = url
        self.selector = selector
        self.action = action
        self.details.update({
            "url": url,
            "selector": selector,
            "action": action
        })


class LoginError(NonRetryableError):
    """The seed account could not sign in."""

    def __init__(self, message: str, email: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.email = email
        self.details["email"] = email


class ApiResponseError(NonRetryableError):
    """A REST endpoint answered with an unexpected status or body."""

    def __init__(
        self,
        message: str,
        url: str,
        status: int,
        body: Any = None,
        **kwargs
    ):
        super().__init__(message, **kwargs)
        self.url = url
        self.status = status
        self.body = body
        self.details.update({
            "url": url,
            "status": status,
        })


class RecoveryError(E2EError):
    """Error raised when recovery strategies fail."""

    def __init__(
        self,
        message: str,
        recovery_strategy: str,
        original_error: Optional[Exception] = None,
        **kwargs
    ):
        super().__init__(message, cause=original_error, **kwargs)
        self.recovery_strategy = recovery_strategy
        self.original_error = original_error
        self.details.update({
            "recovery_strategy": recovery_strategy,
            "original_error": str(original_error) if original_error else None
        })
