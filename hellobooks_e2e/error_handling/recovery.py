"""
Retries for the strict steps a scenario depends on.

Scenario steps themselves soft-fail into annotations; this module is for the
operations that must succeed before a scenario can start at all, such as
signing in with the seed account.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar

from .exceptions import NonRetryableError, RecoveryError, RetryableError

logger = logging.getLogger(__name__)

T = TypeVar('T')


class LinearBackoffStrategy:
    """Waits one increment longer before each retry, up to a cap."""

    def __init__(
        self,
        delay_increment_ms: int = 1000,
        max_delay_ms: int = 10000,
        max_attempts: int = 3
    ):
        self.delay_increment_ms = delay_increment_ms
        self.max_delay_ms = max_delay_ms
        self.max_attempts = max_attempts

    def get_delay_ms(self, failed_attempts: int) -> int:
        return min(self.delay_increment_ms * failed_attempts, self.max_delay_ms)

    def should_retry(self, error: Exception, failed_attempts: int) -> bool:
        """Only retryable errors, and only while attempts remain."""
        return isinstance(error, RetryableError) and failed_attempts < self.max_attempts


class RecoveryManager:
    """Runs an async operation until it succeeds or its strategy gives up."""

    def __init__(self, default_strategy: Optional[LinearBackoffStrategy] = None):
        self.default_strategy = default_strategy or LinearBackoffStrategy()

    async def execute_with_recovery(
        self,
        operation: Callable[..., Awaitable[T]],
        operation_name: str,
        *args: Any,
        retry_strategy: Optional[LinearBackoffStrategy] = None,
        **kwargs: Any
    ) -> T:
        """
        Await ``operation(*args, **kwargs)``, retrying retryable errors.

        Args:
            operation: Async function to execute
            operation_name: Name used in log messages
            retry_strategy: Overrides the manager's default strategy

        Raises:
            NonRetryableError: Re-raised unchanged on the first occurrence
            RecoveryError: Once the strategy stops retrying
        """
        strategy = retry_strategy or self.default_strategy
        failed_attempts = 0

        while True:
            try:
                return await operation(*args, **kwargs)
            except NonRetryableError:
                raise
            except Exception as e:
                failed_attempts += 1
                if isinstance(e, RetryableError):
                    e.increment_retry()

                if not strategy.should_retry(e, failed_attempts):
                    logger.error(
                        f"{operation_name} failed after {failed_attempts} attempt(s)",
                        extra={"error": str(e)}
                    )
                    raise RecoveryError(
                        f"All recovery attempts failed for {operation_name}",
                        recovery_strategy=type(strategy).__name__,
                        original_error=e
                    ) from e

                delay_ms = strategy.get_delay_ms(failed_attempts)
                logger.warning(
                    f"Retrying {operation_name} in {delay_ms}ms "
                    f"(attempt {failed_attempts + 1} of {strategy.max_attempts})",
                    extra={"error": str(e)}
                )
                await asyncio.sleep(delay_ms / 1000)
