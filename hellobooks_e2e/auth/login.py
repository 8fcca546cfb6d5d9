"""
Seed account login.

Every scenario starts from a signed-in session created by ``seed_login``.
Login is strict: unlike the soft-fail helpers, any step that does not
complete raises and the scenario never starts.
"""

import re
import time
from typing import Optional

from playwright.async_api import Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from hellobooks_e2e.config.settings import Settings, get_settings
from hellobooks_e2e.error_handling import (
    BrowserError,
    LinearBackoffStrategy,
    LoginError,
    RecoveryManager,
)
from hellobooks_e2e.monitoring.logger import get_logger, log_performance_metric

logger = get_logger(__name__)

LOGIN_PATH = "/login"
EMAIL_LABEL = re.compile(r"email", re.IGNORECASE)
PASSWORD_LABEL = re.compile(r"password", re.IGNORECASE)
LOGIN_BUTTON_NAME = re.compile(r"sign in|log in|login|submit", re.IGNORECASE)

# Routes the app lands on after a successful sign-in
DASHBOARD_URL_PATTERN = re.compile(r"/(banking|dashboard|home)")
LOGIN_URL_PATTERN = re.compile(r"/login", re.IGNORECASE)


async def seed_login(page: Page, settings: Optional[Settings] = None) -> None:
    """
    Sign in with the seed account.

    Args:
        page: Page to sign in on
        settings: Suite settings (defaults to the cached settings)

    Raises:
        LoginError: If no credentials are configured
    """
    settings = settings or get_settings()
    if not settings.has_credentials:
        raise LoginError(
            "Seed login credentials are not configured "
            "(set LOGIN_EMAIL and LOGIN_PASSWORD)",
            email=settings.login_email or None,
        )

    timeout = settings.action_timeout_ms
    logger.info("Signing in", extra={"url": settings.url_for(LOGIN_PATH)})
    started = time.monotonic()

    await page.goto(settings.url_for(LOGIN_PATH), timeout=timeout)
    await page.wait_for_load_state("networkidle", timeout=timeout)

    email_input = page.get_by_label(EMAIL_LABEL)
    await email_input.wait_for(state="visible", timeout=timeout)
    await email_input.fill(settings.login_email, timeout=timeout)

    password_input = page.get_by_label(PASSWORD_LABEL)
    await password_input.wait_for(state="visible", timeout=timeout)
    await password_input.fill(settings.login_password, timeout=timeout)

    login_button = page.get_by_role("button", name=LOGIN_BUTTON_NAME)
    await login_button.wait_for(state="visible", timeout=timeout)
    await login_button.click(timeout=timeout)

    await page.wait_for_load_state("networkidle", timeout=timeout)
    log_performance_metric("seed_login", (time.monotonic() - started) * 1000)


async def login_with_retry(
    page: Page,
    settings: Optional[Settings] = None,
    manager: Optional[RecoveryManager] = None,
    max_attempts: int = 2,
) -> None:
    """
    ``seed_login`` with retries on browser timeouts.

    Missing credentials are not retried.

    Raises:
        LoginError: If no credentials are configured
        RecoveryError: If every attempt timed out
    """
    settings = settings or get_settings()
    manager = manager or RecoveryManager()

    async def attempt() -> None:
        try:
            await seed_login(page, settings)
        except PlaywrightTimeoutError as e:
            raise BrowserError(
                f"Login did not complete: {e}",
                url=settings.url_for(LOGIN_PATH),
                action="login",
                max_retries=max_attempts,
                cause=e,
            ) from e

    await manager.execute_with_recovery(
        attempt,
        "seed_login",
        retry_strategy=LinearBackoffStrategy(max_attempts=max_attempts),
    )
