"""
Tests for seed account login.
"""

from unittest.mock import AsyncMock, call, patch

import pytest
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from hellobooks_e2e.auth import DASHBOARD_URL_PATTERN, login_with_retry, seed_login
from hellobooks_e2e.auth.login import (
    EMAIL_LABEL,
    LOGIN_BUTTON_NAME,
    LOGIN_URL_PATTERN,
    PASSWORD_LABEL,
)
from hellobooks_e2e.config.settings import Settings
from hellobooks_e2e.error_handling import LoginError, RecoveryError


class TestPatterns:

    @pytest.mark.parametrize("path", ["/banking", "/dashboard", "/home/overview"])
    def test_dashboard_routes(self, path):
        assert DASHBOARD_URL_PATTERN.search(f"https://dev.hellobooks.ai{path}")

    def test_login_route(self):
        assert LOGIN_URL_PATTERN.search("https://dev.hellobooks.ai/Login?next=/payees")
        assert not DASHBOARD_URL_PATTERN.search("https://dev.hellobooks.ai/login")

    @pytest.mark.parametrize("name", ["Sign In", "Log in", "LOGIN", "Submit"])
    def test_button_names(self, name):
        assert LOGIN_BUTTON_NAME.search(name)


class TestSeedLogin:

    @pytest.mark.asyncio
    async def test_fills_and_submits(self, mock_page, unit_settings):
        await seed_login(mock_page, unit_settings)

        mock_page.goto.assert_awaited_once_with(
            "https://dev.hellobooks.ai/login", timeout=180000
        )
        assert mock_page.get_by_label.call_args_list == [call(EMAIL_LABEL), call(PASSWORD_LABEL)]
        assert mock_page.default_locator.fill.await_args_list == [
            call("qa@example.com", timeout=180000),
            call("s3cret-pass", timeout=180000),
        ]
        mock_page.get_by_role.assert_called_once_with("button", name=LOGIN_BUTTON_NAME)
        mock_page.default_locator.click.assert_awaited_once_with(timeout=180000)
        assert mock_page.wait_for_load_state.await_count == 2

    @pytest.mark.asyncio
    async def test_missing_credentials(self, mock_page):
        settings = Settings(_env_file=None, login_email="qa@example.com")

        with pytest.raises(LoginError, match="LOGIN_EMAIL and LOGIN_PASSWORD") as exc_info:
            await seed_login(mock_page, settings)

        assert exc_info.value.email == "qa@example.com"
        mock_page.goto.assert_not_awaited()


class TestLoginWithRetry:

    @pytest.fixture(autouse=True)
    def no_sleep(self):
        with patch(
            "hellobooks_e2e.error_handling.recovery.asyncio.sleep",
            new_callable=AsyncMock,
        ) as mock_sleep:
            yield mock_sleep

    @pytest.mark.asyncio
    async def test_retries_timeout_then_succeeds(self, mock_page, unit_settings):
        mock_page.goto.side_effect = [PlaywrightTimeoutError("Timeout 180000ms exceeded"), None]

        await login_with_retry(mock_page, unit_settings)

        assert mock_page.goto.await_count == 2

    @pytest.mark.asyncio
    async def test_gives_up_after_max_attempts(self, mock_page, unit_settings):
        mock_page.goto.side_effect = PlaywrightTimeoutError("Timeout 180000ms exceeded")

        with pytest.raises(RecoveryError) as exc_info:
            await login_with_retry(mock_page, unit_settings, max_attempts=3)

        assert mock_page.goto.await_count == 3
        assert exc_info.value.original_error.action == "login"

    @pytest.mark.asyncio
    async def test_missing_credentials_not_retried(self, mock_page):
        with pytest.raises(LoginError):
            await login_with_retry(mock_page, Settings(_env_file=None))

        mock_page.goto.assert_not_awaited()
