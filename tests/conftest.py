"""
Shared fixtures for the unit tests.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from hellobooks_e2e.config.settings import Settings, get_settings
from hellobooks_e2e.core.annotations import AnnotationLog

pytest_plugins = ["pytester"]


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Keep the developer's environment out of Settings()."""
    for name in Settings.model_fields:
        monkeypatch.delenv(name.upper(), raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def unit_settings(tmp_path):
    """Settings with short timeouts and artifacts under tmp_path."""
    return Settings(
        _env_file=None,
        login_email="qa@example.com",
        login_password="s3cret-pass",
        reports_dir=tmp_path / "reports",
        screenshots_dir=tmp_path / "reports" / "screenshots",
        traces_dir=tmp_path / "reports" / "traces",
    )


def make_locator(visible: bool = True, count: int = 1, text: str = "") -> MagicMock:
    """
    A Playwright Locator double.

    ``wait_for`` raises a Playwright timeout when ``visible`` is False;
    chained locator calls return the same double.
    """
    from playwright.async_api import TimeoutError as PlaywrightTimeoutError

    locator = MagicMock(name="Locator")
    locator.first = locator
    locator.last = locator
    locator.nth.return_value = locator
    locator.filter.return_value = locator
    locator.locator.return_value = locator
    locator.get_by_role.return_value = locator
    locator.get_by_text.return_value = locator
    if visible:
        locator.wait_for = AsyncMock()
    else:
        locator.wait_for = AsyncMock(side_effect=PlaywrightTimeoutError("Timeout 5000ms exceeded"))
    locator.scroll_into_view_if_needed = AsyncMock()
    locator.click = AsyncMock()
    locator.clear = AsyncMock()
    locator.fill = AsyncMock()
    locator.count = AsyncMock(return_value=count)
    locator.inner_text = AsyncMock(return_value=text)
    locator.is_visible = AsyncMock(return_value=visible)
    return locator


@pytest.fixture
def locator_factory():
    return make_locator


@pytest.fixture
def mock_page():
    """A Playwright Page double whose lookups all return one locator."""
    page = MagicMock(name="Page")
    page.url = "https://dev.hellobooks.ai/payees"
    page.default_locator = make_locator()
    page.locator.return_value = page.default_locator
    page.get_by_role.return_value = page.default_locator
    page.get_by_label.return_value = page.default_locator
    page.get_by_text.return_value = page.default_locator
    page.goto = AsyncMock()
    page.reload = AsyncMock()
    page.wait_for_load_state = AsyncMock()
    page.wait_for_timeout = AsyncMock()
    page.wait_for_url = AsyncMock()
    page.keyboard.press = AsyncMock()
    return page


@pytest.fixture
def annotation_log():
    return AnnotationLog(test_id="tests/unit::test_case")
