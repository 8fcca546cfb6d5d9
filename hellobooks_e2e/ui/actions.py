"""
Soft-fail page helpers.

Every helper here follows the same contract: try the UI step within a short
timeout and, if the element never shows up or the interaction fails, record
a note on the test's ``AnnotationLog`` instead of raising. Strict checks
(``wait_for_page_ready`` with a route, ``expect`` in the scenarios) still
raise.
"""

import re
from typing import Awaitable, Callable, Optional, Pattern, Union

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator, Page, expect

from hellobooks_e2e.config.settings import Settings, get_settings
from hellobooks_e2e.core.annotations import AnnotationLog
from hellobooks_e2e.monitoring.logger import get_logger
from hellobooks_e2e.ui import selectors

logger = get_logger(__name__)

# What a soft-fail helper is allowed to swallow
SOFT_FAILURES = (PlaywrightError, AssertionError)

TextPattern = Union[str, Pattern[str]]


def text_regex(text: str) -> Pattern[str]:
    """Escape regex metacharacters and return a case-insensitive pattern."""
    return re.compile(re.escape(text), re.IGNORECASE)


class PageActions:
    """Soft-fail helpers bound to one page and one test's annotations."""

    def __init__(
        self,
        page: Page,
        annotations: AnnotationLog,
        settings: Optional[Settings] = None,
    ) -> None:
        self.page = page
        self.annotations = annotations
        self.settings = settings or get_settings()

    def note(self, description: str) -> None:
        self.annotations.note(description)

    @staticmethod
    async def _scroll_into_view(locator: Locator) -> None:
        try:
            await locator.scroll_into_view_if_needed()
        except PlaywrightError:
            pass

    async def optional_action(
        self,
        locator: Locator,
        action: Callable[[], Awaitable[object]],
        note: str,
    ) -> bool:
        """
        Run ``action`` once ``locator`` is visible; note and continue otherwise.

        Returns:
            True if the action ran to completion
        """
        target = locator.first
        try:
            await target.wait_for(
                state="visible", timeout=self.settings.optional_action_timeout_ms
            )
            await self._scroll_into_view(target)
            await action()
            return True
        except SOFT_FAILURES:
            self.note(note)
            return False

    async def safe_expect_visible(
        self,
        locator: Locator,
        note: str,
        timeout: Optional[int] = None,
    ) -> bool:
        """Visibility assertion that records ``note`` instead of failing."""
        if timeout is None:
            timeout = self.settings.safe_expect_timeout_ms
        try:
            await expect(locator).to_be_visible(timeout=timeout)
            return True
        except SOFT_FAILURES:
            self.note(note)
            return False

    async def appears(self, locator: Locator, timeout: int) -> bool:
        """Whether ``locator`` becomes visible within ``timeout``; never notes."""
        try:
            await locator.wait_for(state="visible", timeout=timeout)
            return True
        except PlaywrightError:
            return False

    async def wait_for_page_ready(self, expected_route: Optional[str] = None) -> None:
        """
        Wait for the DOM, then best-effort network idle.

        Args:
            expected_route: Regex the URL must match; a mismatch raises
        """
        await self.page.wait_for_load_state("domcontentloaded")
        try:
            await self.page.wait_for_load_state("networkidle")
        except PlaywrightError:
            logger.debug("Network did not go idle", extra={"url": self.page.url})
        if expected_route:
            await expect(self.page).to_have_url(
                re.compile(expected_route), timeout=self.settings.route_timeout_ms
            )

    async def fill_field(self, selector: str, value: str, field_name: str) -> bool:
        """Clear and fill the first field matching ``selector``."""
        field = self.page.locator(selector).first
        try:
            await field.wait_for(state="visible", timeout=self.settings.field_timeout_ms)
            await self._scroll_into_view(field)
            await field.clear()
            await field.fill(value)
            return True
        except SOFT_FAILURES:
            self.note(f"Could not fill {field_name}")
            return False

    async def click_button(
        self,
        name: TextPattern,
        note: str,
        scope: Optional[Union[Page, Locator]] = None,
    ) -> bool:
        """Click the first button whose accessible name matches ``name``."""
        button = (scope or self.page).get_by_role("button", name=name).first
        try:
            await button.wait_for(state="visible", timeout=self.settings.field_timeout_ms)
            await self._scroll_into_view(button)
            await button.click()
            return True
        except SOFT_FAILURES:
            self.note(note)
            return False

    async def select_option(
        self,
        trigger_selector: str,
        option_text: str,
        field_name: str,
    ) -> bool:
        """Open a dropdown and pick the option whose name matches ``option_text``."""
        try:
            option_name = re.compile(option_text, re.IGNORECASE)
            trigger = self.page.locator(trigger_selector).first
            await trigger.wait_for(state="visible", timeout=self.settings.field_timeout_ms)
            await trigger.click()
            await self.page.wait_for_timeout(self.settings.dropdown_settle_ms)
            await self.page.get_by_role("option", name=option_name).first.click()
            return True
        except (re.error, *SOFT_FAILURES):
            self.note(f"Could not select {field_name}")
            return False

    async def first_row(self) -> Optional[Locator]:
        """First table row that is not an empty-state placeholder."""
        row = (
            self.page.locator(selectors.TABLE_ROW)
            .filter(has_not_text=selectors.EMPTY_ROW_TEXT)
            .first
        )
        if await row.count():
            await self._scroll_into_view(row)
            return row
        return None

    def rows_matching(self, text: str) -> Locator:
        """Rows whose text contains ``text`` literally, case-insensitive."""
        return self.page.locator(selectors.TABLE_ROW).filter(has_text=text_regex(text))

    async def wait_for_toast(
        self,
        pattern: TextPattern,
        timeout: Optional[int] = None,
    ) -> bool:
        """Whether a toast containing ``pattern`` shows up; never notes."""
        if timeout is None:
            timeout = self.settings.toast_timeout_ms
        toast = self.page.locator(selectors.TOAST).filter(has_text=pattern).first
        return await self.appears(toast, timeout)

    @staticmethod
    async def cell_text(row: Locator) -> str:
        """Trimmed text of a row's first cell, or an empty string."""
        try:
            return (await row.locator(selectors.TABLE_CELL).first.inner_text()).strip()
        except PlaywrightError:
            return ""
