"""
Playwright browser driver: one browser, one context, one page per test.
"""

from pathlib import Path
from typing import Optional

from playwright.async_api import (
    APIRequestContext,
    Browser,
    BrowserContext,
    Page,
    Playwright,
    async_playwright,
)

from hellobooks_e2e.config.settings import Settings, get_settings
from hellobooks_e2e.monitoring.logger import get_logger


class PlaywrightDriver:
    """Owns the Playwright lifecycle for a single test."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        headless: Optional[bool] = None,
    ) -> None:
        """
        Initialize the Playwright driver.

        Args:
            settings: Suite settings (defaults to the cached settings)
            headless: Override for headless mode
        """
        self.settings = settings or get_settings()
        self.headless = headless if headless is not None else self.settings.browser_headless

        self.logger = get_logger("browser.driver")
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None
        self._tracing = False

    async def start(self) -> Page:
        """
        Start the browser, open a context and return its page.

        Anything already started is torn down again if a later step fails.
        """
        try:
            return await self._start()
        except Exception:
            await self.stop()
            raise

    async def _start(self) -> Page:
        if self._playwright is None:
            self._playwright = await async_playwright().start()

        if self._browser is None:
            self.logger.info(
                "Starting browser",
                extra={
                    "headless": self.headless,
                    "viewport": f"{self.settings.browser_viewport_width}x"
                                f"{self.settings.browser_viewport_height}",
                },
            )
            self._browser = await self._playwright.chromium.launch(
                headless=self.headless,
                slow_mo=self.settings.browser_slow_mo_ms,
                args=["--disable-dev-shm-usage"],
            )

        if self._context is None:
            self._context = await self._browser.new_context(
                base_url=self.settings.base_url,
                viewport={
                    "width": self.settings.browser_viewport_width,
                    "height": self.settings.browser_viewport_height,
                },
            )
            self._context.set_default_timeout(self.settings.action_timeout_ms)
            self._context.set_default_navigation_timeout(
                self.settings.navigation_timeout_ms
            )

            if self.settings.trace_mode != "off":
                await self._context.tracing.start(
                    screenshots=True, snapshots=True, sources=False
                )
                self._tracing = True

        if self._page is None:
            self._page = await self._context.new_page()

        return self._page

    async def stop(self, trace_path: Optional[Path] = None) -> Optional[Path]:
        """
        Stop the browser and cleanup resources.

        Every handle is released even when an earlier step raises. The error
        propagates once the remaining handles are closed.

        Args:
            trace_path: Where to keep the trace archive; None discards it

        Returns:
            The trace path if a trace was written
        """
        written: Optional[Path] = None

        try:
            if self._context and self._tracing:
                self._tracing = False
                if trace_path is not None:
                    trace_path.parent.mkdir(parents=True, exist_ok=True)
                    await self._context.tracing.stop(path=str(trace_path))
                    written = trace_path
                else:
                    await self._context.tracing.stop()
        finally:
            await self._close_handles()

        self.logger.info("Browser stopped")
        return written

    async def _close_handles(self) -> None:
        page, self._page = self._page, None
        context, self._context = self._context, None
        browser, self._browser = self._browser, None
        playwright, self._playwright = self._playwright, None

        try:
            if page:
                await page.close()
        finally:
            try:
                if context:
                    await context.close()
            finally:
                try:
                    if browser:
                        await browser.close()
                finally:
                    if playwright:
                        await playwright.stop()

    @property
    def page(self) -> Page:
        if self._page is None:
            raise RuntimeError("Browser not started. Call start() first.")
        return self._page

    @property
    def request(self) -> APIRequestContext:
        """API request context sharing the page's cookies."""
        if self._context is None:
            raise RuntimeError("Browser not started. Call start() first.")
        return self._context.request

    @property
    def is_running(self) -> bool:
        return self._page is not None

    async def save_screenshot(self, path: Path) -> Path:
        """
        Save a full-page screenshot to file.

        Args:
            path: Path to save the screenshot
        """
        path.parent.mkdir(parents=True, exist_ok=True)
        self.logger.info("Saving screenshot", extra={"path": str(path)})
        await self.page.screenshot(path=str(path), type="png", full_page=True)
        return path

    async def __aenter__(self) -> "PlaywrightDriver":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.stop()
