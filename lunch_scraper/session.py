"""Headless browser session for scraping a single restaurant.

One :class:`BrowserSession` owns one Chromium process and one fresh browser
context, so cookies and storage never leak between restaurants. Use it as an
async context manager; the browser is closed on every exit path::

    async with BrowserSession(settings) as session:
        await session.navigate(url)
        html = await session.page.content()
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from lunch_scraper.config import ScraperSettings
from lunch_scraper.errors import NavigationError

if TYPE_CHECKING:
    from playwright.async_api import Browser, BrowserContext, Page, Playwright

logger = logging.getLogger(__name__)

# 'domcontentloaded' rather than 'networkidle': sites with analytics
# beacons never go idle
_WAIT_UNTIL = "domcontentloaded"


class BrowserSession:
    """Lifecycle and navigation for one Playwright page."""

    def __init__(self, settings: ScraperSettings | None = None) -> None:
        self.settings = settings or ScraperSettings()
        self.page: Page | None = None
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._context: BrowserContext | None = None

    async def __aenter__(self) -> BrowserSession:
        try:
            await self.acquire()
        except BaseException:
            await self.release()
            raise
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.release()

    async def acquire(self) -> Page:
        """Launch Chromium and open a Czech-localised page."""
        from playwright.async_api import async_playwright

        s = self.settings
        self._playwright = await async_playwright().start()
        self._browser = await self._playwright.chromium.launch(
            headless=s.headless,
            # /dev/shm is tiny in CI containers
            args=["--disable-dev-shm-usage"],
        )
        self._context = await self._browser.new_context(
            locale=s.locale,
            timezone_id=s.timezone_id,
            extra_http_headers={"Accept-Language": s.accept_language},
        )
        self.page = await self._context.new_page()
        self.page.set_default_navigation_timeout(s.navigation_timeout_ms)
        self.page.set_default_timeout(s.action_timeout_ms)
        logger.debug("Browser session acquired (locale=%s)", s.locale)
        return self.page

    async def add_cookies(self, cookies: list[dict[str, str]]) -> None:
        """Install cookies before the first navigation."""
        if not cookies:
            return
        if self._context is None:
            raise RuntimeError("Session not acquired")
        await self._context.add_cookies(cookies)

    async def navigate(self, url: str, attempts: int | None = None) -> None:
        """Load *url*, retrying with linearly increasing back-off.

        Attempt *n* that fails waits ``n * retry_base_delay`` seconds before
        the next one. Raises :class:`NavigationError` once all attempts fail.
        """
        if self.page is None:
            raise RuntimeError("Session not acquired")
        attempts = attempts or self.settings.navigation_attempts

        last_error: Exception | None = None
        for attempt in range(1, attempts + 1):
            try:
                await self.page.goto(url, wait_until=_WAIT_UNTIL)
                return
            except Exception as exc:
                last_error = exc
                logger.warning(
                    "Navigation attempt %d/%d failed for %s: %s",
                    attempt,
                    attempts,
                    url,
                    exc,
                )
                if attempt < attempts:
                    await asyncio.sleep(attempt * self.settings.retry_base_delay)

        raise NavigationError(url, attempts) from last_error

    async def settle(self) -> None:
        """Give client-side rendering a moment after navigation."""
        if self.page is not None and self.settings.settle_delay_ms:
            await self.page.wait_for_timeout(self.settings.settle_delay_ms)

    async def release(self) -> None:
        """Close page, context, browser and driver. Safe to call twice."""
        page, self.page = self.page, None
        context, self._context = self._context, None
        browser, self._browser = self._browser, None
        playwright, self._playwright = self._playwright, None

        for closer in (page, context, browser):
            if closer is None:
                continue
            try:
                await closer.close()
            except Exception:
                logger.debug("Error while closing %r", closer, exc_info=True)
        if playwright is not None:
            try:
                await playwright.stop()
            except Exception:
                logger.debug("Error while stopping Playwright", exc_info=True)
