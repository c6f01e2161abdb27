"""Lazily launched Chromium shared across renders.

The first ``get_page()`` call starts Playwright and launches the browser;
later calls only open a new page on it.  The browser stays up until
``close()`` / ``shutdown()`` or process exit, so warm calls skip the launch.
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable

from loguru import logger

from roughchart.browser.options import LaunchOptions, get_launch_options
from roughchart.settings import ChartSettings

OptionsFactory = Callable[[Any], Awaitable[LaunchOptions]]


def _start_playwright() -> Awaitable[Any]:
    from playwright.async_api import async_playwright

    return async_playwright().start()


class PageProvider:
    """Owns one browser and hands out fresh pages.

    * Launches Chromium on first ``get_page()`` call, reuses it afterwards.
    * A failed launch leaves nothing cached; the next call tries again.
    * A disconnected browser (crash, killed process) is relaunched.
    * A browser launched on an earlier event loop (one ``asyncio.run`` per
      request) is dropped and relaunched on the current loop.
    """

    def __init__(
        self,
        settings: ChartSettings | None = None,
        *,
        options_factory: OptionsFactory | None = None,
        playwright_factory: Callable[[], Awaitable[Any]] | None = None,
    ) -> None:
        self._settings = settings
        self._options_factory = options_factory
        self._playwright_factory = playwright_factory or _start_playwright
        self._pw: Any | None = None
        self._browser: Any | None = None
        # Playwright handles and the lock are tied to the loop that made them
        self._loop: asyncio.AbstractEventLoop | None = None
        self._lock: asyncio.Lock | None = None
        self._lock_loop: asyncio.AbstractEventLoop | None = None

    @property
    def browser(self) -> Any | None:
        return self._browser

    # ── Lifecycle ────────────────────────────────────────

    def _get_lock(self) -> asyncio.Lock:
        """Return the lock for the running loop, creating it on a new loop."""
        loop = asyncio.get_running_loop()
        if self._lock is None or self._lock_loop is not loop:
            self._lock = asyncio.Lock()
            self._lock_loop = loop
        return self._lock

    def _drop_foreign_browser(self) -> None:
        """Forget a browser launched on another (likely closed) event loop.

        Its connection cannot be awaited from this loop, so it is not closed.
        """
        if self._loop is None or self._loop is asyncio.get_running_loop():
            return
        if self._browser is not None:
            logger.warning("PageProvider: browser belongs to another event loop, relaunching")
        self._browser = None
        self._pw = None
        self._loop = None

    async def _ensure_browser(self) -> Any:
        """Launch Chromium on first call, reuse afterwards."""
        async with self._get_lock():
            self._drop_foreign_browser()
            if self._browser is not None and self._browser.is_connected():
                return self._browser
            if self._browser is not None:
                logger.warning("PageProvider: browser disconnected, relaunching")
                await self._teardown()

            pw = await self._playwright_factory()
            try:
                if self._options_factory is not None:
                    options = await self._options_factory(pw.chromium)
                else:
                    options = await get_launch_options(pw.chromium, self._settings)
                browser = await pw.chromium.launch(**options.to_launch_kwargs())
            except BaseException:
                await pw.stop()
                raise

            self._pw = pw
            self._browser = browser
            self._loop = asyncio.get_running_loop()
            logger.info(
                f"PageProvider: Chromium launched (headless={options.headless}, "
                f"executable={options.executable_path or 'bundled'})"
            )
            return browser

    async def get_page(self, **page_options: Any) -> Any:
        """Return a new page on the shared browser.

        *page_options* go to ``Browser.new_page`` (``viewport``,
        ``device_scale_factor``, ...).  Each page gets its own context, which
        closes with the page.
        """
        browser = await self._ensure_browser()
        return await browser.new_page(**page_options)

    async def _teardown(self) -> None:
        browser, pw = self._browser, self._pw
        self._browser = None
        self._pw = None
        self._loop = None
        try:
            if browser is not None:
                await browser.close()
        finally:
            if pw is not None:
                await pw.stop()

    async def close(self) -> None:
        """Shut down the browser and the Playwright driver."""
        async with self._get_lock():
            self._drop_foreign_browser()
            if self._browser is None and self._pw is None:
                return
            await self._teardown()
            logger.info("PageProvider: Chromium closed")


# ── Module-level default provider ─────────────────────

_provider: PageProvider | None = None


def get_provider() -> PageProvider:
    """Return the process-wide provider, creating it lazily."""
    global _provider
    if _provider is None:
        _provider = PageProvider()
    return _provider


async def get_page(**page_options: Any) -> Any:
    """Open a page on the process-wide browser."""
    return await get_provider().get_page(**page_options)


async def shutdown() -> None:
    """Close the process-wide browser, if one was launched."""
    global _provider
    if _provider is None:
        return
    provider, _provider = _provider, None
    await provider.close()
