"""Playwright stand-ins shared by the test modules."""

from __future__ import annotations

from typing import Any

import pytest

from roughchart.browser.options import LaunchOptions
from roughchart.browser.page import PageProvider

# 1x1 transparent PNG
PNG_BYTES = bytes.fromhex(
    "89504e470d0a1a0a0000000d4948445200000001000000010806000000"
    "1f15c4890000000d49444154789c6360000002000154a24f5d0000000049454e44ae426082"
)


class FakeElementHandle:
    def __init__(self) -> None:
        self.screenshot_kwargs: dict[str, Any] | None = None
        self.disposed = 0
        self.dispose_error: BaseException | None = None

    async def screenshot(self, **kwargs: Any) -> bytes:
        self.screenshot_kwargs = kwargs
        return PNG_BYTES

    async def dispose(self) -> None:
        self.disposed += 1
        if self.dispose_error is not None:
            raise self.dispose_error


class FakePage:
    def __init__(self, options: dict[str, Any]) -> None:
        self.options = options
        self.handlers: dict[str, Any] = {}
        self.content: str | None = None
        self.waited_for: list[tuple[str, dict[str, Any]]] = []
        self.handle: FakeElementHandle | None = FakeElementHandle()
        self.closed = 0
        self.wait_error: BaseException | None = None
        self.js_error: str | None = None

    def on(self, event: str, handler: Any) -> None:
        self.handlers[event] = handler

    async def set_content(self, html: str, **kwargs: Any) -> None:
        self.content = html

    async def wait_for_selector(self, selector: str, **kwargs: Any) -> None:
        self.waited_for.append((selector, kwargs))
        if self.js_error is not None:
            self.handlers["pageerror"](Exception(self.js_error))
        if self.wait_error is not None:
            raise self.wait_error

    async def query_selector(self, selector: str) -> FakeElementHandle | None:
        return self.handle

    async def close(self) -> None:
        self.closed += 1


class FakeBrowser:
    def __init__(self, chromium: FakeChromium | None = None) -> None:
        self.chromium = chromium
        self.pages: list[FakePage] = []
        self.connected = True
        self.closed = 0
        self.page_setup: Any = None

    def is_connected(self) -> bool:
        return self.connected

    async def new_page(self, **kwargs: Any) -> FakePage:
        page = FakePage(kwargs)
        page_setup = self.page_setup
        if page_setup is None and self.chromium is not None:
            page_setup = self.chromium.page_setup
        if page_setup is not None:
            page_setup(page)
        self.pages.append(page)
        return page

    async def close(self) -> None:
        self.closed += 1
        self.connected = False


class FakeChromium:
    executable_path = "/opt/chromium/chrome"

    def __init__(self) -> None:
        self.launches: list[dict[str, Any]] = []
        self.browsers: list[FakeBrowser] = []
        self.fail_next: BaseException | None = None
        self.page_setup: Any = None

    async def launch(self, **kwargs: Any) -> FakeBrowser:
        self.launches.append(kwargs)
        if self.fail_next is not None:
            exc, self.fail_next = self.fail_next, None
            raise exc
        browser = FakeBrowser(self)
        self.browsers.append(browser)
        return browser


class FakePlaywright:
    def __init__(self, chromium: FakeChromium) -> None:
        self.chromium = chromium
        self.stopped = 0

    async def stop(self) -> None:
        self.stopped += 1


class FakeDriver:
    """Counts Playwright starts; every start shares one ``FakeChromium``."""

    def __init__(self) -> None:
        self.chromium = FakeChromium()
        self.started: list[FakePlaywright] = []

    async def start(self) -> FakePlaywright:
        pw = FakePlaywright(self.chromium)
        self.started.append(pw)
        return pw


async def _static_options(browser_type: Any) -> LaunchOptions:
    return LaunchOptions(args=["--no-sandbox"], executable_path=browser_type.executable_path)


@pytest.fixture
def driver() -> FakeDriver:
    return FakeDriver()


@pytest.fixture
def provider(driver: FakeDriver) -> PageProvider:
    return PageProvider(options_factory=_static_options, playwright_factory=driver.start)
