"""Browser launch options, chosen from the execution environment.

Development (``NOW_REGION`` is the dev region) and debug (``DEBUG`` set) runs
use the Chrome installed on the host.  Everything else gets Playwright's
bundled Chromium with flags tuned for small serverless containers.
"""

from __future__ import annotations

import sys
from typing import Any

from pydantic import BaseModel, ConfigDict

from roughchart.settings import ChartSettings, get_settings

# Flags for constrained containers (no /dev/shm, no sandbox, no GPU)
SERVERLESS_ARGS: tuple[str, ...] = (
    "--autoplay-policy=user-gesture-required",
    "--disable-background-networking",
    "--disable-background-timer-throttling",
    "--disable-backgrounding-occluded-windows",
    "--disable-breakpad",
    "--disable-client-side-phishing-detection",
    "--disable-component-update",
    "--disable-default-apps",
    "--disable-dev-shm-usage",
    "--disable-domain-reliability",
    "--disable-extensions",
    "--disable-features=AudioServiceOutOfProcess",
    "--disable-hang-monitor",
    "--disable-ipc-flooding-protection",
    "--disable-notifications",
    "--disable-offer-store-unmasked-wallet-cards",
    "--disable-popup-blocking",
    "--disable-print-preview",
    "--disable-prompt-on-repost",
    "--disable-renderer-backgrounding",
    "--disable-setuid-sandbox",
    "--disable-speech-api",
    "--disable-sync",
    "--disk-cache-size=33554432",
    "--hide-scrollbars",
    "--ignore-gpu-blocklist",
    "--metrics-recording-only",
    "--mute-audio",
    "--no-default-browser-check",
    "--no-first-run",
    "--no-pings",
    "--no-sandbox",
    "--no-zygote",
    "--password-store=basic",
    "--use-gl=swiftshader",
    "--use-mock-keychain",
)


class LaunchOptions(BaseModel):
    """Arguments for ``BrowserType.launch``."""

    model_config = ConfigDict(frozen=True)

    args: list[str]
    executable_path: str | None = None
    headless: bool = True

    def to_launch_kwargs(self) -> dict[str, Any]:
        return self.model_dump()


def local_chrome_path(settings: ChartSettings, platform: str | None = None) -> str:
    """Return the path of the Chrome install expected on a developer machine."""
    platform = platform or sys.platform
    if platform == "win32":
        return settings.chrome_path_windows
    if platform == "darwin":
        return settings.chrome_path_macos
    return settings.chrome_path_linux


async def get_launch_options(
    browser_type: Any | None = None,
    settings: ChartSettings | None = None,
) -> LaunchOptions:
    """Pick launch options for the current environment.

    *browser_type* is the Playwright ``chromium`` object; it is only consulted
    outside dev/debug, where the bundled Chromium's executable path is used.
    """
    settings = settings or get_settings()

    if settings.is_dev or settings.is_debug:
        return LaunchOptions(
            args=[],
            executable_path=local_chrome_path(settings),
            # a visible window when debugging
            headless=not settings.is_debug,
        )

    if browser_type is None:
        from playwright.async_api import async_playwright

        pw = await async_playwright().start()
        try:
            executable_path = pw.chromium.executable_path
        finally:
            await pw.stop()
    else:
        executable_path = browser_type.executable_path

    return LaunchOptions(
        args=list(SERVERLESS_ARGS),
        executable_path=executable_path,
        headless=True,
    )
