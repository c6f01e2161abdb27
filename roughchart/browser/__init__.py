"""Headless Chromium management: launch options and the cached browser."""

from roughchart.browser.options import LaunchOptions, get_launch_options
from roughchart.browser.page import PageProvider, get_page, shutdown

__all__ = ["LaunchOptions", "PageProvider", "get_launch_options", "get_page", "shutdown"]
