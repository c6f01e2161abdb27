"""roughchart - render Chart.js charts to PNG with headless Chromium."""

__version__ = "0.1.0"
__logo__ = "📈"

from roughchart.browser.page import get_page, shutdown
from roughchart.charts.models import ChartRequest, ChartResponse
from roughchart.charts.renderer import (
    ChartNotReadyError,
    ChartRenderError,
    ChartRenderer,
    render,
    render_request,
)

__all__ = [
    "ChartNotReadyError",
    "ChartRenderError",
    "ChartRenderer",
    "ChartRequest",
    "ChartResponse",
    "get_page",
    "render",
    "render_request",
    "shutdown",
]
