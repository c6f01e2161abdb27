"""Chart rendering engine: HTML/Chart.js/Playwright.

Public API
----------
- ``render``          - render a chart from keyword parameters (async).
- ``render_request``  - render a :class:`ChartRequest` (async).
- ``build_document``  - the HTML page for a request, no browser needed.

Example::

    from roughchart.charts import render

    response = await render("line", data, style="normal")
"""

from roughchart.charts.document import build_document
from roughchart.charts.models import ChartRequest, ChartResponse, RoughOptions
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
    "RoughOptions",
    "build_document",
    "render",
    "render_request",
]
