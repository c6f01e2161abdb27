"""HTML document for a chart: Chart.js + rough plugin + optional web fonts.

The page calls ``ready()`` once every requested font has loaded (or right
away when there are none).  ``ready()`` draws the chart with animations off
and appends ``<div class="ready">``, which the renderer waits for.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import jinja2

from roughchart.charts.models import ChartRequest
from roughchart.settings import ChartSettings, get_settings

_TEMPLATES_DIR = Path(__file__).parent / "templates"
_TEMPLATE_NAME = "chart.html"

READY_SELECTOR = ".ready"
CANVAS_SELECTOR = "#main"

_jinja_env: jinja2.Environment | None = None


def _get_jinja_env() -> jinja2.Environment:
    """Return (cached) Jinja2 environment with template loader."""
    global _jinja_env
    if _jinja_env is None:
        _jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(_TEMPLATES_DIR)),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=jinja2.StrictUndefined,
        )
    return _jinja_env


def font_stylesheet_url(fonts: list[str], settings: ChartSettings | None = None) -> str | None:
    """Google Fonts CSS URL for *fonts*, or ``None`` when there are none."""
    if not fonts:
        return None
    settings = settings or get_settings()
    family = "|".join(font.replace(" ", "+") for font in fonts)
    return f"{settings.font_css_url}?family={family}"


def build_chart_config(request: ChartRequest) -> dict[str, Any]:
    """Chart.js config with animations disabled and rough options attached."""
    options = dict(request.options or {})
    plugins = dict(options.get("plugins") or {})
    plugins["rough"] = request.rough.to_plugin_options()

    options.update(
        {
            # a settled first frame, nothing to wait for
            "animation": {"duration": 0},
            "hover": {"animationDuration": 0},
            "responsiveAnimationDuration": 0,
            "plugins": plugins,
        }
    )
    return {"type": request.type, "data": request.data, "options": options}


def build_document(request: ChartRequest, settings: ChartSettings | None = None) -> str:
    """Render the full HTML page for *request*."""
    settings = settings or get_settings()
    fonts = request.fonts
    template = _get_jinja_env().get_template(_TEMPLATE_NAME)
    return template.render(
        font_href=font_stylesheet_url(fonts, settings),
        fonts=fonts,
        scripts={
            "fontfaceobserver": settings.fontfaceobserver_url,
            "chartjs": settings.chartjs_url,
            "roughjs": settings.roughjs_url,
            "chartjs_rough": settings.chartjs_rough_url,
        },
        width=request.width,
        height=request.height,
        chart_config=build_chart_config(request),
        rough=request.style == "rough",
        font_family=request.font_family,
        font_size=request.font_size,
        font_color=request.font_color,
        font_style=request.font_style,
    )
