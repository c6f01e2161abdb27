"""Headless chart renderer: Chart.js in Chromium, screenshot of the canvas.

Usage::

    from roughchart import render

    response = await render("bar", {"labels": [...], "datasets": [...]})
    Path("chart.png").write_bytes(response.body)
"""

from __future__ import annotations

from typing import Any

from loguru import logger
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from roughchart.browser.page import PageProvider, get_provider
from roughchart.charts.document import CANVAS_SELECTOR, READY_SELECTOR, build_document
from roughchart.charts.models import (
    ChartRequest,
    ChartResponse,
    ChartStyle,
    RoughFillStyle,
    RoughOptions,
)
from roughchart.settings import ChartSettings, get_settings


class ChartRenderError(RuntimeError):
    """Raised when the page loaded but no chart image could be taken."""


class ChartNotReadyError(ChartRenderError):
    """Raised when the chart did not signal readiness before the timeout."""


class ChartRenderer:
    """Renders :class:`ChartRequest` objects to PNG.

    * Pages come from a :class:`PageProvider` (the process-wide one unless
      another is given), so the browser is launched once and reused.
    * Each render gets its own page, closed when the render ends.
    """

    def __init__(
        self,
        provider: PageProvider | None = None,
        settings: ChartSettings | None = None,
    ) -> None:
        self._provider = provider
        self._settings = settings

    @property
    def provider(self) -> PageProvider:
        return self._provider or get_provider()

    @property
    def settings(self) -> ChartSettings:
        return self._settings or get_settings()

    async def render(self, request: ChartRequest, *, timeout_ms: int | None = None) -> ChartResponse:
        """Render *request* and return the PNG wrapped in a :class:`ChartResponse`.

        *timeout_ms* bounds both the content load and the wait for the chart
        to draw; it defaults to ``settings.timeout_ms``.
        """
        settings = self.settings
        timeout = timeout_ms if timeout_ms is not None else settings.timeout_ms
        html = build_document(request, settings)

        page = await self.provider.get_page(
            viewport={"width": request.width, "height": request.height},
            device_scale_factor=request.device_scale_factor,
        )
        handle: Any | None = None
        try:
            js_errors: list[str] = []
            page.on(
                "pageerror",
                lambda exc: (
                    js_errors.append(str(exc)),
                    logger.warning(f"ChartRenderer JS error: {exc}"),
                )[0],
            )
            page.on(
                "console",
                lambda msg: logger.debug(f"ChartRenderer console [{msg.type}]: {msg.text}"),
            )

            await page.set_content(html, timeout=timeout)
            try:
                await page.wait_for_selector(READY_SELECTOR, state="attached", timeout=timeout)
            except PlaywrightTimeoutError as exc:
                err_detail = f" | JS errors: {js_errors}" if js_errors else ""
                raise ChartNotReadyError(
                    f"chart '{request.type}' not ready within {timeout}ms{err_detail}"
                ) from exc

            handle = await page.query_selector(CANVAS_SELECTOR)
            if handle is None:
                raise ChartRenderError(f"canvas {CANVAS_SELECTOR!r} not found")
            body = await handle.screenshot(omit_background=True, timeout=timeout)
        finally:
            try:
                if handle is not None:
                    await handle.dispose()
            finally:
                await page.close()

        logger.info(
            f"ChartRenderer: rendered '{request.type}' "
            f"({request.width}x{request.height} @{request.device_scale_factor}x, {len(body)} bytes)"
        )
        return ChartResponse(
            status_code=200,
            headers={"Content-Type": "image/png"},
            body=body,
        )


# ── Module-level convenience API ───────────────────────

async def render_request(request: ChartRequest, *, timeout_ms: int | None = None) -> ChartResponse:
    """Render *request* with the process-wide browser."""
    return await ChartRenderer().render(request, timeout_ms=timeout_ms)


async def render(
    type: str,
    data: dict[str, Any],
    options: dict[str, Any] | None = None,
    width: int = 512,
    height: int = 320,
    device_scale_factor: float = 2,
    font_family: str | None = None,
    font_size: float = 12,
    font_color: str = "#666",
    font_style: str = "normal",
    style: ChartStyle = "rough",
    roughness: float = 1,
    bowing: float = 1,
    fill_style: RoughFillStyle = "hachure",
    fill_weight: float = 0.5,
    hachure_angle: float = -41,
    hachure_gap: float = 4,
    curve_step_count: float = 9,
    simplification: float = 9,
) -> ChartResponse:
    """Render a Chart.js chart to PNG.

    This is the primary public API.  ``font_family`` is a comma-separated
    list of Google Fonts names; ``style="normal"`` draws without the rough
    plugin.  The rough parameters are passed to chartjs-plugin-rough as-is.
    """
    request = ChartRequest(
        type=type,
        data=data,
        options=options,
        width=width,
        height=height,
        device_scale_factor=device_scale_factor,
        font_family=font_family,
        font_size=font_size,
        font_color=font_color,
        font_style=font_style,
        style=style,
        rough=RoughOptions(
            roughness=roughness,
            bowing=bowing,
            fill_style=fill_style,
            fill_weight=fill_weight,
            hachure_angle=hachure_angle,
            hachure_gap=hachure_gap,
            curve_step_count=curve_step_count,
            simplification=simplification,
        ),
    )
    return await render_request(request)
