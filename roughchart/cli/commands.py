"""CLI commands for roughchart."""

import asyncio
import json
from pathlib import Path
from typing import Any

import typer
from loguru import logger
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from roughchart import __logo__, __version__

app = typer.Typer(
    name="roughchart",
    help=f"{__logo__} roughchart - render Chart.js charts to PNG",
    no_args_is_help=True,
)

console = Console()

# Flat keys in a chart file that belong to the rough plugin options
ROUGH_KEYS = {
    "roughness",
    "bowing",
    "fill_style",
    "fill_weight",
    "hachure_angle",
    "hachure_gap",
    "curve_step_count",
    "simplification",
}


def version_callback(value: bool):
    if value:
        console.print(f"{__logo__} roughchart v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True
    ),
):
    """roughchart - render Chart.js charts to PNG."""
    pass


def load_request(path: Path, overrides: dict[str, Any] | None = None):
    """Read a chart file (``{type, data, options, ...}``) into a ChartRequest.

    Rough plugin parameters may be given flat (``"roughness": 2``) or nested
    under ``"rough"``.  Non-``None`` *overrides* win over the file.
    """
    from roughchart.charts.models import ChartRequest

    raw = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise ValueError(f"{path}: expected a JSON object")

    rough = dict(raw.pop("rough", None) or {})
    for key in ROUGH_KEYS & raw.keys():
        rough[key] = raw.pop(key)

    for key, value in (overrides or {}).items():
        if value is None:
            continue
        if key in ROUGH_KEYS:
            rough[key] = value
        else:
            raw[key] = value

    return ChartRequest.model_validate({**raw, "rough": rough})


def _load_or_exit(path: Path, overrides: dict[str, Any] | None = None):
    try:
        return load_request(path, overrides)
    except (OSError, ValueError, ValidationError) as exc:
        # json.JSONDecodeError is a ValueError
        console.print(f"[red]Invalid chart file {path}:[/red] {escape(str(exc))}")
        raise typer.Exit(1)


def _set_logs(enabled: bool) -> None:
    if enabled:
        logger.enable("roughchart")
    else:
        logger.disable("roughchart")


# ============================================================================
# Render
# ============================================================================


@app.command()
def render(
    chart_file: Path = typer.Argument(..., help="JSON file with type, data and options"),
    output: Path = typer.Option(Path("chart.png"), "--output", "-o", help="PNG file to write"),
    width: int = typer.Option(None, "--width", "-W", help="Canvas width in CSS pixels"),
    height: int = typer.Option(None, "--height", "-H", help="Canvas height in CSS pixels"),
    scale: float = typer.Option(None, "--scale", "-s", help="Device scale factor"),
    font_family: str = typer.Option(None, "--font-family", "-f", help="Comma-separated Google Fonts"),
    style: str = typer.Option(None, "--style", help="'rough' or 'normal'"),
    roughness: float = typer.Option(None, "--roughness", help="Rough plugin roughness"),
    fill_style: str = typer.Option(None, "--fill-style", help="Rough plugin fill style"),
    timeout_ms: int = typer.Option(None, "--timeout", help="Load / draw timeout in ms"),
    logs: bool = typer.Option(False, "--logs/--no-logs", help="Show roughchart runtime logs"),
):
    """Render a chart file to PNG."""
    from roughchart.browser.page import shutdown
    from roughchart.charts.renderer import render_request

    _set_logs(logs)
    request = _load_or_exit(
        chart_file,
        {
            "width": width,
            "height": height,
            "device_scale_factor": scale,
            "font_family": font_family,
            "style": style,
            "roughness": roughness,
            "fill_style": fill_style,
        },
    )

    async def run():
        try:
            return await render_request(request, timeout_ms=timeout_ms)
        finally:
            await shutdown()

    try:
        with console.status("[dim]Rendering chart...[/dim]", spinner="dots"):
            response = asyncio.run(run())
    except Exception as exc:
        console.print(f"[red]Render failed:[/red] {escape(str(exc))}")
        raise typer.Exit(1)

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(response.body)
    console.print(
        f"[green]✓[/green] Wrote {output} "
        f"({request.width}x{request.height} @{request.device_scale_factor}x, {len(response.body)} bytes)"
    )


@app.command()
def html(
    chart_file: Path = typer.Argument(..., help="JSON file with type, data and options"),
    output: Path = typer.Option(None, "--output", "-o", help="HTML file to write (default: stdout)"),
    font_family: str = typer.Option(None, "--font-family", "-f", help="Comma-separated Google Fonts"),
    style: str = typer.Option(None, "--style", help="'rough' or 'normal'"),
):
    """Print the HTML page a chart file renders from (no browser needed)."""
    from roughchart.charts.document import build_document

    request = _load_or_exit(chart_file, {"font_family": font_family, "style": style})
    document = build_document(request)

    if output is None:
        typer.echo(document)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(document, encoding="utf-8")
    console.print(f"[green]✓[/green] Wrote {output}")


if __name__ == "__main__":
    app()
