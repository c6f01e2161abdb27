"""Request / response models for chart rendering."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

ChartStyle = Literal["normal", "rough"]
RoughFillStyle = Literal[
    "hachure",
    "solid",
    "zigzag",
    "cross-hatch",
    "dots",
    "starburst",
    "dashed",
    "zigzag-line",
]


class RoughOptions(BaseModel):
    """Options for chartjs-plugin-rough, serialized with its camelCase keys."""

    roughness: float = 1
    bowing: float = 1
    fill_style: RoughFillStyle = Field("hachure", serialization_alias="fillStyle")
    fill_weight: float = Field(0.5, serialization_alias="fillWeight")
    hachure_angle: float = Field(-41, serialization_alias="hachureAngle")
    hachure_gap: float = Field(4, serialization_alias="hachureGap")
    curve_step_count: float = Field(9, serialization_alias="curveStepCount")
    simplification: float = 9

    def to_plugin_options(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class ChartRequest(BaseModel):
    """Everything needed to render one chart.

    ``type``, ``data`` and ``options`` are handed to Chart.js as-is; they are
    not validated here.
    """

    model_config = ConfigDict(populate_by_name=True)

    type: str
    data: dict[str, Any]
    options: dict[str, Any] | None = None

    width: int = Field(512, gt=0)
    height: int = Field(320, gt=0)
    device_scale_factor: float = Field(2, gt=0)

    font_family: str | None = None
    font_size: float = 12
    font_color: str = "#666"
    font_style: str = "normal"

    style: ChartStyle = "rough"
    rough: RoughOptions = Field(default_factory=RoughOptions)

    @property
    def fonts(self) -> list[str]:
        """Comma-separated ``font_family`` split into trimmed names."""
        if not self.font_family:
            return []
        return [font.strip() for font in self.font_family.split(",") if font.strip()]


class ChartResponse(BaseModel):
    """HTTP-style result of a render."""

    status_code: int = 200
    headers: dict[str, str] = Field(default_factory=lambda: {"Content-Type": "image/png"})
    body: bytes
