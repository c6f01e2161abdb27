"""Centralised settings for roughchart, loaded from env / .env."""

from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ChartSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="ROUGHCHART_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # --- execution environment ---
    # NOW_REGION / DEBUG are read without the prefix, as deployments set them.
    region: str = Field(default="", validation_alias=AliasChoices("NOW_REGION", "ROUGHCHART_REGION"))
    debug_flag: str = Field(default="", validation_alias=AliasChoices("DEBUG", "ROUGHCHART_DEBUG"))
    dev_region: str = "dev1"

    # --- local Chrome used in dev / debug ---
    chrome_path_windows: str = r"C:\Program Files (x86)\Google\Chrome\Application\chrome.exe"
    chrome_path_macos: str = "/Applications/Google Chrome.app/Contents/MacOS/Google Chrome"
    chrome_path_linux: str = "/usr/bin/google-chrome"

    # --- page scripts (loaded by the browser at render time) ---
    fontfaceobserver_url: str = (
        "https://cdnjs.cloudflare.com/ajax/libs/fontfaceobserver/2.1.0/fontfaceobserver.standalone.js"
    )
    chartjs_url: str = "https://cdnjs.cloudflare.com/ajax/libs/Chart.js/2.9.3/Chart.bundle.min.js"
    roughjs_url: str = "https://cdn.jsdelivr.net/npm/roughjs@3.1.0/dist/rough.min.js"
    chartjs_rough_url: str = "https://cdn.jsdelivr.net/npm/chartjs-plugin-rough@0.2.0/dist/chartjs-plugin-rough.min.js"
    font_css_url: str = "https://fonts.googleapis.com/css"

    # --- timeouts ---
    timeout_ms: int = 30_000

    @property
    def is_dev(self) -> bool:
        return self.region == self.dev_region

    @property
    def is_debug(self) -> bool:
        return bool(self.debug_flag)


@lru_cache
def get_settings() -> ChartSettings:
    return ChartSettings()
