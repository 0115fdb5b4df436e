"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Environment variables  (TOOLBOARD__SOURCE__URL=https://...)
  2. toolboard.yaml         (searched in cwd, then platform config dir)
  3. Hardcoded defaults

The config file is optional; every field has a default.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from toolboard.aggregator import DEFAULT_RANGE_DAYS
from toolboard.paginator import DEFAULT_PAGE_SIZE, PAGE_SIZE_OPTIONS

_DEFAULT_CONFIG_DIR = platformdirs.user_config_dir("toolboard")


def _find_config_file() -> str | None:
    """Return the path of the first toolboard.yaml found, or None."""
    candidates = [
        Path("toolboard.yaml"),
        Path(_DEFAULT_CONFIG_DIR) / "toolboard.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class SourceSettings(BaseModel):
    url: str = "http://localhost:3000/api/similar-tools"
    # Shown in FetchError messages
    name: str = "similar-tools"
    timeout_seconds: float = 30.0
    share_inflight: bool = False


class TableSettings(BaseModel):
    default_page_size: int = DEFAULT_PAGE_SIZE

    @field_validator("default_page_size")
    @classmethod
    def validate_page_size(cls, v: int) -> int:
        if v not in PAGE_SIZE_OPTIONS:
            raise ValueError(f"default_page_size must be one of {list(PAGE_SIZE_OPTIONS)}, got {v}")
        return v


class ChartSettings(BaseModel):
    default_range_days: int = DEFAULT_RANGE_DAYS

    @field_validator("default_range_days")
    @classmethod
    def validate_range(cls, v: int) -> int:
        if v < 0:
            raise ValueError("default_range_days must not be negative")
        return v


class ServerSettings(BaseModel):
    transport: Literal["stdio", "http"] = "stdio"
    host: str = "127.0.0.1"
    port: int = 8080
    auth_enabled: bool = False
    auth_key: str = ""


class LoggingSettings(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: TOOLBOARD__SERVER__PORT=9090
        env_prefix="TOOLBOARD__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    source: SourceSettings = SourceSettings()
    table: TableSettings = TableSettings()
    chart: ChartSettings = ChartSettings()
    server: ServerSettings = ServerSettings()
    logging: LoggingSettings = LoggingSettings()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
        **kwargs: Any,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            YamlConfigSettingsSource(settings_cls),
            # dotenv and file secrets are not read
        )
