"""Configuration management for rowfit.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the ROWFIT_ prefix,
allowing gallery defaults and server settings to change without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (ROWFIT_* prefix)
2. .env file in the project root
3. Default values defined in RowfitConfig

Example .env file:
    ROWFIT_TARGET_ROW_HEIGHT=280
    ROWFIT_GAP=12
    ROWFIT_MAX_SCALE_UP=1.4
    ROWFIT_SERVER_PORT=8080

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time.

Usage Example
-------------
    from rowfit.core.config import config

    print(config.target_row_height)
    print(config.row_height_tolerance)

Gallery Defaults
----------------
These values are only used by the gallery adapter (rowfit.core.photos) and
the HTTP layer when a caller leaves a layout parameter unset.  The layout
engine itself never reads configuration; every call passes explicit options.
"""

from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RowfitConfig(BaseSettings):
    """Main configuration for rowfit.

    Attributes
    ----------
    Gallery Defaults:
        gap : float
            Horizontal and vertical gap between gallery images in pixels
        target_row_height : float
            Nominal row height in pixels
        row_height_tolerance_min : float
            Lower multiplier of the row height tolerance band
        row_height_tolerance_max : float
            Upper multiplier of the row height tolerance band
        justify_last_row : bool
            Whether the trailing row is stretched to fill the width
        max_scale_up : float
            Maximum enlargement of a photo's native height
        fallback_aspect_ratio : float
            Aspect ratio assumed for photos without usable metadata

    Server Settings:
        server_host : str
            Bind address for the uvicorn server
        server_port : int
            Server port (1024-65535)
        log_level : Literal["DEBUG", "INFO", "WARNING", "ERROR"]
            Root log level configured by the entry point

    Examples
    --------
        >>> custom_config = RowfitConfig(target_row_height=240, gap=8)
        >>> custom_config.row_height_tolerance
        (0.75, 1.35)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="ROWFIT_",
        case_sensitive=False,
    )

    # Gallery defaults
    gap: float = Field(default=16.0, ge=0, description="Gap between gallery images")
    target_row_height: float = Field(
        default=320.0,
        gt=0,
        description="Nominal row height in pixels",
    )
    row_height_tolerance_min: float = Field(
        default=0.75,
        gt=0,
        description="Lower multiplier of the row height tolerance band",
    )
    row_height_tolerance_max: float = Field(
        default=1.35,
        gt=0,
        description="Upper multiplier of the row height tolerance band",
    )
    justify_last_row: bool = Field(
        default=True,
        description="Stretch the trailing row to the container width",
    )
    max_scale_up: float = Field(
        default=1.6,
        ge=1,
        description="Maximum enlargement of a photo's native height",
    )
    fallback_aspect_ratio: float = Field(
        default=1.5,
        gt=0,
        description="Aspect ratio assumed when photo metadata is missing (3:2)",
    )

    # Server settings
    server_host: str = Field(
        default="0.0.0.0",
        description="Server bind address",
    )
    server_port: int = Field(
        default=8000,
        description="Server port",
        ge=1024,
        le=65535,
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Root log level",
    )

    @model_validator(mode="after")
    def _check_tolerance_order(self) -> "RowfitConfig":
        if self.row_height_tolerance_min > self.row_height_tolerance_max:
            raise ValueError(
                "row_height_tolerance_min must not exceed row_height_tolerance_max, "
                f"got {self.row_height_tolerance_min} > {self.row_height_tolerance_max}"
            )
        return self

    @property
    def row_height_tolerance(self) -> tuple[float, float]:
        """Tolerance band as a ``(min, max)`` multiplier pair."""
        return (self.row_height_tolerance_min, self.row_height_tolerance_max)


# Global configuration instance
# Loads values from environment variables (ROWFIT_* prefix) and .env file.
config = RowfitConfig()
