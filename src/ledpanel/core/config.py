"""Configuration management with Pydantic validation.

Provides type-safe configuration with:
- Pydantic models for validation
- YAML file loading
- Thread-safe read access and command line overrides
"""

import logging
import re
import threading
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


# =============================================================================
# Configuration Models
# =============================================================================


class ColorConfig(BaseModel):
    """Colors applied uniformly to every light of a panel."""

    model_config = ConfigDict(frozen=True)

    on: str = Field("#FF3030", description="Lit LED color (hex)")
    off: str = Field("#444444", description="Unlit LED color (hex)")
    background: str = Field("#000000", description="Panel background color (hex)")

    @field_validator("on", "off", "background")
    @classmethod
    def validate_hex(cls, v: str) -> str:
        """Validate the value is a #RGB or #RRGGBB hex color."""
        if not _HEX_COLOR.match(v):
            raise ValueError(f"Invalid hex color: {v!r}")
        return v if v.startswith("#") else f"#{v}"


class PanelConfig(BaseModel):
    """Construction-time configuration of one LED panel."""

    length: int = Field(8, ge=1, le=256, description="Characters visible at once")
    color: ColorConfig = Field(default_factory=ColorConfig)
    led_size: tuple[int, int] = Field((10, 10), description="LED (width, height) in pixels")
    font: str = Field("standard", description="Glyph table: standard, pillow")

    @field_validator("led_size")
    @classmethod
    def validate_led_size(cls, v: tuple[int, int]) -> tuple[int, int]:
        """Both LED dimensions must be positive."""
        if v[0] < 1 or v[1] < 1:
            raise ValueError("LED width and height must be at least 1")
        return v


class AnimationConfig(BaseModel):
    """Default animation settings used by the command line."""

    mode: Literal["loop", "scroll", "vertical"] = Field("scroll", description="Animation mode")
    interval: float = Field(0.05, gt=0, le=60, description="Seconds between steps")
    duration: float = Field(5.0, gt=0, description="Seconds to run a looping animation")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field("INFO", description="Log level")
    format: Literal["simple", "structured"] = Field("simple", description="Format")
    file: str | None = Field(None, description="Log file path")
    max_size_mb: int = Field(10, ge=1, description="Max log file size")
    backup_count: int = Field(3, ge=0, description="Number of backup files")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Accept standard logging level names, case-insensitively."""
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level


class Config(BaseModel):
    """Root configuration model."""

    panel: PanelConfig = Field(default_factory=PanelConfig)
    animation: AnimationConfig = Field(default_factory=AnimationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


# =============================================================================
# Configuration Manager
# =============================================================================


class ConfigManager:
    """Thread-safe, read-only configuration holder.

    Usage:
        config_manager = ConfigManager("/path/to/config.yaml")
        config = config_manager.get()
    """

    def __init__(self, config_path: str | Path | None = None) -> None:
        self._config_path = Path(config_path) if config_path is not None else None
        self._config: Config
        self._lock = threading.RLock()
        self._load()

    @property
    def path(self) -> Path | None:
        return self._config_path

    def _load(self) -> None:
        """Load and validate configuration from file.

        Raises:
            ConfigurationError: If the file is not valid YAML or fails validation
        """
        if self._config_path is None or not self._config_path.exists():
            logger.info("Config file not found, using defaults")
            self._config = Config()
            return

        try:
            with open(self._config_path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                "Config file is not valid YAML",
                details={"path": str(self._config_path)},
                cause=e,
            ) from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                "Config file must contain a mapping",
                details={"path": str(self._config_path)},
            )

        try:
            self._config = Config.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(
                "Invalid configuration",
                details={"path": str(self._config_path), "errors": e.error_count()},
                cause=e,
            ) from e

        logger.info("Loaded config from %s", self._config_path)

    def get(self) -> Config:
        """Get current configuration (deep copy)."""
        with self._lock:
            return self._config.model_copy(deep=True)

    def override(self, **sections: dict[str, Any]) -> Config:
        """Return a copy with top-level sections partially replaced.

        Used by the command line to layer flags over the file. The
        stored configuration is left untouched.
        """
        with self._lock:
            data = self._config.model_dump()
        for key, value in sections.items():
            if key in data and isinstance(value, dict):
                data[key].update({k: v for k, v in value.items() if v is not None})
        try:
            return Config.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(
                "Invalid configuration override",
                details={"errors": e.error_count()},
                cause=e,
            ) from e
