"""Core infrastructure module.

Provides foundational components:
- Configuration management with validation
- Custom exception hierarchy and the shared bounds check
- Structured logging
"""

from .config import (
    AnimationConfig,
    ColorConfig,
    Config,
    ConfigManager,
    LoggingConfig,
    PanelConfig,
)
from .errors import (
    AnimationError,
    ConfigurationError,
    GlyphNotFoundError,
    IndexOutOfBoundsError,
    LEDPanelError,
    assert_boundaries,
)
from .logging import get_logger, setup_logging, setup_logging_from_config

__all__ = [
    # Config
    "AnimationConfig",
    "ColorConfig",
    "Config",
    "ConfigManager",
    "LoggingConfig",
    "PanelConfig",
    # Errors
    "AnimationError",
    "ConfigurationError",
    "GlyphNotFoundError",
    "IndexOutOfBoundsError",
    "LEDPanelError",
    "assert_boundaries",
    # Logging
    "get_logger",
    "setup_logging",
    "setup_logging_from_config",
]
