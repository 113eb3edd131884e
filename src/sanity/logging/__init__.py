"""Sanity logging - colored component logging for builds."""

from .colors import (
    CYAN,
    GREEN,
    LIGHT_BLUE,
    MAGENTA,
    ORANGE,
    RED,
    RESET,
    YELLOW,
)
from .logger import (
    COMPONENTS,
    BuildLogger,
    LogConfig,
    RenderLogger,
    SanityLogger,
    ScriptLogger,
)

__all__ = [
    # Logger classes
    "SanityLogger",
    "BuildLogger",
    "ScriptLogger",
    "RenderLogger",
    "LogConfig",
    "COMPONENTS",
    # Colors
    "RESET",
    "GREEN",
    "RED",
    "YELLOW",
    "ORANGE",
    "LIGHT_BLUE",
    "CYAN",
    "MAGENTA",
]
