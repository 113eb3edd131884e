"""Shared enumerations for sanity."""

from enum import Enum


class LogLevel(str, Enum):
    """Log verbosity level."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


class LogFormat(str, Enum):
    """Log output format."""

    COLORED = "colored"
    JSON = "json"


class FileKind(str, Enum):
    """How a source path is handled by the build."""

    DIRECTORY = "directory"
    TEMPLATE = "template"
    STYLESHEET = "stylesheet"
    SCRIPT = "script"
    ASSET = "asset"


class MinifyKind(str, Enum):
    """Minifier input flavour."""

    PAGE = "page"
    SCRIPT = "script"

