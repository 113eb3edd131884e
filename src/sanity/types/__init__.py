"""Shared types for sanity.

Import from here rather than submodules:
    from sanity.types import FileKind, LogLevel
"""

from .enums import FileKind, LogFormat, LogLevel, MinifyKind

__all__ = [
    "FileKind",
    "LogFormat",
    "LogLevel",
    "MinifyKind",
]
