"""Scripting bridge between build scripts and the build."""

from .bridge import TIMESTAMP_FORMAT, ScriptBridge
from .state import BuildState, StateHandle
from .stubs import STUB_FILENAME, STUB_TEXT, write_stubs

__all__ = [
    "ScriptBridge",
    "BuildState",
    "StateHandle",
    "TIMESTAMP_FORMAT",
    "STUB_FILENAME",
    "STUB_TEXT",
    "write_stubs",
]
