"""Editor stubs for build script globals."""

from pathlib import Path

from sanity.assets import atomic_write_text

STUB_FILENAME = "_sanity.pyi"

STUB_TEXT = '''\
"""Globals available to sanity build scripts."""

from typing import Any

JsonValue = None | bool | int | float | str | list["JsonValue"] | dict[str, "JsonValue"]

PROD: bool
"""True in production builds."""

def render(template: str, target: str, context: dict[str, JsonValue] | None = None) -> None:
    """Queue a render of ``template`` to ``target`` (relative to the output root).

    Queued templates are not rendered by the implicit sweep.
    """

def read_file(path: str) -> str | None:
    """Contents of a source file, or None if it cannot be read."""

def read_json(path: str) -> JsonValue:
    """Parsed JSON document from the source tree, or None on failure."""

def last_modified(path: str) -> str | None:
    """Modification time of a source file as YYYY-MM-DDTHH:MM:SSZ (UTC)."""

def inject(name: str, value: JsonValue) -> None:
    """Expose ``value`` as ``name`` to every render of this build."""

def print(*values: Any, sep: str | None = " ", end: str | None = "\\n") -> None:
    """Write to the build log."""
'''


def write_stubs(root: Path) -> Path:
    """Write the stub file into ``root``.

    Returns:
        Path of the written file
    """
    target = root / STUB_FILENAME
    atomic_write_text(target, STUB_TEXT)
    return target
