"""Stylesheet compilation (libsass)."""

from pathlib import Path

import sass

from sanity.errors import create_error


def compile_stylesheet(path: Path, include_paths: list[Path]) -> str:
    """Compile an SCSS/Sass file to CSS.

    Args:
        path: Stylesheet source file
        include_paths: Search path for ``@import``/``@use`` of partials

    Returns:
        Compiled CSS text

    Raises:
        SanityError(STYLESHEET_FAILED) on compiler errors
    """
    try:
        return sass.compile(
            filename=str(path),
            include_paths=[str(p) for p in include_paths],
            output_style="expanded",
        )
    except sass.CompileError as e:
        raise create_error("STYLESHEET_FAILED", path=path, detail=str(e)) from e
