"""Minification of pages and scripts."""

from pathlib import Path
from typing import TYPE_CHECKING

import minify_html
import rjsmin

from sanity.errors import create_error
from sanity.types import MinifyKind

if TYPE_CHECKING:
    from sanity.logging import RenderLogger


def minify(kind: MinifyKind, data: bytes) -> bytes:
    """Minify ``data``.

    Raises:
        Exception: whatever the underlying minifier raises
    """
    text = data.decode("utf-8")
    if kind is MinifyKind.PAGE:
        result = minify_html.minify(text, minify_css=True, minify_js=False)
    else:
        result = rjsmin.jsmin(text)
    return result.encode("utf-8")


def minify_or_original(
    kind: MinifyKind,
    data: bytes,
    target: Path,
    logger: "RenderLogger | None" = None,
) -> bytes:
    """Minify, falling back to the original bytes on failure.

    The failure is logged; output is never truncated.
    """
    try:
        return minify(kind, data)
    except Exception as e:
        error = create_error("MINIFY_FAILED", path=target, detail=f"{type(e).__name__}: {e}")
        if logger:
            logger.minify_fallback(str(target), error)
        return data
