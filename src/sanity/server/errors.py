"""Dev server error handlers."""

import html
import logging

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse

from sanity.errors import SanityError, wrap_error

logger = logging.getLogger(__name__)

DIAGNOSTIC_PAGE = """<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><title>{code}</title></head>
<body>
<h1>{message}</h1>
<p>Path: <code>{path}</code></p>
<p>{location}</p>
<pre>{detail}</pre>
<p>{suggestion}</p>
</body>
</html>
"""


def render_diagnostic(error: SanityError, path: str) -> str:
    """Diagnostic page embedding the failing path and the error text."""
    return DIAGNOSTIC_PAGE.format(
        code=html.escape(error.code),
        message=html.escape(error.message),
        path=html.escape(path),
        location=html.escape(f"At {error.location}" if error.location else ""),
        detail=html.escape(error.detail or ""),
        suggestion=html.escape(error.suggestion or ""),
    )


def status_for(error: SanityError) -> int:
    """HTTP status answered for ``error``: 404 for lookups, 500 otherwise."""
    return 404 if error.code == "OUTPUT_NOT_FOUND" else 500


def setup_error_handlers(app: FastAPI) -> None:
    """Configure error handlers for the dev server."""

    @app.exception_handler(SanityError)
    async def sanity_error_handler(request: Request, exc: SanityError) -> HTMLResponse:
        """Diagnostic page for any SanityError raised while serving."""
        return HTMLResponse(
            render_diagnostic(exc, request.url.path), status_code=status_for(exc)
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> HTMLResponse:
        """Unexpected failures still answer with a diagnostic page."""
        logger.exception("Unhandled error serving %s", request.url.path)
        error = wrap_error(exc, path=request.url.path)
        return HTMLResponse(render_diagnostic(error, request.url.path), status_code=500)
