"""Dev HTTP server for the output tree."""

from .app import create_dev_app
from .errors import render_diagnostic, setup_error_handlers, status_for
from .lookup import CONTENT_TYPES, INDEX_FILE, content_type_for, resolve_output
from .routes import output_router

__all__ = [
    "create_dev_app",
    "setup_error_handlers",
    "render_diagnostic",
    "status_for",
    "output_router",
    "resolve_output",
    "content_type_for",
    "CONTENT_TYPES",
    "INDEX_FILE",
]
