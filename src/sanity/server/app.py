"""Dev server application factory."""

from pathlib import Path
from typing import TYPE_CHECKING

from fastapi import FastAPI

from .errors import setup_error_handlers
from .routes import output_router

if TYPE_CHECKING:
    from sanity.coordinator import BuildCoordinator
    from sanity.logging import SanityLogger


def create_dev_app(
    output_root: Path,
    coordinator: "BuildCoordinator",
    logger: "SanityLogger | None" = None,
) -> FastAPI:
    """Create the dev server application.

    Args:
        output_root: Directory to serve
        coordinator: Coordinator shared with the rebuild trigger
        logger: Optional sanity logger

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(title="sanity dev server", docs_url=None, redoc_url=None, openapi_url=None)

    app.state.output_root = output_root
    app.state.coordinator = coordinator
    app.state.logger = logger

    setup_error_handlers(app)
    app.include_router(output_router)

    return app
