"""Output tree router."""

from fastapi import APIRouter, Request
from fastapi.responses import Response

from sanity.errors import SanityError, wrap_error

from .errors import status_for
from .lookup import content_type_for, resolve_output

output_router = APIRouter()


@output_router.get("/{path:path}")
def serve_output(path: str, request: Request) -> Response:
    """Serve one file from the output tree.

    Runs in the threadpool: the read lock is held across the lookup and
    the read, so a response never mixes two builds.
    """
    state = request.app.state
    try:
        with state.coordinator.reading():
            target = resolve_output(state.output_root, path)
            content = target.read_bytes()
    except (SanityError, OSError) as e:
        error = wrap_error(e, path=path)
        if state.logger:
            message = f"GET /{path} -> {status_for(error)}"
            state.logger.warn("server", message, {"error": str(error)})
        raise error from e

    if state.logger:
        state.logger.debug("server", f"GET /{path} -> 200", {"file": str(target)})
    return Response(content=content, media_type=content_type_for(target))
