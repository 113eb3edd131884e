"""Output tree lookup for the dev server."""

from pathlib import Path, PurePosixPath

from sanity.errors import create_error

INDEX_FILE = "index.html"

CONTENT_TYPES = {
    ".html": "text/html",
    ".css": "text/css",
    ".js": "text/javascript",
}


def content_type_for(path: Path) -> str | None:
    """Content type for the fixed set of known extensions, else None."""
    return CONTENT_TYPES.get(path.suffix.lower())


def resolve_output(output_root: Path, url_path: str) -> Path:
    """Map a request path onto a file in the output tree.

    Directories resolve to their ``index.html``.

    Raises:
        SanityError(OUTPUT_NOT_FOUND): Nothing servable at this path
    """
    relative = PurePosixPath("/" + url_path).relative_to("/")
    root = output_root.resolve()
    candidate = (root / relative).resolve()

    if candidate != root and not candidate.is_relative_to(root):
        raise create_error(
            "OUTPUT_NOT_FOUND", path=url_path, detail="Path is outside the output tree"
        )

    if candidate.is_dir():
        candidate = candidate / INDEX_FILE

    if not candidate.is_file():
        raise create_error("OUTPUT_NOT_FOUND", path=url_path, detail=f"{candidate} does not exist")

    return candidate
