"""Source path classification.

``classify_name`` is total over file names with zero or more extensions.
Adding a handled extension means adding one entry to ``EXTENSION_KINDS``
and, for a new kind, one handler in the walker.
"""

from pathlib import Path

from sanity.types import FileKind

HIDDEN_PREFIX = "_"
TEMPLATE_SUFFIX = ".j2"

EXTENSION_KINDS: dict[str, FileKind] = {
    TEMPLATE_SUFFIX: FileKind.TEMPLATE,
    ".scss": FileKind.STYLESHEET,
    ".sass": FileKind.STYLESHEET,
    ".py": FileKind.SCRIPT,
}

PAGE_SUFFIXES = frozenset({".html", ".htm"})


def classify_name(name: str) -> FileKind:
    """Classify a file by the final extension of its name."""
    suffix = Path(name).suffix
    return EXTENSION_KINDS.get(suffix, FileKind.ASSET)


def classify(path: Path) -> FileKind:
    """Classify a source path (directories are checked on disk)."""
    if path.is_dir():
        return FileKind.DIRECTORY
    return classify_name(path.name)


def is_hidden(path: Path) -> bool:
    """True for partials/includes: base name starts with '_'."""
    return path.name.startswith(HIDDEN_PREFIX)


def is_page_like(path: Path) -> bool:
    """True when the destination should go through the page minifier."""
    return path.suffix.lower() in PAGE_SUFFIXES
