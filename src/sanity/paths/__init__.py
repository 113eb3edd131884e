"""Source tree paths: classification, destination mapping, staleness."""

from .classifier import (
    EXTENSION_KINDS,
    HIDDEN_PREFIX,
    TEMPLATE_SUFFIX,
    classify,
    classify_name,
    is_hidden,
    is_page_like,
)
from .gate import is_stale, mark_stale
from .project import ProjectPaths

__all__ = [
    "ProjectPaths",
    "classify",
    "classify_name",
    "is_hidden",
    "is_page_like",
    "is_stale",
    "mark_stale",
    "EXTENSION_KINDS",
    "HIDDEN_PREFIX",
    "TEMPLATE_SUFFIX",
]
