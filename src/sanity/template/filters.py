"""Custom template filters."""

from collections.abc import Mapping
from typing import Any

from jinja2 import TemplateRuntimeError, Undefined

from .context import merge_contexts


def filter_required(value: Any, message: str = "required value is missing") -> Any:
    """Fail the render when ``value`` is absent.

    Usage: ``{{ page.title | required("page.title must be set") }}``

    Raises:
        TemplateRuntimeError: If value is undefined or None
    """
    if value is None or isinstance(value, Undefined):
        raise TemplateRuntimeError(message)
    return value


def filter_merge(value: Mapping[str, Any], *others: Mapping[str, Any]) -> dict[str, Any]:
    """Shallow right-biased merge: ``{{ defaults | merge(overrides) }}``."""
    return merge_contexts(value, *others)


# Registry of custom filters
FILTERS: dict[str, Any] = {
    "required": filter_required,
    "merge": filter_merge,
}
