"""Render context construction.

Contexts are shallow, right-biased mappings: for ``merge_contexts(a, b)``
keys of ``b`` win. Every render sees three layers, lowest first: the
base context (reserved ``__prod`` flag), the globals injected by build
scripts, and the job's own context.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import JsonValue, TypeAdapter

PROD_KEY = "__prod"

_VALUE_ADAPTER: TypeAdapter[Any] = TypeAdapter(JsonValue)


def merge_contexts(*layers: Mapping[str, Any] | None) -> dict[str, Any]:
    """Shallow-merge context layers left to right."""
    merged: dict[str, Any] = {}
    for layer in layers:
        if layer:
            merged.update(layer)
    return merged


def base_context(prod: bool) -> dict[str, Any]:
    """The context every render starts from."""
    return {PROD_KEY: prod}


def to_value(value: Any) -> Any:
    """Validate a script-supplied value into the structured value model.

    Accepts null, booleans, numbers, strings, sequences and string-keyed
    mappings, recursively.

    Raises:
        pydantic.ValidationError: For anything else
    """
    return _VALUE_ADAPTER.validate_python(value)


def to_context(value: Any) -> dict[str, Any]:
    """Validate a script-supplied render context (``None`` means empty).

    Raises:
        TypeError: If the value is not a mapping
        pydantic.ValidationError: If a member is not a structured value
    """
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise TypeError(f"context must be a mapping, got {type(value).__name__}")
    return {str(k): to_value(v) for k, v in value.items()}
