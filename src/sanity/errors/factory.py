"""Turn error codes and arbitrary exceptions into SanityErrors."""

import functools
from typing import Any

from .errors import SanityError
from .matchers import ErrorMatcherChain
from .registry import ErrorRegistry


class ErrorFactory:
    """Builds SanityErrors through a registry and a matcher chain."""

    def __init__(
        self,
        registry: ErrorRegistry | None = None,
        matchers: ErrorMatcherChain | None = None,
    ):
        self.registry = registry or ErrorRegistry()
        self.matchers = matchers or ErrorMatcherChain()

    def create(
        self,
        code: str,
        context: dict[str, Any] | None = None,
        **extra: Any,
    ) -> SanityError:
        """Error for ``code``, interpolated with ``context`` and ``extra``."""
        return self.registry.create(code, {**(context or {}), **extra})

    def from_exception(
        self,
        error: Exception,
        path: str | None = None,
        template: str | None = None,
    ) -> SanityError:
        """Map any exception onto a SanityError.

        A SanityError is returned as a copy with missing ``path``/``template``
        filled in; anything else goes through the matcher chain, and the
        matched context takes precedence over the arguments.
        """
        if isinstance(error, SanityError):
            return error.with_context(path=path, template=template)

        match = self.matchers.match(error)
        context = {
            key: value
            for key, value in (("path", path), ("template", template))
            if value is not None
        }
        context.update(match.context)
        return self.registry.create(match.code, context)


@functools.cache
def get_error_factory() -> ErrorFactory:
    """Process-wide default factory."""
    return ErrorFactory()


def create_error(code: str, **context: Any) -> SanityError:
    """Create an error by code, e.g. ``create_error("IO_FAILED", path=p)``."""
    return get_error_factory().create(code, context)


def wrap_error(error: Exception, **context: Any) -> SanityError:
    """Convert an arbitrary exception; ``context`` may carry path/template."""
    return get_error_factory().from_exception(error, **context)
