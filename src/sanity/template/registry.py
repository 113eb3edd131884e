"""Template registry backed by a Jinja2 environment."""

from collections.abc import Callable
from typing import Any

from jinja2 import Environment, FunctionLoader

from sanity.errors import create_error, wrap_error

from .filters import FILTERS


class TemplateRegistry:
    """Discovered template sources, keyed by logical name.

    Sources are added during the walk. The Jinja2 environment reads them
    on demand through a loader callback, so ``extends``/``include``
    resolve against the registry without copying it. The full name set is
    only available once the registry is sealed after the walk.
    """

    def __init__(self, filters: dict[str, Callable[..., Any]] | None = None) -> None:
        self._sources: dict[str, str] = {}
        self._sealed = False
        self.environment = Environment(
            loader=FunctionLoader(self._load),
            autoescape=False,
            keep_trailing_newline=True,
        )
        self.environment.filters.update(FILTERS)
        if filters:
            self.environment.filters.update(filters)

    def _load(self, name: str) -> tuple[str, str, Callable[[], bool]] | None:
        source = self._sources.get(name)
        if source is None:
            return None
        return source, name, lambda: True

    def register(self, name: str, source: str) -> bool:
        """Add a template source; the last registration of a name wins.

        Returns:
            True if an earlier source with the same name was replaced

        Raises:
            RuntimeError: If the registry is already sealed
        """
        if self._sealed:
            raise RuntimeError("Template registry is sealed")
        replaced = name in self._sources
        self._sources[name] = source
        return replaced

    def seal(self) -> None:
        """Mark discovery complete."""
        self._sealed = True

    @property
    def sealed(self) -> bool:
        return self._sealed

    def __contains__(self, name: object) -> bool:
        return name in self._sources

    def __len__(self) -> int:
        return len(self._sources)

    def names(self) -> list[str]:
        """All discovered names, sorted.

        Raises:
            RuntimeError: If called before the walk completed
        """
        if not self._sealed:
            raise RuntimeError("Template names are only known after the walk completes")
        return sorted(self._sources)

    def render(self, name: str, context: dict[str, Any]) -> str:
        """Render a template by name.

        Raises:
            SanityError(TEMPLATE_NOT_FOUND | TEMPLATE_ERROR)
        """
        if name not in self._sources:
            raise create_error("TEMPLATE_NOT_FOUND", template=name)
        try:
            return self.environment.get_template(name).render(context)
        except Exception as e:
            raise wrap_error(e, template=name) from e
