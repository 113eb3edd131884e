"""Template rendering type definitions."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass
class RenderJob:
    """A pending (template, destination, context) triple, rendered once."""

    template: str  # Logical template name
    target: Path  # Absolute destination
    context: dict[str, Any] = field(default_factory=dict)
    explicit: bool = False  # Queued by a build script


@dataclass
class RenderFailure:
    """A render job that did not produce output."""

    job: RenderJob
    error: Exception


@dataclass
class RenderSummary:
    """Outcome of the render phase."""

    rendered: list[RenderJob] = field(default_factory=list)
    failures: list[RenderFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures
