"""Render phase: turns render jobs into output files."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from sanity.assets import atomic_write_bytes, minify_or_original, poison
from sanity.errors import wrap_error
from sanity.paths import is_page_like
from sanity.types import MinifyKind

from .context import base_context, merge_contexts
from .registry import TemplateRegistry
from .types import RenderFailure, RenderJob, RenderSummary

if TYPE_CHECKING:
    from sanity.logging import RenderLogger


@dataclass
class RenderOptions:
    """Per-build render switches."""

    prod: bool = False
    poison: bool = False  # Apply the anti-scraping transform to pages
    minify: bool = True  # Minify page-like outputs (production only)


class Renderer:
    """Render jobs against a sealed registry."""

    def __init__(
        self,
        registry: TemplateRegistry,
        options: RenderOptions,
        injected: dict[str, Any] | None = None,
        logger: "RenderLogger | None" = None,
    ):
        """Initialize renderer.

        Args:
            registry: Template registry, sealed
            options: Render options
            injected: Globals injected by build scripts
            logger: Optional render logger
        """
        self._registry = registry
        self._options = options
        self._injected = injected or {}
        self._logger = logger

    def context_for(self, job: RenderJob) -> dict[str, Any]:
        """Merged context: base < injected globals < job context."""
        return merge_contexts(base_context(self._options.prod), self._injected, job.context)

    def render(self, job: RenderJob) -> None:
        """Render one job to its target.

        The target is replaced atomically, so a failed render never leaves
        a partial file in place of a previous one.

        Raises:
            SanityError on template or I/O failure
        """
        text = self._registry.render(job.template, self.context_for(job))

        page = is_page_like(job.target)
        if page and self._options.poison:
            text = poison(text)

        data = text.encode("utf-8")
        if page and self._options.prod and self._options.minify:
            data = minify_or_original(MinifyKind.PAGE, data, job.target, self._logger)

        try:
            atomic_write_bytes(job.target, data)
        except OSError as e:
            raise wrap_error(e, path=str(job.target), template=job.template) from e

        if self._logger:
            self._logger.rendered(job.template, str(job.target))

    def render_all(self, jobs: list[RenderJob]) -> RenderSummary:
        """Render every job; one failing job does not stop the others."""
        summary = RenderSummary()
        for job in jobs:
            try:
                self.render(job)
            except Exception as e:
                error = wrap_error(e, path=str(job.target), template=job.template)
                summary.failures.append(RenderFailure(job=job, error=error))
                if self._logger:
                    self._logger.failed(job.template, str(job.target), error)
            else:
                summary.rendered.append(job)
        return summary


def plan_jobs(
    registry: TemplateRegistry,
    queued: list[RenderJob],
    default_target: Any,
) -> list[RenderJob]:
    """Build the full job list for the render phase.

    Every discovered template not claimed by a queued job is rendered once
    to its mirrored destination (sorted by name), followed by the queued
    jobs in queue order. Later writes to the same target win.

    Args:
        registry: Sealed template registry
        queued: Jobs queued by build scripts
        default_target: Callable mapping a template name to its destination
    """
    claimed = {job.template for job in queued}
    implicit = [
        RenderJob(template=name, target=default_target(name))
        for name in registry.names()
        if name not in claimed
    ]
    return implicit + list(queued)
