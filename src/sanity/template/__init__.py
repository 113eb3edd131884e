"""Template registry and render phase."""

from .context import PROD_KEY, base_context, merge_contexts, to_context, to_value
from .filters import FILTERS
from .registry import TemplateRegistry
from .renderer import Renderer, RenderOptions, plan_jobs
from .types import RenderFailure, RenderJob, RenderSummary

__all__ = [
    "TemplateRegistry",
    "Renderer",
    "RenderOptions",
    "RenderJob",
    "RenderFailure",
    "RenderSummary",
    "plan_jobs",
    "merge_contexts",
    "base_context",
    "to_context",
    "to_value",
    "PROD_KEY",
    "FILTERS",
]
