"""File system watching and rebuild scheduling."""

from .watcher import (
    DEBOUNCE_SECONDS,
    Debouncer,
    RebuildScheduler,
    SourceEventHandler,
    SourceWatcher,
    prune_outputs,
)

__all__ = [
    "SourceWatcher",
    "SourceEventHandler",
    "Debouncer",
    "RebuildScheduler",
    "prune_outputs",
    "DEBOUNCE_SECONDS",
]
