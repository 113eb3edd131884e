"""Sanity logger - colored component logging for builds.

Every line belongs to one component (``build``, ``walk``, ``script``,
``render``, ``server``, ``watch``). Components can be silenced one by
one; scoped loggers attach the build number and an ``event`` name to
each line so JSON output can be filtered per build.
"""

import json
import sys
import threading
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, TextIO

from sanity.logging.colors import (
    CYAN,
    GREEN,
    LIGHT_BLUE,
    MAGENTA,
    ORANGE,
    RED,
    RESET,
    YELLOW,
)
from sanity.types import LogFormat, LogLevel

COMPONENTS = ("build", "walk", "script", "render", "server", "watch")

SEVERITY = {LogLevel.DEBUG: 0, LogLevel.INFO: 1, LogLevel.WARN: 2, LogLevel.ERROR: 3}

LEVEL_COLORS = {
    LogLevel.DEBUG: LIGHT_BLUE,
    LogLevel.INFO: CYAN,
    LogLevel.WARN: YELLOW,
    LogLevel.ERROR: RED,
}

COMPONENT_COLORS = {
    "build": MAGENTA,
    "walk": CYAN,
    "script": ORANGE,
    "render": GREEN,
    "server": LIGHT_BLUE,
    "watch": YELLOW,
}


@dataclass
class LogConfig:
    """Logger configuration. An empty ``components`` enables all of them."""

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.COLORED
    truncate_at: int = 200  # Colored output only
    components: dict[str, bool] = field(default_factory=dict)
    output: TextIO = field(default=sys.stdout)

    def __post_init__(self) -> None:
        self.components = {name: True for name in COMPONENTS} | self.components


class SanityLogger:
    """Logger facade; hands out loggers scoped to one build."""

    def __init__(self, config: LogConfig | None = None):
        self.config = config or LogConfig()
        # Server, watcher and build threads share the output stream.
        self._write_lock = threading.Lock()

    def build(self, build_id: int) -> "BuildLogger":
        """Logger for build number ``build_id``."""
        return BuildLogger(self, build_id)

    def debug(self, component: str, message: str, context: dict[str, Any] | None = None) -> None:
        self._log(LogLevel.DEBUG, component, message, context)

    def info(self, component: str, message: str, context: dict[str, Any] | None = None) -> None:
        self._log(LogLevel.INFO, component, message, context)

    def warn(self, component: str, message: str, context: dict[str, Any] | None = None) -> None:
        self._log(LogLevel.WARN, component, message, context)

    def error(self, component: str, message: str, context: dict[str, Any] | None = None) -> None:
        self._log(LogLevel.ERROR, component, message, context)

    def enabled(self, level: LogLevel, component: str) -> bool:
        """Whether a line at ``level`` for ``component`` would be written."""
        if SEVERITY[level] < SEVERITY[self.config.level]:
            return False
        return self.config.components.get(component, True)

    def _log(
        self,
        level: LogLevel,
        component: str,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        if not self.enabled(level, component):
            return

        if self.config.format == LogFormat.JSON:
            line = self._json_line(level, component, message, context)
        else:
            line = self._colored_line(level, component, message, context)

        with self._write_lock:
            print(line, file=self.config.output)

    def _json_line(
        self,
        level: LogLevel,
        component: str,
        message: str,
        context: dict[str, Any] | None,
    ) -> str:
        now = datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
        entry = {"timestamp": now, "level": level.value, "component": component}
        entry["message"] = message
        return json.dumps(entry | (context or {}), default=str)

    def _colored_line(
        self,
        level: LogLevel,
        component: str,
        message: str,
        context: dict[str, Any] | None,
    ) -> str:
        tag = f"{COMPONENT_COLORS.get(component, RESET)}[{component.upper()}]{RESET}"
        line = f"{tag} {LEVEL_COLORS.get(level, RESET)}{message}{RESET}"
        if not context:
            return line

        details = str(context)
        if len(details) > self.config.truncate_at:
            details = details[: self.config.truncate_at] + "..."
        return f"{line} {LIGHT_BLUE}{details}{RESET}"


class BuildLogger:
    """Logger for build-level events."""

    def __init__(self, parent: SanityLogger, build_id: int):
        """Initialize build logger.

        Args:
            parent: Parent SanityLogger instance
            build_id: Sequence number of the build
        """
        self.parent = parent
        self.build_id = build_id

    def started(self, source: str, prod: bool) -> None:
        """Log build start."""
        context = {
            "build_id": self.build_id,
            "event": "build_started",
            "source": source,
            "prod": prod,
        }
        mode = "production" if prod else "development"
        message = f"Build #{self.build_id} started ({mode})"
        self.parent._log(LogLevel.INFO, "build", message, context)

    def phase(self, name: str, duration_ms: float) -> None:
        """Log a phase timing (only emitted when profiling)."""
        context = {
            "build_id": self.build_id,
            "event": "build_phase",
            "phase": name,
            "duration_ms": round(duration_ms, 3),
        }
        self.parent._log(
            LogLevel.INFO, "build", f"Phase '{name}' took {duration_ms:.2f}ms", context
        )

    def completed(self, duration_ms: float, renders: int) -> None:
        """Log build completion with summary."""
        context = {
            "build_id": self.build_id,
            "event": "build_completed",
            "duration_ms": round(duration_ms, 3),
            "renders": renders,
        }
        duration_s = duration_ms / 1000
        message = f"Build #{self.build_id} completed ({renders} renders, {duration_s:.2f}s) ✓"
        self.parent._log(LogLevel.INFO, "build", message, context)

    def failed(self, error: Exception, duration_ms: float) -> None:
        """Log build failure."""
        context = {
            "build_id": self.build_id,
            "event": "build_failed",
            "duration_ms": round(duration_ms, 3),
            "error": str(error),
            "error_type": type(error).__name__,
        }
        duration_s = duration_ms / 1000
        message = f"Build #{self.build_id} failed ({duration_s:.2f}s): {error}"
        self.parent._log(LogLevel.ERROR, "build", message, context)

    def walk(self, message: str, level: LogLevel = LogLevel.DEBUG, **context: Any) -> None:
        """Log a tree-walk event."""
        extra = {"build_id": self.build_id, **context} if context else None
        self.parent._log(level, "walk", message, extra)

    def script(self, path: str) -> "ScriptLogger":
        """Get a logger scoped to one build script."""
        return ScriptLogger(self, path)

    def render(self) -> "RenderLogger":
        """Get a logger for the render phase."""
        return RenderLogger(self)


class ScriptLogger:
    """Logger for build script events."""

    def __init__(self, parent: BuildLogger, path: str):
        self.parent = parent
        self.path = path

    def _root(self) -> SanityLogger:
        return self.parent.parent

    def executing(self) -> None:
        """Log script execution start."""
        context = {"build_id": self.parent.build_id, "event": "script_executing", "path": self.path}
        self._root()._log(LogLevel.INFO, "script", f"Executing '{self.path}'", context)

    def output(self, text: str) -> None:
        """Forward captured script stdout, one log line per printed line."""
        for line in text.splitlines():
            self._root()._log(LogLevel.INFO, "script", f"{self.path}: {line}")

    def host_call(self, function: str, args: tuple[Any, ...]) -> None:
        """Trace a host function call (DEBUG only; args may be large)."""
        root = self._root()
        if not root.enabled(LogLevel.DEBUG, "script"):
            return
        shown = repr(args)
        context = {"event": "host_call", "function": function, "args": shown}
        root._log(LogLevel.DEBUG, "script", f"{function}{shown}", context)

    def host_call_failed(self, function: str, error: Exception) -> None:
        """Log a recovered host function failure."""
        context = {
            "build_id": self.parent.build_id,
            "event": "host_call_failed",
            "path": self.path,
            "function": function,
            "error": str(error),
        }
        message = f"'{self.path}': {function}() failed, returning None: {error}"
        self._root()._log(LogLevel.WARN, "script", message, context)

    def completed(self, duration_ms: float) -> None:
        """Log script completion."""
        context = {
            "build_id": self.parent.build_id,
            "event": "script_completed",
            "path": self.path,
            "duration_ms": round(duration_ms, 3),
        }
        self._root()._log(LogLevel.DEBUG, "script", f"'{self.path}' completed ✓", context)


class RenderLogger:
    """Logger for render phase events."""

    def __init__(self, parent: BuildLogger):
        self.parent = parent

    def _root(self) -> SanityLogger:
        return self.parent.parent

    def rendered(self, template: str, target: str) -> None:
        context = {
            "build_id": self.parent.build_id,
            "event": "rendered",
            "template": template,
            "target": target,
        }
        self._root()._log(LogLevel.DEBUG, "render", f"{template} → {target}", context)

    def failed(self, template: str, target: str, error: Exception) -> None:
        context = {
            "build_id": self.parent.build_id,
            "event": "render_failed",
            "template": template,
            "target": target,
            "error": str(error),
        }
        message = f"Rendering '{template}' → {target} failed: {error}"
        self._root()._log(LogLevel.ERROR, "render", message, context)

    def minify_fallback(self, target: str, error: Exception) -> None:
        context = {"event": "minify_failed", "target": target, "error": str(error)}
        message = f"Minification failed for {target}: {error}"
        self._root()._log(LogLevel.ERROR, "render", message, context)
        self._root()._log(
            LogLevel.WARN, "render", "Writing original file contents to destination for debugging"
        )
