"""Scripting bridge: runs build scripts against host functions."""

import functools
import json
import time
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

from sanity.errors import SanityError, create_error, wrap_error
from sanity.paths import ProjectPaths
from sanity.sandbox import PythonExecSandbox, SandboxResult, SecurityError
from sanity.template import RenderJob, to_context, to_value

from .state import BuildState, StateHandle

if TYPE_CHECKING:
    from sanity.logging import BuildLogger, ScriptLogger

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def _require_str(value: Any, what: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{what} must be a string, got {type(value).__name__}")
    return value


class ScriptBridge:
    """Owns the script state for one build.

    Every script of the build runs in a fresh sandbox namespace, but all of
    them share one BuildState: the render queue and the injected globals.
    Host function failures are recovered at the boundary (logged, ``None``
    returned); a script that raises aborts the build.
    """

    def __init__(
        self,
        paths: ProjectPaths,
        sandbox: PythonExecSandbox | None = None,
        logger: "BuildLogger | None" = None,
        prod: bool = False,
    ):
        """Initialize bridge.

        Args:
            paths: Project paths; host functions resolve against the source root
            sandbox: Sandbox to execute scripts in
            logger: Build logger
            prod: Production flag exposed to scripts as ``PROD``
        """
        self.paths = paths
        self.sandbox = sandbox or PythonExecSandbox()
        self.logger = logger
        self.prod = prod
        self._state = BuildState()
        self._handle = StateHandle(self._state)

    @property
    def state(self) -> BuildState:
        return self._handle.get()

    def close(self) -> None:
        """Release the state handle; host functions stop working."""
        self._handle.release()

    def execute(self, path: Path) -> None:
        """Run one build script.

        Raises:
            SanityError(IO_FAILED): Script could not be read
            SanityError(SCRIPT_SYNTAX | SCRIPT_SECURITY | SCRIPT_FAILED)
        """
        script_logger = self.logger.script(str(path)) if self.logger else None
        if script_logger:
            script_logger.executing()

        try:
            code = path.read_text(encoding="utf-8")
        except OSError as e:
            raise wrap_error(e, path=str(path)) from e

        start = time.perf_counter()
        result = self.sandbox.execute(code, self.host_functions(script_logger), str(path))

        if script_logger and result.stdout:
            script_logger.output(result.stdout)

        if not result.success:
            raise self._script_error(result, path)

        if script_logger:
            script_logger.completed((time.perf_counter() - start) * 1000)

    def _script_error(self, result: SandboxResult, path: Path) -> SanityError:
        exc = result.exception
        if isinstance(exc, SecurityError):
            return create_error("SCRIPT_SECURITY", path=path, detail=str(exc))
        if isinstance(exc, SyntaxError):
            return create_error(
                "SCRIPT_SYNTAX", path=path, detail=f"line {exc.lineno}: {exc.msg}"
            )
        return create_error("SCRIPT_FAILED", path=path, detail=result.error)

    def host_functions(self, script_logger: "ScriptLogger | None" = None) -> dict[str, Any]:
        """Globals injected into a build script."""
        handle = self._handle
        paths = self.paths

        def render(template: str, target: str, context: Any = None) -> None:
            name = _require_str(template, "template")
            dest = paths.output_file(_require_str(target, "target"))
            job = RenderJob(template=name, target=dest, context=to_context(context), explicit=True)
            handle.get().render_queue.append(job)

        def read_file(path: str) -> str:
            return paths.source_file(_require_str(path, "path")).read_text(encoding="utf-8")

        def read_json(path: str) -> Any:
            return to_value(json.loads(read_file(path)))

        def last_modified(path: str) -> str:
            stat = paths.source_file(_require_str(path, "path")).stat()
            return datetime.fromtimestamp(stat.st_mtime, UTC).strftime(TIMESTAMP_FORMAT)

        def inject(name: str, value: Any) -> None:
            handle.get().injected[_require_str(name, "name")] = to_value(value)

        functions: dict[str, Any] = {
            "render": render,
            "read_file": read_file,
            "read_json": read_json,
            "last_modified": last_modified,
            "inject": inject,
        }
        host = {name: _recoverable(name, func, script_logger) for name, func in functions.items()}
        host["PROD"] = self.prod
        return host


def _recoverable(
    name: str,
    func: Callable[..., Any],
    script_logger: "ScriptLogger | None",
) -> Callable[..., Any]:
    """Wrap a host function so failures become a logged ``None``."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        if script_logger:
            script_logger.host_call(name, args)
        try:
            return func(*args, **kwargs)
        except Exception as e:
            error = create_error(
                "HOST_CALL_FAILED", function=name, detail=f"{type(e).__name__}: {e}"
            )
            if script_logger:
                script_logger.host_call_failed(name, error)
            return None

    return wrapper
