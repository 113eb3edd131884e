"""Restricted runtime for build scripts.

A build script is parsed once, checked against the import whitelist,
then executed with a trimmed builtins table whose ``__import__`` checks
the whitelist again. The script sees the project only through the host
functions placed in its globals; ``print`` goes to a capture buffer that
the bridge forwards to the log.
"""

import ast
import builtins as builtins_module
import io
import time
from collections.abc import Iterator
from typing import Any

from .types import SandboxResult, SecurityError

SAFE_IMPORTS = frozenset(
    {
        # data
        "json",
        "re",
        "html",
        "string",
        "textwrap",
        "hashlib",
        "uuid",
        # dates
        "datetime",
        "time",
        # numbers
        "math",
        "decimal",
        "statistics",
        "random",
        # functional helpers
        "itertools",
        "functools",
        "operator",
        "collections",
        "copy",
        "typing",
    }
)

DANGEROUS_BUILTINS = frozenset(
    {
        "eval",
        "exec",
        "compile",
        "__import__",
        "open",
        "input",
        "breakpoint",
        "exit",
        "quit",
        "help",
        "globals",
        "locals",
        "vars",
        "getattr",
        "setattr",
        "delattr",
    }
)

_RESTRICTED_BUILTINS = {
    name: value
    for name, value in vars(builtins_module).items()
    if name not in DANGEROUS_BUILTINS
}

SCRIPT_MODULE_NAME = "__sanity__"
TRUNCATED_MARKER = "\n... (truncated)"


def _top_level(module: str) -> str:
    return module.partition(".")[0]


def _imports(tree: ast.AST) -> Iterator[str]:
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                yield _top_level(alias.name)
        elif isinstance(node, ast.ImportFrom) and node.module:
            yield _top_level(node.module)


class PythonExecSandbox:
    """Runs build scripts with whitelisted imports and restricted builtins.

    Example:
        >>> sandbox = PythonExecSandbox()
        >>> result = sandbox.execute('print("hi")', {}, "www/index.py")
        >>> result.success, result.stdout
        (True, 'hi\\n')
    """

    def __init__(
        self,
        allowed_imports: set[str] | None = None,
        max_output_size: int = 1024 * 1024,
    ):
        """Initialize sandbox.

        Args:
            allowed_imports: Importable top-level modules (default: SAFE_IMPORTS);
                an empty set forbids every import
            max_output_size: Captured stdout beyond this many characters is cut
        """
        self.allowed_imports = set(SAFE_IMPORTS if allowed_imports is None else allowed_imports)
        self.max_output_size = max_output_size

    def _check_imports(self, tree: ast.AST) -> None:
        for module in _imports(tree):
            if module not in self.allowed_imports:
                allowed = ", ".join(sorted(self.allowed_imports))
                raise SecurityError(f"Import '{module}' not allowed (allowed: {allowed})")

    def _guarded_import(self, name: str, *args: Any, **kwargs: Any) -> Any:
        module = _top_level(name)
        if module not in self.allowed_imports:
            raise SecurityError(f"Import '{module}' not allowed")
        return builtins_module.__import__(name, *args, **kwargs)

    def _script_globals(
        self, context: dict[str, Any], buffer: io.StringIO, filename: str
    ) -> dict[str, Any]:
        def captured_print(
            *args: Any, sep: str | None = " ", end: str | None = "\n", **_: Any
        ) -> None:
            builtins_module.print(*args, sep=sep, end=end, file=buffer)

        script_builtins: dict[str, Any] = dict(_RESTRICTED_BUILTINS)
        script_builtins["__import__"] = self._guarded_import
        script_builtins["print"] = captured_print

        return {
            "__builtins__": script_builtins,
            "__name__": SCRIPT_MODULE_NAME,
            "__file__": filename,
            **context,
        }

    def execute(
        self,
        code: str,
        context: dict[str, Any] | None = None,
        filename: str = "<script>",
    ) -> SandboxResult:
        """Execute a build script.

        Args:
            code: Python source
            context: Host functions and values to inject as globals
            filename: Path reported in tracebacks

        Returns:
            SandboxResult; ``exception`` holds the SyntaxError,
            SecurityError or runtime exception that stopped the script
        """
        started = time.perf_counter()
        buffer = io.StringIO()
        error: str | None = None
        exception: BaseException | None = None

        try:
            tree = ast.parse(code, filename=filename)
            self._check_imports(tree)
            script_globals = self._script_globals(context or {}, buffer, filename)
            exec(compile(tree, filename, "exec"), script_globals)
        except SecurityError as e:
            error, exception = f"Security violation: {e}", e
        except SyntaxError as e:
            error, exception = f"Syntax error: {e}", e
        except KeyboardInterrupt:
            raise
        except BaseException as e:
            # SystemExit included: a script cannot end the build process.
            error, exception = f"{type(e).__name__}: {e}", e

        stdout = buffer.getvalue()
        if len(stdout) > self.max_output_size:
            stdout = stdout[: self.max_output_size] + TRUNCATED_MARKER

        return SandboxResult(
            success=exception is None,
            stdout=stdout,
            execution_time=time.perf_counter() - started,
            error=error,
            exception=exception,
        )
