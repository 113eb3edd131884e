"""Build script sandbox."""

from .sandbox import DANGEROUS_BUILTINS, SAFE_IMPORTS, PythonExecSandbox
from .types import SandboxResult, SecurityError

__all__ = [
    "PythonExecSandbox",
    "SandboxResult",
    "SecurityError",
    "SAFE_IMPORTS",
    "DANGEROUS_BUILTINS",
]
