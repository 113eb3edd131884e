"""Sandbox types."""

from dataclasses import dataclass


class SecurityError(Exception):
    """A build script used a forbidden import."""


@dataclass
class SandboxResult:
    """Outcome of running one build script.

    ``stdout`` is kept even when the script failed, so output printed
    before an exception still reaches the log.
    """

    success: bool
    stdout: str
    execution_time: float  # Seconds
    error: str | None = None  # "Type: message" summary
    exception: BaseException | None = None
