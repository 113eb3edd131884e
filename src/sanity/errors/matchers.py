"""Exception matchers: map arbitrary exceptions onto error codes."""

from dataclasses import dataclass
from typing import Any, ClassVar

import jinja2


@dataclass
class MatchResult:
    """Error code plus template context extracted from an exception."""

    code: str
    context: dict[str, Any]


class ErrorMatcher:
    """Base matcher. Subclasses list the exception types they handle."""

    handles: ClassVar[tuple[type[BaseException], ...]] = ()

    def matches(self, error: Exception) -> bool:
        return isinstance(error, self.handles)

    def extract(self, error: Exception) -> MatchResult:
        raise NotImplementedError


class OSErrorMatcher(ErrorMatcher):
    """File system errors."""

    handles = (OSError,)

    def extract(self, error: Exception) -> MatchResult:
        context: dict[str, Any] = {"detail": str(error)}
        filename = getattr(error, "filename", None)
        if filename is not None:
            context["path"] = filename
        return MatchResult("IO_FAILED", context)


class SyntaxErrorMatcher(ErrorMatcher):
    """Build script syntax errors."""

    handles = (SyntaxError,)

    def extract(self, error: Exception) -> MatchResult:
        assert isinstance(error, SyntaxError)
        return MatchResult("SCRIPT_SYNTAX", {"detail": f"line {error.lineno}: {error.msg}"})


class TemplateErrorMatcher(ErrorMatcher):
    handles = (jinja2.TemplateError,)

    def extract(self, error: Exception) -> MatchResult:
        if isinstance(error, jinja2.TemplateNotFound):
            return MatchResult("TEMPLATE_NOT_FOUND", {"template": error.name})

        if isinstance(error, jinja2.TemplateSyntaxError) and error.name:
            return MatchResult(
                "TEMPLATE_ERROR", {"detail": f"{error.name}:{error.lineno}: {error.message}"}
            )
        return MatchResult("TEMPLATE_ERROR", {"detail": str(error)})


class GenericErrorMatcher(ErrorMatcher):
    """Fallback for anything else."""

    handles = (Exception,)

    def extract(self, error: Exception) -> MatchResult:
        kind = type(error).__name__
        return MatchResult("INTERNAL_ERROR", {"detail": f"{kind}: {error}", "error_type": kind})


class ErrorMatcherChain:
    """Ordered chain of matchers. First match wins; the generic matcher is last.

    Template errors come before OSError: ``TemplateNotFound`` subclasses it.
    """

    def __init__(self, matchers: list[ErrorMatcher] | None = None) -> None:
        self.matchers = matchers or [
            TemplateErrorMatcher(),
            OSErrorMatcher(),
            SyntaxErrorMatcher(),
            GenericErrorMatcher(),
        ]

    def match(self, error: Exception) -> MatchResult:
        for matcher in self.matchers:
            if matcher.matches(error):
                return matcher.extract(error)
        return GenericErrorMatcher().extract(error)
