"""Error codes and their message templates."""

from dataclasses import dataclass
from typing import Any

from .errors import ErrorCategory, SanityError


@dataclass(frozen=True)
class ErrorTemplate:
    """Message templates for one error code, interpolated with ``str.format``."""

    code: str
    category: ErrorCategory
    message_template: str  # "Failed to read '{path}'"
    detail_template: str | None = None
    suggestion_template: str | None = None


BUILTIN_TEMPLATES = (
    # Walk
    ErrorTemplate(
        "SOURCE_MISSING",
        ErrorCategory.WALK,
        "Source directory '{path}' does not exist",
        "The build needs a populated source tree",
        "Create the source directory or set paths.source in sanity.yaml",
    ),
    ErrorTemplate(
        "IO_FAILED",
        ErrorCategory.WALK,
        "File system operation failed on '{path}'",
        "A file or directory could not be read, written or created",
        "Check file permissions and disk space",
    ),
    ErrorTemplate(
        "STYLESHEET_FAILED",
        ErrorCategory.WALK,
        "Stylesheet '{path}' failed to compile",
        "The stylesheet compiler rejected the input",
        "Fix the stylesheet syntax or the imported partials",
    ),
    # Build scripts
    ErrorTemplate(
        "SCRIPT_SYNTAX",
        ErrorCategory.SCRIPT,
        "Syntax error in build script '{path}'",
        "The build script could not be parsed",
        "Fix the syntax errors and rebuild",
    ),
    ErrorTemplate(
        "SCRIPT_FAILED",
        ErrorCategory.SCRIPT,
        "Build script '{path}' failed",
        "The build script raised an exception",
        "Check the script output above the error",
    ),
    ErrorTemplate(
        "SCRIPT_SECURITY",
        ErrorCategory.SCRIPT,
        "Security violation in build script '{path}'",
        "The script used a forbidden import or builtin",
        "Read files through read_file()/read_json() instead of open()",
    ),
    ErrorTemplate(
        "HOST_CALL_FAILED",
        ErrorCategory.SCRIPT,
        "Host function '{function}' failed",
        "The call returned None to the script",
    ),
    # Render phase
    ErrorTemplate(
        "TEMPLATE_NOT_FOUND",
        ErrorCategory.RENDER,
        "Template '{template}' not found",
        "No template source with this name was discovered",
        "Template names are source paths relative to the source root without '.j2'",
    ),
    ErrorTemplate(
        "TEMPLATE_ERROR",
        ErrorCategory.RENDER,
        "Template rendering failed",
        "Jinja2 could not compile or render the template",
        "Check template syntax and variable names",
    ),
    ErrorTemplate(
        "RENDER_FAILED",
        ErrorCategory.RENDER,
        "{count} render job(s) failed",
        "Some outputs were not written",
        "See the logged render errors for each job",
    ),
    ErrorTemplate(
        "MINIFY_FAILED",
        ErrorCategory.RENDER,
        "Minification of '{path}' failed",
        "The original contents were written instead",
    ),
    # Configuration
    ErrorTemplate(
        "CONFIG_INVALID",
        ErrorCategory.CONFIG,
        "Invalid configuration",
        "The sanity configuration is invalid",
        "Check sanity.yaml and the command line flags",
    ),
    # Dev server
    ErrorTemplate(
        "OUTPUT_NOT_FOUND",
        ErrorCategory.SERVER,
        "No output at '{path}'",
        "Nothing was built at this location",
        "Check the build log for errors, or the URL for typos",
    ),
    ErrorTemplate(
        "INTERNAL_ERROR",
        ErrorCategory.SYSTEM,
        "Internal error",
        "An unexpected error occurred",
        "Rerun with --verbose and check the log",
    ),
)


def _interpolate(template: str | None, context: dict[str, Any]) -> str | None:
    """Format ``template``; a missing key leaves it unformatted."""
    if template is None:
        return None
    try:
        return template.format(**context)
    except KeyError:
        return template


class ErrorRegistry:
    """Registry of error templates. Creates errors from templates + context."""

    def __init__(self) -> None:
        self._templates = {template.code: template for template in BUILTIN_TEMPLATES}

    def get_template(self, code: str) -> ErrorTemplate | None:
        return self._templates.get(code)

    def list_codes(self) -> list[str]:
        return list(self._templates)

    def create(
        self,
        code: str,
        context: dict[str, Any] | None = None,
        cause: SanityError | None = None,
    ) -> SanityError:
        """Create an error from its template.

        An explicit ``detail`` in the context replaces the template's.

        Raises:
            ValueError: If error code not found
        """
        template = self.get_template(code)
        if template is None:
            raise ValueError(f"Unknown error code: {code}")

        context = context or {}
        path = context.get("path")
        return SanityError(
            code=template.code,
            category=template.category,
            message=_interpolate(template.message_template, context) or f"Error {code}",
            detail=context.get("detail") or _interpolate(template.detail_template, context),
            suggestion=_interpolate(template.suggestion_template, context),
            path=str(path) if path is not None else None,
            template=context.get("template"),
            cause=cause,
        )
