"""Sanity error handling - structured errors with context."""

from .errors import ErrorCategory, SanityError
from .factory import ErrorFactory, create_error, get_error_factory, wrap_error
from .matchers import ErrorMatcher, ErrorMatcherChain, MatchResult
from .registry import ErrorRegistry, ErrorTemplate

__all__ = [
    # Core error types
    "SanityError",
    "ErrorCategory",
    "ErrorTemplate",
    "MatchResult",
    # Registry and factory
    "ErrorRegistry",
    "ErrorFactory",
    "ErrorMatcherChain",
    "ErrorMatcher",
    # Convenience functions
    "get_error_factory",
    "create_error",
    "wrap_error",
]
