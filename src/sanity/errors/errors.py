"""Sanity error types."""

import dataclasses
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Which part of a build an error came from."""

    WALK = "WALK"
    SCRIPT = "SCRIPT"
    RENDER = "RENDER"
    CONFIG = "CONFIG"
    SERVER = "SERVER"
    SYSTEM = "SYSTEM"


@dataclass
class SanityError(Exception):
    """Structured build error. Every failure surfaced to users is one of these."""

    code: str  # e.g., "IO_FAILED"
    category: ErrorCategory

    message: str
    detail: str | None = None
    suggestion: str | None = None

    path: str | None = None  # Source or destination file
    template: str | None = None  # Logical template name

    cause: "SanityError | None" = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"{self.message}: {self.detail}" if self.detail else self.message

    @property
    def location(self) -> str | None:
        """Best description of where the error happened."""
        if self.template and self.path:
            return f"{self.template} ({self.path})"
        return self.template or self.path

    def to_dict(self) -> dict[str, Any]:
        """Flatten for JSON logs and the diagnostic page."""
        data = {f.name: getattr(self, f.name) for f in dataclasses.fields(self)}
        data["category"] = self.category.value
        data["timestamp"] = self.timestamp.isoformat()
        data["cause"] = self.cause.to_dict() if self.cause else None
        return data

    def with_context(
        self,
        path: str | None = None,
        template: str | None = None,
    ) -> "SanityError":
        """Copy of this error with ``path``/``template`` filled in where missing."""
        return dataclasses.replace(
            self,
            path=self.path or path,
            template=self.template or template,
        )
