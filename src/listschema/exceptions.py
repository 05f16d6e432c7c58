"""Package exceptions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from listschema.typing.models import FieldError, ParseIssue


class PackageError(Exception):
    """Root exception for the package."""


@dataclass(frozen=True)
class SettingsError(PackageError):
    """Raised when settings cannot be loaded or validated."""

    message: str = "Failed to load settings"
    exc: BaseException | None = None

    def __str__(self) -> str:
        """Return error message payload."""
        return f"{self.message}: {self.exc}" if self.exc else self.message


@dataclass(frozen=True)
class DSLParseError(PackageError):
    """Raised when a single DSL line cannot be parsed."""

    reason: str
    line_number: int
    line: str = ""

    def __str__(self) -> str:
        """Return error message payload."""
        return f"Line {self.line_number}: {self.reason}"


@dataclass(frozen=True)
class SchemaParseError(PackageError):
    """Raised when a DSL document contains one or more unparseable lines."""

    issues: tuple[ParseIssue, ...] = field(default_factory=tuple)
    message: str = "Schema contains syntax errors"

    def __str__(self) -> str:
        """Return error message payload."""
        details = "; ".join(f"line {issue.line}: {issue.message}" for issue in self.issues)
        return f"{self.message}: {details}" if details else self.message


@dataclass(frozen=True)
class SchemaValidationError(PackageError):
    """Raised when a parsed schema is structurally invalid."""

    errors: tuple[FieldError, ...] = field(default_factory=tuple)
    message: str = "Schema is invalid"

    def __str__(self) -> str:
        """Return error message payload."""
        details = "; ".join(f"{error.field}: {error.message}" for error in self.errors)
        return f"{self.message}: {details}" if details else self.message


@dataclass(frozen=True)
class FormValidationError(PackageError):
    """Raised when a data row does not satisfy its field declarations."""

    errors: tuple[FieldError, ...] = field(default_factory=tuple)
    message: str = "Form data is invalid"

    def __str__(self) -> str:
        """Return error message payload."""
        details = "; ".join(f"{error.field}: {error.message}" for error in self.errors)
        return f"{self.message}: {details}" if details else self.message


@dataclass(frozen=True)
class SchemaEditError(PackageError):
    """Raised when a schema transformation cannot be applied."""

    message: str

    def __str__(self) -> str:
        """Return error message payload."""
        return self.message


@dataclass(frozen=True)
class InputTooLargeError(PackageError):
    """Raised when a DSL document exceeds the configured size limit."""

    size: int
    limit: int

    def __str__(self) -> str:
        """Return error message payload."""
        return f"Schema text is {self.size} bytes, limit is {self.limit} bytes"
