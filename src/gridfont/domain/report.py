"""Validation issues and reports."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class Severity(str, Enum):
    """How a validation issue affects the build gate."""

    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class ValidationIssue:
    """One problem found in the glyph corpus.

    Attributes:
        source: File reference (relative path, or several joined by ", ")
        message: Human-readable description
        severity: ERROR fails the build, WARNING does not
    """

    source: str
    message: str
    severity: Severity = Severity.ERROR

    def __str__(self) -> str:
        return f"[{self.source}] {self.message}"


@dataclass(frozen=True)
class ParseFailure:
    """A source file that could not be read or parsed.

    Attributes:
        path: Path of the failing file
        reason: Why it failed
    """

    path: Path
    reason: str


@dataclass
class ValidationReport:
    """Ordered list of issues from one validation run."""

    issues: list[ValidationIssue] = field(default_factory=list)

    def add(self, source: str, message: str, severity: Severity = Severity.ERROR) -> None:
        self.issues.append(ValidationIssue(source=source, message=message, severity=severity))

    def extend(self, issues: list[ValidationIssue]) -> None:
        self.issues.extend(issues)

    @property
    def errors(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.WARNING]

    @property
    def is_valid(self) -> bool:
        """True when no error-severity issue was found."""
        return not self.errors
