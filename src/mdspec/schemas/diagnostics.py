"""Diagnostic models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class Severity(str, Enum):
    """Diagnostic severity."""

    ERROR = "error"
    WARNING = "warning"


class DiagnosticCode(str, Enum):
    """Stable identifiers for every kind of diagnostic."""

    HEADING_DEPTH = "heading-depth"
    DUPLICATE_ANCHOR = "duplicate-anchor"
    SECTION_CONSTRUCT_ERROR = "section-construct-error"
    DUPLICATE_PRODUCTION = "duplicate-production"
    GRAMMAR_PARSE_ERROR = "grammar-parse-error"
    README_REMOVE = "readme-remove"
    README_INSERT = "readme-insert"
    GRAMMAR_EXTRA = "grammar-extra"
    GRAMMAR_MISSING = "grammar-missing"
    GRAMMAR_DIFFERS = "grammar-differs"


class SourceLocation(BaseModel):
    """Where a diagnostic points: a file, optionally a line and a section."""

    model_config = ConfigDict(frozen=True)

    file: str = ""
    line: int | None = None
    section: str | None = None

    def __str__(self) -> str:
        text = self.file
        if self.line is not None:
            text = f"{text}({self.line})"
        if self.section:
            text = f"{text} [{self.section}]"
        return text


class Diagnostic(BaseModel):
    """A single coded finding."""

    model_config = ConfigDict(frozen=True)

    code: DiagnosticCode
    severity: Severity
    message: str
    location: SourceLocation

    def render(self) -> str:
        """Format as ``<location>: <severity> <code>: <message>``."""
        return f"{self.location}: {self.severity.value} {self.code.value}: {self.message}"
