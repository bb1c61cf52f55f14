"""Shared schemas for mdspec."""

from mdspec.schemas.diagnostics import (
    Diagnostic,
    DiagnosticCode,
    Severity,
    SourceLocation,
)
from mdspec.schemas.grammar import Grammar, Production
from mdspec.schemas.result import CheckResult, SpecModel
from mdspec.schemas.sections import ReadmeEntry, Section

__all__ = [
    "CheckResult",
    "Diagnostic",
    "DiagnosticCode",
    "Grammar",
    "Production",
    "ReadmeEntry",
    "Section",
    "Severity",
    "SourceLocation",
    "SpecModel",
]
