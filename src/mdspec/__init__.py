"""mdspec: consistency checks for Markdown specifications with embedded grammars."""

from mdspec.exceptions import (
    GrammarSyntaxError,
    MdspecError,
    ParseError,
    ReadmeLinkError,
    SourceReadError,
)
from mdspec.ingestion import CheckOptions, check_spec, check_spec_text
from mdspec.reporter import Reporter
from mdspec.schemas import CheckResult, Diagnostic, DiagnosticCode, Grammar, Production, Section

__all__ = [
    "CheckOptions",
    "CheckResult",
    "Diagnostic",
    "DiagnosticCode",
    "Grammar",
    "GrammarSyntaxError",
    "MdspecError",
    "ParseError",
    "Production",
    "ReadmeLinkError",
    "Reporter",
    "Section",
    "SourceReadError",
    "check_spec",
    "check_spec_text",
]
