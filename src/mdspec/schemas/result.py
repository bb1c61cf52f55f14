"""Run output models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from mdspec.schemas.diagnostics import Diagnostic, Severity
from mdspec.schemas.grammar import Grammar
from mdspec.schemas.sections import Section


class SpecModel(BaseModel):
    """Sections and grammar built from the specification documents."""

    sections: list[Section] = Field(default_factory=list)
    grammar: Grammar = Field(default_factory=Grammar)


class CheckResult(BaseModel):
    """Final output of a consistency check run.

    Attributes:
        sections: Ordered, numbered, anchor-unique section index.
        grammar: Grammar extracted from the documents, with section links.
        authority: The authority grammar with links copied from the extracted
            grammar, when one was supplied.
        diagnostics: Everything reported during the run, in order.
    """

    sections: list[Section] = Field(default_factory=list)
    grammar: Grammar = Field(default_factory=Grammar)
    authority: Grammar | None = None
    diagnostics: list[Diagnostic] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return any(d.severity is Severity.ERROR for d in self.diagnostics)
