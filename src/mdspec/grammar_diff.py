"""Compare the extracted grammar with the authority grammar."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Literal

from mdspec.config import MDSPEC_START_SYMBOL, MDSPEC_TOOL_NAME
from mdspec.reporter import Reporter
from mdspec.schemas.diagnostics import DiagnosticCode, SourceLocation
from mdspec.schemas.grammar import Grammar

DifferenceKind = Literal["differs", "missing", "extra"]


@dataclass(frozen=True)
class ProductionDifference:
    """One discrepancy between the two grammars.

    Attributes:
        name: Production name.
        kind: ``differs`` (both define it, differently), ``missing`` (only
            the authority defines it) or ``extra`` (only the extracted
            grammar defines it).
        authority: Serialized authority production, if present.
        extracted: Serialized extracted production, if present.
    """

    name: str
    kind: DifferenceKind
    authority: str | None = None
    extracted: str | None = None


def compare_grammars(
    authority: Grammar,
    extracted: Grammar,
    *,
    start_symbol: str = MDSPEC_START_SYMBOL,
) -> list[ProductionDifference]:
    """List every named production that does not match between the grammars.

    Productions are compared by their serialized form. ``start_symbol`` is
    never reported as missing or extra. Neither grammar is modified.
    """
    authority_by_name = authority.by_name()
    extracted_by_name = extracted.by_name()
    differences: list[ProductionDifference] = []

    for name, production in authority_by_name.items():
        if name not in extracted_by_name:
            continue
        authority_text = production.serialize()
        extracted_text = extracted_by_name[name].serialize()
        if authority_text != extracted_text:
            differences.append(
                ProductionDifference(
                    name=name,
                    kind="differs",
                    authority=authority_text,
                    extracted=extracted_text,
                )
            )

    for name, production in authority_by_name.items():
        if name != start_symbol and name not in extracted_by_name:
            differences.append(
                ProductionDifference(name=name, kind="missing", authority=production.serialize())
            )

    for name, production in extracted_by_name.items():
        if name != start_symbol and name not in authority_by_name:
            differences.append(
                ProductionDifference(name=name, kind="extra", extracted=production.serialize())
            )

    return differences


def report_grammar_differences(
    differences: Iterable[ProductionDifference],
    reporter: Reporter,
    location: SourceLocation | None = None,
) -> None:
    """Turn differences into ``grammar-*`` errors."""
    if location is None:
        location = SourceLocation(file=MDSPEC_TOOL_NAME)
    for difference in differences:
        if difference.kind == "extra":
            reporter.error(
                DiagnosticCode.GRAMMAR_EXTRA,
                f"extracted grammar has superfluous production '{difference.name}'",
                location,
            )
        elif difference.kind == "missing":
            reporter.error(
                DiagnosticCode.GRAMMAR_MISSING,
                f"extracted grammar lacks production '{difference.name}'",
                location,
            )
        else:
            reporter.error(
                DiagnosticCode.GRAMMAR_DIFFERS,
                f"production '{difference.name}' differs; "
                f"authority says {_escape(difference.authority)}; "
                f"extracted says {_escape(difference.extracted)}",
                location,
            )


def link_authority_grammar(authority: Grammar, extracted: Grammar) -> Grammar:
    """Return a copy of ``authority`` carrying the section links of ``extracted``.

    Each named production takes the links of the first extracted production
    with the same name, or none.
    """
    first_by_name = {}
    for production in extracted.productions:
        if production.name is not None:
            first_by_name.setdefault(production.name, production)

    linked = []
    for production in authority.productions:
        source = first_by_name.get(production.name) if production.name is not None else None
        linked.append(
            production.model_copy(
                update={
                    "link_anchor": source.link_anchor if source is not None else None,
                    "link_title": source.link_title if source is not None else None,
                }
            )
        )
    return Grammar(productions=linked)


def _escape(text: str | None) -> str:
    return (text or "").replace("\r", "\\r").replace("\n", "\\n")
