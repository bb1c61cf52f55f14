"""Single pass over all documents: index headings and collect grammar fragments."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from mdspec.antlr import read_grammar_string
from mdspec.config import MDSPEC_GRAMMAR_LANGUAGE
from mdspec.exceptions import ParseError
from mdspec.markdown_parser import CodeBlock, Heading, Paragraph, parse_markdown
from mdspec.preprocess import encode_parser_workarounds
from mdspec.reporter import Reporter
from mdspec.schemas.diagnostics import DiagnosticCode
from mdspec.schemas.grammar import Grammar, Production
from mdspec.schemas.result import SpecModel
from mdspec.schemas.sections import Section
from mdspec.sections import IndexState, index_heading
from mdspec.utils.logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class SourceDocument:
    """A parsed document, ready for the fold.

    Attributes:
        path: Path as given by the caller; used in diagnostics.
        paragraphs: Top-level blocks in document order.
    """

    path: str
    paragraphs: list[Paragraph]

    @property
    def name(self) -> str:
        """File name used as the anchor prefix."""
        return Path(self.path).name if self.path else ""


def parse_document(path: str, text: str) -> SourceDocument:
    """Encode parser workarounds into ``text`` and parse it."""
    return SourceDocument(path=path, paragraphs=parse_markdown(encode_parser_workarounds(text)))


def extract_productions(
    code: str,
    *,
    current: Section | None,
    grammar: Grammar,
    reporter: Reporter,
    source: str = "",
) -> list[Production]:
    """Parse one grammar fragment and append its productions to ``grammar``.

    Each production is linked to ``current``. A name that is already in
    ``grammar`` is reported and appended anyway.
    """
    parsed = read_grammar_string(code, source=source)
    for production in parsed.productions:
        if current is not None:
            production.link_anchor = current.anchor
            production.link_title = current.title
        if production.name is not None and grammar.has_production(production.name):
            reporter.warning(
                DiagnosticCode.DUPLICATE_PRODUCTION,
                f"Duplicate grammar for {production.name}",
            )
        grammar.productions.append(production)
    return parsed.productions


def build_spec_model(
    documents: Iterable[SourceDocument],
    reporter: Reporter,
    *,
    language: str = MDSPEC_GRAMMAR_LANGUAGE,
) -> SpecModel:
    """Fold every document, in the given order, into one section index and grammar.

    Numbering and anchor uniqueness span all documents, so this must run
    sequentially over the caller's order.
    """
    state = IndexState()
    grammar = Grammar()
    for document in documents:
        with reporter.context(file=document.path or None, line=None, section=None):
            for paragraph in document.paragraphs:
                if isinstance(paragraph, Heading):
                    with reporter.context(line=paragraph.line, section=None):
                        _index_paragraph(state, paragraph, document, reporter)
                elif isinstance(paragraph, CodeBlock) and paragraph.language == language:
                    with reporter.context(line=paragraph.line, section=_section_label(state.current)):
                        _extract_paragraph(state, paragraph, document, grammar, reporter)
    logger.info(
        "Built specification model",
        extra={"sections": len(state.sections), "productions": len(grammar.productions)},
    )
    return SpecModel(sections=state.sections, grammar=grammar)


def _index_paragraph(
    state: IndexState,
    heading: Heading,
    document: SourceDocument,
    reporter: Reporter,
) -> None:
    try:
        index_heading(state, heading, document.name, reporter)
    except Exception as exc:
        reporter.error(DiagnosticCode.SECTION_CONSTRUCT_ERROR, str(exc))


def _extract_paragraph(
    state: IndexState,
    block: CodeBlock,
    document: SourceDocument,
    grammar: Grammar,
    reporter: Reporter,
) -> None:
    try:
        extract_productions(
            block.code,
            current=state.current,
            grammar=grammar,
            reporter=reporter,
            source=document.name,
        )
    except ParseError as exc:
        reporter.error(DiagnosticCode.GRAMMAR_PARSE_ERROR, str(exc))


def _section_label(section: Section | None) -> str | None:
    if section is None:
        return None
    return f"{section.number} {section.title}"
