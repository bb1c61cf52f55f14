"""Consistency check pipeline: read, fold, reconcile, diff."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from mdspec.antlr import read_grammar_file
from mdspec.config import (
    MDSPEC_DOCUMENT_EXTENSION,
    MDSPEC_ENCODING,
    MDSPEC_GRAMMAR_LANGUAGE,
    MDSPEC_START_SYMBOL,
    MDSPEC_TOOL_NAME,
)
from mdspec.extraction import SourceDocument, build_spec_model, parse_document
from mdspec.file_utils import read_text_async
from mdspec.grammar_diff import (
    compare_grammars,
    link_authority_grammar,
    report_grammar_differences,
)
from mdspec.readme import (
    extract_readme_entries,
    order_documents_by_readme,
    reconcile_readme,
)
from mdspec.reporter import Reporter
from mdspec.schemas import CheckResult, Grammar
from mdspec.utils.logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class CheckOptions:
    """Options for a consistency check run.

    Attributes:
        language: Code block language tag that marks grammar fragments.
        start_symbol: Production exempt from missing/extra checks.
        extension: File extension of specification documents; readme links
            to other files are ignored.
        encoding: Text encoding of every input file.
        order_by_readme: If True and a readme is given, process the documents
            in the order the readme links them instead of the given order.
    """

    language: str = MDSPEC_GRAMMAR_LANGUAGE
    start_symbol: str = MDSPEC_START_SYMBOL
    extension: str = MDSPEC_DOCUMENT_EXTENSION
    encoding: str = MDSPEC_ENCODING
    order_by_readme: bool = False


async def load_documents(
    paths: Iterable[Path | str],
    *,
    encoding: str = MDSPEC_ENCODING,
) -> list[SourceDocument]:
    """Read and parse every document concurrently.

    The result follows the order of ``paths``, not completion order. The
    first read failure aborts the whole load.

    Raises:
        SourceReadError: If any document cannot be read.
    """

    async def load(path: Path) -> SourceDocument:
        text = await read_text_async(path, encoding)
        return await asyncio.to_thread(parse_document, str(path), text)

    return list(await asyncio.gather(*(load(Path(path)) for path in paths)))


async def check_spec(
    files: Iterable[Path | str],
    *,
    readme: Path | str | None = None,
    grammar_file: Path | str | None = None,
    options: CheckOptions | None = None,
) -> CheckResult:
    """Build the section index and grammar from ``files`` and check them.

    Args:
        files: Specification documents, in the order that determines
            section numbering.
        readme: Optional index document whose linked headings must match the
            level 1 and 2 body headings.
        grammar_file: Optional authority grammar to diff the extracted
            grammar against.
        options: Processing options. Uses defaults if None.

    Returns:
        The built model and every diagnostic reported.

    Raises:
        SourceReadError: If a document, the readme or the grammar file
            cannot be read.
        GrammarSyntaxError: If the authority grammar cannot be parsed.
        ReadmeLinkError: If ordering by readme and the readme links an
            unknown document.
    """
    opts = options or CheckOptions()
    reporter = Reporter(default_file=MDSPEC_TOOL_NAME)
    paths = [str(path) for path in files]

    readme_text: str | None = None
    if readme is not None:
        readme_text = await read_text_async(Path(readme), opts.encoding)
        if opts.order_by_readme:
            paths = order_documents_by_readme(readme_text, paths, extension=opts.extension)

    logger.info("Reading specification documents", extra={"documents": len(paths)})
    documents = await load_documents(paths, encoding=opts.encoding)
    model = build_spec_model(documents, reporter, language=opts.language)

    if readme_text is not None:
        entries = extract_readme_entries(readme_text, str(readme), extension=opts.extension)
        reconcile_readme(model.sections, entries, reporter)

    authority: Grammar | None = None
    if grammar_file is not None:
        logger.info("Reading authority grammar", extra={"grammar_file": str(grammar_file)})
        authority_grammar = await asyncio.to_thread(read_grammar_file, grammar_file, opts.encoding)
        differences = compare_grammars(
            authority_grammar, model.grammar, start_symbol=opts.start_symbol
        )
        report_grammar_differences(differences, reporter)
        authority = link_authority_grammar(authority_grammar, model.grammar)

    return CheckResult(
        sections=model.sections,
        grammar=model.grammar,
        authority=authority,
        diagnostics=reporter.diagnostics,
    )


def check_spec_text(
    text: str,
    *,
    path: str = "",
    options: CheckOptions | None = None,
) -> CheckResult:
    """Build and check the model of a single in-memory document."""
    opts = options or CheckOptions()
    reporter = Reporter(default_file=path or MDSPEC_TOOL_NAME)
    model = build_spec_model([parse_document(path, text)], reporter, language=opts.language)
    return CheckResult(
        sections=model.sections,
        grammar=model.grammar,
        diagnostics=reporter.diagnostics,
    )
