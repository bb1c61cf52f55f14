"""Number headings and build the anchor-unique section index."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import PurePosixPath

from mdspec.markdown_parser import Heading
from mdspec.reporter import Reporter
from mdspec.schemas.diagnostics import DiagnosticCode
from mdspec.schemas.sections import Section

MAX_HEADING_DEPTH = 4

Counters = tuple[int, int, int, int]

_SLUG_SEPARATOR_RE = re.compile(r"[\W_]+")


@dataclass(frozen=True)
class SectionError:
    """Why a heading could not become a section."""

    message: str


@dataclass
class IndexState:
    """Accumulator threaded through every heading of a run, in document order."""

    counters: Counters = (0, 0, 0, 0)
    sections: list[Section] = field(default_factory=list)
    anchors: set[str] = field(default_factory=set)
    current: Section | None = None


def slugify(title: str) -> str:
    """Lowercase ``title`` and fold whitespace and punctuation into hyphens."""
    return _SLUG_SEPARATOR_RE.sub("-", title.strip().lower()).strip("-")


def make_anchor(title: str, source_file: str) -> str:
    return f"{source_file}#{slugify(title)}"


def split_link(href: str) -> tuple[str, str]:
    """Split a document link into its bare file name and its fragment."""
    path, _, fragment = href.partition("#")
    return PurePosixPath(path).name, fragment


def anchor_for_link(href: str) -> str:
    """Reduce a link to the anchor form of :func:`make_anchor`.

    ``spec/intro.md#scope`` and ``intro.md#scope`` both become
    ``intro.md#scope``. A link without a fragment keeps just the file name.
    """
    name, fragment = split_link(href)
    return f"{name}#{fragment}" if fragment else name


def advance_counters(counters: Counters, level: int) -> Counters:
    """Increment the counter for ``level`` and zero every deeper one."""
    if not 1 <= level <= MAX_HEADING_DEPTH:
        return counters
    values = list(counters)
    values[level - 1] += 1
    for deeper in range(level, MAX_HEADING_DEPTH):
        values[deeper] = 0
    return (values[0], values[1], values[2], values[3])


def format_number(counters: Counters, level: int) -> str:
    return ".".join(str(value) for value in counters[:level])


def check_heading(heading: Heading) -> SectionError | None:
    """Return an error if the heading content cannot form a section title."""
    if heading.unsupported:
        kinds = ", ".join(sorted(set(heading.unsupported)))
        return SectionError(f"Unsupported content in heading: {kinds}")
    if not heading.text.strip():
        return SectionError("Heading has no title text")
    if not slugify(heading.text):
        return SectionError(f"Cannot derive an anchor from heading '{heading.text}'")
    return None


def build_section(heading: Heading, counters: Counters, source_file: str) -> Section | SectionError:
    """Build the section for ``heading`` numbered with already-advanced ``counters``."""
    error = check_heading(heading)
    if error is not None:
        return error
    return _new_section(heading, counters, source_file)


def _new_section(heading: Heading, counters: Counters, source_file: str) -> Section:
    return Section(
        level=heading.level,
        number=format_number(counters, heading.level),
        title=heading.text,
        anchor=make_anchor(heading.text, source_file),
        source_file=source_file,
    )


def index_heading(
    state: IndexState,
    heading: Heading,
    source_file: str,
    reporter: Reporter,
) -> Section | None:
    """Number one heading and add it to the index.

    Counters advance for every heading of a supported depth, including one
    that is then rejected as a duplicate.

    Returns:
        The accepted section, or None if the heading was rejected.
    """
    error = check_heading(heading)
    if error is not None:
        reporter.error(DiagnosticCode.SECTION_CONSTRUCT_ERROR, error.message)
        return None
    if heading.level > MAX_HEADING_DEPTH:
        reporter.error(
            DiagnosticCode.HEADING_DEPTH,
            f"Only heading depths up to {'#' * MAX_HEADING_DEPTH} are supported",
        )
        return None

    state.counters = advance_counters(state.counters, heading.level)
    section = _new_section(heading, state.counters, source_file)
    if section.anchor in state.anchors:
        reporter.error(DiagnosticCode.DUPLICATE_ANCHOR, f"Duplicate section title {section.anchor}")
        return None

    state.sections.append(section)
    state.anchors.add(section.anchor)
    state.current = section
    return section


def body_headings(sections: list[Section], max_level: int = 2) -> list[Section]:
    """Sections shallow enough to be listed in the index document."""
    return [section for section in sections if section.level <= max_level]
