"""Keep the index document (readme) in step with the body headings."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Literal

from mdspec.config import MDSPEC_DOCUMENT_EXTENSION
from mdspec.exceptions import ReadmeLinkError
from mdspec.markdown_parser import create_markdown_parser
from mdspec.reporter import Reporter
from mdspec.schemas.diagnostics import DiagnosticCode, SourceLocation
from mdspec.schemas.sections import ReadmeEntry, Section
from mdspec.sections import anchor_for_link, body_headings, split_link

try:
    from bs4 import BeautifulSoup
    from bs4.element import Tag
except ImportError as exc:  # pragma: no cover - runtime dependency check
    raise RuntimeError(
        "BeautifulSoup4 is required for readme parsing (pip install beautifulsoup4)."
    ) from exc


@dataclass(frozen=True)
class ReadmeEdit:
    """A line to add to or delete from the readme."""

    kind: Literal["insert", "remove"]
    link: str
    location: SourceLocation


def format_readme_link(level: int, title: str, anchor: str) -> str:
    """Render the bulleted Markdown link for one readme entry."""
    return f"{'  ' * (level - 1)}* [{title}]({anchor})"


def extract_readme_entries(
    text: str,
    source_file: str = "",
    *,
    extension: str = MDSPEC_DOCUMENT_EXTENSION,
) -> list[ReadmeEntry]:
    """Collect the links to specification documents from the readme's lists.

    The level of an entry is the nesting depth of its list item. Only links
    whose path (ignoring any ``#fragment``) ends with ``extension`` are kept.
    """
    soup = BeautifulSoup(_render_with_lines(text), "lxml")
    entries: list[ReadmeEntry] = []
    for item in soup.find_all("li"):
        level = len(item.find_parents(["ul", "ol"]))
        line = item.get("data-line")
        location = SourceLocation(file=source_file, line=int(line) if line else None)
        for link in _direct_links(item):
            href = link.get("href", "")
            if not _links_document(href, extension):
                continue
            entries.append(
                ReadmeEntry(
                    level=level,
                    title=link.get_text(" ", strip=True),
                    anchor=href,
                    location=location,
                )
            )
    return entries


def plan_readme_edits(
    headings: list[Section],
    entries: Iterable[ReadmeEntry],
) -> list[ReadmeEdit]:
    """Compare readme order against body order in a single left-to-right pass.

    ``expected`` is the index of the next body heading the readme should
    list. Entries are matched on level and on the link reduced to anchor
    form, so a directory prefix in the link does not matter. An entry
    matching nothing is to be removed and is shown with its link as
    written. An entry that jumps ahead means every heading it skipped is to
    be inserted. An entry that points back before ``expected`` is skipped
    silently.
    """
    positions: dict[tuple[int, str], int] = {}
    for index, heading in enumerate(headings):
        positions.setdefault((heading.level, heading.anchor), index)

    edits: list[ReadmeEdit] = []
    expected = 0
    for entry in entries:
        position = positions.get((entry.level, anchor_for_link(entry.anchor)))
        if position is None:
            link = format_readme_link(entry.level, entry.title, entry.anchor)
            edits.append(ReadmeEdit(kind="remove", link=link, location=entry.location))
        elif position < expected:
            continue
        elif position == expected:
            expected += 1
        else:
            for missing in headings[expected:position]:
                link = format_readme_link(missing.level, missing.title, missing.anchor)
                edits.append(ReadmeEdit(kind="insert", link=link, location=entry.location))
            expected = position + 1
    return edits


def reconcile_readme(
    sections: list[Section],
    entries: Iterable[ReadmeEntry],
    reporter: Reporter,
) -> list[ReadmeEdit]:
    """Report the edits that bring the readme in line with the body headings.

    Nothing is checked when no level 1 or 2 heading exists.
    """
    headings = body_headings(sections)
    if not headings:
        return []
    edits = plan_readme_edits(headings, entries)
    for edit in edits:
        if edit.kind == "remove":
            reporter.error(DiagnosticCode.README_REMOVE, f"Remove: {edit.link}", edit.location)
        else:
            reporter.error(DiagnosticCode.README_INSERT, f"Insert: {edit.link}", edit.location)
    return edits


def order_documents_by_readme(
    text: str,
    files: Iterable[str],
    *,
    extension: str = MDSPEC_DOCUMENT_EXTENSION,
) -> list[str]:
    """Order ``files`` by the first appearance of their names in readme links.

    Files the readme never links are left out.

    Raises:
        ReadmeLinkError: If the readme links a document that is not in ``files``.
    """
    by_name = {Path(path).name: path for path in files}
    ordered: list[str] = []
    for entry in extract_readme_entries(text, extension=extension):
        name, _ = split_link(entry.anchor)
        if name not in by_name:
            raise ReadmeLinkError(f"readme link '{name}' is not one of the supplied documents")
        if by_name[name] not in ordered:
            ordered.append(by_name[name])
    return ordered


def _render_with_lines(text: str) -> str:
    parser = create_markdown_parser()
    tokens = parser.parse(text)
    for token in tokens:
        if token.type == "list_item_open" and token.map:
            token.attrSet("data-line", str(token.map[0] + 1))
    return parser.renderer.render(tokens, parser.options, {})


def _direct_links(item: Tag) -> list[Tag]:
    """Links in ``item`` that are not inside a nested list item."""
    return [link for link in item.find_all("a") if link.find_parent("li") is item]


def _links_document(href: str, extension: str) -> bool:
    path = href.split("#", 1)[0]
    return bool(path) and path.lower().endswith(extension.lower())
