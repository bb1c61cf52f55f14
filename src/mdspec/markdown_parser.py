"""Parse Markdown into the flat paragraph stream the checker walks."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from markdown_it import MarkdownIt
from markdown_it.token import Token

_INLINE_TEXT_TYPES = {"text", "code_inline"}
_INLINE_BREAK_TYPES = {"softbreak", "hardbreak"}
_UNSUPPORTED_INLINE_TYPES = {"image", "html_inline"}


@dataclass
class Heading:
    """A heading paragraph."""

    level: int
    text: str
    line: int | None = None
    unsupported: list[str] = field(default_factory=list)


@dataclass
class CodeBlock:
    """A fenced or indented code block."""

    language: str
    code: str
    line: int | None = None


@dataclass
class ListBlock:
    """A bulleted or ordered list."""

    ordered: bool
    item_count: int
    line: int | None = None


@dataclass
class Other:
    """Any other top-level block."""

    kind: str
    line: int | None = None


Paragraph = Union[Heading, CodeBlock, ListBlock, Other]


def create_markdown_parser() -> MarkdownIt:
    """CommonMark with GitHub-style tables enabled."""
    return MarkdownIt("commonmark").enable("table")


def parse_markdown(text: str) -> list[Paragraph]:
    """Return the top-level blocks of ``text`` in document order."""
    tokens = create_markdown_parser().parse(text)
    paragraphs: list[Paragraph] = []
    for index, token in enumerate(tokens):
        if token.level != 0 or token.nesting == -1:
            continue
        line = _line_of(token)
        if token.type == "heading_open":
            paragraphs.append(_heading(token, tokens[index + 1], line))
        elif token.type == "fence":
            language = token.info.strip().split()[0] if token.info.strip() else ""
            paragraphs.append(CodeBlock(language=language, code=token.content, line=line))
        elif token.type == "code_block":
            paragraphs.append(CodeBlock(language="", code=token.content, line=line))
        elif token.type in ("bullet_list_open", "ordered_list_open"):
            paragraphs.append(
                ListBlock(
                    ordered=token.type == "ordered_list_open",
                    item_count=_count_items(tokens, index),
                    line=line,
                )
            )
        else:
            paragraphs.append(Other(kind=token.type.removesuffix("_open"), line=line))
    return paragraphs


def _heading(token: Token, inline: Token, line: int | None) -> Heading:
    level = int(token.tag[1:])
    parts: list[str] = []
    unsupported: list[str] = []
    for child in inline.children or []:
        if child.type in _INLINE_TEXT_TYPES:
            parts.append(child.content)
        elif child.type in _INLINE_BREAK_TYPES:
            parts.append(" ")
        elif child.type in _UNSUPPORTED_INLINE_TYPES:
            unsupported.append(child.type)
    text = " ".join("".join(parts).split())
    return Heading(level=level, text=text, line=line, unsupported=unsupported)


def _count_items(tokens: list[Token], start: int) -> int:
    count = 0
    for token in tokens[start + 1 :]:
        if token.level == 0:
            break
        if token.type == "list_item_open" and token.level == 1:
            count += 1
    return count


def _line_of(token: Token) -> int | None:
    return token.map[0] + 1 if token.map else None
