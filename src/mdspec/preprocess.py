"""Rewrite Markdown so the document parser does not trip over known defects.

Three constructs are misparsed downstream:

1. ``|`` inside inline code in a table row is taken as a column break.
2. A level-1 continuation paragraph that follows a level-2 bullet is
   indented one level too deep.
3. Bullet characters at the start of a line inside a fenced code block that
   is itself inside a list item start a nested list.

Each is neutralised with a sentinel string. Stripping the sentinels again is
left to whatever renders the parsed document.
"""

from __future__ import annotations

import re
from enum import Enum

PIPE_SENTINEL = "ceci_n'est_pas_une_pipe"
INDENT_SENTINEL = "ceci-n'est-pas-une-indent"
BULLET_SENTINEL = "ceci_n'est_pas_une_"

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")
_NESTED_FENCE = "\n    ```"
_BULLET_CHARS = ("*", "+", "-")


class _ListScan(Enum):
    NONE = 0
    AFTER_LEVEL1_BULLET = 1
    AFTER_LEVEL2_BULLET = 2
    RESET = 3


def encode_parser_workarounds(text: str) -> str:
    """Apply all three workarounds and return the encoded text.

    Line breaks of any style are normalised to ``\\n``. Text that has
    already been encoded comes back unchanged.
    """
    lines = _LINE_BREAK_RE.split(text)
    lines = [_escape_table_code_pipes(line) for line in lines]
    _mark_level1_continuations(lines)
    return _escape_nested_code_bullets("\n".join(lines))


def _escape_table_code_pipes(line: str) -> str:
    if not line.startswith("|"):
        return line
    parts = line.split("`")
    # Odd parts sit between a pair of backticks; an unclosed last one is left alone.
    for index in range(1, len(parts) - 1, 2):
        parts[index] = parts[index].replace("|", PIPE_SENTINEL)
    return "`".join(parts)


def _mark_level1_continuations(lines: list[str]) -> None:
    state = _ListScan.NONE
    index = 0
    while index < len(lines) - 1:
        line = lines[index]
        in_level2 = state is _ListScan.AFTER_LEVEL2_BULLET
        if line.startswith("*  "):
            state = _ListScan.AFTER_LEVEL1_BULLET
            index = _skip_blank(lines, index)
        elif state in (_ListScan.AFTER_LEVEL1_BULLET, _ListScan.AFTER_LEVEL2_BULLET) and line.startswith("   * "):
            state = _ListScan.AFTER_LEVEL2_BULLET
            index = _skip_blank(lines, index)
        elif in_level2 and _indented_text(line, 6):
            index = _skip_blank(lines, index)
        elif in_level2 and line.startswith("   " + INDENT_SENTINEL):
            state = _ListScan.RESET
        elif in_level2 and _indented_text(line, 3):
            lines[index] = "   " + INDENT_SENTINEL + line[3:]
            state = _ListScan.RESET
        else:
            state = _ListScan.NONE
        index += 1


def _skip_blank(lines: list[str], index: int) -> int:
    """Step over a single blank line that follows a bullet line."""
    if not lines[index + 1].strip():
        return index + 1
    return index


def _indented_text(line: str, depth: int) -> bool:
    """True when ``line`` has exactly ``depth`` spaces before its text."""
    return line.startswith(" " * depth) and len(line) > depth and line[depth] != " "


def _escape_nested_code_bullets(text: str) -> str:
    segments = text.split(_NESTED_FENCE)
    for index in range(1, len(segments) - 1, 2):
        segment = segments[index]
        for bullet in _BULLET_CHARS:
            segment = segment.replace("\n    " + bullet, "\n    " + BULLET_SENTINEL + bullet)
        segments[index] = segment
    return _NESTED_FENCE.join(segments)
