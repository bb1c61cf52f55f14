"""Tests for the parser workaround encoder."""

from __future__ import annotations

from mdspec.preprocess import (
    BULLET_SENTINEL,
    INDENT_SENTINEL,
    PIPE_SENTINEL,
    encode_parser_workarounds,
)


class TestTablePipes:
    """Tests for escaping pipes inside inline code in table rows."""

    def test_escapes_pipe_inside_code_in_table_row(self) -> None:
        """A pipe between backticks on a table row is replaced."""
        result = encode_parser_workarounds("| `a|b` | c |")

        assert result == f"| `a{PIPE_SENTINEL}b` | c |"

    def test_leaves_pipes_outside_code_alone(self) -> None:
        """Column separators are not touched."""
        result = encode_parser_workarounds("| `x` | y | `z|w` |")

        assert result == f"| `x` | y | `z{PIPE_SENTINEL}w` |"

    def test_ignores_lines_that_are_not_table_rows(self) -> None:
        """Only lines starting with a pipe are rewritten."""
        text = "The operator `a|b` is bitwise or."

        assert encode_parser_workarounds(text) == text

    def test_unclosed_code_span_is_left_alone(self) -> None:
        """An unpaired backtick does not start an escaped region."""
        text = "| `a|b | c |"

        assert encode_parser_workarounds(text) == text


class TestListIndentation:
    """Tests for marking level-1 continuation paragraphs after level-2 bullets."""

    def test_marks_continuation_after_level2_bullet(self) -> None:
        """The paragraph that returns to level 1 gets the indent sentinel."""
        text = "*  Item one\n   * Nested\n   Continuation\n"

        result = encode_parser_workarounds(text)

        assert result.splitlines()[2] == f"   {INDENT_SENTINEL}Continuation"

    def test_blank_lines_after_bullets_do_not_reset(self) -> None:
        """A blank line directly after a bullet is skipped."""
        text = "*  Item one\n\n   * Nested\n\n   Continuation\n"

        result = encode_parser_workarounds(text)

        assert result.splitlines()[4] == f"   {INDENT_SENTINEL}Continuation"

    def test_level2_continuation_keeps_state(self) -> None:
        """Text indented to level 2 belongs to the nested item."""
        text = "*  Item\n   * Nested\n      more nested text\n   Back at level one\n"

        lines = encode_parser_workarounds(text).splitlines()

        assert lines[2] == "      more nested text"
        assert lines[3] == f"   {INDENT_SENTINEL}Back at level one"

    def test_no_mark_without_level2_bullet(self) -> None:
        """A continuation directly under a level-1 bullet is fine as is."""
        text = "*  Item\n   Continuation\n"

        assert encode_parser_workarounds(text) == text

    def test_plain_paragraph_resets_state(self) -> None:
        """An unrelated line between the bullet and the paragraph breaks the pattern."""
        text = "*  Item\n   * Nested\nUnrelated\n   Indented\n"

        assert encode_parser_workarounds(text) == text


class TestNestedCodeBullets:
    """Tests for escaping bullet characters inside fenced code within lists."""

    def test_escapes_bullets_inside_nested_fence(self) -> None:
        """Every bullet character after the indentation is prefixed."""
        text = "*  Item\n\n    ```\n    * star\n    + plus\n    - minus\n    ```\n"

        lines = encode_parser_workarounds(text).splitlines()

        assert lines[3] == f"    {BULLET_SENTINEL}* star"
        assert lines[4] == f"    {BULLET_SENTINEL}+ plus"
        assert lines[5] == f"    {BULLET_SENTINEL}- minus"

    def test_leaves_text_after_fence_alone(self) -> None:
        """Bullets after the closing fence are real list items."""
        text = "    ```\n    code\n    ```\n    * real item\n"

        result = encode_parser_workarounds("intro\n" + text)

        assert result.endswith("\n    * real item\n")

    def test_unclosed_fence_is_left_alone(self) -> None:
        """Without a closing fence nothing is rewritten."""
        text = "intro\n    ```\n    * item\n"

        assert encode_parser_workarounds(text) == text


class TestEncoding:
    """Tests for whole-text behaviour."""

    def test_normalises_line_breaks(self) -> None:
        """CRLF and CR line breaks become LF."""
        assert encode_parser_workarounds("a\r\nb\rc\n") == "a\nb\nc\n"

    def test_is_idempotent(self) -> None:
        """Encoding already-encoded text changes nothing."""
        text = (
            "| `a|b` | c |\n"
            "\n"
            "*  Item\n"
            "   * Nested\n"
            "   Continuation\n"
            "\n"
            "*  Other\n"
            "\n"
            "    ```\n"
            "    - code\n"
            "    ```\n"
        )

        once = encode_parser_workarounds(text)

        assert once != text
        assert encode_parser_workarounds(once) == once

    def test_plain_text_is_unchanged(self) -> None:
        """Text without any of the patterns passes through."""
        text = "# Title\n\nSome prose.\n"

        assert encode_parser_workarounds(text) == text
