"""Tests for the diagnostic reporter."""

from __future__ import annotations

from mdspec.reporter import Reporter
from mdspec.schemas.diagnostics import (
    Diagnostic,
    DiagnosticCode,
    Severity,
    SourceLocation,
)


class TestReporter:
    """Tests for Reporter."""

    def test_accumulates_errors_and_warnings(self) -> None:
        """Both severities are kept in order."""
        reporter = Reporter()

        reporter.error(DiagnosticCode.DUPLICATE_ANCHOR, "dup")
        reporter.warning(DiagnosticCode.DUPLICATE_PRODUCTION, "prod")

        assert reporter.codes() == ["duplicate-anchor", "duplicate-production"]
        assert [d.severity for d in reporter.errors] == [Severity.ERROR]
        assert [d.severity for d in reporter.warnings] == [Severity.WARNING]
        assert reporter.has_errors

    def test_warnings_alone_are_not_errors(self) -> None:
        """has_errors ignores warnings."""
        reporter = Reporter()
        reporter.warning(DiagnosticCode.DUPLICATE_PRODUCTION, "prod")

        assert not reporter.has_errors

    def test_context_frames_nest_and_inherit(self) -> None:
        """Inner frames inherit the file and override line and section."""
        reporter = Reporter(default_file="run")

        with reporter.context(file="a.md"):
            with reporter.context(line=4, section="1 Intro"):
                inner = reporter.error(DiagnosticCode.HEADING_DEPTH, "deep")
            outer = reporter.error(DiagnosticCode.HEADING_DEPTH, "deep")
        after = reporter.error(DiagnosticCode.HEADING_DEPTH, "deep")

        assert inner.location == SourceLocation(file="a.md", line=4, section="1 Intro")
        assert outer.location == SourceLocation(file="a.md")
        assert after.location == SourceLocation(file="run")

    def test_new_file_resets_line_and_section(self) -> None:
        """Switching files does not carry over the previous paragraph."""
        reporter = Reporter()

        with reporter.context(file="a.md", line=3, section="1 A"):
            with reporter.context(file="b.md"):
                assert reporter.location == SourceLocation(file="b.md")

    def test_context_is_popped_on_exception(self) -> None:
        """A failure inside the block does not leave a stale frame."""
        reporter = Reporter(default_file="run")

        try:
            with reporter.context(file="a.md", line=1):
                raise ValueError("boom")
        except ValueError:
            pass

        assert reporter.location == SourceLocation(file="run")

    def test_explicit_location_wins(self) -> None:
        """A location passed to error() is used as is."""
        reporter = Reporter()
        location = SourceLocation(file="README.md", line=7)

        with reporter.context(file="a.md", line=1):
            diagnostic = reporter.error(DiagnosticCode.README_INSERT, "Insert: x", location)

        assert diagnostic.location == location


class TestDiagnosticRender:
    """Tests for Diagnostic.render."""

    def test_render_with_line_and_section(self) -> None:
        """Location, severity, code and message are laid out in order."""
        diagnostic = Diagnostic(
            code=DiagnosticCode.DUPLICATE_ANCHOR,
            severity=Severity.ERROR,
            message="Duplicate section title a.md#x",
            location=SourceLocation(file="a.md", line=3, section="1.2 X"),
        )

        assert diagnostic.render() == (
            "a.md(3) [1.2 X]: error duplicate-anchor: Duplicate section title a.md#x"
        )

    def test_render_file_only(self) -> None:
        diagnostic = Diagnostic(
            code=DiagnosticCode.GRAMMAR_MISSING,
            severity=Severity.ERROR,
            message="m",
            location=SourceLocation(file="mdspec"),
        )

        assert diagnostic.render() == "mdspec: error grammar-missing: m"
