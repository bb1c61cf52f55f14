"""Run-wide sink for coded diagnostics."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from mdspec.schemas.diagnostics import (
    Diagnostic,
    DiagnosticCode,
    Severity,
    SourceLocation,
)
from mdspec.utils.logging_config import get_logger

logger = get_logger(__name__)

_UNSET = object()


class Reporter:
    """Accumulates diagnostics for one run.

    Location context is kept on a stack. Components walking the paragraph
    stream push a frame per document and per paragraph with :meth:`context`;
    any diagnostic raised without an explicit location gets the innermost
    frame. Reporting never raises.
    """

    def __init__(self, *, default_file: str = "") -> None:
        self._diagnostics: list[Diagnostic] = []
        self._stack: list[SourceLocation] = [SourceLocation(file=default_file)]

    @property
    def location(self) -> SourceLocation:
        """The innermost context frame."""
        return self._stack[-1]

    @contextmanager
    def context(
        self,
        *,
        file: str | None = None,
        line: object = _UNSET,
        section: object = _UNSET,
    ) -> Iterator[SourceLocation]:
        """Push a context frame for the duration of the ``with`` block.

        Fields that are not given are inherited from the enclosing frame. A
        new file resets line and section unless they are given too.
        """
        parent = self._stack[-1]
        if file is not None and file != parent.file:
            parent = SourceLocation(file=file)
        frame = SourceLocation(
            file=parent.file,
            line=parent.line if line is _UNSET else line,
            section=parent.section if section is _UNSET else section,
        )
        self._stack.append(frame)
        try:
            yield frame
        finally:
            self._stack.pop()

    def error(
        self,
        code: DiagnosticCode,
        message: str,
        location: SourceLocation | None = None,
    ) -> Diagnostic:
        return self._add(code, Severity.ERROR, message, location)

    def warning(
        self,
        code: DiagnosticCode,
        message: str,
        location: SourceLocation | None = None,
    ) -> Diagnostic:
        return self._add(code, Severity.WARNING, message, location)

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return list(self._diagnostics)

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self._diagnostics if d.severity is Severity.ERROR]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self._diagnostics if d.severity is Severity.WARNING]

    @property
    def has_errors(self) -> bool:
        return any(d.severity is Severity.ERROR for d in self._diagnostics)

    def codes(self) -> list[str]:
        """Return the code of every diagnostic, in order."""
        return [d.code.value for d in self._diagnostics]

    def _add(
        self,
        code: DiagnosticCode,
        severity: Severity,
        message: str,
        location: SourceLocation | None,
    ) -> Diagnostic:
        diagnostic = Diagnostic(
            code=code,
            severity=severity,
            message=message,
            location=location if location is not None else self.location,
        )
        self._diagnostics.append(diagnostic)
        logger.log(
            logging.ERROR if severity is Severity.ERROR else logging.WARNING,
            diagnostic.render(),
            extra={"code": code.value},
        )
        return diagnostic
