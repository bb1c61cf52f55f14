"""Custom exceptions for mdspec."""


class MdspecError(Exception):
    """Base exception for mdspec operations."""


class SourceReadError(MdspecError):
    """A specification document or grammar file could not be read."""


class ParseError(MdspecError):
    """Error during content parsing."""


class GrammarSyntaxError(ParseError):
    """Grammar notation could not be parsed.

    Attributes:
        source: Label of the text being parsed (file name or fragment scope).
        line: 1-based line of the offending token, if known.
        column: 1-based column of the offending token, if known.
    """

    def __init__(
        self,
        message: str,
        *,
        source: str = "",
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        super().__init__(message)
        self.source = source
        self.line = line
        self.column = column


class ReadmeLinkError(MdspecError):
    """The index document links a file that was not supplied."""
