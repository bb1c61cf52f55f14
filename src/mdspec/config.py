"""Local configuration for mdspec."""

from __future__ import annotations

import os


DEFAULT_GRAMMAR_LANGUAGE = "antlr"
DEFAULT_START_SYMBOL = "start"
DEFAULT_DOCUMENT_EXTENSION = ".md"
DEFAULT_ENCODING = "utf-8"
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_TOOL_NAME = "mdspec"

# Code blocks tagged with this language are treated as grammar fragments.
MDSPEC_GRAMMAR_LANGUAGE = os.getenv("MDSPEC_GRAMMAR_LANGUAGE", DEFAULT_GRAMMAR_LANGUAGE)
MDSPEC_START_SYMBOL = os.getenv("MDSPEC_START_SYMBOL", DEFAULT_START_SYMBOL)
MDSPEC_DOCUMENT_EXTENSION = os.getenv("MDSPEC_DOCUMENT_EXTENSION", DEFAULT_DOCUMENT_EXTENSION)
MDSPEC_ENCODING = os.getenv("MDSPEC_ENCODING", DEFAULT_ENCODING)
MDSPEC_LOG_LEVEL = os.getenv("MDSPEC_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
# Location label for diagnostics that belong to the run rather than a file.
MDSPEC_TOOL_NAME = os.getenv("MDSPEC_TOOL_NAME", DEFAULT_TOOL_NAME)
