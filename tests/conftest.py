"""Test setup for mdspec."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from mdspec.reporter import Reporter  # noqa: E402


@pytest.fixture
def reporter() -> Reporter:
    """A fresh diagnostic sink."""
    return Reporter(default_file="test")


@pytest.fixture
def spec_dir(tmp_path: Path) -> Path:
    """A small two-document specification with a readme and an authority grammar."""
    (tmp_path / "intro.md").write_text(
        "# Introduction\n"
        "\n"
        "Some text.\n"
        "\n"
        "## Scope\n"
        "\n"
        "```antlr\n"
        "compilation_unit: using_directive* ;\n"
        "```\n",
        encoding="utf-8",
    )
    (tmp_path / "lexical.md").write_text(
        "# Lexical structure\n"
        "\n"
        "## Tokens\n"
        "\n"
        "```antlr\n"
        "using_directive: 'using' identifier ';' ;\n"
        "identifier: LETTER+ ;\n"
        "```\n",
        encoding="utf-8",
    )
    (tmp_path / "README.md").write_text(
        "# Specification\n"
        "\n"
        "- [Introduction](intro.md#introduction)\n"
        "  - [Scope](intro.md#scope)\n"
        "- [Lexical structure](lexical.md#lexical-structure)\n"
        "  - [Tokens](lexical.md#tokens)\n",
        encoding="utf-8",
    )
    (tmp_path / "grammar.g4").write_text(
        "grammar Spec;\n"
        "\n"
        "start: compilation_unit EOF ;\n"
        "compilation_unit: using_directive* ;\n"
        "using_directive: 'using' identifier ';' ;\n"
        "identifier: LETTER+ ;\n",
        encoding="utf-8",
    )
    return tmp_path
