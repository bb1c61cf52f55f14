"""Parse ANTLR-style grammar notation into productions."""

from __future__ import annotations

from pathlib import Path

from mdspec.config import MDSPEC_ENCODING
from mdspec.exceptions import GrammarSyntaxError
from mdspec.file_utils import read_text
from mdspec.schemas.grammar import Grammar, Production

try:
    from lark import Lark, Token, Transformer, Tree
    from lark.exceptions import UnexpectedInput
except ImportError as exc:  # pragma: no cover - runtime dependency check
    raise RuntimeError(
        "lark is required for grammar parsing (pip install lark)."
    ) from exc


_NOTATION = r"""
start: _item*
_item: rule | header

header: NAME? "grammar" NAME ";"

rule: fragment_mod? NAME ":" alternatives ";"
fragment_mod: "fragment"

alternatives: alternative ("|" alternative)*
alternative: [ELEMENT_OPTIONS] element* [alt_label] [command]
alt_label: "#" NAME
command: "->" action ("," action)*
action: NAME ["(" NAME ")"]

element: [label] atom [ELEMENT_OPTIONS] [SUFFIX]
label: NAME LABEL_OP

?atom: NAME                   -> ref
     | STRING                 -> literal
     | STRING ".." STRING     -> range
     | CHARSET                -> charset
     | ACTION                 -> action_block
     | "."                    -> wildcard
     | "~" atom               -> negation
     | "(" alternatives ")"   -> group

LABEL_OP: "+=" | "="
SUFFIX: /[?*+]\??/
ELEMENT_OPTIONS: /<[^<>]*>/
NAME: /[A-Za-z_][A-Za-z0-9_]*/
STRING: /'(?:\\.|[^'\\])*'/
CHARSET: /\[(?:\\.|[^\]\\])*\]/
ACTION: /\{[^{}]*\}/
COMMENT: /\/\/[^\n]*/ | /\/\*[\s\S]*?\*\//

%import common.WS
%ignore WS
%ignore COMMENT
"""


class _CanonicalBody(Transformer):
    """Render a right-hand side with single spaces and no comments."""

    def ref(self, children):
        return str(children[0])

    def literal(self, children):
        return str(children[0])

    def range(self, children):
        return f"{children[0]}..{children[1]}"

    def charset(self, children):
        return str(children[0])

    def action_block(self, children):
        return str(children[0])

    def wildcard(self, children):
        return "."

    def negation(self, children):
        return "~" + children[0]

    def group(self, children):
        return f"({children[0]})"

    def label(self, children):
        return f"{children[0]}{children[1]}"

    def ELEMENT_OPTIONS(self, token):
        return "<" + "".join(token[1:-1].split()) + ">"

    def element(self, children):
        label, atom, options, suffix = children
        return f"{label or ''}{atom}{options or ''}{suffix or ''}"

    def alt_label(self, children):
        return f"#{children[0]}"

    def action(self, children):
        name, argument = children
        return f"{name}({argument})" if argument else str(name)

    def command(self, children):
        return "-> " + ", ".join(children)

    def alternative(self, children):
        return " ".join(part for part in children if part)

    def alternatives(self, children):
        return " | ".join(children)


_parser: Lark | None = None


def _get_parser() -> Lark:
    """Return the shared notation parser, creating it on first call."""
    global _parser
    if _parser is None:
        _parser = Lark(
            _NOTATION,
            parser="lalr",
            propagate_positions=True,
            maybe_placeholders=True,
        )
    return _parser


def read_grammar_string(text: str, source: str = "") -> Grammar:
    """Parse grammar notation into a :class:`Grammar`.

    Rules come back in source order. A comment outside any rule becomes an
    anonymous production so that prose between rules is not lost.

    Args:
        text: Grammar notation, e.g. the body of a grammar code block.
        source: Label used in error messages.

    Raises:
        GrammarSyntaxError: If the text is not valid grammar notation.
    """
    parser = _get_parser()
    try:
        tree = parser.parse(text)
        # Comments are ignored by the parser; a second lexing pass keeps them.
        comments = [token for token in parser.lex(text, dont_ignore=True) if token.type == "COMMENT"]
    except UnexpectedInput as exc:
        where = f"{source}: " if source else ""
        raise GrammarSyntaxError(
            f"{where}invalid grammar notation at line {exc.line}, column {exc.column}",
            source=source,
            line=exc.line,
            column=exc.column,
        ) from exc

    located: list[tuple[int, Production]] = []
    spans: list[tuple[int, int]] = []
    for node in tree.children:
        if not isinstance(node, Tree) or node.data != "rule":
            continue
        start, end = node.meta.start_pos, node.meta.end_pos
        spans.append((start, end))
        located.append((start, _production_from_rule(node, text[start:end])))

    for comment in comments:
        if any(start <= comment.start_pos < end for start, end in spans):
            continue
        body = str(comment).strip()
        located.append((comment.start_pos, Production(name=None, body=body, text=body)))

    located.sort(key=lambda item: item[0])
    return Grammar(productions=[production for _, production in located])


def read_grammar_file(path: Path | str, encoding: str = MDSPEC_ENCODING) -> Grammar:
    """Read and parse a whole grammar file.

    Raises:
        SourceReadError: If the file cannot be read.
        GrammarSyntaxError: If the file is not valid grammar notation.
    """
    path = Path(path)
    text = read_text(path, encoding)
    return read_grammar_string(text, source=path.name)


def _production_from_rule(node: Tree, raw: str) -> Production:
    fragment = False
    name = ""
    body = ""
    for child in node.children:
        if isinstance(child, Tree) and child.data == "fragment_mod":
            fragment = True
        elif isinstance(child, Tree) and child.data == "alternatives":
            body = _CanonicalBody().transform(child)
        elif isinstance(child, Token) and child.type == "NAME":
            name = str(child)
    return Production(name=name, body=body, text=raw, fragment=fragment)
