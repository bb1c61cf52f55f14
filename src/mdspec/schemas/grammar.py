"""Grammar models shared by the extractor and the differ."""

from __future__ import annotations

from pydantic import BaseModel, Field


class Production(BaseModel):
    """One rule of a grammar.

    Attributes:
        name: Rule name, or None for an anonymous production (a standalone
            comment inside a grammar fragment).
        body: Canonical serialized right-hand side.
        text: The raw source text the production was parsed from.
        fragment: True for lexer ``fragment`` rules.
        link_anchor: Anchor of the section the production was found under.
        link_title: Title of that section.
    """

    name: str | None = None
    body: str
    text: str = ""
    fragment: bool = False
    link_anchor: str | None = None
    link_title: str | None = None

    def serialize(self) -> str:
        """Return the canonical form used to compare productions."""
        if self.name is None:
            return self.body
        prefix = "fragment " if self.fragment else ""
        return f"{prefix}{self.name}: {self.body};"


class Grammar(BaseModel):
    """An ordered sequence of productions."""

    productions: list[Production] = Field(default_factory=list)

    def by_name(self) -> dict[str, Production]:
        """Map names to productions; later duplicates win."""
        lookup: dict[str, Production] = {}
        for production in self.productions:
            if production.name is not None:
                lookup[production.name] = production
        return lookup

    def has_production(self, name: str) -> bool:
        return any(production.name == name for production in self.productions)
