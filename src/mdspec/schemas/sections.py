"""Section index models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from mdspec.schemas.diagnostics import SourceLocation


class Section(BaseModel):
    """A numbered heading accepted into the section index."""

    model_config = ConfigDict(frozen=True)

    level: int = Field(..., ge=1, le=4)
    number: str
    title: str
    anchor: str
    source_file: str = ""


class ReadmeEntry(BaseModel):
    """A linked list item read from the index document."""

    model_config = ConfigDict(frozen=True)

    level: int = Field(..., ge=1)
    title: str
    anchor: str
    location: SourceLocation
