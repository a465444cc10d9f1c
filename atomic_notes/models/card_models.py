"""Pydantic models for atomic cards and the card creation tool."""

from __future__ import annotations

from typing import Optional
from pydantic import BaseModel, Field, field_validator

from .base import BaseNoteInput

# Characters Obsidian cannot use in file names or that break [[wikilinks]]
_FORBIDDEN_TITLE_CHARS = set('\\/:*?"<>|[]#^')


class Relation(BaseModel):
    """A link from a card to another concept, qualified by a logic word."""

    logic: str = Field(
        "",
        description="Logic word describing the link, e.g. 'because', 'contrast', 'leads to'.",
    )
    concept: str = Field(
        min_length=1,
        description="Name of the related concept; resolved against existing notes.",
    )

    @field_validator('concept')
    @classmethod
    def validate_concept(cls, v: str) -> str:
        cleaned = v.strip()
        if not cleaned:
            raise ValueError("Relation concept cannot be empty.")
        return cleaned


class CardPosition(BaseModel):
    """Where a card sits in the concept hierarchy."""

    parent: Optional[str] = None
    children: list[str] = Field(default_factory=list)


class AtomicCard(BaseModel):
    """One atomic concept extracted from a source note."""

    title: str = Field(min_length=1, description="Card title; becomes the note file name.")
    description: str = ""
    tags: list[str] = Field(default_factory=list)
    content: str = ""
    explanation: str = ""
    relations: list[Relation] = Field(default_factory=list)
    position: CardPosition = Field(default_factory=CardPosition)

    @field_validator('title')
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Titles must be usable as a single file name."""
        cleaned = v.strip()
        if not cleaned:
            raise ValueError("Card title cannot be empty.")
        if cleaned.startswith("."):
            raise ValueError(
                f"Card title '{cleaned}' cannot start with '.'; hidden notes are not indexed."
            )
        bad = sorted(set(cleaned) & _FORBIDDEN_TITLE_CHARS)
        if bad:
            raise ValueError(
                f"Card title '{cleaned}' contains characters not allowed in note names: "
                f"{' '.join(bad)}"
            )
        return cleaned


class CreateCardsInput(BaseNoteInput):
    """Input model for create_atomic_cards tool.

    ``title`` is the source note the cards were extracted from.
    """

    cards: list[AtomicCard] = Field(
        min_length=1,
        description="Cards to write, usually after a reviewer accepted them.",
    )
    resolve_links: bool = Field(
        True,
        description=(
            "Resolve each relation's concept against existing notes before writing. "
            "Unmatched concepts keep their original text."
        ),
    )
