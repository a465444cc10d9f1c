"""Pydantic input models for concept resolution tools."""

from __future__ import annotations

from pydantic import Field, field_validator

from .base import VaultScopedInput
from .card_models import Relation


class FindMatchesInput(VaultScopedInput):
    """Input model for find_concept_matches tool.

    Examples:
        >>> FindMatchesInput(concept="UX Design")
    """

    concept: str = Field(
        description="Free-text concept name to look up among existing note names.",
        examples=["UX Design", "affordance"],
    )


class ValidateConceptsInput(VaultScopedInput):
    """Input model for validate_concepts tool (unmatched concepts are dropped)."""

    concepts: list[str] = Field(
        description="Concept names; each is replaced by its best matching note name.",
    )

    @field_validator('concepts')
    @classmethod
    def validate_concepts(cls, v: list[str]) -> list[str]:
        return [concept for concept in v if concept.strip()]


class ResolveRelationsInput(VaultScopedInput):
    """Input model for resolve_relations tool (unmatched concepts keep their text)."""

    relations: list[Relation] = Field(
        description="Relations whose concept names should be resolved to note names.",
    )


class RebuildIndexInput(VaultScopedInput):
    """Input model for rebuild_concept_index tool."""
