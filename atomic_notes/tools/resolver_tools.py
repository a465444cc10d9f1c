"""Concept resolution tools.

- rebuild_concept_index: Re-read note names after the vault changed
- find_concept_matches: Up to three scored note matches for one concept
- validate_concepts: Best note per concept, unmatched concepts dropped
- resolve_relations: Best note per relation, unmatched concepts kept as-is
"""
from __future__ import annotations

import logging
from typing import Any

from mcp.server.fastmcp import Context

from atomic_notes.server import mcp
from atomic_notes.session import resolve_workspace
from atomic_notes.models import (
    FindMatchesInput,
    RebuildIndexInput,
    ResolveRelationsInput,
    ValidateConceptsInput,
)

logger = logging.getLogger(__name__)


@mcp.tool()
async def rebuild_concept_index(
    input: RebuildIndexInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Rebuild the note-name index used for concept resolution.

    Call after notes were created, deleted or renamed outside this server.
    Cards written by create_atomic_cards and undo/redo rebuild automatically.

    Returns:
        {"vault": str, "notes_indexed": int}
    """
    workspace = resolve_workspace(input.vault, ctx)
    count = workspace.rebuild_index()
    return {"vault": workspace.vault.name, "notes_indexed": count}


@mcp.tool()
async def find_concept_matches(
    input: FindMatchesInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Find up to three existing notes whose names match a concept.

    An exact (case-insensitive) name match returns that note alone with score
    1.0. Otherwise notes are scored by containment, shared words and edit
    distance; only scores above 0.3 are returned, best first.

    Returns:
        {
            "vault": str,
            "concept": str,
            "matches": [{"note": str, "path": str, "score": float}, ...]
        }

    Examples:
        - Use when: Deciding whether a concept should link to an existing note
        - Don't use: Resolving a whole list → Use validate_concepts()
    """
    workspace = resolve_workspace(input.vault, ctx)
    workspace.ensure_index()
    candidates = workspace.resolver.score_candidates(input.concept)
    return {
        "vault": workspace.vault.name,
        "concept": input.concept,
        "matches": [candidate.as_payload() for candidate in candidates],
    }


@mcp.tool()
async def validate_concepts(
    input: ValidateConceptsInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Replace each concept with its best matching note name, dropping unmatched ones.

    The result holds each note name once, in first-seen order.

    Returns:
        {"vault": str, "concepts": [str, ...], "dropped": int}
    """
    workspace = resolve_workspace(input.vault, ctx)
    workspace.ensure_index()
    validated, unmatched = workspace.resolver.partition_concepts(input.concepts)
    return {
        "vault": workspace.vault.name,
        "concepts": validated,
        "dropped": len(unmatched),
    }


@mcp.tool()
async def resolve_relations(
    input: ResolveRelationsInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Resolve each relation's concept to a note name, keeping unmatched text.

    Unmatched concepts are returned unchanged so they can become links to
    notes that do not exist yet. Order and duplicates are preserved.

    Returns:
        {"vault": str, "relations": [{"logic": str, "concept": str}, ...]}
    """
    workspace = resolve_workspace(input.vault, ctx)
    workspace.ensure_index()
    resolved = workspace.resolver.resolve_relations(input.relations)
    return {
        "vault": workspace.vault.name,
        "relations": [relation.model_dump() for relation in resolved],
    }
