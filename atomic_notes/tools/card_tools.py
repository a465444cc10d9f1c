"""Tool for writing accepted atomic cards into the vault."""
from __future__ import annotations

import logging
from typing import Any

from mcp.server.fastmcp import Context

from atomic_notes.config import get_vault_configuration
from atomic_notes.core.card_operations import create_cards
from atomic_notes.core.vault_operations import construct_note_path
from atomic_notes.models import CreateCardsInput
from atomic_notes.server import mcp
from atomic_notes.session import resolve_workspace

logger = logging.getLogger(__name__)


@mcp.tool()
async def create_atomic_cards(
    input: CreateCardsInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Write atomic cards extracted from a source note as one undoable step.

    Cards go to ``<folder>/<source name>-atomic/<card title>.md`` where
    ``folder`` is the configured default folder or the source note's folder.
    When the banner setting is on, the source note gets a list of links to the
    new cards. Everything written is recorded as a single transaction for
    undo_generation().

    Args:
        input (CreateCardsInput): Validated input containing:
            - title (str): Source note identifier (path without .md)
            - cards (list): Cards with title, description, tags, content,
              explanation, relations and position
            - resolve_links (bool): Resolve relation concepts to existing notes first
            - vault (str, optional): Vault name (omit to use active vault)

    Returns:
        {
            "vault": str,
            "source": str,
            "folder": str,
            "created": [str, ...],
            "skipped": [str, ...],   # Cards whose file already existed
            "failed": [str, ...],
            "source_updated": bool
        }

    Error Handling:
        - Source note not found → FileNotFoundError with the note path
        - Existing card files are never overwritten
    """
    workspace = resolve_workspace(input.vault, ctx)
    source_path = construct_note_path(input.title)

    cards = input.cards
    if input.resolve_links:
        workspace.ensure_index()
        cards = [
            card.model_copy(update={"relations": workspace.resolver.resolve_relations(card.relations)})
            for card in cards
        ]

    result = create_cards(workspace.storage, source_path, cards, get_vault_configuration().cards)
    workspace.history.add_transaction(result.operations)
    if result.created:
        workspace.rebuild_index()

    return {"vault": workspace.vault.name, "source": source_path, **result.as_payload()}
