"""Undo/redo tools for card generation."""
from __future__ import annotations

import logging
from typing import Any

from mcp.server.fastmcp import Context

from atomic_notes.models import HistoryInput
from atomic_notes.server import mcp
from atomic_notes.session import resolve_workspace

logger = logging.getLogger(__name__)


@mcp.tool()
async def undo_generation(
    input: HistoryInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Undo the most recent card generation in a vault.

    Created cards are deleted and modified notes get their previous content
    back, last operation first. Files that no longer exist are skipped and
    cannot be redone.

    Returns:
        {
            "vault": str,
            "action": "undo",
            "count": int,       # Operations reversed
            "message": str,
            "operations": [{"path": str, "type": str, "status": str, "detail": str}]
        }
    """
    workspace = resolve_workspace(input.vault, ctx)
    outcome = workspace.history.undo()
    if outcome.count:
        workspace.rebuild_index()
    return {"vault": workspace.vault.name, **outcome.as_payload()}


@mcp.tool()
async def redo_generation(
    input: HistoryInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Redo the most recently undone card generation in a vault.

    Returns the same shape as undo_generation() with ``action`` set to "redo".
    """
    workspace = resolve_workspace(input.vault, ctx)
    outcome = workspace.history.redo()
    if outcome.count:
        workspace.rebuild_index()
    return {"vault": workspace.vault.name, **outcome.as_payload()}


@mcp.tool()
async def get_history_status(
    input: HistoryInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Report how many generations can be undone or redone in a vault.

    Returns:
        {"vault": str, "undo_depth": int, "redo_depth": int}
    """
    workspace = resolve_workspace(input.vault, ctx)
    return {
        "vault": workspace.vault.name,
        "undo_depth": workspace.history.undo_depth,
        "redo_depth": workspace.history.redo_depth,
    }
