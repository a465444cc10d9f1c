"""Pydantic input models for undo/redo tools."""

from __future__ import annotations

from .base import VaultScopedInput


class HistoryInput(VaultScopedInput):
    """Input model for undo_generation, redo_generation and get_history_status.

    Each vault keeps its own history; omit ``vault`` to use the active one.
    """
