"""Pydantic models for MCP tool input validation and card payloads.

Architecture:
- base: Shared validation (vault selection, note identifiers)
- card_models: Atomic cards, relations and the card creation input
- resolver_models: Inputs for concept resolution tools
- history_models: Inputs for undo/redo tools
- vault_models: Inputs for vault management tools
"""

from .base import BaseNoteInput, VaultScopedInput, clean_note_identifier
from .card_models import (
    AtomicCard,
    CardPosition,
    CreateCardsInput,
    Relation,
)
from .resolver_models import (
    FindMatchesInput,
    ValidateConceptsInput,
    ResolveRelationsInput,
    RebuildIndexInput,
)
from .history_models import HistoryInput
from .vault_models import (
    ListVaultsInput,
    SetActiveVaultInput,
)

__all__ = [
    # Base models
    "BaseNoteInput",
    "VaultScopedInput",
    "clean_note_identifier",
    # Cards
    "AtomicCard",
    "CardPosition",
    "CreateCardsInput",
    "Relation",
    # Resolution
    "FindMatchesInput",
    "ValidateConceptsInput",
    "ResolveRelationsInput",
    "RebuildIndexInput",
    # History
    "HistoryInput",
    # Vault models
    "ListVaultsInput",
    "SetActiveVaultInput",
]
