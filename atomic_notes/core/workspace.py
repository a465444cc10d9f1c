"""Per-vault bundle of storage, note index, resolver and history."""

from __future__ import annotations

import logging

from atomic_notes.core.concept_resolver import ConceptResolver
from atomic_notes.core.corpus_index import NoteCorpusIndex
from atomic_notes.core.operation_log import OperationLog
from atomic_notes.core.vault_operations import ensure_vault_ready
from atomic_notes.core.vault_storage import VaultStorage
from atomic_notes.data_models import VaultMetadata

logger = logging.getLogger(__name__)


class VaultWorkspace:
    """Owns the index and the undo/redo history for one vault.

    :meth:`rebuild_index` is the only way the index changes. It runs
    synchronously to completion, so rebuilds issued from tool calls never
    overlap.
    """

    def __init__(self, vault: VaultMetadata) -> None:
        self.vault = vault
        self.storage = VaultStorage(vault.path)
        self.index = NoteCorpusIndex()
        self.resolver = ConceptResolver(self.index)
        self.history = OperationLog(self.storage)
        self._indexed = False

    def rebuild_index(self) -> int:
        """Re-read every note name in the vault; returns the index size."""
        ensure_vault_ready(self.vault)
        self.index.rebuild(self.storage.list_note_handles())
        self._indexed = True
        logger.info("Indexed %d note(s) in vault '%s'", len(self.index), self.vault.name)
        return len(self.index)

    def ensure_index(self) -> None:
        """Build the index on first use."""
        if not self._indexed:
            self.rebuild_index()
