"""Undo/redo history of file operations.

Each transaction is the ordered list of file operations performed by one
generation step. Undo walks a transaction backwards and builds the inverse
transaction for redo from the content it observes right before each write;
redo walks forwards and does the same for undo. Operations whose target file
is missing are skipped and failures are logged; neither stops the rest of the
transaction, and neither contributes to the inverse.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Optional, Protocol

from atomic_notes.core.vault_storage import STORAGE_ERRORS
from atomic_notes.data_models import (
    CreateOperation,
    FileOperation,
    HistoryOutcome,
    ModifyOperation,
    OperationResult,
    OperationStatus,
    Transaction,
)

logger = logging.getLogger(__name__)


class FileStore(Protocol):
    """The subset of :class:`~atomic_notes.core.vault_storage.VaultStorage` the log needs."""

    def exists(self, path: str) -> bool: ...

    def read(self, path: str) -> str: ...

    def write(self, path: str, content: str) -> None: ...

    def create(self, path: str, content: str) -> None: ...

    def delete(self, path: str) -> None: ...


class OperationLog:
    """Dual-stack undo/redo engine over a :class:`FileStore`."""

    def __init__(self, storage: FileStore) -> None:
        self.storage = storage
        self._undo_stack: list[Transaction] = []
        self._redo_stack: list[Transaction] = []

    @property
    def undo_depth(self) -> int:
        return len(self._undo_stack)

    @property
    def redo_depth(self) -> int:
        return len(self._redo_stack)

    @property
    def can_undo(self) -> bool:
        return bool(self._undo_stack)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    def add_transaction(self, operations: Iterable[FileOperation]) -> None:
        """Record a new forward transaction and invalidate redo history.

        An empty transaction is ignored and leaves the redo stack intact.
        """
        transaction = list(operations)
        if not transaction:
            return
        self._undo_stack.append(transaction)
        self._redo_stack.clear()
        logger.debug("Recorded transaction with %d operation(s)", len(transaction))

    def clear(self) -> None:
        self._undo_stack.clear()
        self._redo_stack.clear()

    def undo(self) -> HistoryOutcome:
        """Reverse the most recent transaction, last operation first."""
        if not self._undo_stack:
            return HistoryOutcome(action="undo", message="Nothing to undo")

        transaction = self._undo_stack.pop()
        outcome = HistoryOutcome(action="undo")
        inverse: Transaction = []

        for operation in reversed(transaction):
            result, inverse_operation = self._apply_undo(operation)
            outcome.results.append(result)
            if inverse_operation is not None:
                inverse.append(inverse_operation)

        # Undo applied the transaction backwards; redo must replay it forwards
        inverse.reverse()
        if inverse:
            self._redo_stack.append(inverse)

        outcome.message = f"Undid {outcome.count} file operation(s)"
        logger.info(
            "%s (%d skipped, %d failed)",
            outcome.message,
            len(outcome.with_status(OperationStatus.SKIPPED)),
            len(outcome.with_status(OperationStatus.FAILED)),
        )
        return outcome

    def redo(self) -> HistoryOutcome:
        """Re-apply the most recently undone transaction in its original order."""
        if not self._redo_stack:
            return HistoryOutcome(action="redo", message="Nothing to redo")

        transaction = self._redo_stack.pop()
        outcome = HistoryOutcome(action="redo")
        inverse: Transaction = []

        for operation in transaction:
            result, inverse_operation = self._apply_redo(operation)
            outcome.results.append(result)
            if inverse_operation is not None:
                inverse.append(inverse_operation)

        if inverse:
            self._undo_stack.append(inverse)

        outcome.message = f"Redid {outcome.count} file operation(s)"
        logger.info(
            "%s (%d skipped, %d failed)",
            outcome.message,
            len(outcome.with_status(OperationStatus.SKIPPED)),
            len(outcome.with_status(OperationStatus.FAILED)),
        )
        return outcome

    # ==========================================================================
    # PER-OPERATION APPLICATION
    # ==========================================================================

    def _apply_undo(
        self, operation: FileOperation
    ) -> tuple[OperationResult, Optional[FileOperation]]:
        try:
            if isinstance(operation, CreateOperation):
                if not self.storage.exists(operation.path):
                    return self._skipped(operation, "file no longer exists")
                content = self.storage.read(operation.path)
                self.storage.delete(operation.path)
                return (
                    OperationResult(operation, OperationStatus.SUCCEEDED, "deleted"),
                    CreateOperation(path=operation.path, content=content),
                )
            if isinstance(operation, ModifyOperation):
                return self._restore(operation)
        except STORAGE_ERRORS as exc:
            return self._failed("Undo", operation, exc)
        raise TypeError(f"Unsupported file operation: {operation!r}")

    def _apply_redo(
        self, operation: FileOperation
    ) -> tuple[OperationResult, Optional[FileOperation]]:
        try:
            if isinstance(operation, CreateOperation):
                if operation.content is None:
                    return self._skipped(operation, "no captured content to re-create")
                if self.storage.exists(operation.path):
                    return self._skipped(operation, "file already exists")
                self.storage.create(operation.path, operation.content)
                return (
                    OperationResult(operation, OperationStatus.SUCCEEDED, "created"),
                    CreateOperation(path=operation.path),
                )
            if isinstance(operation, ModifyOperation):
                return self._restore(operation)
        except STORAGE_ERRORS as exc:
            return self._failed("Redo", operation, exc)
        raise TypeError(f"Unsupported file operation: {operation!r}")

    def _restore(
        self, operation: ModifyOperation
    ) -> tuple[OperationResult, Optional[FileOperation]]:
        """Write ``prior_content`` back, capturing what it replaces first."""
        if not self.storage.exists(operation.path):
            return self._skipped(operation, "file no longer exists")
        current = self.storage.read(operation.path)
        self.storage.write(operation.path, operation.prior_content)
        return (
            OperationResult(operation, OperationStatus.SUCCEEDED, "restored"),
            ModifyOperation(path=operation.path, prior_content=current),
        )

    @staticmethod
    def _skipped(
        operation: FileOperation, reason: str
    ) -> tuple[OperationResult, Optional[FileOperation]]:
        logger.info("Skipping %s of '%s': %s", operation.kind, operation.path, reason)
        return OperationResult(operation, OperationStatus.SKIPPED, reason), None

    @staticmethod
    def _failed(
        action: str, operation: FileOperation, exc: Exception
    ) -> tuple[OperationResult, Optional[FileOperation]]:
        logger.warning("%s failed for '%s': %s", action, operation.path, exc)
        return OperationResult(operation, OperationStatus.FAILED, str(exc)), None

