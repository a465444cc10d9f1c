"""Data models for vault configuration, note handles and file operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Optional, Union


@dataclass(frozen=True)
class VaultMetadata:
    """Normalized metadata describing an Obsidian vault."""

    name: str
    path: Path
    description: str
    exists: bool

    def as_payload(self) -> dict[str, Any]:
        """Return a serializable payload representation."""
        return {
            "name": self.name,
            "path": str(self.path),
            "description": self.description,
            "exists": self.path.is_dir(),
        }


@dataclass(frozen=True)
class CardSettings:
    """Where generated cards are written and whether the source gets a banner."""

    default_folder: str = ""
    add_banner: bool = True


class VaultConfiguration:
    """Holds vault metadata, card settings and default resolution helpers."""

    def __init__(
        self,
        default_vault: str,
        vaults: dict[str, VaultMetadata],
        cards: Optional[CardSettings] = None,
    ) -> None:
        self.default_vault = default_vault
        self.vaults = vaults
        self.cards = cards or CardSettings()

    def get(self, name: str) -> VaultMetadata:
        """Get vault metadata by name.

        Raises:
            ValueError: If the vault name is not found in configuration.
        """
        try:
            return self.vaults[name]
        except KeyError as exc:
            raise ValueError(f"Unknown vault '{name}'") from exc

    def as_payload(self) -> dict[str, Any]:
        return {
            "default": self.default_vault,
            "vaults": [vault.as_payload() for vault in self.vaults.values()],
        }


@dataclass(frozen=True)
class NoteHandle:
    """A note known to the corpus.

    ``path`` is vault-relative with forward slashes and includes ``.md``;
    ``name`` is the case-preserved base name without extension.
    """

    path: str
    name: str


@dataclass(frozen=True)
class MatchCandidate:
    """A scored fuzzy match against the corpus index."""

    handle: NoteHandle
    score: float

    def as_payload(self) -> dict[str, Any]:
        return {"note": self.handle.name, "path": self.handle.path, "score": round(self.score, 4)}


# ==============================================================================
# FILE OPERATIONS
# ==============================================================================


@dataclass(frozen=True)
class CreateOperation:
    """A file created by a forward action; reversed by deleting it.

    ``content`` is only set on entries generated by undo, where it carries
    the content needed to re-create the file on redo.
    """

    path: str
    content: Optional[str] = None

    kind = "create"


@dataclass(frozen=True)
class ModifyOperation:
    """A file overwritten by a forward action.

    ``prior_content`` must be read before the write happens; restoring it
    reverses the change.
    """

    path: str
    prior_content: str

    kind = "modify"


FileOperation = Union[CreateOperation, ModifyOperation]
Transaction = list[FileOperation]


class OperationStatus(str, Enum):
    SUCCEEDED = "succeeded"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class OperationResult:
    """What happened to one operation while walking a transaction."""

    operation: FileOperation
    status: OperationStatus
    detail: str = ""

    def as_payload(self) -> dict[str, Any]:
        return {
            "path": self.operation.path,
            "type": self.operation.kind,
            "status": self.status.value,
            "detail": self.detail,
        }


@dataclass
class HistoryOutcome:
    """Result of an undo or redo request."""

    action: str
    results: list[OperationResult] = field(default_factory=list)
    message: str = ""

    @property
    def count(self) -> int:
        """Number of operations that were successfully applied."""
        return sum(1 for result in self.results if result.status is OperationStatus.SUCCEEDED)

    def with_status(self, status: OperationStatus) -> list[OperationResult]:
        return [result for result in self.results if result.status is status]

    def as_payload(self) -> dict[str, Any]:
        return {
            "action": self.action,
            "count": self.count,
            "message": self.message,
            "operations": [result.as_payload() for result in self.results],
        }
