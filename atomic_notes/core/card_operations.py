"""Writing atomic cards into the vault as one undoable transaction."""

from __future__ import annotations

import logging
import posixpath
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

import frontmatter

from atomic_notes.constants import CARD_FOLDER_SUFFIX, NOTE_SUFFIX
from atomic_notes.core.vault_storage import STORAGE_ERRORS, VaultStorage
from atomic_notes.data_models import (
    CardSettings,
    CreateOperation,
    ModifyOperation,
    Transaction,
)
from atomic_notes.models.card_models import AtomicCard

logger = logging.getLogger(__name__)


@dataclass
class CardBatchResult:
    """What :func:`create_cards` did, plus the transaction to record for undo."""

    folder: str
    created: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    source_updated: bool = False
    operations: Transaction = field(default_factory=list)

    def as_payload(self) -> dict[str, Any]:
        return {
            "folder": self.folder,
            "created": self.created,
            "skipped": self.skipped,
            "failed": self.failed,
            "source_updated": self.source_updated,
        }


# ==============================================================================
# RENDERING
# ==============================================================================


def _wikilink(name: str) -> str:
    return f"[[{name}]]"


def render_card_markdown(card: AtomicCard) -> str:
    """Render a card as markdown with ``description`` and ``tags`` frontmatter."""
    lines = [
        f"- **Content**: {card.content}",
        f"- **Explanation**: {card.explanation}",
    ]

    if card.relations:
        links = [
            f"{relation.logic} {_wikilink(relation.concept)}".strip()
            for relation in card.relations
        ]
        lines.append(f"- **Related**: {' | '.join(links)}")

    position: list[str] = []
    if card.position.parent:
        position.append(f"[Up] {_wikilink(card.position.parent)}")
    if card.position.children:
        children = ", ".join(_wikilink(child) for child in card.position.children)
        position.append(f"[Down] {children}")
    if position:
        lines.append(f"- **Position**: {'; '.join(position)}")

    post = frontmatter.Post("\n".join(lines), description=card.description, tags=list(card.tags))
    return frontmatter.dumps(post, sort_keys=False) + "\n"


def build_banner(cards: Sequence[AtomicCard]) -> str:
    """Return the block appended to a source note listing its cards."""
    links = "\n".join(f"- {_wikilink(card.title)}" for card in cards)
    return f"\n\n---\n## Atomic cards\n\n{links}\n"


def card_folder_for(source_path: str, default_folder: str = "") -> str:
    """Return ``<folder>/<source name>-atomic`` for a vault-relative source path.

    ``folder`` is ``default_folder`` when set, otherwise the source note's folder.
    """
    parent, file_name = posixpath.split(source_path)
    base = file_name[: -len(NOTE_SUFFIX)] if file_name.lower().endswith(NOTE_SUFFIX) else file_name
    folder = default_folder.strip("/") or parent
    leaf = f"{base}{CARD_FOLDER_SUFFIX}"
    return f"{folder}/{leaf}" if folder else leaf


# ==============================================================================
# WRITING
# ==============================================================================


def create_cards(
    storage: VaultStorage,
    source_path: str,
    cards: Sequence[AtomicCard],
    settings: CardSettings,
) -> CardBatchResult:
    """Write ``cards`` next to their source note and optionally add a banner to it.

    Each card becomes ``<card folder>/<title>.md``. Cards whose file already
    exists are skipped; write failures are logged and the batch continues.
    The source note's content is read before the banner is appended so the
    change can be reversed.

    Args:
        storage: Vault storage to write into.
        source_path: Vault-relative path of the note the cards came from.
        cards: Cards to write.
        settings: Card folder and banner settings.

    Returns:
        A :class:`CardBatchResult`; its ``operations`` list, in the order the
        writes happened, is the transaction for the operation log.

    Raises:
        FileNotFoundError: If the source note does not exist.
    """
    if not storage.exists(source_path):
        raise FileNotFoundError(f"Source note '{source_path}' not found in vault at {storage.root}.")

    result = CardBatchResult(folder=card_folder_for(source_path, settings.default_folder))
    written: list[AtomicCard] = []

    for card in cards:
        card_path = f"{result.folder}/{card.title}{NOTE_SUFFIX}"
        if storage.exists(card_path):
            logger.info("Card '%s' already exists, leaving it untouched", card_path)
            result.skipped.append(card_path)
            continue

        try:
            storage.create(card_path, render_card_markdown(card))
        except STORAGE_ERRORS as exc:
            logger.warning("Failed to create card '%s': %s", card_path, exc)
            result.failed.append(card_path)
            continue

        result.created.append(card_path)
        result.operations.append(CreateOperation(path=card_path))
        written.append(card)

    if settings.add_banner and written:
        try:
            original = storage.read(source_path)
            storage.write(source_path, original + build_banner(written))
        except STORAGE_ERRORS as exc:
            logger.warning("Failed to add card banner to '%s': %s", source_path, exc)
            result.failed.append(source_path)
        else:
            result.operations.append(ModifyOperation(path=source_path, prior_content=original))
            result.source_updated = True

    logger.info(
        "Created %d card(s) in '%s' (%d skipped, %d failed)",
        len(result.created),
        result.folder,
        len(result.skipped),
        len(result.failed),
    )
    return result
