"""Core vault path helpers and validation."""

from pathlib import Path

from atomic_notes.constants import NOTE_SUFFIX
from atomic_notes.data_models import VaultMetadata


def ensure_vault_ready(vault: VaultMetadata) -> None:
    """Ensure the target vault directory is accessible before performing operations.

    Raises:
        FileNotFoundError: If the vault path does not exist or is not a directory.
    """
    if not vault.path.is_dir():
        raise FileNotFoundError(f"Vault '{vault.name}' is not accessible at {vault.path}")


def construct_note_path(identifier: str) -> str:
    """Build a vault-relative note path from a pre-validated identifier.

    Assumes the identifier was validated by a pydantic input model (stripped,
    no ``.md`` suffix, no traversal segments).

    Examples:
        >>> construct_note_path("My Note")
        'My Note.md'
        >>> construct_note_path("Folder/My Note")
        'Folder/My Note.md'
    """
    parts = identifier.split("/")
    parts[-1] = f"{parts[-1]}{NOTE_SUFFIX}"
    return "/".join(parts)


def resolve_vault_path(root: Path, relative: str) -> Path:
    """Resolve a vault-relative path to an absolute one inside ``root``.

    Raises:
        ValueError: If the resolved path escapes the vault root.
    """
    vault_root = root.resolve(strict=False)
    candidate = (vault_root / Path(relative)).resolve(strict=False)

    # Filesystem-level check: symlinks and ".." can only be caught after resolution
    if not candidate.is_relative_to(vault_root):
        raise ValueError(f"Path '{relative}' escapes the configured vault.")

    return candidate


def note_display_name(root: Path, path: Path) -> str:
    """Convert an absolute note path into a forward-slash path relative to ``root``."""
    relative = path.relative_to(root.resolve(strict=False))
    return relative.as_posix()
