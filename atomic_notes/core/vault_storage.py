"""Filesystem access for a single vault.

Everything the resolver and the operation log know about files goes through
:class:`VaultStorage`. Paths are vault-relative strings with forward slashes
(``"Folder/Note.md"``) and are sandboxed to the vault root.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from atomic_notes.constants import NOTE_SUFFIX
from atomic_notes.core.vault_operations import note_display_name, resolve_vault_path
from atomic_notes.data_models import NoteHandle

logger = logging.getLogger(__name__)

# Errors a single file access can raise; undecodable bytes surface as UnicodeError
STORAGE_ERRORS = (OSError, UnicodeError)


class VaultStorage:
    """Read, write and enumerate markdown notes under a vault root."""

    def __init__(self, root: Path) -> None:
        self.root = root.resolve(strict=False)

    def _absolute(self, path: str) -> Path:
        return resolve_vault_path(self.root, path)

    def exists(self, path: str) -> bool:
        """Return ``True`` when a regular file lives at ``path``."""
        return self._absolute(path).is_file()

    def read(self, path: str) -> str:
        return self._absolute(path).read_text(encoding="utf-8")

    def write(self, path: str, content: str) -> None:
        """Overwrite an existing file.

        Raises:
            FileNotFoundError: If there is no file at ``path``.
        """
        target = self._absolute(path)
        if not target.is_file():
            raise FileNotFoundError(f"Note '{path}' not found in vault at {self.root}.")
        target.write_text(content, encoding="utf-8")

    def create(self, path: str, content: str) -> None:
        """Create a new file, creating parent folders as needed.

        Raises:
            FileExistsError: If something already exists at ``path``.
        """
        target = self._absolute(path)
        if target.exists():
            raise FileExistsError(f"Note '{path}' already exists in vault at {self.root}.")
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")

    def delete(self, path: str) -> None:
        self._absolute(path).unlink(missing_ok=False)

    def list_note_handles(self, folder: Optional[str] = None) -> list[NoteHandle]:
        """Enumerate markdown notes below ``folder`` (the whole vault by default).

        Directories are walked with an explicit work-list so deeply nested
        vaults cannot exhaust the interpreter stack. Hidden directories such as
        ``.obsidian`` and ``.trash`` are skipped. Entries within a directory are
        visited in sorted order, so the result is deterministic for a fixed tree.

        Raises:
            ValueError: If ``folder`` escapes the vault root.
        """
        start = self._absolute(folder) if folder else self.root
        if not start.is_dir():
            logger.info("Folder '%s' does not exist in vault at %s", folder, self.root)
            return []

        handles: list[NoteHandle] = []
        pending: list[Path] = [start]
        while pending:
            directory = pending.pop()
            try:
                entries = sorted(directory.iterdir(), key=lambda entry: entry.name)
            except OSError as exc:
                logger.warning("Could not list '%s' while enumerating notes: %s", directory, exc)
                continue

            subdirectories: list[Path] = []
            for entry in entries:
                if entry.name.startswith("."):
                    continue
                if entry.is_dir():
                    subdirectories.append(entry)
                elif entry.is_file() and entry.suffix.lower() == NOTE_SUFFIX:
                    handles.append(
                        NoteHandle(path=note_display_name(self.root, entry), name=entry.stem)
                    )

            # Reversed so the first subdirectory is popped first
            pending.extend(reversed(subdirectories))

        return handles
