"""Name index over the notes of a vault."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import Optional

from atomic_notes.constants import NOTE_SUFFIX
from atomic_notes.data_models import NoteHandle

logger = logging.getLogger(__name__)


def normalize_note_name(name: str) -> str:
    """Lowercase a note name and drop a trailing ``.md`` (any case).

    Surrounding whitespace is kept; note names can legitimately carry it.
    """
    lowered = name.lower()
    if lowered.endswith(NOTE_SUFFIX):
        lowered = lowered[: -len(NOTE_SUFFIX)]
    return lowered


class NoteCorpusIndex:
    """Maps normalized note names to their handles.

    The index is rebuilt wholesale and never updated incrementally, so it
    reflects the corpus as of the last :meth:`rebuild`. ``rebuild`` clears the
    mapping before repopulating it: a lookup interleaved with a rebuild can
    observe an empty or partial index. Callers that receive bursts of
    corpus-change events must serialize rebuilds themselves.
    """

    def __init__(self) -> None:
        self._entries: dict[str, NoteHandle] = {}

    def rebuild(self, handles: Iterable[NoteHandle]) -> None:
        """Replace the index contents with ``handles``; last write wins on key collisions."""
        self._entries.clear()
        for handle in handles:
            self._entries[normalize_note_name(handle.name)] = handle
        logger.debug("Rebuilt note index with %d entries", len(self._entries))

    def lookup_exact(self, name: str) -> Optional[NoteHandle]:
        return self._entries.get(normalize_note_name(name))

    def get(self, key: str) -> Optional[NoteHandle]:
        """Look up an already-normalized key as-is."""
        return self._entries.get(key)

    def all_entries(self) -> Iterator[tuple[str, NoteHandle]]:
        """Yield ``(normalized_name, handle)`` pairs in insertion order.

        Each call starts a fresh pass over the current state.
        """
        yield from list(self._entries.items())

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and normalize_note_name(name) in self._entries
