"""Fuzzy resolution of free-text concept names against the note index.

Concept names come from an external generator and may differ from note names
in casing, punctuation or wording. Resolution is a cheap, explainable
heuristic: an exact lookup first, then a per-note similarity score combining
containment, shared words and normalized Levenshtein distance.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence

from atomic_notes.constants import (
    CONTAINMENT_SCORE,
    MAX_MATCHES,
    SIMILARITY_THRESHOLD,
    WORD_SPLIT_PATTERN,
)
from atomic_notes.core.corpus_index import NoteCorpusIndex
from atomic_notes.data_models import MatchCandidate
from atomic_notes.models.card_models import Relation

logger = logging.getLogger(__name__)

_WORD_SPLIT = re.compile(WORD_SPLIT_PATTERN)

# Word-stage scores land in (WORD_BASE_SCORE, WORD_BASE_SCORE + WORD_SCORE_RANGE]
WORD_BASE_SCORE = 0.5
WORD_SCORE_RANGE = 0.4


# ==============================================================================
# SCORING
# ==============================================================================


def levenshtein_distance(left: str, right: str) -> int:
    """Return the edit distance between two strings (insert, delete, substitute)."""
    if len(left) < len(right):
        left, right = right, left
    if not right:
        return len(left)

    previous = list(range(len(right) + 1))
    for i, left_char in enumerate(left, start=1):
        current = [i]
        for j, right_char in enumerate(right, start=1):
            if left_char == right_char:
                current.append(previous[j - 1])
            else:
                current.append(min(previous[j - 1], previous[j], current[j - 1]) + 1)
        previous = current

    return previous[-1]


def split_words(text: str) -> list[str]:
    """Split on whitespace, hyphens and underscores.

    Leading or trailing separators leave empty pieces in place; an empty piece
    is contained in every word, so it counts as matched.
    """
    return _WORD_SPLIT.split(text)


def similarity(left: str, right: str) -> float:
    """Score how alike two already-normalized names are, in ``[0, 1]``.

    Stages, first hit wins:

    1. Containment: either string contains the other -> ``0.9``.
    2. Length rejection: if the relative length difference exceeds
       ``1 - threshold`` the edit-distance score cannot clear the threshold,
       so return ``0`` without computing it.
    3. Shared words: ``0.5 + matched / max(word counts) * 0.4`` when at least
       one word of ``left`` contains or is contained by a word of ``right``.
    4. Normalized Levenshtein similarity, floored at ``0``.
    """
    if left in right or right in left:
        return CONTAINMENT_SCORE

    max_len = max(len(left), len(right))
    if max_len > 0 and abs(len(left) - len(right)) / max_len > 1 - SIMILARITY_THRESHOLD:
        return 0.0

    left_words = split_words(left)
    right_words = split_words(right)
    matched = sum(
        1
        for left_word in left_words
        if any(right_word in left_word or left_word in right_word for right_word in right_words)
    )
    if matched > 0:
        return WORD_BASE_SCORE + (matched / max(len(left_words), len(right_words))) * WORD_SCORE_RANGE

    distance = levenshtein_distance(left, right)
    return max(0.0, 1 - distance / max_len)


# ==============================================================================
# RESOLVER
# ==============================================================================


class ConceptResolver:
    """Resolve concept names to existing notes using a :class:`NoteCorpusIndex`."""

    def __init__(self, index: NoteCorpusIndex) -> None:
        self.index = index

    def score_candidates(self, concept: str) -> list[MatchCandidate]:
        """Return up to three scored matches for ``concept``, best first.

        An exact (case-insensitive) name hit short-circuits with a single
        candidate scored ``1.0``. Ties keep index iteration order.
        """
        normalized = concept.strip().lower()
        if not normalized:
            return []

        exact = self.index.get(normalized)
        if exact is not None:
            return [MatchCandidate(handle=exact, score=1.0)]

        candidates: list[MatchCandidate] = []
        for name, handle in self.index.all_entries():
            score = similarity(normalized, name)
            if score > SIMILARITY_THRESHOLD:
                candidates.append(MatchCandidate(handle=handle, score=score))

        candidates.sort(key=lambda candidate: candidate.score, reverse=True)
        return candidates[:MAX_MATCHES]

    def find_matches(self, concept: str) -> list[str]:
        """Return the names of up to three notes matching ``concept``."""
        return [candidate.handle.name for candidate in self.score_candidates(concept)]

    def validate_concepts(self, concepts: Iterable[str]) -> list[str]:
        """Map each concept to its best note and drop the ones that match nothing.

        The result holds no duplicates and keeps first-seen order.
        """
        validated, _ = self.partition_concepts(concepts)
        return validated

    def partition_concepts(self, concepts: Iterable[str]) -> tuple[list[str], list[str]]:
        """Return ``(validated, unmatched)`` in a single pass.

        ``validated`` is what :meth:`validate_concepts` returns; ``unmatched``
        lists the dropped concepts in input order.
        """
        validated: list[str] = []
        unmatched: list[str] = []
        seen: set[str] = set()
        for concept in concepts:
            matches = self.find_matches(concept)
            if not matches:
                logger.debug("Dropping unmatched concept '%s'", concept)
                unmatched.append(concept)
                continue
            best = matches[0]
            if best not in seen:
                seen.add(best)
                validated.append(best)
        return validated, unmatched

    def resolve_concept(self, concept: str) -> str:
        """Return the best matching note name, or the stripped concept text when none match."""
        matches = self.find_matches(concept)
        return matches[0] if matches else concept.strip()

    def resolve_relations(self, relations: Sequence[Relation]) -> list[Relation]:
        """Resolve every relation's concept, keeping the original text when unmatched.

        Unlike :meth:`validate_concepts` nothing is dropped or deduplicated;
        unmatched concepts become links to notes that do not exist yet.
        """
        return [
            relation.model_copy(update={"concept": self.resolve_concept(relation.concept)})
            for relation in relations
        ]
