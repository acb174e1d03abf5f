"""Vector index of trained documents.

Holds one ``(TermVector, Document)`` entry per trained document in
insertion order and answers best-match queries by cosine similarity.

The index has a single writer (the training worker) and any number of
readers, possibly on other threads. One lock guards insertion and the
snapshot taken by each lookup; the similarity scan itself runs on the
snapshot outside the lock.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Optional

from .models import Document, Match
from .vectors import TermVector, cosine_similarity, norm

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IndexEntry:
    """A trained document with its term vector and precomputed norm."""

    vector: TermVector
    document: Document
    norm: float = field(default=0.0, compare=False)


class VectorIndex:
    """Insertion-ordered collection of trained term vectors.

    Example::

        index = VectorIndex()
        index.insert(term_vector("gold silver truck."), doc)
        best = index.best_match(term_vector("silver truck."))
    """

    def __init__(self) -> None:
        self._entries: list[IndexEntry] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def insert(self, vector: TermVector, document: Document) -> None:
        """Append a trained document.

        The vector is copied so later changes by the caller cannot leak
        into the index.
        """
        vector = TermVector(vector)
        entry = IndexEntry(vector=vector, document=document, norm=norm(vector))
        with self._lock:
            self._entries.append(entry)
        logger.debug("Indexed %r with %d distinct terms", document.label, len(vector))

    def snapshot(self) -> tuple[IndexEntry, ...]:
        """Return the current entries in insertion order."""
        with self._lock:
            return tuple(self._entries)

    def best_match(self, query: TermVector) -> Optional[Document]:
        """Find the trained document most similar to ``query``.

        Entries are scanned in insertion order and only a strictly greater
        similarity replaces the current best, so on ties the earliest
        trained document wins.

        Args:
            query: Term vector of the query text.

        Returns:
            The best matching document, or ``None`` when no trained
            document shares a term with the query.
        """
        query_norm = norm(query)
        best: Optional[Document] = None
        best_similarity = 0.0

        for entry in self.snapshot():
            similarity = cosine_similarity(query, entry.vector, query_norm, entry.norm)
            if similarity > best_similarity:
                best_similarity = similarity
                best = entry.document

        return best if best_similarity > 0 else None

    def rank(self, query: TermVector, limit: Optional[int] = None) -> list[Match]:
        """Rank every trained document with a non-zero similarity.

        Args:
            query: Term vector of the query text.
            limit: Maximum number of matches to return (all if ``None``).

        Returns:
            Matches sorted by similarity (descending), earliest trained
            first on ties.

        Raises:
            ValueError: If ``limit`` is negative.
        """
        if limit is not None and limit < 0:
            raise ValueError(f"limit must be non-negative, got {limit}")

        query_norm = norm(query)
        matches: list[Match] = []
        for entry in self.snapshot():
            similarity = cosine_similarity(query, entry.vector, query_norm, entry.norm)
            if similarity > 0:
                matches.append(Match(document=entry.document, similarity=similarity))

        # sorted() is stable, so insertion order survives among equal scores
        matches = sorted(matches, key=lambda m: m.similarity, reverse=True)
        return matches if limit is None else matches[:limit]
