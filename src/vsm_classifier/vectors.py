"""Tokenization, term-frequency vectors and cosine similarity.

Terms are produced by case-folding the (already normalized) text and
splitting it on runs of whitespace. Punctuation is *not* stripped, so
``"truck."`` and ``"truck"`` are distinct terms; sentence-final periods take
part in matching.

Vectors are sparse ``Counter`` objects mapping each term to its raw
occurrence count. No IDF or sublinear weighting is applied.
"""

from __future__ import annotations

import math
from collections import Counter

TermVector = Counter


def tokenize(text: str) -> list[str]:
    """Split text into case-folded, whitespace-delimited terms."""
    return text.casefold().split()


def term_vector(text: str) -> TermVector:
    """Count term occurrences in text.

    Empty or whitespace-only text yields an empty vector.
    """
    return Counter(tokenize(text))


def norm(vector: TermVector) -> float:
    """Euclidean norm over the vector's term counts."""
    return math.sqrt(sum(count * count for count in vector.values()))


def dot(a: TermVector, b: TermVector) -> int:
    """Dot product over the terms present in both vectors."""
    if len(a) > len(b):
        a, b = b, a
    return sum(count * b[term] for term, count in a.items() if term in b)


def cosine_similarity(
    a: TermVector,
    b: TermVector,
    norm_a: float | None = None,
    norm_b: float | None = None,
) -> float:
    """Cosine similarity of two term vectors, in ``[0, 1]``.

    Precomputed norms may be passed to avoid recomputing them. If either
    norm is zero the similarity is defined as 0.

    Args:
        a: First vector.
        b: Second vector.
        norm_a: Optional precomputed norm of ``a``.
        norm_b: Optional precomputed norm of ``b``.

    Returns:
        ``dot(a, b) / (||a|| * ||b||)``, or 0.0 for an empty vector.
    """
    if norm_a is None:
        norm_a = norm(a)
    if norm_b is None:
        norm_b = norm(b)
    if norm_a == 0 or norm_b == 0:
        return 0.0
    return dot(a, b) / (norm_a * norm_b)
