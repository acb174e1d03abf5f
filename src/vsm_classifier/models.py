"""Data models for the VSM classifier."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Document:
    """A labeled example sentence.

    The label is serialized under the ``"class"`` key; ``label`` is used as
    the attribute name because ``class`` is reserved in Python.
    """

    sentence: str
    label: str

    def to_dict(self) -> dict:
        return {"sentence": self.sentence, "class": self.label}

    @classmethod
    def from_dict(cls, data: dict) -> "Document":
        """Build a document from its ``{"sentence", "class"}`` mapping.

        Raises:
            KeyError: If either key is missing.
        """
        return cls(sentence=data["sentence"], label=data["class"])


@dataclass(frozen=True)
class TrainResult:
    """Outcome of consuming one training document.

    ``document`` is ``None`` for the single result emitted when training is
    stopped by its context rather than by the end of the input.
    """

    document: Optional[Document] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        return {
            "document": self.document.to_dict() if self.document else None,
            "error": str(self.error) if self.error else None,
        }


@dataclass(frozen=True)
class Match:
    """A trained document together with its similarity to a query."""

    document: Document
    similarity: float

    def to_dict(self) -> dict:
        return {
            "sentence": self.document.sentence,
            "class": self.document.label,
            "similarity": round(self.similarity, 4),
        }
