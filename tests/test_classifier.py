"""Tests for the VSM classifier search API.

Trains on the three shipment sentences and checks classification with and
without a hyphen-splitting normalizer, the no-match outcome and normalizer
failures.
"""

from __future__ import annotations

import pytest

from vsm_classifier import (
    VSM,
    Document,
    FunctionNormalizer,
    HyphenNormalizer,
    NormalizationError,
    new,
)


def _hyphen_to_space(c: str) -> str:
    return " " if c == "-" else c


class TestSearch:
    """End-to-end classification tests."""

    @pytest.mark.parametrize(
        "normalizer, query, want",
        [
            (None, "gold silver truck.", Document("Delivery of silver arrived in a silver truck.", "d2")),
            (None, "shipment gold fire.", Document("Shipment of gold damaged in a fire.", "d1")),
            (
                HyphenNormalizer(),
                "shipment gold in a flying truck.",
                Document("Shipment-of-gold-arrived in a truck.", "d3"),
            ),
            (
                FunctionNormalizer(_hyphen_to_space),
                "shipment gold in a flying truck.",
                Document("Shipment-of-gold-arrived in a truck.", "d3"),
            ),
            (None, "this query should result an empty document.", None),
        ],
    )
    def test_classification(self, training_docs, train_sync, normalizer, query, want) -> None:
        vsm = new(normalizer)
        results = train_sync(vsm, training_docs)
        assert all(r.ok for r in results)

        assert vsm.search(query) == want

    def test_without_normalizer_hyphens_stay_joined(self, training_docs, train_sync) -> None:
        vsm = VSM()
        train_sync(vsm, training_docs)
        doc = vsm.search("shipment gold in a flying truck.")
        assert doc is not None
        assert doc.label == "d1"

    def test_search_before_training(self) -> None:
        assert VSM().search("gold") is None

    def test_empty_query(self, training_docs, train_sync) -> None:
        vsm = VSM()
        train_sync(vsm, training_docs)
        assert vsm.search("") is None
        assert vsm.search("   ") is None

    def test_case_insensitive(self, training_docs, train_sync) -> None:
        vsm = VSM()
        train_sync(vsm, training_docs)
        assert vsm.search("SHIPMENT GOLD FIRE.").label == "d1"

    def test_duplicate_document_first_wins(self, train_sync) -> None:
        doc = Document("Shipment of gold damaged in a fire.", "d1")
        other = Document("Shipment of gold damaged in a fire.", "copy")
        vsm = VSM()
        results = train_sync(vsm, [doc, doc, other])
        assert len(results) == 3
        assert len(vsm) == 3
        assert vsm.search("gold fire.") is doc

    def test_whitespace_document_never_matches(self, train_sync) -> None:
        vsm = VSM()
        results = train_sync(vsm, [Document("   ", "blank"), Document("", "empty")])
        assert all(r.ok for r in results)
        assert len(vsm) == 2
        assert vsm.search("blank empty") is None

    def test_rank(self, training_docs, train_sync) -> None:
        vsm = VSM()
        train_sync(vsm, training_docs)
        matches = vsm.rank("gold silver truck.", limit=2)
        assert [m.document.label for m in matches] == ["d2", "d3"]


class TestSearchErrors:
    """Normalizer failures surface from search."""

    def test_failing_normalizer_raises(self, failing_normalizer) -> None:
        vsm = VSM(failing_normalizer)
        with pytest.raises(NormalizationError):
            vsm.search("testing")

    def test_failing_normalizer_rank_raises(self, failing_normalizer) -> None:
        with pytest.raises(NormalizationError):
            VSM(failing_normalizer).rank("testing")

    def test_function_normalizer_error_is_wrapped(self) -> None:
        def boom(c: str) -> str:
            raise RuntimeError("broken mapping")

        with pytest.raises(NormalizationError, match="broken mapping"):
            VSM(FunctionNormalizer(boom)).search("text")


class TestConstruction:
    def test_new_binds_normalizer(self) -> None:
        normalizer = HyphenNormalizer()
        vsm = new(normalizer)
        assert isinstance(vsm, VSM)
        assert vsm.normalizer is normalizer
        assert len(vsm) == 0

    def test_default_has_no_normalizer(self) -> None:
        assert VSM().normalizer is None
