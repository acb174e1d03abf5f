"""Shared test fixtures for vsm-classifier tests."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from vsm_classifier import VSM, Document, NormalizationError, Normalizer, TrainResult


class FailingNormalizer(Normalizer):
    """Normalizer that rejects every input."""

    def normalize(self, text: str) -> str:
        raise NormalizationError("testing error")


@pytest.fixture
def training_docs() -> list[Document]:
    """The three shipment sentences used across classifier tests."""
    return [
        Document("Shipment of gold damaged in a fire.", "d1"),
        Document("Delivery of silver arrived in a silver truck.", "d2"),
        Document("Shipment-of-gold-arrived in a truck.", "d3"),
    ]


@pytest.fixture
def failing_normalizer() -> Normalizer:
    return FailingNormalizer()


@pytest.fixture
def train_sync():
    """Train a classifier from synchronous test code and return its results."""

    def _train(vsm: VSM, docs: list[Document], timeout: float = 0.5) -> list[TrainResult]:
        return asyncio.run(vsm.fit(docs, timeout=timeout))

    return _train


@pytest.fixture
def fixture_path() -> Path:
    """Path to the bundled JSON training fixture."""
    return Path(__file__).parent / "testdata" / "training.json"
