"""VSM Classifier -- nearest-document classification in the Vector Space Model."""

__version__ = "0.1.0"

from .classifier import VSM, new
from .context import Context
from .errors import (
    CancellationError,
    Cancelled,
    DeadlineExceeded,
    FixtureError,
    NormalizationError,
    StreamClosedError,
    VSMError,
)
from .fixtures import CaseOutcome, Fixture, FixtureCase, evaluate_fixture, load_fixture
from .index import IndexEntry, VectorIndex
from .models import Document, Match, TrainResult
from .normalizers import (
    ChainNormalizer,
    CharMapNormalizer,
    FunctionNormalizer,
    HyphenNormalizer,
    Normalizer,
    UnicodeNormalizer,
)
from .stream import Stream
from .vectors import cosine_similarity, term_vector, tokenize

__all__ = [
    # Core
    "VSM",
    "new",
    "Document",
    "TrainResult",
    "Match",
    # Training
    "Context",
    "Stream",
    # Index
    "VectorIndex",
    "IndexEntry",
    "cosine_similarity",
    "term_vector",
    "tokenize",
    # Normalizers
    "Normalizer",
    "CharMapNormalizer",
    "ChainNormalizer",
    "FunctionNormalizer",
    "HyphenNormalizer",
    "UnicodeNormalizer",
    # Fixtures
    "Fixture",
    "FixtureCase",
    "CaseOutcome",
    "load_fixture",
    "evaluate_fixture",
    # Errors
    "VSMError",
    "NormalizationError",
    "CancellationError",
    "Cancelled",
    "DeadlineExceeded",
    "StreamClosedError",
    "FixtureError",
]
