"""JSON classification fixtures.

A fixture bundles training documents, an optional character-mapping
transform and a list of queries with their expected class::

    {
      "documents": [{"sentence": "Shipment of gold damaged in a fire.", "class": "d1"}],
      "transform": {"map": {"runes": "-", "to": " "}},
      "tests": [{"query": "shipment gold fire.", "wantClass": "d1"}]
    }

``evaluate_fixture`` trains a fresh classifier for every test case and
compares the predicted class with the expected one.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .classifier import VSM
from .config import Settings
from .context import Context
from .errors import FixtureError, VSMError
from .models import Document
from .normalizers import ChainNormalizer, CharMapNormalizer, Normalizer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FixtureCase:
    """A query and the class it should be classified as."""

    query: str
    want: str


@dataclass
class Fixture:
    """Parsed fixture file."""

    documents: list[Document] = field(default_factory=list)
    cases: list[FixtureCase] = field(default_factory=list)
    char_map: Optional[tuple[str, str]] = None
    source: Optional[Path] = None

    def build_normalizer(self) -> Optional[Normalizer]:
        """Normalizer described by the ``transform`` block, if any."""
        if self.char_map is None:
            return None
        chars, to = self.char_map
        return ChainNormalizer(CharMapNormalizer(chars, to))


@dataclass
class CaseOutcome:
    """Result of running one fixture case."""

    query: str
    want: str
    got: Optional[str] = None
    error: Optional[str] = None

    @property
    def passed(self) -> bool:
        return self.error is None and self.got == self.want

    def to_dict(self) -> dict:
        return {
            "query": self.query,
            "wantClass": self.want,
            "gotClass": self.got,
            "error": self.error,
            "passed": self.passed,
        }


def parse_fixture(data: dict, source: Optional[Path] = None) -> Fixture:
    """Build a ``Fixture`` from decoded JSON.

    Raises:
        FixtureError: If required keys are missing or have the wrong type.
    """
    if not isinstance(data, dict):
        raise FixtureError(f"fixture must be a JSON object, got {type(data).__name__}")

    try:
        documents = [Document.from_dict(d) for d in data.get("documents", [])]
        cases = [FixtureCase(query=t["query"], want=t["wantClass"]) for t in data.get("tests", [])]
    except (KeyError, TypeError) as e:
        raise FixtureError(f"malformed fixture entry: {e}") from e

    char_map = None
    transform = data.get("transform")
    if transform is not None:
        mapping = transform.get("map") if isinstance(transform, dict) else None
        if mapping is not None:
            try:
                char_map = (str(mapping["runes"]), str(mapping["to"]))
            except (KeyError, TypeError) as e:
                raise FixtureError(f"malformed transform map: {e}") from e

    return Fixture(documents=documents, cases=cases, char_map=char_map, source=source)


def load_fixture(path: str | Path) -> Fixture:
    """Read and parse a fixture file.

    Raises:
        FixtureError: If the file cannot be read or is not a valid fixture.
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise FixtureError(f"cannot read fixture {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise FixtureError(f"invalid JSON in fixture {path}: {e}") from e

    fixture = parse_fixture(data, source=path)
    logger.debug(
        "Loaded fixture %s: %d documents, %d cases",
        path,
        len(fixture.documents),
        len(fixture.cases),
    )
    return fixture


def resolve_fixture_path(settings: Settings, name: Optional[str] = None) -> Path:
    """Path of fixture ``name`` (or the configured default) in the fixture dir."""
    return settings.fixture_dir / (name or settings.fixture_file)


async def train_fixture(fixture: Fixture, timeout: Optional[float] = None) -> VSM:
    """Train a new classifier on the fixture's documents.

    Raises:
        VSMError: The first error reported while training.
    """
    vsm = VSM(fixture.build_normalizer())
    ctx = Context() if timeout is None else Context.with_timeout(timeout)
    for result in await vsm.fit(fixture.documents, ctx=ctx):
        if result.error is not None:
            raise result.error
    return vsm


async def evaluate_fixture(
    fixture: Fixture,
    timeout: Optional[float] = None,
) -> list[CaseOutcome]:
    """Run every case of a fixture against a freshly trained classifier.

    Args:
        fixture: Parsed fixture.
        timeout: Seconds allowed for each training run.

    Returns:
        One outcome per case, in fixture order.
    """
    outcomes: list[CaseOutcome] = []
    for case in fixture.cases:
        outcome = CaseOutcome(query=case.query, want=case.want)
        try:
            vsm = await train_fixture(fixture, timeout=timeout)
            doc = vsm.search(case.query)
        except VSMError as e:
            outcome.error = str(e)
        else:
            outcome.got = doc.label if doc else None
        if not outcome.passed:
            logger.info("Fixture case %r failed: want %r, got %r", case.query, case.want, outcome.got)
        outcomes.append(outcome)
    return outcomes
