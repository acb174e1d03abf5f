"""Vector Space Model document classifier.

Training documents are normalized, split into case-folded whitespace terms
and stored as raw term-frequency vectors. A query is classified by the
trained document whose vector has the highest cosine similarity to the
query's vector; ties go to the document trained first. A query sharing no
term with any trained document has no match.

Example::

    vsm = VSM(normalizer=HyphenNormalizer())

    results = vsm.train(Context.with_timeout(5), Stream.from_iterable(docs))
    async for result in results:
        if not result.ok:
            print(result.error)

    doc = vsm.search("shipment gold in a flying truck.")
    print(doc.label if doc else "no match")
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
from typing import Optional, Union

from .context import Context
from .index import VectorIndex
from .models import Document, Match, TrainResult
from .normalizers import Normalizer
from .pipeline import TrainingPipeline
from .stream import Stream
from .vectors import TermVector, term_vector

DocumentSource = Union[Stream[Document], Iterable[Document]]


class VSM:
    """Cosine-similarity classifier over term-frequency vectors.

    Args:
        normalizer: Applied to every training sentence and query before
            tokenization. ``None`` leaves text unchanged.
    """

    def __init__(self, normalizer: Optional[Normalizer] = None) -> None:
        self._normalizer = normalizer
        self._index = VectorIndex()
        self._workers: set[asyncio.Task] = set()

    @property
    def normalizer(self) -> Optional[Normalizer]:
        return self._normalizer

    @property
    def index(self) -> VectorIndex:
        """The trained index (read-only use intended)."""
        return self._index

    def __len__(self) -> int:
        return len(self._index)

    def train(
        self,
        ctx: Optional[Context],
        documents: DocumentSource,
    ) -> Stream[TrainResult]:
        """Start training in the background and return the result stream.

        Must be called while an event loop is running. Returns at once; a
        single worker task consumes ``documents`` and emits one
        ``TrainResult`` per document in order, plus one result carrying the
        context error if ``ctx`` finishes first. The returned stream is
        unbuffered: the worker waits for each result to be received before
        reading the next document, so the stream must be drained.

        Args:
            ctx: Cancellation/deadline signal (``None`` never cancels).
            documents: A ``Stream`` of documents, or any iterable of
                documents (``None`` items are rejected), which is
                consumed as a closed stream.

        Returns:
            Stream of ``TrainResult``; closed when training ends.

        Raises:
            RuntimeError: If no event loop is running.
            TypeError: If an iterable of documents contains ``None``.
        """
        if ctx is None:
            ctx = Context()
        if not isinstance(documents, Stream):
            documents = Stream.from_iterable(documents)

        output: Stream[TrainResult] = Stream(unbuffered=True)
        pipeline = TrainingPipeline(ctx, documents, output, self._ingest)
        task = pipeline.start()
        self._workers.add(task)
        task.add_done_callback(self._worker_done)
        return output

    async def fit(
        self,
        documents: DocumentSource,
        ctx: Optional[Context] = None,
        timeout: Optional[float] = None,
    ) -> list[TrainResult]:
        """Train on ``documents`` and collect every result.

        Args:
            documents: Documents to train on.
            ctx: Cancellation signal; overrides ``timeout`` when given.
            timeout: Seconds before training is cancelled (``None`` for no
                limit).

        Returns:
            All results, in order.
        """
        if ctx is None:
            ctx = Context() if timeout is None else Context.with_timeout(timeout)
        return [result async for result in self.train(ctx, documents)]

    def search(self, text: str) -> Optional[Document]:
        """Return the trained document most similar to ``text``.

        Args:
            text: Query text.

        Returns:
            The best matching document, or ``None`` if no trained document
            shares a term with the query.

        Raises:
            NormalizationError: If the normalizer fails on ``text``.
        """
        return self._index.best_match(self._vectorize(text))

    def rank(self, text: str, limit: Optional[int] = None) -> list[Match]:
        """Return all matching documents ordered by similarity.

        Raises:
            NormalizationError: If the normalizer fails on ``text``.
        """
        return self._index.rank(self._vectorize(text), limit=limit)

    def _worker_done(self, task: asyncio.Task) -> None:
        self._workers.discard(task)
        # logged by the worker already
        if not task.cancelled():
            task.exception()

    def _vectorize(self, text: str) -> TermVector:
        if self._normalizer is not None:
            text = self._normalizer.normalize(text)
        return term_vector(text)

    def _ingest(self, document: Document) -> None:
        self._index.insert(self._vectorize(document.sentence), document)


def new(normalizer: Optional[Normalizer] = None) -> VSM:
    """Create a classifier bound to ``normalizer``."""
    return VSM(normalizer)
