"""Sequential training worker.

One ``TrainingPipeline`` is started per ``VSM.train`` call. It runs as a
single asyncio task that reads documents one at a time, ingests each one
into the index and reports a ``TrainResult`` per document, in order.

Loop, per iteration:

1. If the context is done, report its error once, close the output, stop.
2. Wait for the next document *or* the context, whichever comes first.
3. A closed, drained input stream ends training without an error.
4. Ingest the document; a failure is reported as a ``NormalizationError``
   for that document only and training continues.

A document that has already been received is always ingested and reported,
even if the context finished at the same moment; the cancellation is then
picked up at the top of the next iteration.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from .context import Context
from .errors import NormalizationError
from .models import Document, TrainResult
from .stream import Stream

logger = logging.getLogger(__name__)


class TrainingPipeline:
    """Single-consumer worker feeding documents into an index.

    Args:
        ctx: Cancellation/deadline signal for this run.
        documents: Input stream of training documents.
        output: Stream receiving one ``TrainResult`` per document.
        ingest: Normalizes, vectorizes and indexes one document. Any
            exception it raises becomes that document's result error.
    """

    def __init__(
        self,
        ctx: Context,
        documents: Stream[Document],
        output: Stream[TrainResult],
        ingest: Callable[[Document], None],
    ) -> None:
        self.ctx = ctx
        self.documents = documents
        self.output = output
        self._ingest = ingest
        self.consumed = 0
        self.failed = 0

    def start(self) -> asyncio.Task:
        """Schedule the worker on the running event loop."""
        return asyncio.create_task(self.run(), name="vsm-train")

    async def run(self) -> None:
        """Consume the input stream until it ends or the context is done.

        The output stream is closed exactly once on every exit path.
        """
        logger.debug("Training started (%r)", self.ctx)
        waiter = asyncio.ensure_future(self.ctx.wait())
        try:
            while True:
                if self.ctx.done:
                    logger.info(
                        "Training stopped after %d documents: %s",
                        self.consumed,
                        self.ctx.err,
                    )
                    await self.output.send(TrainResult(error=self.ctx.err))
                    return

                receiver = asyncio.ensure_future(self.documents.receive())
                await asyncio.wait({receiver, waiter}, return_when=asyncio.FIRST_COMPLETED)
                if not receiver.done():
                    receiver.cancel()
                    continue

                document = receiver.result()
                if document is None:
                    logger.debug(
                        "Training input exhausted: %d documents, %d failed",
                        self.consumed,
                        self.failed,
                    )
                    return

                await self.output.send(self._process(document))
        except Exception:
            logger.exception("Training worker crashed after %d documents", self.consumed)
            raise
        finally:
            waiter.cancel()
            self.output.close()

    def _process(self, document: Document) -> TrainResult:
        self.consumed += 1
        try:
            self._ingest(document)
        except NormalizationError as e:
            self.failed += 1
            logger.warning("Could not normalize training document %r: %s", document.label, e)
            return TrainResult(document=document, error=e)
        except Exception as e:
            self.failed += 1
            logger.exception("Unexpected error ingesting training document %r", document)
            error = NormalizationError(f"cannot ingest training document: {e}")
            error.__cause__ = e
            return TrainResult(document=document, error=error)
        return TrainResult(document=document)
