"""Exception hierarchy for the VSM classifier.

Every error raised or reported by the library derives from ``VSMError`` so
callers can catch library failures with a single ``except`` clause.
"""

from __future__ import annotations


class VSMError(Exception):
    """Base class for all classifier errors."""


class NormalizationError(VSMError):
    """A normalizer could not transform the given text.

    Recoverable: during training the error is reported for the offending
    document only, during search it aborts that single call.
    """


class CancellationError(VSMError):
    """Training stopped because its context was cancelled or expired."""


class Cancelled(CancellationError):
    """The context was cancelled explicitly via ``Context.cancel()``."""

    def __init__(self, message: str = "context cancelled") -> None:
        super().__init__(message)


class DeadlineExceeded(CancellationError):
    """The context deadline elapsed."""

    def __init__(self, message: str = "context deadline exceeded") -> None:
        super().__init__(message)


class StreamClosedError(VSMError):
    """An item was sent on a stream that has already been closed."""


class FixtureError(VSMError):
    """A fixture file is missing, unreadable, or malformed."""
