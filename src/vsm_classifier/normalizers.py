"""Text normalizers applied before tokenization.

The classifier only depends on the ``Normalizer`` interface: given raw text,
return normalized text or raise ``NormalizationError``. The same normalizer
is applied to training sentences and to queries.

Concrete normalizers provided here:

- ``CharMapNormalizer``: replace a set of characters with one character
- ``HyphenNormalizer``: turn every Unicode hyphen into a space
- ``FunctionNormalizer``: apply an arbitrary per-character function
- ``UnicodeNormalizer``: NFC/NFD/NFKC/NFKD normalization
- ``ChainNormalizer``: run several normalizers in sequence
"""

from __future__ import annotations

import unicodedata
from abc import ABC, abstractmethod
from collections.abc import Callable

from .errors import NormalizationError

# Characters with the Unicode ``Hyphen`` property.
HYPHENS: frozenset[str] = frozenset(
    "-\u00ad\u058a\u1806\u2010\u2011\u2e17\u30fb\ufe63\uff0d\uff65"
)


class Normalizer(ABC):
    """Abstract text normalizer.

    Implementations must be reentrant: one instance may be shared by the
    training worker and concurrent searches.
    """

    @abstractmethod
    def normalize(self, text: str) -> str:
        """Return the normalized form of ``text``.

        Raises:
            NormalizationError: If the text cannot be normalized.
        """


class CharMapNormalizer(Normalizer):
    """Replace every character of ``chars`` with the first character of ``to``.

    An empty ``to`` leaves the text unchanged.

    Args:
        chars: Characters to replace.
        to: Replacement; only its first character is used.
    """

    def __init__(self, chars: str, to: str) -> None:
        self.chars = chars
        self.to = to
        self._table = str.maketrans({c: to[0] for c in chars}) if to else {}

    def normalize(self, text: str) -> str:
        return text.translate(self._table) if self._table else text

    def __repr__(self) -> str:
        return f"CharMapNormalizer(chars={self.chars!r}, to={self.to!r})"


class HyphenNormalizer(CharMapNormalizer):
    """Map every Unicode hyphen character to a space."""

    def __init__(self) -> None:
        super().__init__("".join(sorted(HYPHENS)), " ")

    def __repr__(self) -> str:
        return "HyphenNormalizer()"


class FunctionNormalizer(Normalizer):
    """Apply ``func`` to each character and join the results.

    Any exception raised by ``func`` is reported as a ``NormalizationError``.
    """

    def __init__(self, func: Callable[[str], str]) -> None:
        self.func = func

    def normalize(self, text: str) -> str:
        try:
            return "".join(self.func(c) for c in text)
        except NormalizationError:
            raise
        except Exception as e:
            raise NormalizationError(f"character mapping failed: {e}") from e


class UnicodeNormalizer(Normalizer):
    """Unicode normalization (``unicodedata.normalize``).

    Raises:
        ValueError: If ``form`` is not a Unicode normalization form.
    """

    FORMS = ("NFC", "NFD", "NFKC", "NFKD")

    def __init__(self, form: str = "NFC") -> None:
        if form not in self.FORMS:
            raise ValueError(f"Unknown normalization form: {form}. Known: {self.FORMS}")
        self.form = form

    def normalize(self, text: str) -> str:
        return unicodedata.normalize(self.form, text)


class ChainNormalizer(Normalizer):
    """Run normalizers in order, feeding each the previous output.

    An empty chain returns the text unchanged. The first failure stops
    the chain and propagates.
    """

    def __init__(self, *normalizers: Normalizer) -> None:
        self.normalizers: tuple[Normalizer, ...] = normalizers

    def normalize(self, text: str) -> str:
        for normalizer in self.normalizers:
            text = normalizer.normalize(text)
        return text
