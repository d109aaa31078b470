"""Text normalization shared by content extraction and keyword tables.

Both sides of every keyword comparison go through the same transform, so
Spanish accents in either the document or the keyword tables never decide a
match: ``declaración`` and ``declaracion`` normalize to the same string.
"""

import unicodedata
from typing import ClassVar

import icu  # type: ignore[import-untyped]


class TextNormalizer:
    """Unicode-compose, fold accents to ASCII and lowercase via ICU."""

    _ICU_TRANSFORM: ClassVar[str] = "Latin-ASCII; Lower"

    def __init__(self) -> None:
        self._transliterator: icu.Transliterator = icu.Transliterator.createInstance(
            self._ICU_TRANSFORM
        )

    def normalize(self, text: str) -> str:
        if not text:
            return ""
        composed = unicodedata.normalize("NFC", text)
        return str(self._transliterator.transliterate(composed))

    def normalize_all(self, values: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(self.normalize(value) for value in values)
