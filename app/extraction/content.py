from dataclasses import dataclass
from pathlib import PurePath

from app.extraction.normalizer import TextNormalizer


@dataclass(frozen=True)
class ExtractedContent:
    """Normalized text plus the file-kind information the validators need."""

    text: str
    extension: str
    is_text: bool


def file_extension(filename: str) -> str:
    """Lowercased suffix without the dot; empty when the name has none."""
    return PurePath(filename).suffix.lstrip(".").lower()


class ContentExtractor:
    """Turns raw upload bytes into normalized text.

    Text formats are decoded directly. Binary formats are never parsed: the
    lowercased filename stands in for their content so filename keywords can
    still classify them.
    """

    def __init__(
        self,
        normalizer: TextNormalizer,
        allowed_extensions: list[str],
        text_extensions: list[str],
    ) -> None:
        self._normalizer = normalizer
        self._allowed = tuple(ext.lower().lstrip(".") for ext in allowed_extensions)
        self._text = frozenset(ext.lower().lstrip(".") for ext in text_extensions)

    @property
    def allowed_extensions(self) -> tuple[str, ...]:
        return self._allowed

    def is_supported(self, filename: str) -> bool:
        return file_extension(filename) in self._allowed

    def unsupported_message(self) -> str:
        formats = ", ".join(ext.upper() for ext in self._allowed)
        return f"Unsupported file format. Please upload one of: {formats}."

    def extract(self, raw: bytes | str, filename: str) -> ExtractedContent:
        extension = file_extension(filename)
        if extension in self._text:
            decoded = raw if isinstance(raw, str) else raw.decode("utf-8", errors="replace")
            return ExtractedContent(
                text=self._normalizer.normalize(decoded),
                extension=extension,
                is_text=True,
            )
        return ExtractedContent(
            text=self._normalizer.normalize(filename),
            extension=extension,
            is_text=False,
        )

    def normalize_filename(self, filename: str) -> str:
        return self._normalizer.normalize(filename)
