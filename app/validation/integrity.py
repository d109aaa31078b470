"""Post-validation gate that can still reject a valid PDF as corrupted."""

import random
import threading
from abc import ABC, abstractmethod

from app.documents.models import DocumentType, RejectionReason, Verdict
from app.extraction.content import ExtractedContent
from app.logging.logger import Log

GATED_EXTENSIONS = frozenset({"pdf"})


class CorruptionPolicy(ABC):
    @abstractmethod
    def is_corrupted(self, content: ExtractedContent) -> bool:
        """Return True if *content* should be treated as a damaged file."""


class NeverCorruptPolicy(CorruptionPolicy):
    def is_corrupted(self, content: ExtractedContent) -> bool:
        return False


class RandomCorruptionPolicy(CorruptionPolicy):
    """Flags a fixed fraction of files at random. Seed it for reproducible runs."""

    def __init__(self, rate: float, seed: int | None = None) -> None:
        if not 0.0 <= rate <= 1.0:
            raise ValueError(f"corruption rate must be within [0, 1], got {rate}")
        self._rate = rate
        self._random = random.Random(seed)
        self._lock = threading.Lock()

    def is_corrupted(self, content: ExtractedContent) -> bool:
        with self._lock:
            return self._random.random() < self._rate


class IntegrityGate:
    def __init__(
        self,
        policy: CorruptionPolicy,
        extensions: frozenset[str] = GATED_EXTENSIONS,
    ) -> None:
        self._policy = policy
        self._extensions = extensions

    def apply(
        self,
        verdict: Verdict,
        document_type: DocumentType,
        content: ExtractedContent,
    ) -> Verdict:
        if not verdict.is_valid or content.extension not in self._extensions:
            return verdict
        if not self._policy.is_corrupted(content):
            return verdict

        Log.warning("Integrity gate rejected document", document_type=document_type.value)
        return Verdict.invalid(
            f"{document_type.value} {content.extension.upper()} file appears to be "
            "corrupted or improperly formatted.",
            RejectionReason.CORRUPTED,
        )
