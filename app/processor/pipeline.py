from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from app.consistency.upsert import UpsertResult
from app.documents.models import (
    DocumentType,
    IdentityKey,
    OrganizationalContext,
    Verdict,
)
from app.extraction.content import ExtractedContent
from app.extraction.facts import ExtractedFacts


@dataclass(slots=True)
class PipelineContext:
    document_id: str
    filename: str
    locator: str
    context: OrganizationalContext
    current_year: int
    uploaded_at: datetime
    raw_bytes: bytes = b""
    content: ExtractedContent | None = None
    document_type: DocumentType | None = None
    facts: ExtractedFacts | None = None
    document_year: int | None = None
    identity_key: IdentityKey | None = None
    verdict: Verdict | None = None
    result: UpsertResult | None = None

    @property
    def decided(self) -> bool:
        """True once some step has produced a verdict."""
        return self.verdict is not None

    def resolved_key(self) -> IdentityKey:
        if self.identity_key is not None:
            return self.identity_key
        return IdentityKey.for_document(
            self.document_type or DocumentType.UNRECOGNIZED,
            self.context.company_category,
            self.document_year,
        )


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
