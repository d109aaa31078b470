from abc import ABC, abstractmethod
from dataclasses import dataclass

from app.documents.models import (
    CompanyCategory,
    Document,
    OrganizationalContext,
    Verdict,
)
from app.extraction.content import ExtractedContent
from app.extraction.facts import ExtractedFacts


@dataclass(frozen=True)
class ValidationSubject:
    """Everything a validator may look at for one upload."""

    filename: str
    content: ExtractedContent
    facts: ExtractedFacts
    context: OrganizationalContext
    existing_documents: tuple[Document, ...]
    current_year: int

    @property
    def text(self) -> str:
        return self.content.text

    @property
    def category(self) -> CompanyCategory | None:
        return self.context.company_category

    def is_short(self, minimum_length: int) -> bool:
        """Only text uploads have a meaningful length; binary proxies never count as short."""
        return self.content.is_text and len(self.content.text) < minimum_length


class BaseDocumentValidator(ABC):
    """Contract for per-type document validators."""

    @abstractmethod
    def validate(self, subject: ValidationSubject) -> Verdict:
        """Decide whether *subject* is an acceptable document of this type."""
