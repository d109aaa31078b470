from dataclasses import dataclass
from datetime import datetime
from typing import Any

from app.documents.models import CompanyCategory, Document, DocumentType

STATUS_CURRENT = "current"
STATUS_REJECTED = "rejected"
STATUS_SUPERSEDED = "superseded"

DOCUMENT_COLUMNS = (
    "id, name, locator, uploaded_at, is_valid, validation_message, "
    "document_type, company_category, document_year"
)


@dataclass
class DocumentRecord:
    """Represents a row from the documents table."""

    id: str
    name: str
    locator: str
    uploaded_at: datetime
    is_valid: bool
    document_type: str
    validation_message: str | None = None
    company_category: str | None = None
    document_year: int | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "DocumentRecord":
        return cls(
            id=row["id"],
            name=row["name"],
            locator=row["locator"],
            uploaded_at=row["uploaded_at"],
            is_valid=row["is_valid"],
            document_type=row["document_type"],
            validation_message=row["validation_message"],
            company_category=row["company_category"],
            document_year=row["document_year"],
        )

    @classmethod
    def from_document(cls, document: Document) -> "DocumentRecord":
        return cls(
            id=document.id,
            name=document.name,
            locator=document.locator,
            uploaded_at=document.uploaded_at,
            is_valid=document.is_valid,
            document_type=document.document_type.value,
            validation_message=document.validation_message,
            company_category=(
                document.company_category.value if document.company_category else None
            ),
            document_year=document.document_year,
        )

    def to_document(self) -> Document:
        return Document(
            id=self.id,
            name=self.name,
            locator=self.locator,
            uploaded_at=self.uploaded_at,
            is_valid=self.is_valid,
            document_type=DocumentType(self.document_type),
            validation_message=self.validation_message,
            company_category=CompanyCategory.parse(self.company_category),
            document_year=self.document_year,
        )
