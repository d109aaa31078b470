from collections.abc import Callable
from datetime import datetime, timezone

import pytest

from app.database.repositories.memory_repository import InMemoryDocumentRepository
from app.documents.models import (
    CompanyCategory,
    Document,
    DocumentType,
    OrganizationalContext,
)
from app.extraction.content import ExtractedContent
from app.extraction.facts import ExtractedFacts
from app.extraction.normalizer import TextNormalizer
from app.validation.base import ValidationSubject

CURRENT_YEAR = 2024


@pytest.fixture(scope="session")
def normalizer() -> TextNormalizer:
    return TextNormalizer()


@pytest.fixture()
def repository() -> InMemoryDocumentRepository:
    return InMemoryDocumentRepository()


@pytest.fixture()
def make_document() -> Callable[..., Document]:
    counter = iter(range(1, 10_000))

    def _make(
        document_type: DocumentType = DocumentType.BALANCE,
        *,
        is_valid: bool = True,
        category: CompanyCategory | None = None,
        year: int | None = None,
        message: str | None = None,
        uploaded_at: datetime | None = None,
    ) -> Document:
        n = next(counter)
        return Document(
            id=f"doc-{n}",
            name=f"file-{n}.txt",
            locator=f"loc/{n}",
            uploaded_at=uploaded_at or datetime(2024, 1, 1, 0, 0, n % 60, tzinfo=timezone.utc),
            is_valid=is_valid,
            document_type=document_type,
            validation_message=message if message or is_valid else "rejected",
            company_category=category,
            document_year=year,
        )

    return _make


@pytest.fixture()
def make_subject() -> Callable[..., ValidationSubject]:
    def _make(
        text: str = "",
        *,
        category: CompanyCategory | None = None,
        max_debt_amount: float | None = None,
        max_debt_term_years: int | None = None,
        year: int | None = None,
        projection_year: int | None = None,
        existing: tuple[Document, ...] = (),
        is_text: bool = True,
        extension: str = "txt",
        current_year: int = CURRENT_YEAR,
    ) -> ValidationSubject:
        return ValidationSubject(
            filename=f"document.{extension}",
            content=ExtractedContent(text=text, extension=extension, is_text=is_text),
            facts=ExtractedFacts(year=year, projection_year=projection_year),
            context=OrganizationalContext(
                company_category=category,
                max_debt_amount=max_debt_amount,
                max_debt_term_years=max_debt_term_years,
            ),
            existing_documents=existing,
            current_year=current_year,
        )

    return _make
