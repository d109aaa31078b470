"""Which documents a company category must submit, and how far along it is."""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from app.consistency.upsert import NEW_COMPANY_BALANCE_QUOTA
from app.documents.models import CompanyCategory, Document, DocumentType

_BASE_REQUIREMENTS = (
    DocumentType.CASHFLOW,
    DocumentType.BALANCE,
    DocumentType.PROFESSIONAL_REPORT,
)

_REQUIREMENTS: dict[CompanyCategory | None, tuple[DocumentType, ...]] = {
    None: _BASE_REQUIREMENTS,
    CompanyCategory.REGULAR: _BASE_REQUIREMENTS,
    CompanyCategory.AGRICULTURAL: (
        *_BASE_REQUIREMENTS,
        DocumentType.DICOSE,
        DocumentType.DETA,
    ),
    CompanyCategory.NEW: (
        DocumentType.BALANCE,
        DocumentType.PROFESSIONAL_REPORT,
        DocumentType.DICOSE,
    ),
}


class RequirementStatus(str, Enum):
    COMPLETE = "complete"
    INVALID = "invalid"
    MISSING = "missing"


@dataclass(frozen=True)
class RequirementProgress:
    document_type: DocumentType
    status: RequirementStatus
    max_count: int
    valid_count: int


def required_document_types(category: CompanyCategory | None) -> tuple[DocumentType, ...]:
    return _REQUIREMENTS[category]


def max_document_count(category: CompanyCategory | None, document_type: DocumentType) -> int:
    if category == CompanyCategory.NEW and document_type == DocumentType.BALANCE:
        return NEW_COMPANY_BALANCE_QUOTA
    return 1


def describe_requirements(category: CompanyCategory | None) -> str:
    """Human-readable list of the types *category* is expected to upload."""
    labels = []
    for document_type in required_document_types(category):
        count = max_document_count(category, document_type)
        label = document_type.value
        labels.append(f"{label} (up to {count})" if count > 1 else label)
    return ", ".join(labels)


def completion_status(
    category: CompanyCategory | None,
    documents: Iterable[Document],
) -> list[RequirementProgress]:
    """Report each required type as complete, invalid or missing.

    *documents* should include current documents and the rejection log, so
    a type with only rejected submissions shows as invalid, not missing.
    One valid document completes a requirement.
    """
    documents = list(documents)
    progress: list[RequirementProgress] = []
    for document_type in required_document_types(category):
        of_type = [doc for doc in documents if doc.document_type == document_type]
        valid = sum(1 for doc in of_type if doc.is_valid)
        if valid:
            status = RequirementStatus.COMPLETE
        elif of_type:
            status = RequirementStatus.INVALID
        else:
            status = RequirementStatus.MISSING
        progress.append(
            RequirementProgress(
                document_type=document_type,
                status=status,
                max_count=max_document_count(category, document_type),
                valid_count=valid,
            )
        )
    return progress
