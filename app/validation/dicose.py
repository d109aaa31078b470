from app.consistency.years import year_consistency
from app.documents.models import CompanyCategory, RejectionReason, Verdict
from app.validation.base import BaseDocumentValidator, ValidationSubject
from app.validation.structure import MIN_LENGTH_DICOSE

_ALLOWED_CATEGORIES = (CompanyCategory.AGRICULTURAL, CompanyCategory.NEW)


class DicoseValidator(BaseDocumentValidator):
    """Livestock declaration; only agricultural and new companies file it."""

    def validate(self, subject: ValidationSubject) -> Verdict:
        if subject.category not in _ALLOWED_CATEGORIES:
            return Verdict.invalid(
                "DICOSE documents are only required for agricultural and new "
                "companies. Please select the correct company category.",
                RejectionReason.WRONG_CATEGORY,
            )

        year = subject.facts.year
        if year is None:
            return Verdict.invalid(
                "Could not determine the year of the DICOSE document. Make sure "
                "the declaration year appears in the document or its filename.",
                RejectionReason.MISSING_YEAR,
            )

        if subject.is_short(MIN_LENGTH_DICOSE):
            return Verdict.invalid(
                "DICOSE document appears to be incomplete or too short.",
                RejectionReason.STRUCTURAL_INCOMPLETE,
            )

        consistency = year_consistency(subject.existing_documents, year)
        if not consistency.consistent:
            return Verdict.invalid(
                f"DICOSE year ({year}) does not match existing documents. "
                f"{consistency.message}",
                RejectionReason.CROSS_DOCUMENT_INCONSISTENCY,
            )

        return Verdict.valid()
