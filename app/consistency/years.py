from collections.abc import Iterable
from dataclasses import dataclass, field

from app.documents.models import Document, DocumentType

YEAR_MATCHED_TYPES = frozenset({DocumentType.BALANCE, DocumentType.DICOSE})


@dataclass(frozen=True)
class YearConsistency:
    consistent: bool
    conflicting_years: list[int] = field(default_factory=list)
    message: str | None = None


def year_consistency(
    documents: Iterable[Document],
    candidate_year: int | None = None,
) -> YearConsistency:
    """Check that valid Balance and DICOSE documents all refer to one year.

    The candidate's own year joins the union, so a newcomer that disagrees
    with the stored set is reported before it is recorded. Documents without
    a year do not take part.
    """
    years = {
        doc.document_year
        for doc in documents
        if doc.is_valid
        and doc.document_type in YEAR_MATCHED_TYPES
        and doc.document_year is not None
    }
    if candidate_year is not None:
        years.add(candidate_year)

    if len(years) <= 1:
        return YearConsistency(consistent=True)

    ordered = sorted(years)
    listed = ", ".join(str(year) for year in ordered)
    return YearConsistency(
        consistent=False,
        conflicting_years=ordered,
        message=(
            f"Year mismatch detected. Found documents for years: {listed}. "
            "All Balance and DICOSE documents must be for the same year."
        ),
    )
