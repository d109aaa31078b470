from app.documents.models import RejectionReason, Verdict
from app.oracle.base import BaseOracle
from app.oracle.models import CoverageCheck
from app.validation.base import BaseDocumentValidator, ValidationSubject
from app.validation.structure import (
    CASHFLOW_CONCEPTS,
    MIN_LENGTH_CASHFLOW,
    missing_concepts,
)

MAX_MISSING_CONCEPTS = 2


def coverage_year(check: CoverageCheck, current_year: int) -> int | None:
    """Last year the projection covers, from its final year or its duration.

    Fractional durations are truncated; a partial year does not count.
    """
    if check.final_year is not None:
        return check.final_year
    if check.duration_years is not None:
        return current_year + int(check.duration_years)
    return None


class CashflowValidator(BaseDocumentValidator):
    def __init__(self, oracle: BaseOracle) -> None:
        self._oracle = oracle

    def validate(self, subject: ValidationSubject) -> Verdict:
        missing = missing_concepts(subject.text, CASHFLOW_CONCEPTS)
        if len(missing) > MAX_MISSING_CONCEPTS:
            return Verdict.invalid(
                f"Flujo de Fondos is missing key elements: {', '.join(missing)}.",
                RejectionReason.STRUCTURAL_INCOMPLETE,
            )

        if subject.is_short(MIN_LENGTH_CASHFLOW):
            return Verdict.invalid(
                "Flujo de Fondos appears to be incomplete or too short.",
                RejectionReason.STRUCTURAL_INCOMPLETE,
            )

        term = subject.context.max_debt_term_years
        if not term or term <= 0:
            return Verdict.valid(
                "Maximum debt term is not configured; projection coverage was not checked."
            )

        return self._coverage_verdict(subject, term)

    def _coverage_verdict(self, subject: ValidationSubject, term: int) -> Verdict:
        check = self._oracle.check_projection_coverage(subject.text, subject.current_year)
        if check.error is not None:
            return Verdict.invalid(
                f"Could not analyze the projection period ({check.error}). "
                "The document has been flagged for manual review.",
                RejectionReason.ORACLE_UNAVAILABLE,
            )

        covered = coverage_year(check, subject.current_year)
        if covered is None or not check.confidence.is_reliable:
            return Verdict.invalid(
                "Could not determine the period covered by the projection. "
                "The document has been flagged for manual review.",
                RejectionReason.ORACLE_INDETERMINATE,
            )

        required = subject.current_year + term
        if covered < required:
            return Verdict.invalid(
                f"Projection covers through {covered}, but a debt term of {term} "
                f"years requires coverage through at least {required}.",
                RejectionReason.COVERAGE_INSUFFICIENT,
            )

        return Verdict.valid(
            f"Projection covers through {covered}, meeting the required horizon of {required}."
        )
