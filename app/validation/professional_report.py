from app.documents.models import RejectionReason, Verdict
from app.oracle.base import BaseOracle
from app.oracle.models import ReportTier
from app.validation.base import BaseDocumentValidator, ValidationSubject
from app.validation.structure import (
    MIN_LENGTH_PROFESSIONAL_REPORT,
    PROFESSIONAL_REPORT_CONCEPTS,
    missing_concepts,
)

LIMITED_REVIEW_THRESHOLD = 900_000
AUDIT_THRESHOLD = 2_400_000
MAX_MISSING_CONCEPTS = 1


def required_tier(max_debt_amount: float) -> ReportTier:
    """Lowest report tier accepted for a given maximum debt, in UYU."""
    if max_debt_amount >= AUDIT_THRESHOLD:
        return ReportTier.AUDIT
    if max_debt_amount >= LIMITED_REVIEW_THRESHOLD:
        return ReportTier.LIMITED_REVIEW
    return ReportTier.COMPILATION


class ProfessionalReportValidator(BaseDocumentValidator):
    def __init__(self, oracle: BaseOracle) -> None:
        self._oracle = oracle

    def validate(self, subject: ValidationSubject) -> Verdict:
        amount = subject.context.max_debt_amount
        result = self._oracle.classify_report_tier(subject.text, amount)
        if result.error is not None:
            return Verdict.invalid(
                f"Could not classify the professional report ({result.error}). "
                "The document has been flagged for manual review.",
                RejectionReason.ORACLE_UNAVAILABLE,
            )

        tier = result.tier
        if tier == ReportTier.INDETERMINATE:
            return Verdict.invalid(
                "Could not determine whether the report is a compilation, a limited "
                "review or an audit. The document has been flagged for manual review.",
                RejectionReason.ORACLE_INDETERMINATE,
            )

        if amount is None:
            return Verdict.invalid(
                "Configure the maximum debt amount before uploading the Informe Profesional.",
                RejectionReason.CONFIGURATION_MISSING,
            )

        required = required_tier(amount)
        if tier.rank < required.rank:
            return Verdict.invalid(
                f"The report was classified as {tier.label}, but a maximum debt of "
                f"{amount:,.0f} UYU requires at least {required.label}.",
                RejectionReason.TIER_INSUFFICIENT,
            )

        missing = missing_concepts(subject.text, PROFESSIONAL_REPORT_CONCEPTS)
        if len(missing) > MAX_MISSING_CONCEPTS:
            return Verdict.invalid(
                f"Informe Profesional is missing key elements: {', '.join(missing)}.",
                RejectionReason.STRUCTURAL_INCOMPLETE,
            )

        if subject.is_short(MIN_LENGTH_PROFESSIONAL_REPORT):
            return Verdict.invalid(
                "Informe Profesional appears to be incomplete or too short.",
                RejectionReason.STRUCTURAL_INCOMPLETE,
            )

        return Verdict.valid(
            f"{tier.label} report accepted for a maximum debt of {amount:,.0f} UYU."
        )
