from app.documents.models import CompanyCategory, RejectionReason, Verdict
from app.oracle.base import BaseOracle
from app.oracle.models import DualOpinionCheck, TriState
from app.validation.base import BaseDocumentValidator, ValidationSubject
from app.validation.structure import MIN_LENGTH_DETA

_MANUAL_REVIEW = "The document has been flagged for manual review."


class DetaValidator(BaseDocumentValidator):
    """Accountant's report on agricultural projections.

    It must contain two separate professional opinions: one on the cash flow
    projection and one on the credit capacity.
    """

    def __init__(self, oracle: BaseOracle) -> None:
        self._oracle = oracle

    def validate(self, subject: ValidationSubject) -> Verdict:
        if subject.category != CompanyCategory.AGRICULTURAL:
            return Verdict.invalid(
                "DETA documents are only required for agricultural companies. "
                "Please select the correct company category.",
                RejectionReason.WRONG_CATEGORY,
            )

        verdict = self._opinion_verdict(self._oracle.check_dual_opinions(subject.text))

        if subject.is_short(MIN_LENGTH_DETA):
            incomplete = "DETA document appears to be incomplete or too short."
            if verdict.is_valid:
                return Verdict.invalid(incomplete, RejectionReason.STRUCTURAL_INCOMPLETE)
            return Verdict.invalid(f"{verdict.message} {incomplete}", verdict.reason)

        return verdict

    @staticmethod
    def _opinion_verdict(check: DualOpinionCheck) -> Verdict:
        if check.error is not None:
            return Verdict.invalid(
                f"Could not analyze the professional opinions in the DETA ({check.error}). "
                f"{_MANUAL_REVIEW}",
                RejectionReason.ORACLE_UNAVAILABLE,
            )

        cashflow = check.cashflow_opinion
        credit = check.credit_opinion
        if TriState.UNKNOWN in (cashflow, credit):
            return Verdict.invalid(
                "Could not determine whether the DETA contains both required "
                f"professional opinions. {_MANUAL_REVIEW}",
                RejectionReason.ORACLE_INDETERMINATE,
            )

        if cashflow == TriState.PRESENT and credit == TriState.PRESENT:
            return Verdict.valid()

        missing = []
        if cashflow == TriState.ABSENT:
            missing.append("cash flow projection opinion")
        if credit == TriState.ABSENT:
            missing.append("credit capacity opinion")
        return Verdict.invalid(
            f"DETA must include separate professional opinions. Missing: {', '.join(missing)}.",
            RejectionReason.STRUCTURAL_INCOMPLETE,
        )
