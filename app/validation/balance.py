from app.consistency.years import year_consistency
from app.documents.models import CompanyCategory, RejectionReason, Verdict
from app.logging.logger import Log
from app.oracle.base import BaseOracle
from app.oracle.models import EquationCheck
from app.validation.base import BaseDocumentValidator, ValidationSubject
from app.validation.structure import (
    BALANCE_CONCEPTS,
    MIN_LENGTH_BALANCE,
    missing_concepts,
)

MAX_MISSING_CONCEPTS = 2
EQUATION_TOLERANCE = 0.01

_YEAR_MATCHED_CATEGORIES = (CompanyCategory.AGRICULTURAL, CompanyCategory.NEW)


class BalanceValidator(BaseDocumentValidator):
    """Financial statements; the accounting equation must hold."""

    def __init__(self, oracle: BaseOracle) -> None:
        self._oracle = oracle

    def validate(self, subject: ValidationSubject) -> Verdict:
        missing = missing_concepts(subject.text, BALANCE_CONCEPTS)
        if len(missing) > MAX_MISSING_CONCEPTS:
            return Verdict.invalid(
                f"Balance is missing key elements: {', '.join(missing)}.",
                RejectionReason.STRUCTURAL_INCOMPLETE,
            )

        if subject.is_short(MIN_LENGTH_BALANCE):
            return Verdict.invalid(
                "Balance appears to be incomplete or too short.",
                RejectionReason.STRUCTURAL_INCOMPLETE,
            )

        verdict = self._equation_verdict(self._oracle.check_accounting_equation(subject.text))

        year = subject.facts.year
        if subject.category in _YEAR_MATCHED_CATEGORIES and year is not None:
            consistency = year_consistency(subject.existing_documents, year)
            if not consistency.consistent:
                mismatch = (
                    f"Balance year ({year}) does not match existing documents. "
                    f"{consistency.message}"
                )
                if verdict.is_valid:
                    return Verdict.invalid(
                        mismatch, RejectionReason.CROSS_DOCUMENT_INCONSISTENCY
                    )
                return Verdict.invalid(f"{verdict.message} {mismatch}", verdict.reason)

        return verdict

    @staticmethod
    def _equation_verdict(check: EquationCheck) -> Verdict:
        if check.error is not None:
            return Verdict.invalid(
                f"Could not analyze the Balance figures ({check.error}). "
                "The document has been flagged for manual review.",
                RejectionReason.ORACLE_UNAVAILABLE,
            )

        assets, liabilities, equity = check.assets, check.liabilities, check.equity
        if assets is None or liabilities is None or equity is None:
            return Verdict.invalid(
                "Could not read total assets, liabilities and equity from the Balance. "
                "The document has been flagged for manual review.",
                RejectionReason.ORACLE_INDETERMINATE,
            )

        difference = assets - (liabilities + equity)
        if check.claimed_difference is not None and (
            abs(check.claimed_difference - difference) >= EQUATION_TOLERANCE
        ):
            Log.debug(
                "Oracle difference disagrees with recomputed difference",
                claimed=check.claimed_difference,
                recomputed=difference,
            )

        figures = (
            f"Assets {assets:,.2f}, Liabilities {liabilities:,.2f}, Equity {equity:,.2f}"
        )
        if abs(difference) < EQUATION_TOLERANCE:
            return Verdict.valid(f"Accounting equation holds: {figures}.")
        return Verdict.invalid(
            f"Accounting equation does not hold: {figures}. "
            f"Difference: {difference:,.2f}.",
            RejectionReason.EQUATION_FAILED,
        )
