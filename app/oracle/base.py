from abc import ABC, abstractmethod

from app.oracle.models import (
    CoverageCheck,
    DualOpinionCheck,
    EquationCheck,
    ReportTierResult,
)


class BaseOracle(ABC):
    """Contract for the fuzzy classification/extraction capability.

    Implementations never raise: infrastructure or parsing failures come
    back as an unknown result with ``error`` set.
    """

    @abstractmethod
    def classify_report_tier(
        self, text: str, max_debt_amount: float | None
    ) -> ReportTierResult:
        """Classify an accountant's report as compilation, limited review or audit."""

    @abstractmethod
    def check_accounting_equation(self, text: str) -> EquationCheck:
        """Read total assets, liabilities and equity from a balance sheet."""

    @abstractmethod
    def check_dual_opinions(self, text: str) -> DualOpinionCheck:
        """Detect the cashflow-projection and credit-application opinions."""

    @abstractmethod
    def check_projection_coverage(self, text: str, current_year: int) -> CoverageCheck:
        """Find the last projected year or the projection duration."""
