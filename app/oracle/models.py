from dataclasses import dataclass
from enum import Enum


class Confidence(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    NONE = "none"

    @property
    def is_reliable(self) -> bool:
        return self in (Confidence.HIGH, Confidence.MEDIUM)


class TriState(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"
    UNKNOWN = "unknown"


class ReportTier(str, Enum):
    """Assurance level of an accountant's report, lowest to highest."""

    COMPILATION = "compilation"
    LIMITED_REVIEW = "limited_review"
    AUDIT = "audit"
    INDETERMINATE = "indeterminate"

    @property
    def rank(self) -> int:
        return _TIER_RANK[self]

    @property
    def label(self) -> str:
        return _TIER_LABEL[self]


_TIER_RANK = {
    ReportTier.INDETERMINATE: -1,
    ReportTier.COMPILATION: 0,
    ReportTier.LIMITED_REVIEW: 1,
    ReportTier.AUDIT: 2,
}

_TIER_LABEL = {
    ReportTier.INDETERMINATE: "Indeterminate",
    ReportTier.COMPILATION: "Compilation",
    ReportTier.LIMITED_REVIEW: "Limited Review",
    ReportTier.AUDIT: "Audit",
}


@dataclass(frozen=True)
class ReportTierResult:
    tier: ReportTier
    error: str | None = None

    @classmethod
    def unknown(cls, error: str | None = None) -> "ReportTierResult":
        return cls(tier=ReportTier.INDETERMINATE, error=error)


@dataclass(frozen=True)
class EquationCheck:
    """Figures the oracle read from a balance sheet.

    ``claimed_difference`` is kept for logging only; validators recompute
    the difference from the three figures.
    """

    assets: float | None = None
    liabilities: float | None = None
    equity: float | None = None
    claimed_difference: float | None = None
    confidence: Confidence = Confidence.NONE
    error: str | None = None

    @classmethod
    def unknown(cls, error: str | None = None) -> "EquationCheck":
        return cls(error=error)


@dataclass(frozen=True)
class DualOpinionCheck:
    cashflow_opinion: TriState = TriState.UNKNOWN
    credit_opinion: TriState = TriState.UNKNOWN
    error: str | None = None

    @classmethod
    def unknown(cls, error: str | None = None) -> "DualOpinionCheck":
        return cls(error=error)


@dataclass(frozen=True)
class CoverageCheck:
    final_year: int | None = None
    duration_years: float | None = None
    confidence: Confidence = Confidence.NONE
    error: str | None = None

    @classmethod
    def unknown(cls, error: str | None = None) -> "CoverageCheck":
        return cls(error=error)
