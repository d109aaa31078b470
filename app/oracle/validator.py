"""Builds typed oracle results from parsed JSON responses.

Shape errors (not an object, an unknown enum value) raise
OracleValidationError. Individual figures that are missing or non-numeric
become None: the validators treat those as "unknown", not as failures.
"""

from typing import Any

from app.oracle.exceptions import OracleValidationError
from app.oracle.models import (
    Confidence,
    CoverageCheck,
    DualOpinionCheck,
    EquationCheck,
    ReportTier,
    ReportTierResult,
    TriState,
)

_MIN_PLAUSIBLE_YEAR = 2000
_MAX_PLAUSIBLE_YEAR = 2100


def build_report_tier(data: dict[str, Any]) -> ReportTierResult:
    raw = data.get("tier")
    if not isinstance(raw, str):
        raise OracleValidationError("'tier' must be a string")
    try:
        return ReportTierResult(tier=ReportTier(raw.strip().lower()))
    except ValueError as exc:
        raise OracleValidationError(f"Unknown report tier: {raw!r}") from exc


def build_equation_check(data: dict[str, Any]) -> EquationCheck:
    return EquationCheck(
        assets=_number_or_none(data.get("assets")),
        liabilities=_number_or_none(data.get("liabilities")),
        equity=_number_or_none(data.get("equity")),
        claimed_difference=_number_or_none(data.get("difference")),
        confidence=_build_confidence(data.get("confidence")),
    )


def build_dual_opinion_check(data: dict[str, Any]) -> DualOpinionCheck:
    return DualOpinionCheck(
        cashflow_opinion=_build_tri_state(data.get("cashflow_opinion"), "cashflow_opinion"),
        credit_opinion=_build_tri_state(data.get("credit_opinion"), "credit_opinion"),
    )


def build_coverage_check(data: dict[str, Any]) -> CoverageCheck:
    final_year = data.get("final_year")
    if isinstance(final_year, float) and final_year.is_integer():
        final_year = int(final_year)
    if not isinstance(final_year, int) or isinstance(final_year, bool):
        final_year = None
    elif not _MIN_PLAUSIBLE_YEAR <= final_year <= _MAX_PLAUSIBLE_YEAR:
        final_year = None

    duration = _number_or_none(data.get("duration_years"))
    if duration is not None and duration < 0:
        duration = None

    return CoverageCheck(
        final_year=final_year,
        duration_years=duration,
        confidence=_build_confidence(data.get("confidence")),
    )


def _number_or_none(raw: Any) -> float | None:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        return float(raw)
    if isinstance(raw, str):
        try:
            return float(raw.replace(",", "").strip())
        except ValueError:
            return None
    return None


def _build_confidence(raw: Any) -> Confidence:
    if raw is None:
        return Confidence.NONE
    if not isinstance(raw, str):
        raise OracleValidationError("'confidence' must be a string")
    try:
        return Confidence(raw.strip().lower())
    except ValueError as exc:
        raise OracleValidationError(f"Unknown confidence: {raw!r}") from exc


def _build_tri_state(raw: Any, field: str) -> TriState:
    if raw is None:
        return TriState.UNKNOWN
    if isinstance(raw, bool):
        return TriState.PRESENT if raw else TriState.ABSENT
    if not isinstance(raw, str):
        raise OracleValidationError(f"'{field}' must be a string")
    try:
        return TriState(raw.strip().lower())
    except ValueError as exc:
        raise OracleValidationError(f"'{field}' has unknown value {raw!r}") from exc
