import math
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum


class DocumentType(str, Enum):
    """Closed set of document types the pipeline can assign."""

    CASHFLOW = "Flujo de Fondos"
    BALANCE = "Balance"
    PROFESSIONAL_REPORT = "Informe Profesional"
    DICOSE = "DICOSE"
    DETA = "DETA"
    UNRECOGNIZED = "Unrecognized"


class CompanyCategory(str, Enum):
    REGULAR = "Regular"
    AGRICULTURAL = "Agricultural"
    NEW = "New"

    @classmethod
    def parse(cls, value: object) -> "CompanyCategory | None":
        """Resolve a category from an enum, value or name; unknown input is None."""
        if isinstance(value, CompanyCategory):
            return value
        if not isinstance(value, str):
            return None
        wanted = value.strip().lower()
        for member in cls:
            if wanted in (member.value.lower(), member.name.lower()):
                return member
        return None


class RejectionReason(str, Enum):
    """Why a verdict is invalid. Business outcomes, never raised."""

    UNSUPPORTED_FORMAT = "unsupported_format"
    FILE_TOO_LARGE = "file_too_large"
    WRONG_CATEGORY = "wrong_category"
    MISSING_YEAR = "missing_year"
    STRUCTURAL_INCOMPLETE = "structural_incomplete"
    CROSS_DOCUMENT_INCONSISTENCY = "cross_document_inconsistency"
    ORACLE_INDETERMINATE = "oracle_indeterminate"
    ORACLE_UNAVAILABLE = "oracle_unavailable"
    EQUATION_FAILED = "equation_failed"
    COVERAGE_INSUFFICIENT = "coverage_insufficient"
    TIER_INSUFFICIENT = "tier_insufficient"
    CONFIGURATION_MISSING = "configuration_missing"
    QUOTA_EXCEEDED = "quota_exceeded"
    UNRECOGNIZED = "unrecognized"
    CORRUPTED = "corrupted"


YEAR_KEYED_TYPES = frozenset({DocumentType.BALANCE, DocumentType.DICOSE})
YEAR_KEYED_CATEGORIES = frozenset({CompanyCategory.AGRICULTURAL, CompanyCategory.NEW})


@dataclass(frozen=True)
class IdentityKey:
    """Grouping key used by the upsert/replace policy."""

    document_type: DocumentType
    company_category: CompanyCategory | None
    document_year: int | None = None

    @classmethod
    def for_document(
        cls,
        document_type: DocumentType,
        company_category: CompanyCategory | None,
        document_year: int | None,
    ) -> "IdentityKey":
        if document_type in YEAR_KEYED_TYPES and company_category in YEAR_KEYED_CATEGORIES:
            return cls(document_type, company_category, document_year)
        return cls(document_type, company_category)

    def as_string(self) -> str:
        category = self.company_category.value if self.company_category else "-"
        year = str(self.document_year) if self.document_year is not None else "-"
        return f"{self.document_type.value}|{category}|{year}"


@dataclass(frozen=True)
class Document:
    """One validated or rejected submission. Never mutated after creation."""

    id: str
    name: str
    locator: str
    uploaded_at: datetime
    is_valid: bool
    document_type: DocumentType
    validation_message: str | None = None
    company_category: CompanyCategory | None = None
    document_year: int | None = None

    def __post_init__(self) -> None:
        if not self.is_valid and not self.validation_message:
            raise ValueError("Invalid documents must carry a validation message")

    @property
    def identity_key(self) -> IdentityKey:
        return IdentityKey.for_document(
            self.document_type, self.company_category, self.document_year
        )

    def rejected(self, message: str) -> "Document":
        """Return a copy of this document marked invalid with *message*."""
        return replace(self, is_valid=False, validation_message=message)


def _coerce_amount(value: object) -> float | None:
    if isinstance(value, bool) or value is None:
        return None
    try:
        amount = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    if math.isnan(amount) or math.isinf(amount) or amount < 0:
        return None
    return amount


def _coerce_term(value: object) -> int | None:
    amount = _coerce_amount(value)
    if amount is None or not amount.is_integer():
        return None
    return int(amount)


_UNSET = object()


@dataclass(frozen=True)
class OrganizationalContext:
    """Mutable-by-copy organizational configuration passed into each validation."""

    company_category: CompanyCategory | None = None
    max_debt_amount: float | None = None
    max_debt_term_years: int | None = None

    def updated(
        self,
        *,
        company_category: object = _UNSET,
        max_debt_amount: object = _UNSET,
        max_debt_term_years: object = _UNSET,
    ) -> "OrganizationalContext":
        """Return a copy with the given fields changed.

        Negative or non-numeric amounts and terms reset the field to unset
        instead of raising. Fields not passed keep their current value.
        """
        changes: dict[str, object] = {}
        if company_category is not _UNSET:
            changes["company_category"] = CompanyCategory.parse(company_category)
        if max_debt_amount is not _UNSET:
            changes["max_debt_amount"] = _coerce_amount(max_debt_amount)
        if max_debt_term_years is not _UNSET:
            changes["max_debt_term_years"] = _coerce_term(max_debt_term_years)
        return replace(self, **changes)  # type: ignore[arg-type]


@dataclass(frozen=True)
class Verdict:
    """Outcome of a validator: valid/invalid plus a human-readable reason."""

    is_valid: bool
    message: str | None = None
    reason: RejectionReason | None = None

    @classmethod
    def valid(cls, message: str | None = None) -> "Verdict":
        return cls(is_valid=True, message=message)

    @classmethod
    def invalid(cls, message: str, reason: RejectionReason) -> "Verdict":
        return cls(is_valid=False, message=message, reason=reason)


@dataclass(frozen=True)
class ValidationOutcome:
    """What the boundary API returns for a validation attempt."""

    accepted: bool
    document: Document
    reason: RejectionReason | None = None
