from datetime import datetime, timezone

import pytest

from app.documents.models import (
    CompanyCategory,
    Document,
    DocumentType,
    IdentityKey,
    OrganizationalContext,
    RejectionReason,
    Verdict,
)


def _make_document(**overrides: object) -> Document:
    fields: dict[str, object] = {
        "id": "doc-1",
        "name": "balance_2023.txt",
        "locator": "abc/balance_2023.txt",
        "uploaded_at": datetime(2024, 3, 1, tzinfo=timezone.utc),
        "is_valid": True,
        "document_type": DocumentType.BALANCE,
    }
    fields.update(overrides)
    return Document(**fields)  # type: ignore[arg-type]


class TestCompanyCategoryParse:
    @pytest.mark.parametrize("value", ["Agricultural", "agricultural", " AGRICULTURAL "])
    def test_parses_value_and_name(self, value: str) -> None:
        assert CompanyCategory.parse(value) == CompanyCategory.AGRICULTURAL

    def test_unknown_value_is_none(self) -> None:
        assert CompanyCategory.parse("Mining") is None

    def test_non_string_is_none(self) -> None:
        assert CompanyCategory.parse(3) is None


class TestIdentityKey:
    def test_year_keyed_for_agricultural_balance(self) -> None:
        key = IdentityKey.for_document(DocumentType.BALANCE, CompanyCategory.AGRICULTURAL, 2023)
        assert key.document_year == 2023

    def test_year_keyed_for_new_dicose(self) -> None:
        key = IdentityKey.for_document(DocumentType.DICOSE, CompanyCategory.NEW, 2022)
        assert key.document_year == 2022

    def test_regular_balance_ignores_year(self) -> None:
        key = IdentityKey.for_document(DocumentType.BALANCE, CompanyCategory.REGULAR, 2023)
        assert key.document_year is None

    def test_cashflow_ignores_year(self) -> None:
        key = IdentityKey.for_document(DocumentType.CASHFLOW, CompanyCategory.NEW, 2030)
        assert key == IdentityKey(DocumentType.CASHFLOW, CompanyCategory.NEW)

    def test_as_string(self) -> None:
        key = IdentityKey(DocumentType.DICOSE, CompanyCategory.NEW, 2022)
        assert key.as_string() == "DICOSE|New|2022"

    def test_as_string_with_unset_fields(self) -> None:
        key = IdentityKey(DocumentType.UNRECOGNIZED, None)
        assert key.as_string() == "Unrecognized|-|-"


class TestDocument:
    def test_invalid_document_requires_message(self) -> None:
        with pytest.raises(ValueError, match="validation message"):
            _make_document(is_valid=False)

    def test_rejected_returns_invalid_copy(self) -> None:
        document = _make_document()
        rejected = document.rejected("too many")
        assert rejected.is_valid is False
        assert rejected.validation_message == "too many"
        assert document.is_valid is True

    def test_identity_key_uses_year_for_year_keyed_types(self) -> None:
        document = _make_document(company_category=CompanyCategory.NEW, document_year=2023)
        assert document.identity_key.as_string() == "Balance|New|2023"


class TestOrganizationalContext:
    def test_updates_only_given_fields(self) -> None:
        context = OrganizationalContext(max_debt_amount=500_000.0)
        updated = context.updated(company_category="New")
        assert updated.company_category == CompanyCategory.NEW
        assert updated.max_debt_amount == 500_000.0

    def test_negative_amount_resets_to_unset(self) -> None:
        context = OrganizationalContext(max_debt_amount=500_000.0)
        assert context.updated(max_debt_amount=-1).max_debt_amount is None

    def test_non_numeric_amount_resets_to_unset(self) -> None:
        context = OrganizationalContext(max_debt_amount=500_000.0)
        assert context.updated(max_debt_amount="lots").max_debt_amount is None

    def test_numeric_string_amount_is_accepted(self) -> None:
        assert OrganizationalContext().updated(max_debt_amount="1200000").max_debt_amount == (
            1_200_000.0
        )

    def test_fractional_term_resets_to_unset(self) -> None:
        assert OrganizationalContext().updated(max_debt_term_years=2.5).max_debt_term_years is None

    def test_boolean_term_resets_to_unset(self) -> None:
        assert OrganizationalContext().updated(max_debt_term_years=True).max_debt_term_years is None

    def test_unknown_category_resets_to_unset(self) -> None:
        context = OrganizationalContext(company_category=CompanyCategory.NEW)
        assert context.updated(company_category="Mining").company_category is None


class TestVerdict:
    def test_valid_has_no_reason(self) -> None:
        verdict = Verdict.valid("advisory")
        assert verdict.is_valid is True
        assert verdict.reason is None

    def test_invalid_carries_reason(self) -> None:
        verdict = Verdict.invalid("nope", RejectionReason.MISSING_YEAR)
        assert verdict.is_valid is False
        assert verdict.reason == RejectionReason.MISSING_YEAR
