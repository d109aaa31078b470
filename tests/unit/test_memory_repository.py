from collections.abc import Callable
from datetime import datetime, timezone

import pytest

from app.database.repositories.memory_repository import InMemoryDocumentRepository
from app.documents.models import CompanyCategory, Document, DocumentType
from app.processor.exceptions import DocumentNotFoundError


class TestListing:
    def test_starts_empty(self, repository: InMemoryDocumentRepository) -> None:
        assert repository.list_current() == []
        assert repository.list_rejections() == []

    def test_lists_newest_first(
        self, repository: InMemoryDocumentRepository, make_document: Callable[..., Document]
    ) -> None:
        older = make_document(
            DocumentType.CASHFLOW, uploaded_at=datetime(2024, 1, 1, tzinfo=timezone.utc)
        )
        newer = make_document(
            DocumentType.BALANCE, uploaded_at=datetime(2024, 2, 1, tzinfo=timezone.utc)
        )
        repository.save_current(older.identity_key, older)
        repository.save_current(newer.identity_key, newer)
        assert repository.list_current() == [newer, older]


class TestSaveCurrent:
    def test_returns_replaced_document(
        self, repository: InMemoryDocumentRepository, make_document: Callable[..., Document]
    ) -> None:
        first = make_document()
        second = make_document()
        assert repository.save_current(first.identity_key, first).replaced is None
        assert repository.save_current(second.identity_key, second).replaced == first
        assert repository.get_current(second.identity_key) == second

    def test_clears_rejection_at_key(
        self, repository: InMemoryDocumentRepository, make_document: Callable[..., Document]
    ) -> None:
        rejected = make_document(is_valid=False)
        accepted = make_document()
        repository.save_rejection(rejected.identity_key, rejected)

        saved = repository.save_current(accepted.identity_key, accepted)

        assert saved.cleared_rejection == rejected
        assert saved.displaced == (rejected,)
        assert repository.list_rejections() == []


class TestRejections:
    def test_save_rejection_returns_overwritten(
        self, repository: InMemoryDocumentRepository, make_document: Callable[..., Document]
    ) -> None:
        first = make_document(is_valid=False, message="first")
        second = make_document(is_valid=False, message="second")
        assert repository.save_rejection(first.identity_key, first) is None
        assert repository.save_rejection(second.identity_key, second) == first
        assert repository.list_rejections() == [second]

    def test_drop_rejection_returns_dropped(
        self, repository: InMemoryDocumentRepository, make_document: Callable[..., Document]
    ) -> None:
        rejected = make_document(is_valid=False)
        repository.save_rejection(rejected.identity_key, rejected)
        assert repository.drop_rejection(rejected.identity_key) == rejected
        assert repository.drop_rejection(rejected.identity_key) is None


class TestCountAccepted:
    def test_counts_superseded_history(
        self, repository: InMemoryDocumentRepository, make_document: Callable[..., Document]
    ) -> None:
        for _ in range(2):
            doc = make_document(category=CompanyCategory.NEW, year=2023)
            repository.save_current(doc.identity_key, doc)
        assert repository.count_accepted(DocumentType.BALANCE, CompanyCategory.NEW) == 2

    def test_ignores_rejections_and_other_categories(
        self, repository: InMemoryDocumentRepository, make_document: Callable[..., Document]
    ) -> None:
        rejected = make_document(category=CompanyCategory.NEW, year=2023, is_valid=False)
        repository.save_rejection(rejected.identity_key, rejected)
        regular = make_document(category=CompanyCategory.REGULAR)
        repository.save_current(regular.identity_key, regular)
        assert repository.count_accepted(DocumentType.BALANCE, CompanyCategory.NEW) == 0


class TestDeleteById:
    def test_deletes_current_and_its_history(
        self, repository: InMemoryDocumentRepository, make_document: Callable[..., Document]
    ) -> None:
        first = make_document(category=CompanyCategory.NEW, year=2023)
        second = make_document(category=CompanyCategory.NEW, year=2023)
        repository.save_current(first.identity_key, first)
        repository.save_current(second.identity_key, second)

        assert repository.delete_by_id(second.id) == second

        assert repository.list_current() == []
        assert repository.count_accepted(DocumentType.BALANCE, CompanyCategory.NEW) == 0

    def test_deletes_rejection(
        self, repository: InMemoryDocumentRepository, make_document: Callable[..., Document]
    ) -> None:
        rejected = make_document(is_valid=False)
        repository.save_rejection(rejected.identity_key, rejected)
        repository.delete_by_id(rejected.id)
        assert repository.list_rejections() == []

    def test_unknown_id_raises(self, repository: InMemoryDocumentRepository) -> None:
        with pytest.raises(DocumentNotFoundError, match="missing not found"):
            repository.delete_by_id("missing")


class TestClear:
    def test_clear_empties_everything(
        self, repository: InMemoryDocumentRepository, make_document: Callable[..., Document]
    ) -> None:
        doc = make_document()
        rejected = make_document(DocumentType.DETA, is_valid=False)
        repository.save_current(doc.identity_key, doc)
        repository.save_rejection(rejected.identity_key, rejected)
        repository.clear()
        assert repository.list_current() == []
        assert repository.list_rejections() == []
