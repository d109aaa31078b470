from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from app.consistency.upsert import UpsertAction
from app.database.repositories.memory_repository import InMemoryDocumentRepository
from app.documents.models import (
    CompanyCategory,
    DocumentType,
    OrganizationalContext,
    RejectionReason,
    Verdict,
)
from app.extraction.content import ContentExtractor, ExtractedContent
from app.extraction.facts import FactExtractor
from app.extraction.normalizer import TextNormalizer
from app.processor.pipeline import PipelineContext
from app.processor.steps import (
    CheckFormatStep,
    ExtractFactsStep,
    FetchContentStep,
    IntegrityGateStep,
    RecordStep,
    ValidateStep,
)
from app.storage.base import BaseContentFetcher
from app.validation.base import BaseDocumentValidator
from app.validation.integrity import IntegrityGate, RandomCorruptionPolicy


def _make_context(
    filename: str = "balance_2023.txt",
    category: CompanyCategory | None = None,
) -> PipelineContext:
    return PipelineContext(
        document_id="doc-1",
        filename=filename,
        locator="abc/" + filename,
        context=OrganizationalContext(company_category=category),
        current_year=2024,
        uploaded_at=datetime(2024, 6, 1, tzinfo=timezone.utc),
    )


def _make_extractor(normalizer: TextNormalizer) -> ContentExtractor:
    return ContentExtractor(normalizer, ["pdf", "doc", "docx", "txt"], ["txt"])


class TestCheckFormatStep:
    def test_unsupported_format_sets_verdict(self, normalizer: TextNormalizer) -> None:
        context = CheckFormatStep(_make_extractor(normalizer)).run(_make_context("tool.exe"))
        assert context.verdict is not None
        assert context.verdict.reason == RejectionReason.UNSUPPORTED_FORMAT
        assert context.document_type == DocumentType.UNRECOGNIZED

    def test_supported_format_passes(self, normalizer: TextNormalizer) -> None:
        context = CheckFormatStep(_make_extractor(normalizer)).run(_make_context("b.pdf"))
        assert context.decided is False


class TestFetchContentStep:
    def test_stores_raw_bytes(self) -> None:
        fetcher = MagicMock(spec=BaseContentFetcher)
        fetcher.fetch.return_value = b"activo"
        context = FetchContentStep(fetcher, max_upload_bytes=100).run(_make_context())
        assert context.raw_bytes == b"activo"
        fetcher.fetch.assert_called_once_with("abc/balance_2023.txt")

    def test_oversized_upload_is_rejected(self) -> None:
        fetcher = MagicMock(spec=BaseContentFetcher)
        fetcher.fetch.return_value = b"x" * 101
        context = FetchContentStep(fetcher, max_upload_bytes=100).run(_make_context())
        assert context.verdict is not None
        assert context.verdict.reason == RejectionReason.FILE_TOO_LARGE
        assert context.raw_bytes == b""


class TestExtractFactsStep:
    @pytest.mark.parametrize(
        ("document_type", "expected_year"),
        [(DocumentType.CASHFLOW, 2030), (DocumentType.BALANCE, 2023)],
    )
    def test_year_depends_on_type(
        self, document_type: DocumentType, expected_year: int
    ) -> None:
        context = _make_context(category=CompanyCategory.AGRICULTURAL)
        context.content = ExtractedContent(text="real 2023 proyectado 2030", extension="txt", is_text=True)
        context.document_type = document_type

        context = ExtractFactsStep(FactExtractor()).run(context)

        assert context.document_year == expected_year
        assert context.identity_key is not None

    def test_requires_classification(self) -> None:
        with pytest.raises(ValueError, match="must be set"):
            ExtractFactsStep(FactExtractor()).run(_make_context())


class TestValidateStep:
    def test_skips_when_already_decided(self) -> None:
        validator = MagicMock(spec=BaseDocumentValidator)
        context = _make_context()
        context.verdict = Verdict.invalid("nope", RejectionReason.UNSUPPORTED_FORMAT)

        ValidateStep({DocumentType.BALANCE: validator}, InMemoryDocumentRepository()).run(context)

        validator.validate.assert_not_called()

    def test_dispatches_by_type(self) -> None:
        validator = MagicMock(spec=BaseDocumentValidator)
        validator.validate.return_value = Verdict.valid()
        context = _make_context()
        context.content = ExtractedContent(text="activo", extension="txt", is_text=True)
        context.document_type = DocumentType.BALANCE
        context = ExtractFactsStep(FactExtractor()).run(context)

        context = ValidateStep(
            {DocumentType.BALANCE: validator}, InMemoryDocumentRepository()
        ).run(context)

        assert context.verdict == Verdict.valid()
        subject = validator.validate.call_args[0][0]
        assert subject.current_year == 2024
        assert subject.existing_documents == ()


class TestIntegrityGateStep:
    def test_applies_gate_to_valid_pdf(self) -> None:
        context = _make_context("balance.pdf")
        context.content = ExtractedContent(text="balance.pdf", extension="pdf", is_text=False)
        context.document_type = DocumentType.BALANCE
        context.verdict = Verdict.valid()

        context = IntegrityGateStep(IntegrityGate(RandomCorruptionPolicy(1.0))).run(context)

        assert context.verdict is not None
        assert context.verdict.reason == RejectionReason.CORRUPTED


class TestRecordStep:
    def test_records_valid_document(self) -> None:
        repository = InMemoryDocumentRepository()
        context = _make_context(category=CompanyCategory.REGULAR)
        context.document_type = DocumentType.BALANCE
        context.document_year = 2023
        context.verdict = Verdict.valid("ok")

        context = RecordStep(repository).run(context)

        assert context.result is not None
        assert context.result.action == UpsertAction.INSERTED
        stored = repository.list_current()[0]
        assert stored.id == "doc-1"
        assert stored.company_category == CompanyCategory.REGULAR
        assert stored.validation_message == "ok"

    def test_records_rejection_with_reason(self) -> None:
        repository = InMemoryDocumentRepository()
        context = _make_context("tool.exe")
        context.document_type = DocumentType.UNRECOGNIZED
        context.verdict = Verdict.invalid("bad format", RejectionReason.UNSUPPORTED_FORMAT)

        context = RecordStep(repository).run(context)

        assert context.result is not None
        assert context.result.reason == RejectionReason.UNSUPPORTED_FORMAT
        assert repository.list_current() == []
        assert len(repository.list_rejections()) == 1

    def test_requires_verdict(self) -> None:
        with pytest.raises(ValueError, match="verdict"):
            RecordStep(InMemoryDocumentRepository()).run(_make_context())
