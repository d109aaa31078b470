from app.classification.classifier import TypeClassifier
from app.consistency.upsert import upsert
from app.database.repositories.base import BaseDocumentRepository
from app.documents.models import (
    Document,
    DocumentType,
    IdentityKey,
    RejectionReason,
    Verdict,
)
from app.extraction.content import ContentExtractor
from app.extraction.facts import FactExtractor
from app.logging.logger import Log
from app.processor.pipeline import PipelineContext, PipelineStep
from app.storage.base import BaseContentFetcher
from app.validation.base import BaseDocumentValidator, ValidationSubject
from app.validation.integrity import IntegrityGate


class CheckFormatStep(PipelineStep):
    def __init__(self, extractor: ContentExtractor) -> None:
        self._extractor = extractor

    def run(self, context: PipelineContext) -> PipelineContext:
        if not self._extractor.is_supported(context.filename):
            context.document_type = DocumentType.UNRECOGNIZED
            context.verdict = Verdict.invalid(
                self._extractor.unsupported_message(),
                RejectionReason.UNSUPPORTED_FORMAT,
            )
            Log.info("Unsupported file format", document_id=context.document_id)
        return context


class FetchContentStep(PipelineStep):
    def __init__(self, fetcher: BaseContentFetcher, max_upload_bytes: int) -> None:
        self._fetcher = fetcher
        self._max_upload_bytes = max_upload_bytes

    def run(self, context: PipelineContext) -> PipelineContext:
        raw_bytes = self._fetcher.fetch(context.locator)
        if len(raw_bytes) > self._max_upload_bytes:
            limit_mb = self._max_upload_bytes / (1024 * 1024)
            context.document_type = DocumentType.UNRECOGNIZED
            context.verdict = Verdict.invalid(
                f"File exceeds the maximum upload size of {limit_mb:g} MB.",
                RejectionReason.FILE_TOO_LARGE,
            )
            return context
        context.raw_bytes = raw_bytes
        Log.info(f"Fetched {len(raw_bytes)} bytes", document_id=context.document_id)
        return context


class ExtractContentStep(PipelineStep):
    def __init__(self, extractor: ContentExtractor) -> None:
        self._extractor = extractor

    def run(self, context: PipelineContext) -> PipelineContext:
        context.content = self._extractor.extract(context.raw_bytes, context.filename)
        Log.debug(
            f"Extracted {len(context.content.text)} chars",
            document_id=context.document_id,
            is_text=context.content.is_text,
        )
        return context


class ClassifyStep(PipelineStep):
    def __init__(self, classifier: TypeClassifier) -> None:
        self._classifier = classifier

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.content is None:
            raise ValueError("PipelineContext.content must be set before classification")
        context.document_type = self._classifier.classify(context.content.text, context.filename)
        Log.info(
            "Document classified",
            document_id=context.document_id,
            document_type=context.document_type.value,
        )
        return context


class ExtractFactsStep(PipelineStep):
    """Extracts facts and fixes the document year and identity key.

    Flujo de Fondos is keyed by the year it projects to; every other type
    by the most recent past year it mentions.
    """

    def __init__(self, fact_extractor: FactExtractor) -> None:
        self._fact_extractor = fact_extractor

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.content is None or context.document_type is None:
            raise ValueError("PipelineContext content and type must be set before facts")
        facts = self._fact_extractor.extract(
            context.content.text, context.filename, context.current_year
        )
        context.facts = facts
        if context.document_type == DocumentType.CASHFLOW:
            context.document_year = facts.projection_year
        else:
            context.document_year = facts.year
        context.identity_key = IdentityKey.for_document(
            context.document_type,
            context.context.company_category,
            context.document_year,
        )
        return context


class ValidateStep(PipelineStep):
    def __init__(
        self,
        validators: dict[DocumentType, BaseDocumentValidator],
        repository: BaseDocumentRepository,
    ) -> None:
        self._validators = validators
        self._repository = repository

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.decided:
            return context
        if context.content is None or context.facts is None or context.document_type is None:
            raise ValueError("PipelineContext must be classified before validation")
        subject = ValidationSubject(
            filename=context.filename,
            content=context.content,
            facts=context.facts,
            context=context.context,
            existing_documents=tuple(self._repository.list_current()),
            current_year=context.current_year,
        )
        context.verdict = self._validators[context.document_type].validate(subject)
        Log.info(
            "Document validated",
            document_id=context.document_id,
            document_type=context.document_type.value,
            is_valid=context.verdict.is_valid,
        )
        return context


class IntegrityGateStep(PipelineStep):
    def __init__(self, gate: IntegrityGate) -> None:
        self._gate = gate

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.verdict is None or context.content is None or context.document_type is None:
            return context
        context.verdict = self._gate.apply(context.verdict, context.document_type, context.content)
        return context


class RecordStep(PipelineStep):
    def __init__(self, repository: BaseDocumentRepository) -> None:
        self._repository = repository

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.verdict is None:
            raise ValueError("PipelineContext.verdict must be set before recording")
        verdict = context.verdict
        document = Document(
            id=context.document_id,
            name=context.filename,
            locator=context.locator,
            uploaded_at=context.uploaded_at,
            is_valid=verdict.is_valid,
            document_type=context.document_type or DocumentType.UNRECOGNIZED,
            validation_message=verdict.message,
            company_category=context.context.company_category,
            document_year=context.document_year,
        )
        context.result = upsert(document, self._repository, verdict.reason)
        return context
