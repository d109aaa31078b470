"""Boundary API: everything a caller can do with documents and context."""

import threading
import uuid
from collections.abc import Callable
from datetime import datetime, timezone

from app.classification.classifier import TypeClassifier
from app.config.settings import Settings
from app.consistency.requirements import RequirementProgress, completion_status
from app.database.repositories.base import BaseDocumentRepository
from app.database.repositories.factory import RepositoryFactory
from app.documents.models import Document, OrganizationalContext, ValidationOutcome
from app.extraction.content import ContentExtractor
from app.extraction.normalizer import TextNormalizer
from app.logging.logger import Log
from app.oracle.factory import OracleFactory
from app.processor.exceptions import BlobNotFoundError, DocumentNotFoundError, StorageError
from app.processor.pipeline import PipelineContext
from app.processor.processor import Processor, build_processor
from app.storage.base import BaseBlobStorage
from app.storage.factory import BlobStorageFactory, ContentFetcherFactory


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class DocumentValidationService:
    def __init__(
        self,
        processor: Processor,
        repository: BaseDocumentRepository,
        blob_storage: BaseBlobStorage,
        extractor: ContentExtractor,
        clock: Callable[[], datetime] = _utc_now,
        context: OrganizationalContext | None = None,
    ) -> None:
        self._processor = processor
        self._repository = repository
        self._blob_storage = blob_storage
        self._extractor = extractor
        self._clock = clock
        self._context = context if context is not None else OrganizationalContext()
        self._context_lock = threading.Lock()

    def upload(
        self,
        raw: bytes,
        filename: str,
        context: OrganizationalContext | None = None,
    ) -> ValidationOutcome:
        """Store *raw* and validate it. Unsupported formats are never stored.

        If validation raises, the freshly stored file is removed again.
        """
        locator = ""
        if self._extractor.is_supported(filename):
            locator = self._blob_storage.store(raw, filename)
        try:
            return self.validate(locator, filename, context)
        except Exception:
            if locator:
                self._discard_blob(locator)
            raise

    def validate(
        self,
        locator: str,
        filename: str,
        context: OrganizationalContext | None = None,
    ) -> ValidationOutcome:
        """Validate content already stored at *locator* and record the result.

        Raises:
            FetchExhaustedError: if the content could not be fetched.
            BlobNotFoundError: if nothing is stored at *locator*.
            StorageError: if the document store fails.
        """
        now = self._clock()
        pipeline_context = PipelineContext(
            document_id=str(uuid.uuid4()),
            filename=filename,
            locator=locator,
            context=context if context is not None else self.get_context(),
            current_year=now.year,
            uploaded_at=now,
        )
        pipeline_context = self._processor.process(pipeline_context)
        result = pipeline_context.result
        if result is None:
            raise RuntimeError("Pipeline finished without recording a result")
        for displaced in result.displaced:
            if displaced.locator:
                self._discard_blob(displaced.locator)
        return ValidationOutcome(
            accepted=result.document.is_valid,
            document=result.document,
            reason=result.reason,
        )

    def list_documents(self) -> list[Document]:
        return self._repository.list_current()

    def list_rejections(self) -> list[Document]:
        return self._repository.list_rejections()

    def delete_document(self, document_id: str) -> Document:
        """Delete a document's stored bytes, then its record.

        The file goes first so a storage failure leaves the record in place
        and the call can be retried.

        Raises:
            DocumentNotFoundError: if no listed document has *document_id*.
            StorageError: if the stored file could not be deleted.
        """
        document = self._find_listed(document_id)
        if document.locator:
            try:
                self._blob_storage.delete(document.locator)
            except BlobNotFoundError:
                Log.warning("Stored file already gone", document_id=document_id)
        deleted = self._repository.delete_by_id(document_id)
        Log.info("Document deleted", document_id=document_id)
        return deleted

    def set_context(self, **changes: object) -> OrganizationalContext:
        with self._context_lock:
            self._context = self._context.updated(**changes)  # type: ignore[arg-type]
            return self._context

    def get_context(self) -> OrganizationalContext:
        with self._context_lock:
            return self._context

    def reset_context(self) -> OrganizationalContext:
        with self._context_lock:
            self._context = OrganizationalContext()
            return self._context

    def completion_status(self) -> list[RequirementProgress]:
        documents = [*self._repository.list_current(), *self._repository.list_rejections()]
        return completion_status(self.get_context().company_category, documents)

    def _find_listed(self, document_id: str) -> Document:
        for document in (*self._repository.list_current(), *self._repository.list_rejections()):
            if document.id == document_id:
                return document
        raise DocumentNotFoundError(f"Document {document_id} not found")

    def _discard_blob(self, locator: str) -> None:
        """Delete a file no record points to. Failures are logged, not raised."""
        try:
            self._blob_storage.delete(locator)
        except BlobNotFoundError:
            Log.debug("Unreferenced file already gone", locator=locator)
        except StorageError as exc:
            Log.error("Could not delete unreferenced file", locator=locator, error=str(exc))


def build_service(settings: Settings) -> DocumentValidationService:
    """Wire the service from application settings."""
    normalizer = TextNormalizer()
    extractor = ContentExtractor(
        normalizer,
        allowed_extensions=settings.allowed_extensions,
        text_extensions=settings.text_extensions,
    )
    repository = RepositoryFactory.create(settings)
    blob_storage = BlobStorageFactory.create(settings)
    processor = build_processor(
        settings,
        repository=repository,
        fetcher=ContentFetcherFactory.create(settings, blob_storage),
        oracle=OracleFactory.create(settings),
        extractor=extractor,
        classifier=TypeClassifier(normalizer),
    )
    return DocumentValidationService(
        processor=processor,
        repository=repository,
        blob_storage=blob_storage,
        extractor=extractor,
    )
