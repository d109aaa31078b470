import threading

from app.database.repositories.base import BaseDocumentRepository, CurrentSave
from app.documents.models import CompanyCategory, Document, DocumentType, IdentityKey
from app.processor.exceptions import DocumentNotFoundError


def _newest_first(documents: list[Document]) -> list[Document]:
    return sorted(documents, key=lambda doc: doc.uploaded_at, reverse=True)


class InMemoryDocumentRepository(BaseDocumentRepository):
    """Process-local document store. Starts empty; ``clear()`` resets it."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._current: dict[IdentityKey, Document] = {}
        self._rejections: dict[IdentityKey, Document] = {}
        self._superseded: list[Document] = []

    def list_current(self) -> list[Document]:
        with self._lock:
            return _newest_first(list(self._current.values()))

    def list_rejections(self) -> list[Document]:
        with self._lock:
            return _newest_first(list(self._rejections.values()))

    def get_current(self, key: IdentityKey) -> Document | None:
        with self._lock:
            return self._current.get(key)

    def save_current(self, key: IdentityKey, document: Document) -> CurrentSave:
        with self._lock:
            replaced = self._current.get(key)
            if replaced is not None:
                self._superseded.append(replaced)
            self._current[key] = document
            return CurrentSave(
                replaced=replaced,
                cleared_rejection=self._rejections.pop(key, None),
            )

    def save_rejection(self, key: IdentityKey, document: Document) -> Document | None:
        with self._lock:
            overwritten = self._rejections.get(key)
            self._rejections[key] = document
            return overwritten

    def drop_rejection(self, key: IdentityKey) -> Document | None:
        with self._lock:
            return self._rejections.pop(key, None)

    def count_accepted(
        self,
        document_type: DocumentType,
        company_category: CompanyCategory | None,
    ) -> int:
        with self._lock:
            candidates = [*self._current.values(), *self._superseded]
            return sum(
                1
                for doc in candidates
                if doc.is_valid
                and doc.document_type == document_type
                and doc.company_category == company_category
            )

    def delete_by_id(self, document_id: str) -> Document:
        with self._lock:
            for key, doc in self._current.items():
                if doc.id == document_id:
                    del self._current[key]
                    self._superseded = [
                        old for old in self._superseded if old.identity_key != key
                    ]
                    return doc
            for key, doc in self._rejections.items():
                if doc.id == document_id:
                    del self._rejections[key]
                    return doc
        raise DocumentNotFoundError(f"Document {document_id} not found")

    def clear(self) -> None:
        with self._lock:
            self._current.clear()
            self._rejections.clear()
            self._superseded.clear()
