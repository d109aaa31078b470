from abc import ABC, abstractmethod
from dataclasses import dataclass

from app.documents.models import CompanyCategory, Document, DocumentType, IdentityKey


@dataclass(frozen=True)
class CurrentSave:
    """What making a document current pushed out of the visible lists."""

    replaced: Document | None = None
    cleared_rejection: Document | None = None

    @property
    def displaced(self) -> tuple[Document, ...]:
        return tuple(doc for doc in (self.replaced, self.cleared_rejection) if doc is not None)


class BaseDocumentRepository(ABC):
    """Contract for the document store.

    The store keeps three collections:

    * current: at most one document per identity key, the one that counts;
    * rejections: the latest invalid verdict per identity key, kept so the
      caller can surface it;
    * superseded: current documents that a later valid submission replaced.
    """

    @abstractmethod
    def list_current(self) -> list[Document]:
        """Current documents sorted by ``uploaded_at`` descending."""

    @abstractmethod
    def list_rejections(self) -> list[Document]:
        """Latest rejection per key, sorted by ``uploaded_at`` descending."""

    @abstractmethod
    def get_current(self, key: IdentityKey) -> Document | None:
        """Return the current document at *key*, if any."""

    @abstractmethod
    def save_current(self, key: IdentityKey, document: Document) -> CurrentSave:
        """Make *document* current at *key* and forget the key's rejection.

        Both writes happen atomically. The previous current document moves to
        the superseded history.
        """

    @abstractmethod
    def save_rejection(self, key: IdentityKey, document: Document) -> Document | None:
        """Record *document* as the latest rejection at *key*; return the one it overwrote."""

    @abstractmethod
    def drop_rejection(self, key: IdentityKey) -> Document | None:
        """Forget the rejection recorded at *key* and return it, if any."""

    @abstractmethod
    def count_accepted(
        self,
        document_type: DocumentType,
        company_category: CompanyCategory | None,
    ) -> int:
        """Count valid documents ever accepted (current plus superseded)."""

    @abstractmethod
    def delete_by_id(self, document_id: str) -> Document:
        """Remove a document; a current one takes its key's superseded history along.

        Raises:
            DocumentNotFoundError: if no current or rejected document has this id.
        """

    @abstractmethod
    def clear(self) -> None:
        """Drop every stored document."""
