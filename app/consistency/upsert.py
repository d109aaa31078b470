"""Identity-keyed upsert/replace policy over the document store."""

from dataclasses import dataclass
from enum import Enum

from app.database.repositories.base import BaseDocumentRepository
from app.documents.models import CompanyCategory, Document, DocumentType, RejectionReason
from app.logging.logger import Log

NEW_COMPANY_BALANCE_QUOTA = 3


class UpsertAction(str, Enum):
    INSERTED = "inserted"
    REPLACED = "replaced"
    KEPT_EXISTING = "kept_existing"
    REJECTED = "rejected"


@dataclass(frozen=True)
class UpsertResult:
    """The recorded document plus the records it pushed out of the visible lists.

    Displaced records are superseded or overwritten; their stored files are no
    longer referenced by anything a caller can list.
    """

    document: Document
    action: UpsertAction
    reason: RejectionReason | None = None
    displaced: tuple[Document, ...] = ()


def quota_violation(document: Document, repository: BaseDocumentRepository) -> str | None:
    """Return the quota message if accepting *document* would exceed a quota."""
    if not (
        document.is_valid
        and document.document_type == DocumentType.BALANCE
        and document.company_category == CompanyCategory.NEW
    ):
        return None
    accepted = repository.count_accepted(DocumentType.BALANCE, CompanyCategory.NEW)
    if accepted < NEW_COMPANY_BALANCE_QUOTA:
        return None
    return (
        f"New companies can only upload up to {NEW_COMPANY_BALANCE_QUOTA} Balance "
        "documents. You have already uploaded the maximum number."
    )


def upsert(
    document: Document,
    repository: BaseDocumentRepository,
    reason: RejectionReason | None = None,
) -> UpsertResult:
    """Apply the replace policy for *document* and return what was recorded.

    A valid newcomer becomes current at its key, replacing whatever was
    there and clearing the key's rejection in the same write. An invalid
    newcomer never touches the current entry; it is kept as the latest
    rejection for its key instead.
    """
    quota_message = quota_violation(document, repository)
    if quota_message is not None:
        document = document.rejected(quota_message)
        reason = RejectionReason.QUOTA_EXCEEDED

    key = document.identity_key
    if document.is_valid:
        saved = repository.save_current(key, document)
        action = UpsertAction.REPLACED if saved.replaced is not None else UpsertAction.INSERTED
        Log.info(
            "Document recorded",
            document_id=document.id,
            key=key.as_string(),
            action=action.value,
        )
        return UpsertResult(document=document, action=action, displaced=saved.displaced)

    overwritten = repository.save_rejection(key, document)
    existing = repository.get_current(key)
    action = UpsertAction.KEPT_EXISTING if existing is not None else UpsertAction.REJECTED
    Log.info(
        "Rejection recorded",
        document_id=document.id,
        key=key.as_string(),
        action=action.value,
    )
    return UpsertResult(
        document=document,
        action=action,
        reason=reason,
        displaced=(overwritten,) if overwritten is not None else (),
    )
