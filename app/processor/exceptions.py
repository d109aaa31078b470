class ProcessorError(Exception):
    """Base exception for infrastructure failures surfaced to the caller."""


class DocumentNotFoundError(ProcessorError):
    """Raised when a document id is not present in the store."""


class FetchError(ProcessorError):
    """Raised by a content fetcher on a single transient failure."""


class FetchExhaustedError(ProcessorError):
    """Raised when the content-fetch retry budget is spent."""


class BlobNotFoundError(ProcessorError):
    """Raised when a blob locator does not resolve to stored bytes."""


class StorageError(ProcessorError):
    """Raised when the document repository or blob storage fails."""
