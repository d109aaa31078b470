from abc import ABC, abstractmethod


class BaseContentFetcher(ABC):
    """Resolves a locator to the bytes it points at."""

    @abstractmethod
    def fetch(self, locator: str) -> bytes:
        """Return the stored bytes.

        Raises:
            FetchError: on a transient failure worth retrying.
            BlobNotFoundError: if nothing is stored at *locator*.
        """


class BaseBlobStorage(BaseContentFetcher):
    """Stores uploaded bytes and hands back an opaque locator."""

    @abstractmethod
    def store(self, raw: bytes, name: str) -> str:
        """Persist *raw* and return its locator."""

    @abstractmethod
    def delete(self, locator: str) -> None:
        """Remove the bytes at *locator*.

        Raises:
            BlobNotFoundError: if nothing is stored at *locator*.
        """
