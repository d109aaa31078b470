from pathlib import Path

from app.config.settings import Settings
from app.storage.base import BaseBlobStorage, BaseContentFetcher
from app.storage.http_fetcher import HttpContentFetcher
from app.storage.local_storage import LocalBlobStorage
from app.storage.retry import RetryingFetcher


class BlobStorageFactory:
    @staticmethod
    def create(settings: Settings) -> BaseBlobStorage:
        return LocalBlobStorage(blob_root=Path(settings.blob_root))


class ContentFetcherFactory:
    @staticmethod
    def create(settings: Settings, blob_storage: BaseBlobStorage) -> BaseContentFetcher:
        backend = settings.fetch_backend.lower()
        fetcher: BaseContentFetcher
        if backend == "blob":
            fetcher = blob_storage
        elif backend == "http":
            fetcher = HttpContentFetcher(timeout_seconds=settings.fetch_timeout_seconds)
        else:
            raise ValueError(f"Unknown fetch backend: {settings.fetch_backend}")
        return RetryingFetcher(
            fetcher,
            max_attempts=settings.fetch_max_attempts,
            backoff_seconds=settings.fetch_backoff_seconds,
        )
