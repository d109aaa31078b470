from app.config.settings import Settings
from app.database.repositories.base import BaseDocumentRepository
from app.database.repositories.document_repository import PostgresDocumentRepository
from app.database.repositories.memory_repository import InMemoryDocumentRepository


class RepositoryFactory:
    @staticmethod
    def create(settings: Settings) -> BaseDocumentRepository:
        """Create the configured document store.

        The postgres backend expects ``init_pool()`` to have been called.
        """
        backend = settings.storage_backend.lower()
        if backend == "memory":
            return InMemoryDocumentRepository()
        if backend == "postgres":
            return PostgresDocumentRepository()
        raise ValueError(f"Unknown storage backend: {settings.storage_backend}")
