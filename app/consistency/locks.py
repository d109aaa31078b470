import threading
from collections.abc import Generator
from contextlib import contextmanager

from app.documents.models import IdentityKey


class KeyedLocks:
    """One lock per identity key, created on first use.

    Validation and upsert for the same key run one at a time. Different keys
    proceed concurrently, so cross-key checks (Balance against DICOSE years)
    can still interleave.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[IdentityKey, threading.Lock] = {}

    @contextmanager
    def hold(self, key: IdentityKey) -> Generator[None, None, None]:
        with self._guard:
            lock = self._locks.setdefault(key, threading.Lock())
        with lock:
            yield
