import time
from collections.abc import Callable

from app.logging.logger import Log
from app.processor.exceptions import FetchError, FetchExhaustedError
from app.storage.base import BaseContentFetcher


class RetryingFetcher(BaseContentFetcher):
    """Retries transient fetch failures with a fixed budget and backoff.

    Only ``FetchError`` is retried. Anything else, including
    ``BlobNotFoundError``, propagates on the first attempt.
    """

    def __init__(
        self,
        fetcher: BaseContentFetcher,
        max_attempts: int = 3,
        backoff_seconds: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._fetcher = fetcher
        self._max_attempts = max_attempts
        self._backoff_seconds = backoff_seconds
        self._sleep = sleep

    def fetch(self, locator: str) -> bytes:
        last_error: FetchError | None = None
        for attempt in range(1, self._max_attempts + 1):
            try:
                return self._fetcher.fetch(locator)
            except FetchError as exc:
                last_error = exc
                Log.warning(
                    f"Fetch attempt {attempt}/{self._max_attempts} failed: {exc}",
                    locator=locator,
                )
                if attempt < self._max_attempts:
                    self._sleep(self._backoff_seconds)

        Log.error(f"Fetch permanently failed after {self._max_attempts} attempts", locator=locator)
        raise FetchExhaustedError(
            f"Could not fetch {locator} after {self._max_attempts} attempts: {last_error}"
        ) from last_error
