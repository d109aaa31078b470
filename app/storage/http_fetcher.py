import httpx

from app.processor.exceptions import BlobNotFoundError, FetchError
from app.storage.base import BaseContentFetcher

_MISSING_STATUSES = (404, 410)


class HttpContentFetcher(BaseContentFetcher):
    """Downloads content from an HTTP(S) locator, e.g. a presigned URL."""

    def __init__(self, timeout_seconds: int = 30, client: httpx.Client | None = None) -> None:
        self._client = client if client is not None else httpx.Client(timeout=timeout_seconds)

    def fetch(self, locator: str) -> bytes:
        try:
            response = self._client.get(locator, follow_redirects=True)
        except httpx.HTTPError as exc:
            raise FetchError(f"Request to {locator} failed: {exc}") from exc

        if response.status_code in _MISSING_STATUSES:
            raise BlobNotFoundError(f"Nothing stored at {locator}")
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise FetchError(
                f"Fetching {locator} returned status {response.status_code}"
            ) from exc
        return response.content
