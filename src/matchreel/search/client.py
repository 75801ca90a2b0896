"""HTTP client for the broadcaster's media search endpoint."""

from __future__ import annotations

import logging
import time
from typing import Protocol

import httpx
from pydantic import ValidationError

from ..config import SearchSettings
from .models import RawClip, SearchResponse

LOGGER = logging.getLogger(__name__)


class SearchError(Exception):
    """A single search request failed (transport, status or payload)."""


class ClipSearcher(Protocol):
    def search(self, query: str) -> list[RawClip]: ...


class SearchClient:
    """Text search against the media list endpoint.

    Requests are strictly sequential and paced: consecutive calls are spaced
    by at least ``request_delay`` seconds. Failed requests are neither cached
    nor retried; :meth:`search` degrades them to an empty result list so the
    caller simply moves on to its next query.
    """

    def __init__(self, settings: SearchSettings | None = None) -> None:
        self.settings = settings or SearchSettings()
        self.base_url = self.settings.api_base_url
        self._client = httpx.Client(timeout=self.settings.timeout)
        self._last_request: float | None = None

    def _pace(self) -> None:
        if self._last_request is None or self.settings.request_delay <= 0:
            return
        elapsed = time.monotonic() - self._last_request
        remaining = self.settings.request_delay - elapsed
        if remaining > 0:
            time.sleep(remaining)

    def _fetch(self, query: str) -> SearchResponse:
        """Issue one search request.

        Raises:
            SearchError: On transport failure, non-success status or malformed payload
        """
        self._pace()
        try:
            response = self._client.request("GET", self.base_url, params={"q": query})
        except httpx.RequestError as exc:
            raise SearchError(f"request failed: {exc}") from exc
        finally:
            self._last_request = time.monotonic()

        if not 200 <= response.status_code < 300:
            raise SearchError(f"HTTP {response.status_code} {response.reason_phrase}".rstrip())

        try:
            payload = response.json()
        except ValueError as exc:
            raise SearchError("response body is not valid JSON") from exc

        try:
            return SearchResponse.model_validate(payload)
        except ValidationError as exc:
            raise SearchError(f"malformed payload ({exc.error_count()} errors)") from exc

    def search(self, query: str) -> list[RawClip]:
        """Return the clips matching ``query``; an empty list when the request fails."""
        LOGGER.debug('Searching media list: "%s"', query)
        try:
            result = self._fetch(query)
        except SearchError as exc:
            LOGGER.error('Search for "%s" failed: %s', query, exc)
            return []
        return result.items

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> SearchClient:
        return self

    def __exit__(self, *args) -> None:
        self.close()
