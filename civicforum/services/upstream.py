"""Shared HTTP client for every upstream data source.

Each call is a single GET that either yields parsed data or a typed
``FetchError``. Failures are returned, never raised, so callers can fall
through to fallback or derived data.
"""

import asyncio
import json
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

import httpx
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from civicforum.config import get_settings
from civicforum.services.cache import MISSING, TTLCache

logger = logging.getLogger(__name__)

settings = get_settings()

T = TypeVar("T")
U = TypeVar("U")

UNAVAILABLE = "unavailable"
MALFORMED = "malformed"
NOT_CONFIGURED = "not_configured"
ALL_MIRRORS_FAILED = "all_mirrors_failed"


@dataclass
class FetchError:
    """Why an upstream call produced no data."""

    source: str
    reason: str
    detail: str = ""
    status_code: int | None = None

    def __str__(self) -> str:
        status = f" (HTTP {self.status_code})" if self.status_code else ""
        return f"{self.source}: {self.reason}{status} {self.detail}".strip()


@dataclass
class AllMirrorsFailed(FetchError):
    """Every mirror of a source was tried and failed."""

    reason: str = ALL_MIRRORS_FAILED
    attempts: list[FetchError] = field(default_factory=list)


@dataclass
class FetchResult(Generic[T]):
    """Either ``data`` or ``error``, never both."""

    data: T | None = None
    error: FetchError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, data: T) -> "FetchResult[T]":
        return cls(data=data)

    @classmethod
    def failure(cls, error: FetchError) -> "FetchResult[T]":
        return cls(error=error)

    def map(self, fn: Callable[[T], U], source: str = "payload") -> "FetchResult[U]":
        """Transform the payload of a successful result.

        A ``ValueError``, ``TypeError`` or ``KeyError`` from ``fn`` means the
        payload had an unexpected shape and becomes a malformed failure.
        """
        if not self.ok:
            return FetchResult(error=self.error)
        try:
            return FetchResult(data=fn(self.data))
        except (ValueError, TypeError, KeyError, AttributeError) as exc:
            logger.warning("Unexpected payload shape in %s: %s", source, exc)
            return FetchResult(error=FetchError(source=source, reason=MALFORMED, detail=str(exc)))


def not_configured(source: str, setting: str) -> FetchResult:
    """Failure for a source whose API key is missing."""
    return FetchResult.failure(
        FetchError(source=source, reason=NOT_CONFIGURED, detail=f"{setting} is not set")
    )


class UpstreamClient:
    """Wraps an ``httpx.AsyncClient`` with caching, timeouts and typed failures."""

    def __init__(self, http: httpx.AsyncClient, cache: TTLCache, timeout: float | None = None):
        self.http = http
        self.cache = cache
        self.timeout = timeout or settings.upstream_timeout

    async def _send(self, url: str, params: dict | None, timeout: float, headers: dict | None) -> httpx.Response:
        return await asyncio.wait_for(
            self.http.get(url, params=params, headers=headers, timeout=timeout),
            timeout=timeout,
        )

    @retry(
        retry=retry_if_exception_type(httpx.TransportError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    async def _send_with_retry(self, url: str, params: dict | None, timeout: float, headers: dict | None) -> httpx.Response:
        return await self._send(url, params, timeout, headers)

    async def _fetch(
        self,
        url: str,
        *,
        source: str,
        ttl: float,
        params: dict | None,
        timeout: float | None,
        retry: bool,
        headers: dict | None,
        parse: Callable[[httpx.Response], Any],
        kind: str,
    ) -> FetchResult:
        key = (kind, url, tuple(sorted((params or {}).items())))
        cached = self.cache.get(key)
        if cached is not MISSING:
            return FetchResult.success(cached)

        attempt_timeout = timeout or self.timeout
        send = self._send_with_retry if retry else self._send
        try:
            response = await send(url, params, attempt_timeout, headers)
        except asyncio.TimeoutError:
            logger.warning("%s timed out after %.1fs: %s", source, attempt_timeout, url)
            return FetchResult.failure(
                FetchError(source=source, reason=UNAVAILABLE, detail=f"timed out after {attempt_timeout}s")
            )
        except httpx.HTTPError as exc:
            logger.warning("%s request failed: %s (%s)", source, url, type(exc).__name__)
            return FetchResult.failure(FetchError(source=source, reason=UNAVAILABLE, detail=type(exc).__name__))

        if not response.is_success:
            logger.warning("%s returned HTTP %s: %s", source, response.status_code, url)
            return FetchResult.failure(
                FetchError(source=source, reason=UNAVAILABLE, status_code=response.status_code)
            )

        try:
            data = parse(response)
        except ValueError as exc:
            logger.warning("%s returned a malformed body: %s", source, url)
            return FetchResult.failure(FetchError(source=source, reason=MALFORMED, detail=str(exc)[:200]))

        self.cache.set(key, data, ttl)
        return FetchResult.success(data)

    async def get_json(
        self,
        url: str,
        *,
        source: str,
        ttl: float,
        params: dict | None = None,
        timeout: float | None = None,
        retry: bool = True,
        headers: dict | None = None,
    ) -> FetchResult[Any]:
        """
        GET a JSON document.

        Args:
            url: Absolute URL
            source: Source name used in errors and logs
            ttl: Seconds a successful response stays cached
            params: Query parameters, part of the cache key
            timeout: Per-attempt timeout, defaults to ``upstream_timeout``
            retry: Retry transport errors with exponential backoff

        Returns:
            FetchResult with the decoded JSON or a FetchError
        """
        return await self._fetch(
            url,
            source=source,
            ttl=ttl,
            params=params,
            timeout=timeout,
            retry=retry,
            headers=headers,
            parse=_parse_json,
            kind="json",
        )

    async def get_text(
        self,
        url: str,
        *,
        source: str,
        ttl: float,
        params: dict | None = None,
        timeout: float | None = None,
        retry: bool = True,
        headers: dict | None = None,
    ) -> FetchResult[str]:
        """GET a body as text, for sources that do not reliably send JSON."""
        return await self._fetch(
            url,
            source=source,
            ttl=ttl,
            params=params,
            timeout=timeout,
            retry=retry,
            headers=headers,
            parse=lambda response: response.text,
            kind="text",
        )


def _parse_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ValueError(f"invalid JSON: {exc}") from exc
