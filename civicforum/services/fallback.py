"""Ordered mirror fallback for sources served from several equivalent hosts."""

import logging
from collections.abc import Sequence
from typing import Any

from civicforum.services.cache import MISSING
from civicforum.services.upstream import AllMirrorsFailed, FetchError, FetchResult, UpstreamClient

logger = logging.getLogger(__name__)


class FallbackResolver:
    """Try mirrors strictly in order and return the first success.

    Each mirror gets exactly one attempt bounded by ``timeout``. There is no
    backoff and no concurrency between mirrors: the next one is only tried
    after the previous has failed.
    """

    def __init__(self, upstream: UpstreamClient):
        self.upstream = upstream

    async def resolve(
        self,
        mirrors: Sequence[str],
        *,
        source: str,
        ttl: float,
        timeout: float | None = None,
    ) -> FetchResult[Any]:
        """
        Fetch a JSON document from the first mirror that answers.

        Args:
            mirrors: URLs in priority order, primary host first
            source: Logical source name
            ttl: Seconds the resolved document stays cached
            timeout: Per-mirror timeout in seconds

        Returns:
            The first successful FetchResult, or an AllMirrorsFailed error
            listing every attempt
        """
        cache_key = ("mirrors", source, tuple(mirrors))
        cached = self.upstream.cache.get(cache_key)
        if cached is not MISSING:
            return FetchResult.success(cached)

        attempts: list[FetchError] = []
        for url in mirrors:
            result = await self.upstream.get_json(
                url, source=source, ttl=ttl, timeout=timeout, retry=False
            )
            if result.ok:
                if attempts:
                    logger.info("%s served by mirror %s after %d failure(s)", source, url, len(attempts))
                self.upstream.cache.set(cache_key, result.data, ttl)
                return result
            logger.warning("Mirror %s failed for %s, trying next", url, source)
            attempts.append(result.error)

        logger.error("All %d mirror(s) failed for %s", len(attempts), source)
        return FetchResult.failure(
            AllMirrorsFailed(
                source=source,
                detail=f"{len(attempts)} mirror(s) tried",
                attempts=attempts,
            )
        )
