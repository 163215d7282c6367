# spiderette/fetcher.py
"""
HTTPX-based fetch cache.

Responsibilities:
- Issue at most one GET per canonical URL per run, no matter how many
  traversal paths ask for it or how concurrently they ask.
- Hand every caller the same Page object (or the same failure).
- Own the run's page registry: canonical URL -> pending-or-completed Page.

Redirects are NOT followed here; the traversal chases 3xx itself so every
hop shows up in the page graph.
"""
from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Dict, Optional

import httpx

from spiderette.config import CrawlOptions
from spiderette.exceptions import ContentTypeError, TransportError
from spiderette.models import FetchResult, URLReference
from spiderette.page import Page
from spiderette.url_logic import canonicalize

log = logging.getLogger(__name__)


class FetchCache:
    """
    Memoizes fetches keyed by canonical URL.

    Use as an async context manager so the underlying httpx client is closed:

        async with FetchCache(options) as cache:
            page = await cache.load_page(ref)
    """

    def __init__(
        self,
        options: CrawlOptions,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.options = options
        self.fetch_count = 0
        self._pages: Dict[str, "asyncio.Task[Page]"] = {}
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._limiter: Optional[asyncio.Semaphore] = None

    async def __aenter__(self) -> "FetchCache":
        headers = {
            "Accept": "text/html",
            "Accept-Encoding": "gzip",
            "User-Agent": self.options.user_agent,
        }
        self._client = httpx.AsyncClient(
            follow_redirects=False,
            timeout=self.options.timeout,
            headers=headers,
            transport=self._transport,
        )
        if self.options.max_concurrency > 0:
            self._limiter = asyncio.Semaphore(self.options.max_concurrency)
        log.debug("httpx session initialized.")
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._client is not None:
            await self._client.aclose()
        log.debug("httpx session closed.")

    def __len__(self) -> int:
        return len(self._pages)

    def __contains__(self, url: str) -> bool:
        return url in self._pages

    def load_page(self, ref: URLReference) -> "asyncio.Task[Page]":
        """
        Return the (possibly still pending) task that fetches `ref`.

        The lookup and the insert below run without an await in between, so
        under asyncio no other coroutine can slip in and start a second fetch
        for the same canonical URL.
        """
        key = canonicalize(ref)
        task = self._pages.get(key)
        if task is None:
            task = asyncio.ensure_future(self._fetch(ref, key))
            self._pages[key] = task
        return task

    async def _fetch(self, ref: URLReference, key: str) -> Page:
        if self._client is None:
            raise RuntimeError("FetchCache must be used as an async context manager")

        async with self._limiter if self._limiter else contextlib.nullcontext():
            self.fetch_count += 1
            log.info("GET %s", key)
            try:
                async with self._client.stream("GET", key) as resp:
                    # Check the headers before pulling a body we would throw away.
                    content_type = resp.headers.get("content-type", "text/html")
                    if not content_type.lower().startswith("text/html"):
                        log.info("Skipping non-HTML content at %s (%s)", key, content_type)
                        raise ContentTypeError(key, content_type)
                    await resp.aread()
            except (httpx.RequestError, httpx.InvalidURL) as e:
                log.warning("Network error fetching %s: %s", key, e)
                raise TransportError(key, str(e) or type(e).__name__) from e

        result = FetchResult(
            status_code=resp.status_code,
            headers=resp.headers,
            body=resp.text,
        )
        return Page(ref, result)

    async def resolve_all(self) -> Dict[str, Page]:
        """
        Wait for every fetch ever started and return the Pages that exist.
        Failed fetches are dropped.
        """
        keys = list(self._pages)
        results = await asyncio.gather(
            *(self._pages[k] for k in keys), return_exceptions=True
        )
        pages: Dict[str, Page] = {}
        for key, result in zip(keys, results):
            if isinstance(result, Page):
                pages[key] = result
            elif not isinstance(result, (TransportError, ContentTypeError)):
                # Anything else is a bug, not a dead link.
                raise result
        return pages
