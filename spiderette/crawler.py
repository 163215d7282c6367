# spiderette/crawler.py
"""
Recursive, cycle-guarded traversal of a site's link graph.

Each call to `analyze_page` handles one node on one traversal path:
- a page already on the current path is a cycle and counts as success;
- redirects are chased (the target inherits the original fragment);
- 4xx/5xx end the path with failure, but stay in the graph for reporting;
- externally-scoped pages are checked but not expanded;
- everything else is expanded: one task per outgoing link, all awaited,
  result is the AND of the children.

The visited set is per path. Sibling branches each get their own copy, so
one page can be walked once per branch while still being fetched only once
(the FetchCache guarantees that).
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import IO, Optional, Set

from spiderette.config import CrawlOptions
from spiderette.exceptions import ContentTypeError, TransportError
from spiderette.fetcher import FetchCache
from spiderette.models import URLReference
from spiderette.page import Page
from spiderette.report import is_reported
from spiderette.ui import render_progress_line
from spiderette.url_logic import host, is_http_like, resolve, with_fragment

log = logging.getLogger(__name__)


@dataclass
class CrawlSession:
    """All per-run state. Nothing here outlives the run."""

    options: CrawlOptions
    cache: FetchCache
    progress: Optional[IO[str]] = None
    color: bool = True

    def emit(self, page: Page, referrer: Optional[Page]) -> None:
        if self.progress is None or not is_reported(page, self.options):
            return
        render_progress_line(
            page, referrer.url if referrer else None, file=self.progress, color=self.color
        )


async def analyze_page(
    session: CrawlSession,
    page: Page,
    referrer: Optional[Page],
    visited: Set[str],
    load_children: bool,
) -> bool:
    """Walk one node on one path. Returns False iff an error ended a path below here."""
    if page.url in visited:
        return True
    visited.add(page.url)

    session.emit(page, referrer)

    if page.is_redirect():
        return await _follow_redirect(session, page, referrer, visited, load_children)

    if page.is_client_error() or page.is_server_error():
        return False

    if not load_children:
        return True

    children = []
    for link in page.get_outgoing_links():
        is_internal = host(link) == page.host
        if is_internal or not session.options.internal:
            # Sibling branches must not see each other's visits.
            children.append(
                _analyze_link(session, page, link, set(visited), is_internal)
            )

    results = await asyncio.gather(*children)
    return all(results)


async def _follow_redirect(
    session: CrawlSession,
    page: Page,
    referrer: Optional[Page],
    visited: Set[str],
    load_children: bool,
) -> bool:
    location = page.header("location")
    target = resolve(page.ref, location) if location else None
    if target is None or not is_http_like(target):
        log.warning("Redirect from %s has no usable location: %r", page.url, location)
        return False

    target = with_fragment(target, page.ref.fragment)
    next_page = await session.cache.load_page(target)
    page.add_outgoing_page(next_page)
    next_page.add_incoming_page(page)
    return await analyze_page(session, next_page, referrer, visited, load_children)


async def _analyze_link(
    session: CrawlSession,
    page: Page,
    link: URLReference,
    visited: Set[str],
    load_children: bool,
) -> bool:
    try:
        child = await session.cache.load_page(link)
        # Wire the edge before looking at the status so broken pages
        # still show who links to them.
        page.add_outgoing_page(child)
        child.add_incoming_page(page)
        return await analyze_page(session, child, page, visited, load_children)
    except (TransportError, ContentTypeError) as e:
        # An unreachable or non-HTML link (or redirect target) does not fail the walk.
        log.info("Ignoring %s (linked from %s): %s", link.geturl(), page.url, e)
        return True


async def crawl(session: CrawlSession, seed: URLReference) -> bool:
    """
    Fetch the seed and walk everything reachable from it.
    A seed fetch failure propagates; it is fatal for the run.
    """
    try:
        seed_page = await session.cache.load_page(seed)
    except (TransportError, ContentTypeError) as e:
        log.error("Cannot load seed %s: %s", seed.geturl(), e)
        raise
    return await analyze_page(session, seed_page, None, set(), True)
