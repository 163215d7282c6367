# spiderette/api.py
# The primary, programmer-facing API for the library.

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import IO, Dict, List, Optional

import httpx

from spiderette.config import CrawlOptions, build_options
from spiderette.crawler import CrawlSession, crawl
from spiderette.fetcher import FetchCache
from spiderette.page import Page
from spiderette.report import CrawlStats, ReportGroup, build_groups, compute_stats
from spiderette.url_logic import parse

log = logging.getLogger(__name__)


@dataclass
class CrawlReport:
    """The final result of a check_site run."""

    seed_url: str
    ok: bool
    pages: Dict[str, Page] = field(default_factory=dict)
    groups: List[ReportGroup] = field(default_factory=list)
    stats: CrawlStats = field(default_factory=CrawlStats)
    fetch_count: int = 0


async def check_site(
    seed_url: str,
    *,
    options: Optional[CrawlOptions] = None,
    internal: bool | None = None,
    verbose: bool | None = None,
    ignore_redirect: bool | None = None,
    ignore_client: bool | None = None,
    ignore_server: bool | None = None,
    progress: Optional[IO[str]] = None,
    color: bool = True,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> CrawlReport:
    """
    Crawl a site from `seed_url` and report its broken links.

    Args:
        seed_url: The absolute http(s) URL to start from.
        options: Fully-built options. When omitted they are loaded from
            defaults + pyproject.toml, with the keyword overrides applied.
        internal: Only expand links to the same host.
        verbose: Report success pages too.
        ignore_redirect / ignore_client / ignore_server: Hide that category
            from progress output and report groups (stats still count it).
        progress: Stream for per-page progress lines, or None for silence.
        color: Whether progress lines carry ANSI colors.
        transport: httpx transport override, mainly for tests.

    Returns:
        A CrawlReport. `ok` is False when any un-ignored error ended a path.

    Raises:
        ValueError: `seed_url` is not an absolute http(s) URL.
        TransportError / ContentTypeError: the seed itself could not be loaded.
    """
    seed = parse(seed_url)
    if seed is None or seed.scheme not in ("http", "https"):
        raise ValueError(f"Not an absolute http(s) URL: {seed_url!r}")

    if options is None:
        options = build_options(
            {
                "internal": internal,
                "verbose": verbose,
                "ignore_redirect": ignore_redirect,
                "ignore_client": ignore_client,
                "ignore_server": ignore_server,
            }
        )
    log.info("Starting crawl from %s with %s", seed_url, options)

    async with FetchCache(options, transport=transport) as cache:
        session = CrawlSession(options=options, cache=cache, progress=progress, color=color)
        ok = await crawl(session, seed)
        pages = await cache.resolve_all()
        fetch_count = cache.fetch_count

    log.info("Crawl complete: %d pages, %d requests, ok=%s", len(pages), fetch_count, ok)
    return CrawlReport(
        seed_url=seed_url,
        ok=ok,
        pages=pages,
        groups=build_groups(pages, options),
        stats=compute_stats(pages.values()),
        fetch_count=fetch_count,
    )
