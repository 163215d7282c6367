# spiderette/report.py
"""
Builds the final report once traversal has settled.

Pages are grouped by referrer signature: the sorted, de-duplicated list of
pages linking to them. Pages with exactly the same referrers share a group,
so a broken link in a site-wide footer shows up once, not once per page.
"""
from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Tuple

from spiderette.config import CrawlOptions
from spiderette.page import Page

Signature = Tuple[str, ...]


@dataclass
class ReportGroup:
    referrers: List[Page]
    pages: List[Page] = field(default_factory=list)


@dataclass
class CrawlStats:
    total: int = 0
    success: int = 0
    redirects: int = 0
    client_errors: int = 0
    server_errors: int = 0

    @property
    def success_percent(self) -> float:
        if not self.total:
            return 0.0
        return 100.0 * self.success / self.total


def is_reported(page: Page, options: CrawlOptions) -> bool:
    if page.is_redirect():
        return not options.ignore_redirect
    if page.is_client_error():
        return not options.ignore_client
    if page.is_server_error():
        return not options.ignore_server
    return options.verbose


def referrer_signature(page: Page) -> Signature:
    return tuple(sorted(set(page.incoming_urls)))


def build_groups(pages: Mapping[str, Page], options: CrawlOptions) -> List[ReportGroup]:
    """
    Group reportable pages by referrer signature.

    Groups are ordered by number of distinct referrers, most first; ties by the
    referrer URLs themselves. Members are ordered by URL.
    """
    by_signature: Dict[Signature, List[Page]] = defaultdict(list)
    for page in pages.values():
        if is_reported(page, options):
            by_signature[referrer_signature(page)].append(page)

    ordered = sorted(by_signature, key=lambda sig: (-len(sig), sig))
    return [
        ReportGroup(
            referrers=[pages[url] for url in sig if url in pages],
            pages=sorted(by_signature[sig], key=lambda p: p.url),
        )
        for sig in ordered
    ]


def compute_stats(pages: Iterable[Page]) -> CrawlStats:
    """Counts over every page that was fetched, suppressed or not."""
    stats = CrawlStats()
    for page in pages:
        stats.total += 1
        if page.is_success():
            stats.success += 1
        elif page.is_redirect():
            stats.redirects += 1
        elif page.is_client_error():
            stats.client_errors += 1
        elif page.is_server_error():
            stats.server_errors += 1
    return stats
