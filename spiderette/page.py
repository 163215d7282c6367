# spiderette/page.py
"""
A fetched page and its place in the link graph.

Edges are stored as canonical URLs, i.e. lookups into the run's page registry
(see fetcher.FetchCache). A Page never holds the Pages it links to or from,
so link cycles (A -> B -> A) stay plain data.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from colorama import Back, Fore, Style

from spiderette.models import FetchResult, URLReference
from spiderette.url_logic import (
    canonicalize,
    extract_anchor_hrefs,
    host,
    is_http_like,
    resolve,
)

log = logging.getLogger(__name__)


class Page:
    def __init__(self, ref: URLReference, response: FetchResult):
        # `ref` is the reference that was requested, fragment included.
        self.ref = ref
        self.response = response
        self.outgoing_urls: List[str] = []
        self.incoming_urls: List[str] = []
        self._hrefs: Optional[List[str]] = None

    def __repr__(self) -> str:
        return f"<Page {self.status_code} {self.url}>"

    @property
    def url(self) -> str:
        """Canonical URL; unique per run."""
        return canonicalize(self.ref)

    @property
    def host(self) -> str:
        return host(self.ref)

    @property
    def status_code(self) -> int:
        return self.response.status_code

    def header(self, name: str) -> Optional[str]:
        return self.response.headers.get(name)

    def is_html(self) -> bool:
        return self.response.content_type.lower().startswith("text/html")

    # ---- Links -------------------------------------------------------------

    def get_outgoing_links(self) -> List[URLReference]:
        """
        Every anchor on the page, resolved against this page's URL.
        Non-HTML pages have no links; unresolvable and non-http(s) hrefs are dropped.
        """
        if not self.is_html():
            return []
        if self._hrefs is None:
            self._hrefs = extract_anchor_hrefs(self.response.body)

        links: List[URLReference] = []
        for href in self._hrefs:
            ref = resolve(self.ref, href)
            if ref is None or not is_http_like(ref):
                continue
            links.append(ref)
        return links

    def add_outgoing_page(self, page: "Page") -> None:
        self.outgoing_urls.append(page.url)

    def add_incoming_page(self, page: "Page") -> None:
        self.incoming_urls.append(page.url)

    # ---- Classification ----------------------------------------------------

    def is_success(self) -> bool:
        return 100 <= self.status_code < 300

    def is_redirect(self) -> bool:
        return 300 <= self.status_code < 400

    def is_client_error(self) -> bool:
        return 400 <= self.status_code < 500

    def is_server_error(self) -> bool:
        return 500 <= self.status_code < 600

    def log(self, color: bool = True) -> str:
        """One line: status code, colored by class, then the canonical URL."""
        status = str(self.status_code)
        if color:
            if self.is_redirect():
                status = Back.YELLOW + Fore.BLACK + status
            elif self.is_client_error():
                status = Back.RED + Fore.WHITE + status
            elif self.is_server_error():
                status = Back.RED + Fore.BLACK + status
            else:
                status = Back.GREEN + Fore.BLACK + status
            status += Style.RESET_ALL
        return f"{status} {self.url}"
