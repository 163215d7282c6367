# Defines the data structures shared across the crawl.

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import SplitResult

import httpx

# An absolute URL split into scheme, netloc (host), path, query and fragment.
URLReference = SplitResult


@dataclass(frozen=True)
class FetchResult:
    """What the transport handed back for a single GET."""

    status_code: int
    headers: httpx.Headers  # case-insensitive
    body: str = ""

    @property
    def content_type(self) -> str:
        # No header at all is treated as HTML.
        return self.headers.get("content-type", "text/html")
