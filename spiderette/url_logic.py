# spiderette/url_logic.py
"""
URL resolution, canonical identity and anchor extraction.

Canonical identity is scheme + host + path. Query strings and fragments are
not part of a page's identity, so `/a?x=1` and `/a#top` are the same page.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Union
from urllib.parse import urljoin, urlsplit

from bs4 import BeautifulSoup

from spiderette.models import URLReference

log = logging.getLogger(__name__)

ALLOWED_SCHEMES = {"http", "https"}


def _as_ref(url: Union[str, URLReference]) -> URLReference:
    if isinstance(url, str):
        return urlsplit(url)
    return url


def parse(url: str) -> Optional[URLReference]:
    """Split an absolute URL, or return None when it cannot be parsed."""
    try:
        ref = urlsplit(url.strip())
        ref.port  # raises on a non-numeric or out-of-range port
    except ValueError:
        return None
    if not ref.scheme:
        return None
    return ref


def resolve(base: Union[str, URLReference], href: str) -> Optional[URLReference]:
    """
    Resolve a possibly-relative reference against an absolute base URL.
    Returns None if the result is not an absolute, parseable URL.
    """
    base_url = base if isinstance(base, str) else base.geturl()
    try:
        joined = urljoin(base_url, href.strip())
    except ValueError:
        log.debug("Unresolvable href %r on %s", href, base_url)
        return None
    return parse(joined)


def host(url: Union[str, URLReference]) -> str:
    return _as_ref(url).netloc.lower()


def canonicalize(url: Union[str, URLReference]) -> str:
    """Return `scheme://host/path`, dropping query and fragment."""
    ref = _as_ref(url)
    return f"{ref.scheme.lower()}://{ref.netloc.lower()}{ref.path or '/'}"


def is_http_like(url: Union[str, URLReference]) -> bool:
    """Return True iff the URL uses a scheme we can actually fetch (http/https)."""
    return _as_ref(url).scheme.lower() in ALLOWED_SCHEMES


def with_fragment(ref: URLReference, fragment: str) -> URLReference:
    return ref._replace(fragment=fragment)


def extract_anchor_hrefs(markup: str) -> List[str]:
    """
    Return the href of every <a href=...> in document order.
    Duplicates are kept: two anchors to one target are two links.
    """
    soup = BeautifulSoup(markup, "html.parser")
    return [a["href"] for a in soup.find_all("a", href=True)]
