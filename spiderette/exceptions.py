# spiderette/exceptions.py
"""
Fetch-level failures.

HTTP status codes are data (see page.py), never exceptions. Only failures that
leave us without a Page at all are raised.
"""
from __future__ import annotations


class SpideretteError(Exception):
    """Base class for all spiderette errors."""


class TransportError(SpideretteError):
    """Connection, DNS, TLS or timeout failure while fetching a URL."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"Network error fetching {url}: {reason}")
        self.url = url
        self.reason = reason


class ContentTypeError(SpideretteError):
    """The response is not an HTML document."""

    def __init__(self, url: str, content_type: str):
        super().__init__(f"Wrong Content-Type for {url}: {content_type}")
        self.url = url
        self.content_type = content_type
