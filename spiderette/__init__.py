# Entrypoint for the spiderette package.
# This file makes the public API available to programmers.

from __future__ import annotations

from spiderette.__about__ import __version__
from spiderette.api import CrawlReport, check_site
from spiderette.config import CrawlOptions
from spiderette.exceptions import ContentTypeError, SpideretteError, TransportError
from spiderette.page import Page

__all__ = [
    "check_site",
    "CrawlReport",
    "CrawlOptions",
    "Page",
    "SpideretteError",
    "TransportError",
    "ContentTypeError",
    "__version__",
]
