"""Metadata for spiderette."""

__all__ = [
    "__title__",
    "__version__",
    "__description__",
    "__credits__",
    "__requires_python__",
]

__title__ = "spiderette"
__version__ = "0.1.0"
__description__ = (
    "A site-crawling link validator that reports broken links grouped by referrer."
)
__credits__ = [
    {"name": "Matthew D. Martin", "email": "matthewdeanmartin@users.noreply.github.com"}
]
__requires_python__ = ">=3.10"
