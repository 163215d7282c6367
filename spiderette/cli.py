# spiderette/cli.py
# Defines the command-line interface using argparse.

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import IO, Sequence

import colorama

from spiderette import __version__
from spiderette.api import check_site
from spiderette.exceptions import SpideretteError
from spiderette.ui import render_report, render_run_header, render_stats
from spiderette.url_logic import parse

log = logging.getLogger(__name__)


def _configure_logging(debug: bool) -> None:
    level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Crawl a site from a seed URL and report broken links, grouped by referrer.",
        prog="spiderette",
    )
    parser.add_argument("url", help="The seed URL to start crawling from.")
    parser.add_argument(
        "-V", "--version", action="version", version=f"%(prog)s {__version__}"
    )

    scope_group = parser.add_argument_group("scope arguments")
    scope_group.add_argument(
        "-i",
        "--internal",
        action="store_true",
        default=None,
        help="Only follow links to the same host as the linking page.",
    )

    report_group = parser.add_argument_group("report arguments")
    report_group.add_argument(
        "-R",
        "--ignore-redirect",
        action="store_true",
        default=None,
        help="Do not log or report redirects.",
    )
    report_group.add_argument(
        "-C",
        "--ignore-client",
        action="store_true",
        default=None,
        help="Do not log or report client errors (4xx).",
    )
    report_group.add_argument(
        "-S",
        "--ignore-server",
        action="store_true",
        default=None,
        help="Do not log or report server errors (5xx).",
    )
    report_group.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=None,
        help="Also log and report pages that loaded successfully.",
    )
    report_group.add_argument(
        "--no-color",
        action="store_true",
        help="Disable ANSI colors.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging output to stderr.",
    )
    return parser


async def async_main(
    argv: Sequence[str] | None = None,
    stdout: IO[str] | None = None,
    stderr: IO[str] | None = None,
) -> int:
    """Async entry point for the command-line interface."""
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    args = _build_parser().parse_args(argv)
    _configure_logging(args.debug)
    color = not args.no_color

    seed = parse(args.url)
    if seed is None or seed.scheme not in ("http", "https"):
        print(f"Error: not an absolute http(s) URL: {args.url}", file=stderr)
        return 1

    render_run_header(seed.netloc, seed.path or "/", file=stderr, color=color)

    try:
        report = await check_site(
            args.url,
            internal=args.internal,
            verbose=args.verbose,
            ignore_redirect=args.ignore_redirect,
            ignore_client=args.ignore_client,
            ignore_server=args.ignore_server,
            progress=stderr,
            color=color,
        )
    except SpideretteError as e:
        print(f"Error: {e}", file=stderr)
        return 1

    render_report(report.groups, file=stdout, color=color)
    render_stats(report.stats, file=stderr)
    return 0 if report.ok else 1


def main(argv: Sequence[str] | None = None) -> int:
    """Synchronous wrapper for the CLI entry point."""
    colorama.just_fix_windows_console()
    return asyncio.run(async_main(argv))


if __name__ == "__main__":
    sys.exit(main())
