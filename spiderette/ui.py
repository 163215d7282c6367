# spiderette/ui.py
# Presentation-only utilities for CLI output.
from __future__ import annotations

from typing import IO, Iterable, Optional

from colorama import Fore, Style

from spiderette.page import Page
from spiderette.report import CrawlStats, ReportGroup

INCOMING = "  <- "
OUTGOING = "  -> "


def _writeln(text: str = "", *, file: IO[str]) -> None:
    file.write(text + "\n")


def _label(text: str, color: bool) -> str:
    if not color:
        return text
    return Fore.YELLOW + text + Style.RESET_ALL


def render_run_header(host: str, path: str, *, file: IO[str], color: bool = True) -> None:
    _writeln(f"{_label('Host:', color)}       {host}", file=file)
    _writeln(f"{_label('Start Path:', color)} {path}", file=file)


def render_progress_line(
    page: Page, referrer: Optional[str], *, file: IO[str], color: bool = True
) -> None:
    line = page.log(color)
    if referrer is not None:
        suffix = f"(from {referrer})"
        if color:
            suffix = Fore.LIGHTBLACK_EX + suffix + Style.RESET_ALL
        line = f"{line} {suffix}"
    _writeln(line, file=file)


def render_report(
    groups: Iterable[ReportGroup], *, file: IO[str], color: bool = True
) -> None:
    for group in groups:
        for referrer in group.referrers:
            _writeln(INCOMING + referrer.log(color), file=file)
        for page in group.pages:
            _writeln(OUTGOING + page.log(color), file=file)
        _writeln(file=file)


def render_stats(stats: CrawlStats, *, file: IO[str]) -> None:
    _writeln(f"Total:         {stats.total}", file=file)
    _writeln(f"Success:       {stats.success} ({stats.success_percent:.1f}%)", file=file)
    _writeln(f"Redirects:     {stats.redirects}", file=file)
    _writeln(f"Client errors: {stats.client_errors}", file=file)
    _writeln(f"Server errors: {stats.server_errors}", file=file)
