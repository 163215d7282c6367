# test/test_report.py
from __future__ import annotations

import io

import httpx
import pytest

from spiderette.config import CrawlOptions
from spiderette.models import FetchResult
from spiderette.page import Page
from spiderette.report import (
    build_groups,
    compute_stats,
    is_reported,
    referrer_signature,
)
from spiderette.ui import render_progress_line, render_report, render_stats
from spiderette.url_logic import parse


def make_page(path: str, status: int = 200) -> Page:
    return Page(
        parse(f"http://a.test{path}"),
        FetchResult(status_code=status, headers=httpx.Headers({"Content-Type": "text/html"})),
    )


def link(source: Page, target: Page) -> None:
    source.add_outgoing_page(target)
    target.add_incoming_page(source)


@pytest.fixture
def site() -> dict[str, Page]:
    home = make_page("/")
    about = make_page("/about")
    footer_a = make_page("/terms", 404)
    footer_b = make_page("/privacy", 404)
    only_home = make_page("/oops", 500)
    moved = make_page("/moved", 301)

    link(home, about)
    link(home, footer_a)
    link(about, footer_a)
    link(about, footer_b)
    link(home, footer_b)
    link(home, footer_b)  # duplicate anchor
    link(home, only_home)
    link(about, moved)

    return {p.url: p for p in (home, about, footer_a, footer_b, only_home, moved)}


def test_referrer_signature_dedups_and_sorts(site):
    privacy = site["http://a.test/privacy"]
    assert privacy.incoming_urls == [
        "http://a.test/about",
        "http://a.test/",
        "http://a.test/",
    ]
    assert referrer_signature(privacy) == ("http://a.test/", "http://a.test/about")


def test_groups_share_signature_and_order_by_referrer_count(site):
    groups = build_groups(site, CrawlOptions())

    shapes = [
        ([r.url for r in g.referrers], [p.url for p in g.pages]) for g in groups
    ]
    assert shapes == [
        (
            ["http://a.test/", "http://a.test/about"],
            ["http://a.test/privacy", "http://a.test/terms"],
        ),
        (["http://a.test/"], ["http://a.test/oops"]),
        (["http://a.test/about"], ["http://a.test/moved"]),
    ]


def test_verbose_adds_success_pages_including_seed(site):
    groups = build_groups(site, CrawlOptions(verbose=True))
    reported = {p.url for g in groups for p in g.pages}
    assert "http://a.test/" in reported
    assert "http://a.test/about" in reported
    # The seed has no referrers, so it sits in the last group.
    assert groups[-1].referrers == []
    assert [p.url for p in groups[-1].pages] == ["http://a.test/"]


@pytest.mark.parametrize(
    "options, hidden",
    [
        (CrawlOptions(ignore_redirect=True), "http://a.test/moved"),
        (CrawlOptions(ignore_client=True), "http://a.test/terms"),
        (CrawlOptions(ignore_server=True), "http://a.test/oops"),
    ],
)
def test_suppression_hides_category(site, options, hidden):
    assert not is_reported(site[hidden], options)
    reported = {p.url for g in build_groups(site, options) for p in g.pages}
    assert hidden not in reported


def test_stats_ignore_suppression(site):
    stats = compute_stats(site.values())
    assert stats.total == 6
    assert stats.success == 2
    assert stats.redirects == 1
    assert stats.client_errors == 2
    assert stats.server_errors == 1
    assert stats.success_percent == pytest.approx(100 * 2 / 6)


def test_stats_empty():
    stats = compute_stats([])
    assert stats.total == 0
    assert stats.success_percent == 0.0


def test_render_report_layout(site):
    out = io.StringIO()
    render_report(build_groups(site, CrawlOptions()), file=out, color=False)
    assert out.getvalue().splitlines() == [
        "  <- 200 http://a.test/",
        "  <- 200 http://a.test/about",
        "  -> 404 http://a.test/privacy",
        "  -> 404 http://a.test/terms",
        "",
        "  <- 200 http://a.test/",
        "  -> 500 http://a.test/oops",
        "",
        "  <- 200 http://a.test/about",
        "  -> 301 http://a.test/moved",
        "",
    ]


def test_render_stats(site):
    out = io.StringIO()
    render_stats(compute_stats(site.values()), file=out)
    text = out.getvalue()
    assert "Total:         6" in text
    assert "Success:       2 (33.3%)" in text
    assert "Client errors: 2" in text


def test_progress_line_names_referrer_only_when_there_is_one(site):
    out = io.StringIO()
    render_progress_line(site["http://a.test/"], None, file=out, color=False)
    render_progress_line(site["http://a.test/terms"], "http://a.test/", file=out, color=False)
    assert out.getvalue().splitlines() == [
        "200 http://a.test/",
        "404 http://a.test/terms (from http://a.test/)",
    ]
