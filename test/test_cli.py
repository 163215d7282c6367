# test/test_cli.py
from __future__ import annotations

import io

import httpx
import pytest
import respx

from spiderette import __version__
from spiderette.cli import async_main


def page(*hrefs: str) -> httpx.Response:
    anchors = "".join(f'<a href="{h}">{h}</a>' for h in hrefs)
    return httpx.Response(200, html=f"<html><body>{anchors}</body></html>")


async def run(*argv: str) -> tuple[int, str, str]:
    stdout, stderr = io.StringIO(), io.StringIO()
    code = await async_main(["--no-color", *argv], stdout=stdout, stderr=stderr)
    return code, stdout.getvalue(), stderr.getvalue()


@respx.mock
@pytest.mark.asyncio
async def test_clean_site_exits_zero():
    respx.get("http://a.test/start").mock(return_value=page("/about", "http://b.test/"))
    respx.get("http://a.test/about").mock(return_value=page())
    respx.get("http://b.test/").mock(return_value=page("/never"))

    code, out, err = await run("http://a.test/start")

    assert code == 0
    assert out == ""
    assert "Host:       a.test" in err
    assert "Start Path: /start" in err
    assert "Total:         3" in err
    assert "Success:       3 (100.0%)" in err


@respx.mock
@pytest.mark.asyncio
async def test_broken_link_exits_one_and_is_reported():
    respx.get("http://a.test/").mock(return_value=page("/gone"))
    respx.get("http://a.test/gone").mock(return_value=httpx.Response(404, html="x"))

    code, out, err = await run("http://a.test/")

    assert code == 1
    assert out.splitlines() == [
        "  <- 200 http://a.test/",
        "  -> 404 http://a.test/gone",
        "",
    ]
    assert "404 http://a.test/gone (from http://a.test/)" in err
    assert "Client errors: 1" in err


@respx.mock
@pytest.mark.asyncio
async def test_ignore_client_hides_but_still_fails():
    respx.get("http://a.test/").mock(return_value=page("/gone"))
    respx.get("http://a.test/gone").mock(return_value=httpx.Response(404, html="x"))

    code, out, err = await run("-C", "http://a.test/")

    assert code == 1
    assert out == ""
    assert "Client errors: 1" in err


@respx.mock
@pytest.mark.asyncio
async def test_internal_flag_skips_external_hosts():
    respx.get("http://a.test/").mock(return_value=page("http://b.test/"))

    code, out, err = await run("--internal", "-v", "http://a.test/")

    assert code == 0
    assert out.splitlines() == ["  -> 200 http://a.test/", ""]


@respx.mock
@pytest.mark.asyncio
async def test_seed_content_type_error_exits_one():
    respx.get("http://a.test/x.pdf").mock(
        return_value=httpx.Response(200, content=b"%PDF", headers={"Content-Type": "application/pdf"})
    )

    code, out, err = await run("http://a.test/x.pdf")

    assert code == 1
    assert out == ""
    assert "Wrong Content-Type" in err


@pytest.mark.asyncio
async def test_invalid_seed_exits_one():
    code, out, err = await run("not-a-url")
    assert code == 1
    assert "not an absolute http(s) URL" in err


@pytest.mark.asyncio
async def test_version_flag(capsys):
    with pytest.raises(SystemExit) as exc_info:
        await async_main(["--version"])
    assert exc_info.value.code == 0
    assert __version__ in capsys.readouterr().out
