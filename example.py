# example.py
# A small example demonstrating how to use the spiderette library
# to crawl a site and print its broken links grouped by referrer.

import asyncio
import logging
import sys

from spiderette import CrawlOptions, SpideretteError, check_site

# --- Configuration ---
# You can enable logging to see each request the crawler makes.
logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

# The site you want to check. Only pages on this host are expanded;
# links to other hosts are checked one hop deep.
TARGET_URL = "https://example.com/"


async def main() -> int:
    print(f"[*] Checking links from: {TARGET_URL}\n")

    options = CrawlOptions(internal=False, verbose=False, max_concurrency=8)
    try:
        report = await check_site(TARGET_URL, options=options, progress=sys.stderr)
    except SpideretteError as e:
        print(f"[!] Could not load the start page: {e}")
        return 1

    print("\n--- CRAWL COMPLETE ---")
    print(f"Pages fetched: {report.stats.total} ({report.fetch_count} requests)")
    print(f"Success rate:  {report.stats.success_percent:.1f}%")

    for group in report.groups:
        print("\nLinked from:")
        for referrer in group.referrers:
            print(f"  {referrer.url}")
        for page in group.pages:
            print(f"    {page.status_code} {page.url}")

    return 0 if report.ok else 1


if __name__ == "__main__":
    # The library is async, so we use asyncio.run() to start it.
    sys.exit(asyncio.run(main()))
