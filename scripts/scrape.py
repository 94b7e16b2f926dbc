#!/usr/bin/env python3
"""Scrape EGPW member records into the JSON sink.

Usage::

    python scripts/scrape.py                       # latest parliament (EGPW_PARLIAMENT_ID)
    python scripts/scrape.py 3750 2841             # several parliaments, same sink
    python scripts/scrape.py --fresh               # clear the page cache first
    python scripts/scrape.py --parquet data/members.parquet
"""

from __future__ import annotations

import argparse
import logging
import shutil
import sys
import time
from pathlib import Path

# Ensure the project is importable
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT / "src"))

from egpw_members.config import CACHE_DIR, OUTPUT_PATH, PARLIAMENT_ID  # noqa: E402
from egpw_members.exceptions import ScrapeError  # noqa: E402
from egpw_members.fetcher import CachedFetcher  # noqa: E402
from egpw_members.run_log import RunLogger  # noqa: E402
from egpw_members.scraper import ParliamentScraper, display_summary  # noqa: E402
from egpw_members.sink import JsonRecordSink, export_parquet  # noqa: E402


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Scrape legislator records from egpw.org.",
    )
    parser.add_argument(
        "parliaments",
        nargs="*",
        type=int,
        help=f"Parliament (session) ids to scrape (default: {PARLIAMENT_ID}).",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=OUTPUT_PATH,
        help=f"JSON sink file (default: {OUTPUT_PATH}).",
    )
    parser.add_argument(
        "--cache-dir",
        type=Path,
        default=CACHE_DIR,
        help=f"Page cache directory (default: {CACHE_DIR}).",
    )
    parser.add_argument(
        "--fresh",
        action="store_true",
        help="Delete the page cache before scraping.",
    )
    parser.add_argument(
        "--parquet",
        type=Path,
        default=None,
        help="Also export all stored members to this Parquet file.",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging.")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger = logging.getLogger("scrape")

    if args.fresh and args.cache_dir.exists():
        logger.info("Removing cache directory: %s", args.cache_dir)
        shutil.rmtree(args.cache_dir)

    parliament_ids = args.parliaments or [PARLIAMENT_ID]
    fetcher = CachedFetcher(cache_dir=args.cache_dir)
    sink = JsonRecordSink(path=args.output)
    results = []

    try:
        with RunLogger("scrape", meta={"parliaments": parliament_ids}) as log:
            for pid in parliament_ids:
                scraper = ParliamentScraper(
                    parliament_id=pid, fetcher=fetcher, sink=sink, logger=logger
                )
                t0 = time.perf_counter()
                with log.phase_ctx(f"Parliament {pid}"):
                    result = scraper.run()
                results.append(result)
                logger.info(
                    "Parliament %d done in %.1fs: %d members stored.",
                    pid,
                    time.perf_counter() - t0,
                    result.records,
                )
            log.meta["members"] = len(sink)
            if args.parquet is not None:
                with log.phase_ctx("Parquet export", detail=str(args.parquet)):
                    export_parquet(sink.records(), args.parquet)
    except ScrapeError as exc:
        logger.error("Scrape aborted: %s", exc)
        logger.error("%d members were stored in %s before the failure.", len(sink), args.output)
        return 1

    display_summary(results)
    logger.info("Done. %d members in %s", len(sink), args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
