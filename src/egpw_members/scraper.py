from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from rich.console import Console
from rich.table import Table

from .config import BASE_URL, PARLIAMENT_ID
from .fetcher import CachedFetcher, Fetcher, Page, fetch_page
from .models import MemberRecord
from .scrapers.listing import extract_member_links
from .scrapers.member import extract_member_record
from .scrapers.pagination import walk
from .sink import JsonRecordSink, RecordSink

LOGGER = logging.getLogger(__name__)

console = Console()


@dataclass
class ScrapeResult:
    parliament_id: int
    pages: int = 0
    member_urls: int = 0
    records: int = 0


# ── Scraper ──────────────────────────────────────────────────────────────────


@dataclass
class ParliamentScraper:
    parliament_id: int = PARLIAMENT_ID
    fetcher: Fetcher = field(default_factory=CachedFetcher)
    sink: RecordSink = field(default_factory=JsonRecordSink)
    base_url: str = BASE_URL
    logger: logging.Logger = field(default=LOGGER, repr=False)

    def first_page_url(self) -> str:
        return (
            f"{self.base_url}search?title=&field_chamber_tid=All"
            f"&field_session_nid={self.parliament_id}"
        )

    # ── listing ──────────────────────────────────────────────────────────

    def fetch_pages(self) -> Iterator[tuple[str, Page]]:
        return walk(self.first_page_url(), self.fetcher)

    def fetch_member_urls(self, result: ScrapeResult | None = None) -> set[str]:
        member_urls: set[str] = set()
        for page_url, page in self.fetch_pages():
            self.logger.info("Considering listing page %s", page_url)
            member_urls.update(extract_member_links(page, page_url))
            if result is not None:
                result.pages += 1
        return member_urls

    # ── members ──────────────────────────────────────────────────────────

    def scrape_member(self, url: str) -> MemberRecord:
        page = fetch_page(self.fetcher, url)
        return extract_member_record(page, url, logger=self.logger)

    def run(self) -> ScrapeResult:
        """Walk the listing, then scrape and store every member found.

        Any error aborts the run; records already upserted stay in the sink.
        """
        result = ScrapeResult(parliament_id=self.parliament_id)
        member_urls = self.fetch_member_urls(result)
        result.member_urls = len(member_urls)
        self.logger.info(
            "Parliament %s: %d listing pages, %d unique members.",
            self.parliament_id,
            result.pages,
            result.member_urls,
        )

        total = len(member_urls)
        for completed, url in enumerate(sorted(member_urls), start=1):
            record = self.scrape_member(url)
            self.sink.upsert(record)
            result.records += 1
            self.logger.info("  [%d/%d] Scraped %s (%s)", completed, total, record.name, url)
            self.logger.debug("  %s", record)
        return result


def run(
    parliament_id: int = PARLIAMENT_ID,
    *,
    fetcher: Fetcher | None = None,
    sink: RecordSink | None = None,
    base_url: str = BASE_URL,
    logger: logging.Logger = LOGGER,
) -> ScrapeResult:
    scraper = ParliamentScraper(
        parliament_id=parliament_id,
        base_url=base_url,
        fetcher=fetcher if fetcher is not None else CachedFetcher(),
        sink=sink if sink is not None else JsonRecordSink(),
        logger=logger,
    )
    return scraper.run()


def run_many(
    parliament_ids: Iterable[int],
    *,
    fetcher: Fetcher | None = None,
    sink: RecordSink | None = None,
    base_url: str = BASE_URL,
    logger: logging.Logger = LOGGER,
) -> list[ScrapeResult]:
    """Scrape several parliaments in turn into the same sink."""
    fetcher = fetcher if fetcher is not None else CachedFetcher()
    sink = sink if sink is not None else JsonRecordSink()
    return [
        run(pid, fetcher=fetcher, sink=sink, base_url=base_url, logger=logger)
        for pid in parliament_ids
    ]


def display_summary(results: list[ScrapeResult]) -> None:
    """Print a per-parliament table of pages walked and members stored."""
    table = Table(title="EGPW Scrape Summary", show_lines=True)
    table.add_column("Parliament", style="bold")
    table.add_column("Pages", justify="right")
    table.add_column("Members", justify="right")
    table.add_column("Stored", justify="right")
    for r in results:
        table.add_row(
            str(r.parliament_id),
            f"{r.pages:,}",
            f"{r.member_urls:,}",
            f"{r.records:,}",
        )
    console.print(table)
