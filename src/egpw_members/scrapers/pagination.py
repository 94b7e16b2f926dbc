"""Pager walking for the EGPW search listing.

The listing is split over numbered pages. Each page links to the next one
from its pager (``ul.pager``) by the page number as link text; the walk stops
on the first page with no link for the following number.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from urllib.parse import urljoin

from ..exceptions import AmbiguousPaginationError
from ..fetcher import Fetcher, Page, fetch_page

LOGGER = logging.getLogger(__name__)

PAGER_LINK_SELECTOR = "ul.pager > li.pager-item > a[href]"


def next_page_urls(page: Page, page_num: int) -> list[str]:
    """Absolute URLs of pager links whose text is exactly *page_num*."""
    wanted = str(page_num)
    urls: list[str] = []
    for anchor in page.select(PAGER_LINK_SELECTOR):
        if Page.text(anchor) != wanted:
            continue
        urls.append(urljoin(page.url, Page.href(anchor) or ""))
    return urls


def walk(start_url: str, fetcher: Fetcher) -> Iterator[tuple[str, Page]]:
    """Yield ``(page_url, page)`` for every listing page, starting at *start_url*."""
    page_url = start_url
    page_num = 1

    while True:
        page = fetch_page(fetcher, page_url)
        yield page_url, page

        page_num += 1
        candidates = next_page_urls(page, page_num)
        if not candidates:
            LOGGER.debug("No link to page %d on %s; last page reached.", page_num, page_url)
            return
        if len(candidates) > 1:
            raise AmbiguousPaginationError(
                message=f"{len(candidates)} pager links for the same page",
                url=page_url,
                page_num=page_num,
                candidates=candidates,
            )
        page_url = candidates[0]
