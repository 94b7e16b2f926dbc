from __future__ import annotations

from urllib.parse import urljoin

from ..fetcher import Page

MEMBER_LINK_SELECTOR = "div.members ul > li > h3 > a[href]"


def extract_member_links(page: Page, page_url: str) -> list[str]:
    """Member detail URLs listed on one search page, in document order.

    Duplicates are kept; the caller collects the links into a set.
    """
    return [urljoin(page_url, Page.href(a) or "") for a in page.select(MEMBER_LINK_SELECTOR)]
