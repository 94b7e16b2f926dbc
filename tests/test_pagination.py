"""Tests for walking the paginated search listing."""

from __future__ import annotations

import pytest

from egpw_members.exceptions import AmbiguousPaginationError, FetchError
from egpw_members.scrapers.pagination import next_page_urls, walk

START_URL = "http://egpw.org/search?title=&field_chamber_tid=All&field_session_nid=3750"
PAGE_2 = f"{START_URL}&page=1"
PAGE_3 = f"{START_URL}&page=2"


class TestNextPageUrls:
    def test_resolves_relative_href(self, listing, make_page) -> None:
        page = make_page(listing([], pager=[("2", "/search?page=1")]))
        assert next_page_urls(page, 2) == ["http://egpw.org/search?page=1"]

    def test_matches_exact_number_only(self, listing, make_page) -> None:
        page = make_page(
            listing([], pager=[("12", "/search?page=11"), ("3", "/search?page=2")])
        )
        assert next_page_urls(page, 2) == []
        assert next_page_urls(page, 3) == ["http://egpw.org/search?page=2"]

    def test_ignores_surrounding_whitespace(self, make_page) -> None:
        html = (
            '<ul class="pager"><li class="pager-item">'
            '<a href="/search?page=1">\n  2 \n</a></li></ul>'
        )
        assert next_page_urls(make_page(html), 2) == ["http://egpw.org/search?page=1"]

    def test_ignores_links_outside_pager_items(self, make_page) -> None:
        html = (
            '<ul class="pager"><li class="pager-next"><a href="/search?page=1">2</a></li></ul>'
            '<ul><li class="pager-item"><a href="/other">2</a></li></ul>'
        )
        assert next_page_urls(make_page(html), 2) == []


class TestWalk:
    def test_single_page(self, listing, fetcher_for) -> None:
        fetcher = fetcher_for({START_URL: listing(["/members/mem-1"])})
        pages = list(walk(START_URL, fetcher))
        assert [url for url, _ in pages] == [START_URL]
        assert fetcher.calls == [START_URL]

    def test_follows_next_page_in_order(self, listing, fetcher_for) -> None:
        fetcher = fetcher_for(
            {
                START_URL: listing([], pager=[("2", PAGE_2.replace("http://egpw.org", ""))]),
                PAGE_2: listing(
                    [],
                    pager=[
                        ("1", START_URL.replace("http://egpw.org", "")),
                        ("3", PAGE_3.replace("http://egpw.org", "")),
                    ],
                ),
                PAGE_3: listing(
                    [],
                    pager=[
                        ("1", START_URL.replace("http://egpw.org", "")),
                        ("2", PAGE_2.replace("http://egpw.org", "")),
                    ],
                ),
            }
        )
        urls = [url for url, _ in walk(START_URL, fetcher)]
        assert urls == [START_URL, PAGE_2, PAGE_3]

    def test_yields_page_before_looking_for_next(self, listing, fetcher_for) -> None:
        fetcher = fetcher_for({START_URL: listing([], pager=[("2", "/missing")])})
        pages = walk(START_URL, fetcher)
        url, page = next(pages)
        assert url == START_URL
        assert page.url == START_URL
        assert fetcher.calls == [START_URL]
        with pytest.raises(FetchError):
            next(pages)

    def test_ambiguous_next_page(self, listing, fetcher_for) -> None:
        fetcher = fetcher_for(
            {START_URL: listing([], pager=[("2", "/search?page=1"), ("2", "/search?p=1")])}
        )
        pages = walk(START_URL, fetcher)
        next(pages)
        with pytest.raises(AmbiguousPaginationError) as exc_info:
            next(pages)
        err = exc_info.value
        assert err.url == START_URL
        assert err.page_num == 2
        assert err.candidates == ["http://egpw.org/search?page=1", "http://egpw.org/search?p=1"]

    def test_is_lazy(self, listing, fetcher_for) -> None:
        fetcher = fetcher_for({START_URL: listing([])})
        walk(START_URL, fetcher)
        assert fetcher.calls == []
