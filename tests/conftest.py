from __future__ import annotations

from collections.abc import Callable

import pytest

from egpw_members.exceptions import FetchError
from egpw_members.fetcher import Page, parse_html

BASE_URL = "http://egpw.org/"
START_URL = f"{BASE_URL}search?title=&field_chamber_tid=All&field_session_nid=3750"

GOVERNORATE_LABEL = "المحافظة"
REGION_LABEL = "الدائرة الانتخابية"
SESSION_LABEL = "الدورة البرلمانية"
CHAMBER_LABEL = "الغرفة البرلمانية"

HOUSE = "مجلس النواب"
NINTH = "الهيئة النيابية التاسعة"

# ── HTML builders ─────────────────────────────────────────────────────────────


def listing_html(member_hrefs: list[str], pager: list[tuple[str, str]] | None = None) -> str:
    """A search results page: member links plus optional ``(text, href)`` pager links."""
    items = "\n".join(
        f'<li><h3><a href="{href}">Member {i}</a></h3><span>القاهرة</span></li>'
        for i, href in enumerate(member_hrefs)
    )
    pager_items = "\n".join(
        f'<li class="pager-item"><a title="Go to page {text}" href="{href}">{text}</a></li>'
        for text, href in (pager or [])
    )
    return (
        "<html><body>\n"
        '<div class="view-content"><div class="members">\n'
        f"<ul>\n{items}\n</ul>\n"
        "</div></div>\n"
        '<h2 class="element-invisible">Pages</h2>\n'
        '<div class="item-list"><ul class="pager">\n'
        '<li class="pager-current">1</li>\n'
        f"{pager_items}\n"
        '<li class="pager-next"><a href="/search?page=99">next ›</a></li>\n'
        "</ul></div>\n"
        "</body></html>\n"
    )


def field_block(css_class: str, label: str | None, values: list[str]) -> str:
    label_html = f'<div class="field-label">{label}:&nbsp;</div>' if label is not None else ""
    items = "".join(f'<div class="field-item even">  {v}  </div>' for v in values)
    return (
        f'<div class="field {css_class} field-type-taxonomy-term-reference '
        'field-label-inline clearfix">'
        f'{label_html}<div class="field-items">{items}</div></div>\n'
    )


def member_html(
    name: str = "محمد أحمد علي",
    *,
    titles: int = 1,
    governorate: list[str] | None = None,
    governorate_label: str | None = GOVERNORATE_LABEL,
    regions: list[str] | None = None,
    region_label: str | None = REGION_LABEL,
    sessions: list[str] | None = None,
    session_label: str | None = SESSION_LABEL,
    chambers: list[str] | None = None,
    chamber_label: str | None = CHAMBER_LABEL,
) -> str:
    heading = "".join(f'<h1 class="title" id="page-title">{name}</h1>' for _ in range(titles))
    if regions is None:
        regions = ["الدائرة الأولى"]
    return (
        "<html><body>\n"
        f"{heading}\n"
        '<div class="node node-member">\n'
        + field_block("field-name-field-govern", governorate_label, governorate or ["القاهرة"])
        + (field_block("field-name-field-region", region_label, regions) if regions else "")
        + field_block("field-name-field-session", session_label, sessions or [NINTH])
        + field_block("field-name-field-chamber", chamber_label, chambers or [HOUSE])
        + "</div>\n</body></html>\n"
    )


# ── Fakes ─────────────────────────────────────────────────────────────────────


class FakeFetcher:
    """In-memory fetcher keyed by absolute URL; records every call."""

    def __init__(self, pages: dict[str, str]) -> None:
        self.pages = pages
        self.calls: list[str] = []

    def fetch(self, url: str) -> str:
        self.calls.append(url)
        if url not in self.pages:
            raise FetchError(message="404 Client Error: Not Found", url=url)
        return self.pages[url]


# ── Fixtures ──────────────────────────────────────────────────────────────────


@pytest.fixture
def make_page() -> Callable[..., Page]:
    def _make(html: str, url: str = START_URL) -> Page:
        return parse_html(html, url)

    return _make


@pytest.fixture
def make_member_page() -> Callable[..., Page]:
    def _make(url: str = f"{BASE_URL}members/mem-4821", **kwargs) -> Page:
        return parse_html(member_html(**kwargs), url)

    return _make


@pytest.fixture
def two_page_site() -> dict[str, str]:
    """Listing of 3750: page 1 has mem-1..3, page 2 has mem-4..5, no page 3."""
    page_2 = f"{START_URL}&page=1"
    pages = {
        START_URL: listing_html(
            ["/members/mem-1", "/members/mem-2", "/members/mem-3"],
            pager=[("2", "/search?title=&field_chamber_tid=All&field_session_nid=3750&page=1")],
        ),
        page_2: listing_html(
            ["/members/mem-4", "/members/mem-5"],
            pager=[("1", "/search?title=&field_chamber_tid=All&field_session_nid=3750")],
        ),
    }
    for i in range(1, 6):
        pages[f"{BASE_URL}members/mem-{i}"] = member_html(f"Member {i}")
    return pages


@pytest.fixture
def listing() -> Callable[..., str]:
    return listing_html


@pytest.fixture
def member() -> Callable[..., str]:
    return member_html


@pytest.fixture
def fetcher_for() -> Callable[[dict[str, str]], FakeFetcher]:
    return FakeFetcher
