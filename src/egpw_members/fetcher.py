"""Fetching and parsing of EGPW pages.

``CachedFetcher`` downloads a URL once and keeps the body on disk, one file
per URL, so re-running a crawl only hits the network for pages it has never
seen. There is no retry adapter: a failed request raises
:class:`~egpw_members.exceptions.FetchError` and aborts the run.

``Page`` is the parsed view handed to the extractors. It exposes only typed
queries (lists of tags, strings, optional attributes) on top of BeautifulSoup.
"""

from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

import requests
from bs4 import BeautifulSoup, Tag

from .config import CACHE_DIR, TIMEOUT_SECONDS
from .exceptions import AmbiguityError, FetchError

LOGGER = logging.getLogger(__name__)


# ── Parsed pages ─────────────────────────────────────────────────────────────


@dataclass
class Page:
    url: str
    soup: BeautifulSoup = field(repr=False)

    def select(self, css: str) -> list[Tag]:
        return list(self.soup.select(css))

    def select_one_exact(self, css: str) -> Tag:
        """Return the single element matching *css*; raise if zero or many."""
        matches = self.select(css)
        if len(matches) != 1:
            raise AmbiguityError(
                message="one element expected",
                url=self.url,
                selector=css,
                count=len(matches),
            )
        return matches[0]

    @staticmethod
    def text(element: Tag, *, strip: bool = True) -> str:
        text = element.get_text()
        return text.strip() if strip else text

    @staticmethod
    def href(element: Tag) -> str | None:
        value = element.get("href")
        if value is None:
            return None
        return value if isinstance(value, str) else " ".join(value)


def parse_html(html: str, url: str) -> Page:
    return Page(url=url, soup=BeautifulSoup(html, "html.parser"))


# ── Fetchers ─────────────────────────────────────────────────────────────────


class Fetcher(Protocol):
    def fetch(self, url: str) -> str: ...


def fetch_page(fetcher: Fetcher, url: str) -> Page:
    return parse_html(fetcher.fetch(url), url)


def cache_key(url: str) -> str:
    """Stable file name for *url* inside the cache directory."""
    return hashlib.md5(url.encode("utf-8")).hexdigest() + ".html"


@dataclass
class CachedFetcher:
    cache_dir: Path | None = CACHE_DIR
    timeout_seconds: float = TIMEOUT_SECONDS
    _session: requests.Session = field(default_factory=requests.Session, repr=False)

    def cache_path(self, url: str) -> Path | None:
        if self.cache_dir is None:
            return None
        return self.cache_dir / cache_key(url)

    def fetch(self, url: str) -> str:
        path = self.cache_path(url)
        if path is not None and path.exists():
            LOGGER.debug("Cache hit for %s (%s)", url, path.name)
            return path.read_text(encoding="utf-8")

        LOGGER.debug("GET %s", url)
        try:
            resp = self._session.get(url, timeout=self.timeout_seconds)
            resp.raise_for_status()
        except requests.RequestException as exc:
            raise FetchError(message=str(exc), url=url) from exc

        # The site serves UTF-8 Arabic text, sometimes without a charset header.
        if not resp.encoding or resp.encoding.lower() == "iso-8859-1":
            resp.encoding = resp.apparent_encoding or "utf-8"
        html = resp.text

        if path is not None:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = path.with_suffix(".html.tmp")
            tmp_path.write_text(html, encoding="utf-8")
            tmp_path.replace(path)
        return html

    def fetch_page(self, url: str) -> Page:
        return parse_html(self.fetch(url), url)
