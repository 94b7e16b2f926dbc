"""Exception hierarchy for the EGPW scraper.

Every error carries the URL of the listing page or member page that was
being processed, so a failed run can name the page that broke it.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ScrapeError(Exception):
    """Base exception for scrape errors."""

    message: str
    url: str

    def __str__(self) -> str:
        return f"{self.message} ({self.url})"


@dataclass
class FetchError(ScrapeError):
    """Raised when a page cannot be downloaded."""

    def __str__(self) -> str:
        return f"Failed to fetch {self.url}\n{self.message}"


@dataclass
class AmbiguousPaginationError(ScrapeError):
    """Raised when more than one pager link points at the next page number."""

    page_num: int
    candidates: list[str] = field(default_factory=list)

    def __str__(self) -> str:
        links = ", ".join(self.candidates)
        return (
            f"Invalid pagination on {self.url}: {self.message}\n"
            f"Page {self.page_num} links: {links}"
        )


@dataclass
class MalformedUrlError(ScrapeError):
    """Raised when a member URL does not end in ``mem-<digits>``."""

    def __str__(self) -> str:
        return f"Malformed member URL: {self.url}\n{self.message}"


@dataclass
class AmbiguityError(ScrapeError):
    """Raised when exactly one element or value was expected."""

    selector: str
    count: int

    def __str__(self) -> str:
        return (
            f"Expected exactly one match for {self.selector!r} on {self.url}, "
            f"found {self.count}\n{self.message}"
        )


@dataclass
class LabelMismatchError(ScrapeError):
    """Raised when a field block's label is not the expected text."""

    expected: str
    actual: str

    def __str__(self) -> str:
        return (
            f"Invalid label on {self.url}: {self.message}\n"
            f"Expected: {self.expected}\n"
            f"Actual: {self.actual}"
        )


@dataclass
class MissingOrAmbiguousLabelError(ScrapeError):
    """Raised when a required field block has no label, or several."""

    css_class: str
    label_count: int

    def __str__(self) -> str:
        return (
            f"Label not found on {self.url}: {self.message}\n"
            f"Block: div.{self.css_class} ({self.label_count} labels)"
        )


@dataclass
class UnknownChamberError(ScrapeError):
    """Raised when a chamber name is not one of the known chambers."""

    chamber: str

    def __str__(self) -> str:
        return f"Unexpected chamber {self.chamber!r} on {self.url}\n{self.message}"
