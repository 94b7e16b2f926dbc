"""Member detail page extraction.

A member page (``/members/mem-<id>``) is a Drupal node where each field is
rendered as ``div.field-name-field-<x>`` holding one ``.field-label`` and
one or more ``.field-item`` values. The label is checked against the
expected Arabic text before any value is trusted, so a layout change fails
loudly instead of producing shifted columns.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from ..exceptions import (
    AmbiguityError,
    LabelMismatchError,
    MalformedUrlError,
    MissingOrAmbiguousLabelError,
    UnknownChamberError,
)
from ..fetcher import Page
from ..models import MemberRecord

LOGGER = logging.getLogger(__name__)

# ── Pre-compiled regex patterns ──────────────────────────────────────────────

_RE_MEMBER_ID = re.compile(r"/mem-(?P<member_id>[0-9]+)$")
_RE_LABEL = re.compile(r"^\s*(?P<label>.*?)\s*:?\s*$", re.DOTALL)

NAME_SELECTOR = "h1.title"

# ── Lookup tables ────────────────────────────────────────────────────────────

# Open table: unknown sessions pass through with a warning.
SESSION_SHORT_NAMES: dict[str, str] = {
    "الهيئة النيابية السابعة": "7",
    "الهيئة النيابية الثامنة": "8",
    "الهيئة النيابية التاسعة": "9",
}

# Closed table: any other chamber is an error.
CHAMBER_LABELS: dict[str, str] = {
    "مجلس النواب": "house of representatives",
    "مجلس الشعب": "peoples council",
}


# ── Field blocks ─────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class FieldBlock:
    css_class: str
    label: str
    optional: bool = False

    @property
    def label_selector(self) -> str:
        return f"div.{self.css_class} .field-label"

    @property
    def item_selector(self) -> str:
        return f"div.{self.css_class} .field-item"


GOVERNORATE = FieldBlock("field-name-field-govern", "المحافظة")
REGION = FieldBlock("field-name-field-region", "الدائرة الانتخابية", optional=True)
SESSION = FieldBlock("field-name-field-session", "الدورة البرلمانية")
CHAMBER = FieldBlock("field-name-field-chamber", "الغرفة البرلمانية")


def member_id_from_url(url: str) -> str:
    match = _RE_MEMBER_ID.search(url)
    if not match:
        raise MalformedUrlError(message="expected a trailing mem-<digits> segment", url=url)
    return match.group("member_id")


def strip_label(raw: str) -> str:
    """``" الدورة البرلمانية :"`` -> ``"الدورة البرلمانية"``."""
    match = _RE_LABEL.match(raw)
    return match.group("label") if match else raw.strip()


def _unique(values: list[str]) -> list[str]:
    return list(dict.fromkeys(values))


def block_values(page: Page, block: FieldBlock) -> list[str]:
    """Trimmed value texts of *block*, after checking its label.

    An optional block without a label yields ``[]``.
    """
    labels = page.select(block.label_selector)
    if len(labels) == 1:
        actual = strip_label(Page.text(labels[0], strip=False))
        if actual != block.label:
            raise LabelMismatchError(
                message=f"unexpected label in div.{block.css_class}",
                url=page.url,
                expected=block.label,
                actual=actual,
            )
        return [Page.text(item) for item in page.select(block.item_selector)]
    if not labels and block.optional:
        return []
    raise MissingOrAmbiguousLabelError(
        message="expected exactly one label",
        url=page.url,
        css_class=block.css_class,
        label_count=len(labels),
    )


# ── Field extraction ─────────────────────────────────────────────────────────


def extract_name(page: Page) -> str:
    return Page.text(page.select_one_exact(NAME_SELECTOR), strip=False)


def extract_area(page: Page) -> str:
    # Governorate; the wider area that also appears on the search listing.
    values = block_values(page, GOVERNORATE)
    if len(values) != 1:
        raise AmbiguityError(
            message="one governorate expected",
            url=page.url,
            selector=GOVERNORATE.item_selector,
            count=len(values),
        )
    return values[0]


def extract_electoral_districts(page: Page) -> list[str]:
    # Smaller constituencies inside the governorate, possibly several.
    return _unique(block_values(page, REGION))


def short_name_for_session(
    name: str, *, url: str = "", logger: logging.Logger = LOGGER
) -> str:
    short = SESSION_SHORT_NAMES.get(name)
    if short is None:
        logger.warning("No short name for session %r (%s)", name, url)
        return name
    return short


def extract_terms(page: Page, *, logger: logging.Logger = LOGGER) -> list[str]:
    return _unique(
        [
            short_name_for_session(name, url=page.url, logger=logger)
            for name in block_values(page, SESSION)
        ]
    )


def chamber_label(chamber: str, *, url: str = "") -> str:
    try:
        return CHAMBER_LABELS[chamber]
    except KeyError:
        raise UnknownChamberError(
            message=f"known chambers: {', '.join(CHAMBER_LABELS)}",
            url=url,
            chamber=chamber,
        ) from None


def extract_chambers(page: Page) -> list[str]:
    return _unique([chamber_label(c, url=page.url) for c in block_values(page, CHAMBER)])


def extract_member_record(
    page: Page, member_url: str, *, logger: logging.Logger = LOGGER
) -> MemberRecord:
    member_id = member_id_from_url(member_url)
    name = extract_name(page)
    return MemberRecord(
        id=member_id,
        name=name,
        source_url=member_url,
        area=extract_area(page),
        terms=extract_terms(page, logger=logger),
        electoral_districts=extract_electoral_districts(page),
        chambers=extract_chambers(page),
    )
