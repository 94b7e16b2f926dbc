"""Centralized configuration for the EGPW members scraper.

Settings can be overridden by environment variables or a ``.env`` file
without touching source code.

Usage::

    from egpw_members.config import BASE_URL, PARLIAMENT_ID

    url = f"{BASE_URL}search?title=&field_chamber_tid=All&field_session_nid={PARLIAMENT_ID}"
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from current working directory
load_dotenv()

LOGGER = logging.getLogger(__name__)


def _env(key: str, fallback: str = "") -> str:
    """Read an env var, falling back to *fallback* when unset or blank."""
    value = os.getenv(key, "").strip()
    return value or fallback


# ── Site ─────────────────────────────────────────────────────────────────────
BASE_URL: str = _env("EGPW_BASE_URL", "http://egpw.org/").rstrip("/") + "/"

# Latest parliament known to the site. Older ones have lower ids.
PARLIAMENT_ID: int = int(_env("EGPW_PARLIAMENT_ID", "3750"))

# ── Directories / files ──────────────────────────────────────────────────────
CACHE_DIR: Path = Path(_env("EGPW_CACHE_DIR", ".cache"))
OUTPUT_PATH: Path = Path(_env("EGPW_OUTPUT_PATH", "data/members.json"))
RUN_LOG_PATH: Path = Path(_env("EGPW_RUN_LOG", ".run_log.jsonl"))

# ── Network ──────────────────────────────────────────────────────────────────
# Per-request timeout only; failed requests are never retried.
TIMEOUT_SECONDS: float = float(_env("EGPW_TIMEOUT", "30"))

if not BASE_URL.startswith(("http://", "https://")):
    LOGGER.warning("EGPW_BASE_URL=%r has no http(s) scheme.", BASE_URL)
