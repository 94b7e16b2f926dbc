"""Output sinks for scraped member records.

``JsonRecordSink`` is a small keyed table on disk: one JSON list of rows,
upserted by ``id`` and rewritten atomically after every record, so rows from
a run that later fails are kept.

``export_parquet`` flattens the same rows into a Parquet table with Polars.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

import polars as pl

from .config import OUTPUT_PATH
from .models import MemberRecord

LOGGER = logging.getLogger(__name__)

KEY_COLUMNS: tuple[str, ...] = ("id",)

PARQUET_SCHEMA: dict[str, pl.DataType] = {
    "id": pl.Utf8,
    "name": pl.Utf8,
    "source": pl.Utf8,
    "area": pl.Utf8,
    "terms": pl.List(pl.Utf8),
    "electoral_districts": pl.List(pl.Utf8),
    "chambers": pl.List(pl.Utf8),
}


class RecordSink(Protocol):
    def upsert(self, record: MemberRecord) -> None: ...


@dataclass
class JsonRecordSink:
    path: Path = OUTPUT_PATH
    key_columns: tuple[str, ...] = KEY_COLUMNS
    _rows: dict[tuple, dict] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        if self.path.exists():
            with open(self.path, encoding="utf-8") as f:
                for row in json.load(f):
                    self._rows[self._key(row)] = row
            LOGGER.info("Loaded %d existing rows from %s", len(self._rows), self.path)

    def _key(self, row: dict) -> tuple:
        return tuple(row[c] for c in self.key_columns)

    def __len__(self) -> int:
        return len(self._rows)

    def upsert(self, record: MemberRecord) -> None:
        row = record.to_row()
        self._rows[self._key(row)] = row
        self._write()

    def rows(self) -> list[dict]:
        return list(self._rows.values())

    def records(self) -> list[MemberRecord]:
        return [MemberRecord.from_row(row) for row in self._rows.values()]

    def _write(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(self.rows(), f, indent=2, ensure_ascii=False)
        tmp_path.replace(self.path)


def records_to_frame(records: list[MemberRecord]) -> pl.DataFrame:
    return pl.DataFrame([r.to_row() for r in records], schema=PARQUET_SCHEMA)


def export_parquet(records: list[MemberRecord], path: Path) -> pl.DataFrame:
    """Write *records* to *path* as Parquet and return the frame."""
    df = records_to_frame(records)
    path.parent.mkdir(parents=True, exist_ok=True)
    df.write_parquet(path)
    LOGGER.info("Exported %d members to %s", df.height, path)
    return df
