"""Append-only run log for scrape runs.

One JSON object per line, recording which parliaments were scraped, how long
each phase took and whether the run finished. A failed run is logged with
``status="error"`` and the error text, which names the page that broke it.

Usage::

    from egpw_members.run_log import RunLogger

    with RunLogger("scrape", meta={"parliaments": [3750]}) as log:
        with log.phase_ctx("Parliament 3750"):
            ...
"""

from __future__ import annotations

import json
import logging
import time
import uuid
from contextlib import contextmanager
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path

from .config import RUN_LOG_PATH

LOGGER = logging.getLogger(__name__)


@dataclass
class RunRecord:
    run_id: str
    task: str
    started_at: str  # ISO
    ended_at: str | None = None
    duration_s: float | None = None
    status: str = "running"  # ok | error | running
    phases: list[dict] = field(default_factory=list)  # [{name, duration_s, detail}]
    error: str | None = None
    meta: dict = field(default_factory=dict)

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)

    @classmethod
    def from_json_line(cls, line: str) -> RunRecord | None:
        line = line.strip()
        if not line:
            return None
        try:
            d = json.loads(line)
        except json.JSONDecodeError:
            LOGGER.warning("Skipping unreadable run log line: %r", line[:60])
            return None
        return cls(
            run_id=d.get("run_id", ""),
            task=d.get("task", ""),
            started_at=d.get("started_at", ""),
            ended_at=d.get("ended_at"),
            duration_s=d.get("duration_s"),
            status=d.get("status", "ok"),
            phases=d.get("phases", []),
            error=d.get("error"),
            meta=d.get("meta", {}),
        )


class RunLogger:
    """Context manager that times one run and appends it to the log."""

    def __init__(
        self,
        task: str,
        *,
        log_path: Path | None = None,
        meta: dict | None = None,
    ):
        self.task = task
        self.log_path = log_path if log_path is not None else RUN_LOG_PATH
        self.meta = dict(meta or {})
        self.run_id = uuid.uuid4().hex[:8]
        self.phases: list[dict] = []
        self._started_at: str | None = None
        self._start_time: float | None = None

    @contextmanager
    def phase_ctx(self, name: str, detail: str | None = None):
        t0 = time.perf_counter()
        try:
            yield
        finally:
            self.phases.append(
                {
                    "name": name,
                    "duration_s": round(time.perf_counter() - t0, 2),
                    "detail": detail,
                }
            )

    def __enter__(self) -> RunLogger:
        self._started_at = datetime.now(timezone.utc).isoformat()
        self._start_time = time.perf_counter()
        self.phases = []
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if exc_type is None:
            self._write("ok", None)
        else:
            error = f"{exc_type.__name__}: {exc_val}" if exc_val else exc_type.__name__
            self._write("error", error)
        return None  # do not suppress

    def _write(self, status: str, error: str | None) -> None:
        ended_at = datetime.now(timezone.utc).isoformat()
        start = self._start_time if self._start_time is not None else time.perf_counter()
        record = RunRecord(
            run_id=self.run_id,
            task=self.task,
            started_at=self._started_at or ended_at,
            ended_at=ended_at,
            duration_s=round(time.perf_counter() - start, 2),
            status=status,
            phases=self.phases,
            error=error,
            meta=self.meta,
        )
        try:
            self.log_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.log_path, "a", encoding="utf-8") as f:
                f.write(record.to_json_line() + "\n")
        except OSError as e:
            LOGGER.warning("Run log append failed: %s", e)


def load_recent_runs(
    n: int = 20,
    *,
    task: str | None = None,
    log_path: Path | None = None,
) -> list[RunRecord]:
    """Last *n* runs, newest first, optionally filtered by task."""
    path = log_path if log_path is not None else RUN_LOG_PATH
    if not path.exists():
        return []
    records: list[RunRecord] = []
    with open(path, encoding="utf-8") as f:
        for line in f:
            rec = RunRecord.from_json_line(line)
            if rec is not None and (task is None or rec.task == task):
                records.append(rec)
    return records[::-1][:n]
