#!/usr/bin/env python3
"""Terminal view of recent scrape runs from the run log.

Usage:
    python scripts/log_dashboard.py            # last 20 runs
    python scripts/log_dashboard.py --tail 50
"""

from __future__ import annotations

import argparse
import sys
from datetime import datetime
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT / "src"))

from rich.console import Console  # noqa: E402
from rich.markup import escape  # noqa: E402
from rich.table import Table  # noqa: E402

from egpw_members.run_log import load_recent_runs  # noqa: E402

STATUS_STYLE = {"ok": "green", "error": "red", "running": "yellow"}


def _t(s: str) -> str:
    try:
        return datetime.fromisoformat(s).strftime("%m/%d %H:%M")
    except ValueError:
        return s[:16]


def _fmt_dur(s: float | None) -> str:
    if s is None:
        return "-"
    if s >= 60:
        return f"{s / 60:.1f}m"
    return f"{s:.1f}s"


def main() -> int:
    parser = argparse.ArgumentParser(description="View recent scrape runs.")
    parser.add_argument("--tail", "-n", type=int, default=20, help="Number of runs.")
    parser.add_argument("--task", default=None, help="Only runs of this task.")
    args = parser.parse_args()

    runs = load_recent_runs(args.tail, task=args.task)
    if not runs:
        print("No runs logged yet.")
        return 0

    table = Table(title="Recent runs")
    table.add_column("Started")
    table.add_column("Task", style="bold")
    table.add_column("Status")
    table.add_column("Duration", justify="right")
    table.add_column("Phases")
    table.add_column("Error")
    for run in runs:
        style = STATUS_STYLE.get(run.status, "")
        phases = ", ".join(f"{p['name']} {_fmt_dur(p.get('duration_s'))}" for p in run.phases)
        table.add_row(
            _t(run.started_at),
            run.task,
            f"[{style}]{run.status}[/]" if style else run.status,
            _fmt_dur(run.duration_s),
            phases,
            escape((run.error or "")[:60]),
        )
    Console().print(table)
    return 0


if __name__ == "__main__":
    sys.exit(main())
