"""Utilities for persisting battery runs to a structured history log."""

from __future__ import annotations

import csv
import json
from dataclasses import asdict, dataclass
from datetime import timezone
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - import cycle safe typing
    from .app import RunResult


LOG_FIELDNAMES = ("timestamp", "result", "passed_tests", "total_tests", "report_path")
"""Ordered field names used for CSV and JSON payloads."""

DEFAULT_LOG_PATH = Path("logs") / "run_log.jsonl"


@dataclass(frozen=True)
class RunLogRecord:
    """One line of the run history."""

    timestamp: str
    result: str
    passed_tests: int
    total_tests: int
    report_path: str

    @classmethod
    def from_run_result(cls, result: "RunResult", report_path: Path | None) -> "RunLogRecord":
        return cls(
            timestamp=result.started_at.astimezone(timezone.utc).isoformat(),
            result="PASS" if result.passed else "FAIL",
            passed_tests=result.passed_count,
            total_tests=result.total_tests,
            report_path=str(report_path) if report_path is not None else "",
        )

    def to_dict(self) -> dict[str, str | int]:
        return asdict(self)


def log_run_result(
    result: "RunResult",
    report_path: Path | None = None,
    *,
    log_path: Path | None = None,
    fmt: str = "jsonl",
    retention: int | None = 100,
) -> Path:
    """Append ``result`` to the run log and enforce retention limits."""

    normalised_format = fmt.lower()
    if normalised_format not in {"jsonl", "csv"}:
        raise ValueError(f"Unsupported log format: {fmt}")
    target = Path(log_path).expanduser() if log_path is not None else DEFAULT_LOG_PATH
    target = target.resolve()
    target.parent.mkdir(parents=True, exist_ok=True)

    record = RunLogRecord.from_run_result(result, report_path)
    if normalised_format == "jsonl":
        with target.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(record.to_dict(), ensure_ascii=False) + "\n")
    else:
        is_new_file = not target.exists() or target.stat().st_size == 0
        with target.open("a", encoding="utf-8", newline="") as handle:
            writer = csv.DictWriter(handle, fieldnames=LOG_FIELDNAMES)
            if is_new_file:
                writer.writeheader()
            writer.writerow(record.to_dict())

    if retention is not None and retention > 0:
        trim_log(target, retention, fmt=normalised_format)
    return target


def trim_log(path: Path, max_entries: int, *, fmt: str = "jsonl") -> None:
    """Keep only the last ``max_entries`` records of ``path``.

    CSV logs keep their header line on top of the retained records.
    """

    if max_entries <= 0 or not path.exists():
        return
    if fmt not in {"jsonl", "csv"}:
        raise ValueError(f"Unsupported log format: {fmt}")
    with path.open("r", encoding="utf-8", newline="") as handle:
        lines = handle.readlines()
    header = lines[:1] if fmt == "csv" else []
    records = lines[len(header):]
    if len(records) <= max_entries:
        return
    with path.open("w", encoding="utf-8", newline="") as handle:
        handle.writelines(header + records[-max_entries:])


__all__ = ["RunLogRecord", "log_run_result", "trim_log"]
