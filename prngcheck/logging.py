"""Utilities for persisting run metadata to structured log files."""

from __future__ import annotations

import csv
import io
import json
from dataclasses import dataclass
from datetime import timezone
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - import cycle safe typing
    from .app import RunResult


LOG_FIELDNAMES = (
    "timestamp",
    "config_file",
    "result",
    "passed_tests",
    "total_tests",
    "report_path",
)
"""Ordered field names used for CSV and JSON payloads."""

DEFAULT_LOG_PATH = Path("logs") / "run_log.jsonl"
"""Default location for the run history log."""


@dataclass(frozen=True)
class RunLogRecord:
    """Structured representation of a logged application run."""

    timestamp: str
    config_file: str
    result: str
    passed_tests: int
    total_tests: int
    report_path: str

    @classmethod
    def from_run_result(cls, result: "RunResult", report_path: Path | None) -> "RunLogRecord":
        """Create a log record from a :class:`~prngcheck.app.RunResult`."""

        timestamp = result.started_at.astimezone(timezone.utc).isoformat()
        verdict = "UNIFORM" if result.is_uniform else "NON-UNIFORM"
        return cls(
            timestamp=timestamp,
            config_file=str(result.config_path) if result.config_path else "",
            result=verdict,
            passed_tests=result.passed_tests,
            total_tests=result.total_tests,
            report_path=str(report_path) if report_path else "",
        )

    def to_dict(self) -> dict[str, str | int]:
        """Serialise the record to a mapping compatible with JSON/CSV writers."""

        return {
            "timestamp": self.timestamp,
            "config_file": self.config_file,
            "result": self.result,
            "passed_tests": self.passed_tests,
            "total_tests": self.total_tests,
            "report_path": self.report_path,
        }


LOG_FORMATS = ("jsonl", "csv")


def log_run_result(
    result: "RunResult",
    report_path: Path | None,
    *,
    log_path: Path | None = None,
    fmt: str = "jsonl",
    retention: int | None = 100,
) -> Path:
    """Append ``result`` to the run history and keep at most ``retention`` records.

    A ``retention`` of ``None`` or below one keeps every record.
    """

    log_format = _check_format(fmt)
    target = Path(log_path if log_path is not None else DEFAULT_LOG_PATH).expanduser().resolve()
    target.parent.mkdir(parents=True, exist_ok=True)

    header, entries = _read_entries(target, log_format)
    entries.append(_serialise(RunLogRecord.from_run_result(result, report_path), log_format))
    if retention is not None and retention > 0:
        entries = entries[-retention:]
    _write_entries(target, header, entries)
    return target


def trim_log(path: Path, max_entries: int, *, fmt: str = "jsonl") -> None:
    """Drop all but the newest ``max_entries`` records from ``path``."""

    log_format = _check_format(fmt)
    if max_entries <= 0 or not path.exists():
        return
    header, entries = _read_entries(path, log_format)
    if len(entries) > max_entries:
        _write_entries(path, header, entries[-max_entries:])


def _check_format(fmt: str) -> str:
    log_format = fmt.lower()
    if log_format not in LOG_FORMATS:
        raise ValueError(f"Unsupported log format: {fmt}")
    return log_format


def _serialise(record: RunLogRecord, log_format: str) -> str:
    if log_format == "jsonl":
        return json.dumps(record.to_dict(), ensure_ascii=False)
    buffer = io.StringIO()
    csv.DictWriter(buffer, fieldnames=LOG_FIELDNAMES, lineterminator="\n").writerow(record.to_dict())
    return buffer.getvalue().rstrip("\n")


def _read_entries(path: Path, log_format: str) -> tuple[str | None, list[str]]:
    """Split an existing log into its CSV header (if any) and record lines."""

    header = ",".join(LOG_FIELDNAMES) if log_format == "csv" else None
    if not path.exists():
        return header, []
    lines = [line for line in path.read_text(encoding="utf-8").splitlines() if line]
    if header is not None and lines:
        header, lines = lines[0], lines[1:]
    return header, lines


def _write_entries(path: Path, header: str | None, entries: list[str]) -> None:
    lines = ([header] if header is not None else []) + entries
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")


__all__ = ["LOG_FIELDNAMES", "LOG_FORMATS", "RunLogRecord", "log_run_result", "trim_log"]
