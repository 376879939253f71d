"""Input helpers for reading externally produced sequences."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path, PureWindowsPath
from typing import Tuple

from .errors import (
    EmptyInputFileError,
    InputTooLargeError,
    InvalidInputError,
    MissingFileError,
)

DEFAULT_MAX_ENTRIES = 1_000_000


@dataclass(frozen=True)
class InputData:
    """Container describing the sequence loaded from an input file."""

    path: Path
    values: Tuple[float, ...]

    @property
    def entry_count(self) -> int:
        return len(self.values)


NUMERIC_PATTERN = re.compile(
    r"""
    ^
    [+-]?
    (
        (?:\d+\.\d+)|
        (?:\d+\.)|
        (?:\.\d+)|
        (?:\d+)
    )
    (?:[eE][+-]?\d+)?
    $
    """,
    re.VERBOSE,
)


def read_input_file(path: Path | str, *, max_entries: int | None = DEFAULT_MAX_ENTRIES) -> InputData:
    """Read one value per line from ``path``; blank lines are skipped.

    Every value must be a decimal number in ``[0, 1)``.
    """

    candidate = _normalise_path(path)
    if not candidate.exists():
        raise MissingFileError(f"Input file not found: {candidate}")
    try:
        with candidate.open("r", encoding="utf-8", newline="") as handle:
            raw_lines = tuple(handle.readlines())
    except OSError as exc:  # pragma: no cover - filesystem guard
        raise MissingFileError(f"Could not read input file: {candidate}") from exc

    entries = [(number, line.strip()) for number, line in enumerate(_strip_newlines(raw_lines), 1)]
    entries = [(number, entry) for number, entry in entries if entry]
    if not entries:
        raise EmptyInputFileError(
            f"Input file '{candidate}' does not contain any non-empty entries."
        )

    if max_entries is not None and len(entries) > max_entries:
        raise InputTooLargeError(
            f"Input file '{candidate}' has {len(entries)} entries, exceeding the allowed maximum of {max_entries}."
        )

    values = tuple(_parse_value(entry, number, candidate) for number, entry in entries)
    return InputData(path=candidate, values=values)


def _parse_value(entry: str, line_number: int, path: Path) -> float:
    if not NUMERIC_PATTERN.fullmatch(entry):
        raise InvalidInputError(
            f"Line {line_number} of '{path}' is not a number: {entry!r}."
        )
    value = float(entry)
    if not 0.0 <= value < 1.0:
        raise InvalidInputError(
            f"Line {line_number} of '{path}' is outside [0, 1): {entry}."
        )
    return value


def _normalise_path(path: Path | str) -> Path:
    if isinstance(path, Path):
        candidate = path
    else:
        candidate = Path(path)
    if isinstance(path, str) and re.match(r"^[A-Za-z]:\\", path):
        return Path(PureWindowsPath(path))
    return candidate.expanduser().resolve()


def _strip_newlines(raw_lines: Tuple[str, ...]) -> Tuple[str, ...]:
    return tuple(line.rstrip("\r\n") for line in raw_lines)


__all__ = [
    "InputData",
    "read_input_file",
]
