"""Utility helpers shared by the uniformity tests."""

from __future__ import annotations

import math
from typing import List, Sequence

import numpy as np

from ..errors import InvalidParameterError

DEFAULT_SERIES_DEPTH = 1000


def as_value_array(values: Sequence[float]) -> np.ndarray:
    """Return ``values`` as a one dimensional float array, rejecting bad input."""

    array = np.asarray(values, dtype=float)
    if array.ndim != 1:
        raise InvalidParameterError("Sequence must be one dimensional.")
    if array.size == 0:
        raise InvalidParameterError("Sequence must contain at least one value.")
    if not np.all(np.isfinite(array)):
        raise InvalidParameterError("Sequence contains non-finite values.")
    return array


def require_quantile(quantile: float) -> float:
    """Validate a caller supplied critical value."""

    value = float(quantile)
    if not math.isfinite(value) or value <= 0:
        raise InvalidParameterError(f"Quantile must be a positive number, got {quantile!r}.")
    return value


def calc_kolmogorov_distribution(y: float, tau: int = DEFAULT_SERIES_DEPTH) -> float:
    """Evaluate the limiting Kolmogorov CDF through its alternating series.

    ``tau`` is the number of series terms; the truncation error is not
    reported.
    """

    if tau <= 0:
        raise InvalidParameterError(f"Series depth must be positive, got {tau}.")
    total = 0.0
    for i in range(1, tau + 1):
        sign = 1 if i & 1 else -1
        total += sign * math.exp(-2 * i * i * y * y)
    return 1.0 - 2.0 * total


def calc_frequencies_empirical(
    values: Sequence[float],
    cell_count: int,
    left_border: float = 0.0,
    right_border: float = 1.0,
    *,
    strategy: str = "direct",
) -> List[int]:
    """Count how many ``values`` fall into each of ``cell_count`` cells.

    The cell width is ``(right_border - left_border) / (cell_count + 1)``, so
    the cells cover the interval only up to ``cell_count`` widths.

    ``strategy="direct"`` places each value in cell
    ``floor((x - left_border) / step)``; values past the last cell border are
    added to the last cell and values outside ``[left_border, right_border)``
    are ignored.  The result does not depend on the order of ``values``.

    ``strategy="legacy"`` walks the values once with a single cursor that only
    moves forward: a value below the current border is counted, any other
    value moves the cursor to the next cell without being counted, and once
    the cursor sits on the last cell values at or above its border are
    dropped.  The counts are only meaningful for ascending input and even then
    lose the first value of every cell after the first.
    """

    if cell_count <= 0:
        raise InvalidParameterError(f"Cell count must be positive, got {cell_count}.")
    if right_border <= left_border:
        raise InvalidParameterError("Right border must be greater than the left border.")
    array = as_value_array(values)
    step = (right_border - left_border) / (cell_count + 1)

    if strategy == "direct":
        inside = array[(array >= left_border) & (array < right_border)]
        indices = np.floor((inside - left_border) / step).astype(np.int64)
        indices = np.minimum(indices, cell_count - 1)
        counts = np.bincount(indices, minlength=cell_count)
        return [int(count) for count in counts]
    if strategy == "legacy":
        return _legacy_frequencies(array, cell_count, left_border, step)
    raise InvalidParameterError(
        f"Unknown binning strategy '{strategy}'; expected 'direct' or 'legacy'."
    )


def _legacy_frequencies(
    array: np.ndarray, cell_count: int, left_border: float, step: float
) -> List[int]:
    result = [0] * cell_count
    cur_border = left_border + step
    result_index = 0
    for value in array:
        if value < cur_border:
            result[result_index] += 1
        elif result_index < cell_count - 1:
            result_index += 1
            cur_border += step
    return result


__all__ = [
    "DEFAULT_SERIES_DEPTH",
    "as_value_array",
    "calc_frequencies_empirical",
    "calc_kolmogorov_distribution",
    "require_quantile",
]
