"""Tests for :mod:`prngcheck.combiner`."""

from __future__ import annotations

from typing import Sequence

import pytest

from prngcheck.combiner import combine
from prngcheck.errors import InvalidParameterError
from prngcheck.generators import MultiplicativePRNG


class ScriptedPRNG:
    """Generator replaying a fixed list of values and counting draws."""

    name = "scripted"

    def __init__(self, values: Sequence[float]) -> None:
        self._values = list(values)
        self._position = 0
        self.draws = 0

    def next(self) -> float:
        value = self._values[self._position % len(self._values)]
        self._position += 1
        self.draws += 1
        return value

    def reset(self) -> None:
        self._position = 0


def test_constant_first_stream_yields_constant_output() -> None:
    first = ScriptedPRNG([0.5])
    second = MultiplicativePRNG(2**31, 131075, 131075)

    result = combine(first, second, 256, 1000)

    assert result == (0.5,) * 1000


def test_lookup_table_is_replenished_from_first_stream() -> None:
    first = ScriptedPRNG([0.1, 0.2, 0.3, 0.4, 0.5, 0.6])
    second = ScriptedPRNG([0.0, 0.0, 0.75, 0.5])

    result = combine(first, second, 2, 4)

    assert result == (0.1, 0.3, 0.2, 0.5)


def test_streams_are_drawn_the_expected_number_of_times() -> None:
    first = ScriptedPRNG([0.25, 0.75])
    second = ScriptedPRNG([0.1, 0.9])

    combine(first, second, 16, 100)

    assert first.draws == 116
    assert second.draws == 100


def test_combined_values_come_from_first_stream() -> None:
    first = MultiplicativePRNG(2**31, 262147, 262147)
    second = MultiplicativePRNG(2**31, 131075, 131075)
    first_draws = {first.next() for _ in range(1256)}
    first.reset()

    result = combine(first, second, 256, 1000)

    assert len(result) == 1000
    assert set(result) <= first_draws


@pytest.mark.parametrize(("offset", "count"), [(0, 10), (-1, 10), (4, 0), (4, -3)])
def test_rejects_non_positive_sizes(offset: int, count: int) -> None:
    with pytest.raises(InvalidParameterError):
        combine(ScriptedPRNG([0.5]), ScriptedPRNG([0.5]), offset, count)


@pytest.mark.parametrize("selector", [1.0, -0.25])
def test_rejects_selector_outside_unit_interval(selector: float) -> None:
    with pytest.raises(InvalidParameterError, match="must lie in"):
        combine(ScriptedPRNG([0.5]), ScriptedPRNG([selector]), 4, 3)


def test_selector_just_below_one_maps_to_last_slot() -> None:
    first = ScriptedPRNG([0.1, 0.2, 0.3, 0.9])
    second = ScriptedPRNG([0.9999999999999999])

    result = combine(first, second, 3, 1)

    assert result == (0.3,)
