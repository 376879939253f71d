"""Unit tests for :mod:`prngcheck.analysis`."""

from __future__ import annotations

from typing import List, Sequence

import pytest

from prngcheck.analysis import UNIFORM_VARIANCE, all_passed, analyse_sequence
from prngcheck.errors import InvalidParameterError
from prngcheck.generators import MultiplicativePRNG, generate
from prngcheck.tests import KolmogorovSmirnovTest, PearsonChiSquareTest, Verdict


class RecordingCheck:
    """Stub uniformity test remembering the values it was given."""

    def __init__(self, name: str, passed: bool) -> None:
        self.name = name
        self._passed = passed
        self.seen: List[float] = []

    def run(self, values: Sequence[float]) -> Verdict:
        self.seen = list(values)
        return Verdict(self.name, self._passed, 0.5, 1.0, "stub")


def test_analyse_sequence_passes_sorted_copy_to_tests() -> None:
    check = RecordingCheck("stub", passed=True)
    values = (0.75, 0.25, 0.5)

    analysis = analyse_sequence("sample", values, [check])

    assert check.seen == [0.25, 0.5, 0.75]
    assert analysis.values == values
    assert analysis.size == 3
    assert analysis.mean == pytest.approx(0.5)
    assert analysis.passed is True


def test_analysis_fails_when_any_verdict_fails() -> None:
    analysis = analyse_sequence(
        "sample",
        [0.1, 0.9],
        [RecordingCheck("first", passed=True), RecordingCheck("second", passed=False)],
    )

    assert analysis.passed is False
    assert [verdict.name for verdict in analysis.verdicts] == ["first", "second"]
    assert all_passed([analysis]) is False


def test_analysis_notes_values_outside_unit_interval() -> None:
    analysis = analyse_sequence("sample", [0.2, 1.5], [RecordingCheck("stub", passed=True)])

    assert analysis.metadata == ("Sequence contains values outside [0, 1).",)


def test_analysis_requires_at_least_one_test() -> None:
    with pytest.raises(InvalidParameterError):
        analyse_sequence("sample", [0.2, 0.4], [])


def test_reference_sequence_moments_are_close_to_uniform() -> None:
    values = generate(MultiplicativePRNG(2**31, 262147, 262147), 1000)
    suite = [KolmogorovSmirnovTest(quantile=1.36), PearsonChiSquareTest(30.14, 20)]

    analysis = analyse_sequence("Multiplicative", values, suite)

    assert analysis.mean == pytest.approx(0.5, abs=0.05)
    assert analysis.variance == pytest.approx(UNIFORM_VARIANCE, abs=0.02)
    assert [verdict.name for verdict in analysis.verdicts] == ["kolmogorov", "pearson"]


def test_all_passed_is_false_without_analyses() -> None:
    assert all_passed([]) is False
