"""Run a uniformity test suite over labelled sequences.

The :mod:`prngcheck.tests` package exposes the individual goodness-of-fit
tests, each returning a :class:`prngcheck.tests.base.Verdict`.  This module
applies a suite of those tests to one sequence and bundles the verdicts with
the sequence itself so reporting layers receive everything they need in one
object.

Two reference moments are attached to every analysis:

``UNIFORM_MEAN``
    Expected mean of the continuous uniform distribution on ``[0, 1)``.

``UNIFORM_VARIANCE``
    Expected variance, ``1 / 12``.

They are informational only and never affect the verdicts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence, Tuple

import numpy as np

from .errors import InvalidParameterError
from .tests.base import UniformityTest, Verdict
from .tests.utils import as_value_array

UNIFORM_MEAN: float = 0.5
"""Mean of the uniform distribution on ``[0, 1)``."""

UNIFORM_VARIANCE: float = 1.0 / 12.0
"""Variance of the uniform distribution on ``[0, 1)``."""


@dataclass(frozen=True)
class SequenceAnalysis:
    """Verdicts produced for a single labelled sequence."""

    label: str
    values: Tuple[float, ...]
    verdicts: Tuple[Verdict, ...]
    mean: float
    variance: float
    metadata: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def passed(self) -> bool:
        return all(verdict.passed for verdict in self.verdicts)

    @property
    def size(self) -> int:
        return len(self.values)


def analyse_sequence(
    label: str,
    values: Sequence[float],
    tests: Iterable[UniformityTest],
) -> SequenceAnalysis:
    """Apply every test in ``tests`` to ``values``.

    The tests receive an ascending copy of ``values``; the analysis keeps the
    original generation order for reporting.
    """

    array = as_value_array(values)
    ordered = np.sort(array)
    verdicts = tuple(test.run(ordered) for test in tests)
    if not verdicts:
        raise InvalidParameterError("At least one test is required to analyse a sequence.")

    metadata: Tuple[str, ...] = ()
    if np.any((array < 0.0) | (array >= 1.0)):
        metadata = ("Sequence contains values outside [0, 1).",)

    return SequenceAnalysis(
        label=label,
        values=tuple(float(value) for value in array),
        verdicts=verdicts,
        mean=float(array.mean()),
        variance=float(array.var()),
        metadata=metadata,
    )


def all_passed(analyses: Sequence[SequenceAnalysis]) -> bool:
    """Return whether every analysed sequence passed every test."""

    return bool(analyses) and all(analysis.passed for analysis in analyses)


__all__ = [
    "SequenceAnalysis",
    "UNIFORM_MEAN",
    "UNIFORM_VARIANCE",
    "all_passed",
    "analyse_sequence",
]
