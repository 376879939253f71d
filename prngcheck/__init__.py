"""PRNG generation and uniformity checking package."""

from .analysis import SequenceAnalysis, analyse_sequence
from .app import PrngCheckApp, RunResult
from .combiner import combine
from .generators import (
    LinearCongruentialPRNG,
    MinimalStandardPRNG,
    MultiplicativePRNG,
    PseudoRandomGenerator,
    generate,
)
from .tests import Verdict, kolmogorov_test, pearson_test

__all__ = [
    "LinearCongruentialPRNG",
    "MinimalStandardPRNG",
    "MultiplicativePRNG",
    "PrngCheckApp",
    "PseudoRandomGenerator",
    "RunResult",
    "SequenceAnalysis",
    "Verdict",
    "analyse_sequence",
    "combine",
    "generate",
    "kolmogorov_test",
    "pearson_test",
]
