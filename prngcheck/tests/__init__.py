"""Uniformity tests package."""

from .base import UniformityTest, Verdict
from .factory import DEFAULT_TESTS, build_test_suite
from .statistical import (
    KolmogorovSmirnovTest,
    PearsonChiSquareTest,
    calc_kolmogorov_distance_uniform,
    check_kolmogorov_test_uniform_quantile,
    check_kolmogorov_test_uniform_significance,
    check_pearson_test_uniform,
    kolmogorov_test,
    pearson_test,
    significance_quantile,
)
from .utils import calc_frequencies_empirical, calc_kolmogorov_distribution

__all__ = [
    "DEFAULT_TESTS",
    "KolmogorovSmirnovTest",
    "PearsonChiSquareTest",
    "UniformityTest",
    "Verdict",
    "build_test_suite",
    "calc_frequencies_empirical",
    "calc_kolmogorov_distance_uniform",
    "calc_kolmogorov_distribution",
    "check_kolmogorov_test_uniform_quantile",
    "check_kolmogorov_test_uniform_significance",
    "check_pearson_test_uniform",
    "kolmogorov_test",
    "pearson_test",
    "significance_quantile",
]
