"""Pseudo-random number generators package."""

from .base import PseudoRandomGenerator, generate
from .congruential import LinearCongruentialPRNG, MinimalStandardPRNG, MultiplicativePRNG
from .factory import DEFAULT_GENERATORS, build_generator

__all__ = [
    "DEFAULT_GENERATORS",
    "LinearCongruentialPRNG",
    "MinimalStandardPRNG",
    "MultiplicativePRNG",
    "PseudoRandomGenerator",
    "build_generator",
    "generate",
]
