"""Common interfaces for pseudo-random number generators."""

from __future__ import annotations

from typing import Protocol, Tuple

from ..errors import InvalidParameterError


class PseudoRandomGenerator(Protocol):
    """Protocol implemented by all generators.

    A generator is a small state machine: :meth:`next` advances the state and
    returns a value in ``[0, 1)``, :meth:`reset` rewinds it to the seed so the
    same stream can be replayed without building a new instance.
    """

    name: str

    def next(self) -> float:
        """Advance the generator and return the next value in ``[0, 1)``."""

    def reset(self) -> None:
        """Restore the generator to its initial seed."""


def generate(prng: PseudoRandomGenerator, count: int) -> Tuple[float, ...]:
    """Draw ``count`` consecutive values from ``prng``."""

    if count <= 0:
        raise InvalidParameterError(f"Sequence length must be positive, got {count}.")
    return tuple(prng.next() for _ in range(count))


__all__ = ["PseudoRandomGenerator", "generate"]
