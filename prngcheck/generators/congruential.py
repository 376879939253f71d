"""Congruential generator implementations.

All generators keep their state as Python integers.  Python integers have
arbitrary precision, so ``multiplier * state`` is always exact and the modulo
never operates on a truncated product.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..errors import InvalidParameterError

MINIMAL_STANDARD_MODULUS = 2**31 - 1
MINIMAL_STANDARD_MULTIPLIER = 16807


def _as_integer(value: float, label: str) -> int:
    """Return ``value`` as an ``int``, rejecting anything with a fractional part."""

    if isinstance(value, int):
        return value
    try:
        integral = float(value).is_integer()
    except (TypeError, ValueError) as exc:
        raise InvalidParameterError(f"{label} must be an integer, got {value!r}.") from exc
    if not integral:
        raise InvalidParameterError(f"{label} must be an integer, got {value!r}.")
    return int(value)


@dataclass
class _CongruentialGenerator:
    name: str
    modulus: int
    seed: int
    multiplier: int
    current: int = field(init=False)

    def __post_init__(self) -> None:
        self._validate()
        self.current = self.seed

    def _validate(self) -> None:
        if self.modulus < 2:
            raise InvalidParameterError(f"Modulus must be at least 2, got {self.modulus}.")
        if not 1 <= self.multiplier < self.modulus:
            raise InvalidParameterError(
                f"Multiplier must lie in [1, {self.modulus}), got {self.multiplier}."
            )

    def _advance(self) -> int:  # pragma: no cover - abstract
        raise NotImplementedError

    def next(self) -> float:
        self.current = self._advance()
        return self.current / self.modulus

    def reset(self) -> None:
        self.current = self.seed


class MultiplicativePRNG(_CongruentialGenerator):
    """Multiplicative congruential generator ``X <- (A * X) mod M``."""

    def __init__(self, modulus: int, seed: int, multiplier: int) -> None:
        super().__init__(
            name="multiplicative",
            modulus=_as_integer(modulus, "Modulus"),
            seed=_as_integer(seed, "Seed"),
            multiplier=_as_integer(multiplier, "Multiplier"),
        )

    def _validate(self) -> None:
        super()._validate()
        # Zero is a fixed point of the multiplicative recurrence.
        if not 1 <= self.seed < self.modulus:
            raise InvalidParameterError(
                f"Seed must lie in [1, {self.modulus}), got {self.seed}."
            )

    def _advance(self) -> int:
        return (self.multiplier * self.current) % self.modulus


class MinimalStandardPRNG(MultiplicativePRNG):
    """Lehmer generator with the Park-Miller "minimal standard" parameters."""

    def __init__(self, seed: int = 1) -> None:
        super().__init__(MINIMAL_STANDARD_MODULUS, seed, MINIMAL_STANDARD_MULTIPLIER)
        self.name = "minimal_standard"


class LinearCongruentialPRNG(_CongruentialGenerator):
    """Mixed congruential generator ``X <- (A * X + C) mod M``."""

    increment: int

    def __init__(self, modulus: int, seed: int, multiplier: int, increment: int) -> None:
        self.increment = _as_integer(increment, "Increment")
        super().__init__(
            name="linear",
            modulus=_as_integer(modulus, "Modulus"),
            seed=_as_integer(seed, "Seed"),
            multiplier=_as_integer(multiplier, "Multiplier"),
        )

    def _validate(self) -> None:
        super()._validate()
        if not 0 <= self.seed < self.modulus:
            raise InvalidParameterError(
                f"Seed must lie in [0, {self.modulus}), got {self.seed}."
            )
        if not 0 <= self.increment < self.modulus:
            raise InvalidParameterError(
                f"Increment must lie in [0, {self.modulus}), got {self.increment}."
            )

    def _advance(self) -> int:
        return (self.multiplier * self.current + self.increment) % self.modulus


__all__ = [
    "LinearCongruentialPRNG",
    "MINIMAL_STANDARD_MODULUS",
    "MINIMAL_STANDARD_MULTIPLIER",
    "MinimalStandardPRNG",
    "MultiplicativePRNG",
]
