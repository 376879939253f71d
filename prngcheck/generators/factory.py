"""Factory utilities for registering and instantiating generators."""

from __future__ import annotations

from typing import Callable, Dict, Mapping

from ..config import GeneratorSettings
from ..errors import InvalidConfigurationError, InvalidParameterError
from .base import PseudoRandomGenerator
from .congruential import LinearCongruentialPRNG, MinimalStandardPRNG, MultiplicativePRNG

GeneratorBuilder = Callable[[GeneratorSettings], PseudoRandomGenerator]


def _default_registry() -> Dict[str, GeneratorBuilder]:
    return {
        "multiplicative": lambda s: MultiplicativePRNG(s.modulus, s.seed, s.multiplier),
        "linear": lambda s: LinearCongruentialPRNG(
            s.modulus, s.seed, s.multiplier, s.increment
        ),
        "minimal_standard": lambda s: MinimalStandardPRNG(s.seed),
    }


DEFAULT_GENERATORS: Mapping[str, GeneratorBuilder] = _default_registry()


def build_generator(
    settings: GeneratorSettings,
    *,
    registry: Mapping[str, GeneratorBuilder] | None = None,
) -> PseudoRandomGenerator:
    """Construct the generator described by ``settings``."""

    builders = registry or DEFAULT_GENERATORS
    builder = builders.get(settings.kind)
    if builder is None:
        known = ", ".join(sorted(builders))
        raise InvalidConfigurationError(
            f"Unknown generator type '{settings.kind}'; expected one of: {known}."
        )
    try:
        return builder(settings)
    except InvalidParameterError as exc:
        raise InvalidConfigurationError(
            f"Invalid parameters for '{settings.kind}' generator: {exc}"
        ) from exc


__all__ = ["DEFAULT_GENERATORS", "GeneratorBuilder", "build_generator"]
