"""Configuration parsing utilities for the PRNG uniformity checker."""

from __future__ import annotations

import configparser
import math
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Tuple

from .errors import InvalidConfigurationError, MissingFileError

DEFAULT_MODULUS = 2**31
BINNING_STRATEGIES = ("direct", "legacy")
KNOWN_TESTS = ("kolmogorov", "pearson")

_POWER_PATTERN = re.compile(r"^\s*(\d+)\s*(?:\*\*|\^)\s*(\d+)\s*$")


@dataclass(frozen=True)
class GeneratorSettings:
    """Parameters used to construct a single generator."""

    kind: str
    modulus: int
    seed: int
    multiplier: int
    increment: int = 0


@dataclass(frozen=True)
class SequenceSection:
    count: int


@dataclass(frozen=True)
class CombinerSection:
    """MacLaren-Marsaglia options."""

    enabled: bool
    offset: int


@dataclass(frozen=True)
class TestsSection:
    """Configuration data describing which tests are enabled."""

    enabled_tests: Tuple[str, ...]


@dataclass(frozen=True)
class KolmogorovSection:
    quantile: float | None
    significance: float | None


@dataclass(frozen=True)
class PearsonSection:
    quantile: float
    cell_count: int
    binning: str


@dataclass(frozen=True)
class OutputSection:
    """Options controlling how results should be presented to the user."""

    report_path: Path | None
    sequence_path: Path | None
    histogram_bins: int
    log_results: bool
    run_log_path: Path
    run_log_format: str
    run_log_retention: int | None


@dataclass(frozen=True)
class PrngCheckConfig:
    """Aggregate configuration container returned by :func:`load_config`."""

    generator: GeneratorSettings
    second_generator: GeneratorSettings
    sequence: SequenceSection
    combiner: CombinerSection
    tests: TestsSection
    kolmogorov: KolmogorovSection
    pearson: PearsonSection
    output: OutputSection
    warnings: Tuple[str, ...] = field(default_factory=tuple)


def load_config(path: Path) -> PrngCheckConfig:
    """Load and validate an INI configuration file."""

    parser = configparser.ConfigParser(inline_comment_prefixes=(";", "#"))
    try:
        with path.open("r", encoding="utf-8") as config_file:
            parser.read_file(config_file)
    except FileNotFoundError as exc:
        raise MissingFileError(f"Configuration file not found: {path}") from exc
    except OSError as exc:  # pragma: no cover - filesystem guard
        raise MissingFileError(f"Could not read configuration file: {path}") from exc
    except configparser.Error as exc:
        raise InvalidConfigurationError(f"Configuration is not valid INI: {exc}") from exc

    return _build_config(parser, path.resolve().parent)


def default_config(base_dir: Path | None = None) -> PrngCheckConfig:
    """Return the configuration used when no file is supplied."""

    parser = configparser.ConfigParser()
    return _build_config(parser, (base_dir or Path.cwd()).resolve())


def _build_config(parser: configparser.ConfigParser, base_dir: Path) -> PrngCheckConfig:
    warnings: list[str] = []
    generator = _parse_generator(parser, "generator", multiplier=262147, seed=262147)
    second_generator = _parse_generator(
        parser, "second_generator", multiplier=131075, seed=131075
    )
    sequence = SequenceSection(
        count=_get_positive_int(parser, "sequence", "count", 1000)
    )
    combiner = _parse_combiner(parser)
    tests = _parse_tests(parser)
    kolmogorov = _parse_kolmogorov(parser, warnings)
    pearson = _parse_pearson(parser)
    output = _parse_output(parser, base_dir)

    if combiner.enabled and generator == second_generator:
        warnings.append(
            "First and second generators share identical parameters; "
            "the combined sequence will not mix independent streams."
        )

    return PrngCheckConfig(
        generator=generator,
        second_generator=second_generator,
        sequence=sequence,
        combiner=combiner,
        tests=tests,
        kolmogorov=kolmogorov,
        pearson=pearson,
        output=output,
        warnings=tuple(warnings),
    )


def _parse_generator(
    parser: configparser.ConfigParser, section_name: str, *, multiplier: int, seed: int
) -> GeneratorSettings:
    kind = "multiplicative"
    if parser.has_section(section_name) and "type" in parser[section_name]:
        kind = parser[section_name]["type"].strip().lower()
    return GeneratorSettings(
        kind=kind,
        modulus=_get_int(parser, section_name, "modulus", DEFAULT_MODULUS),
        seed=_get_int(parser, section_name, "seed", seed),
        multiplier=_get_int(parser, section_name, "multiplier", multiplier),
        increment=_get_int(parser, section_name, "increment", 0),
    )


def _parse_combiner(parser: configparser.ConfigParser) -> CombinerSection:
    return CombinerSection(
        enabled=_get_bool(parser, "combiner", "enabled", True),
        offset=_get_positive_int(parser, "combiner", "offset", 256),
    )


def _parse_tests(parser: configparser.ConfigParser) -> TestsSection:
    if not parser.has_section("tests"):
        return TestsSection(enabled_tests=KNOWN_TESTS)

    enabled: list[str] = []
    for name, _ in parser.items("tests"):
        if name not in KNOWN_TESTS:
            raise InvalidConfigurationError(f"Unknown test '{name}' in [tests] section.")
        try:
            is_enabled = parser.getboolean("tests", name)
        except ValueError as exc:
            raise InvalidConfigurationError(
                f"Test '{name}' in [tests] must be a boolean value."
            ) from exc
        if is_enabled:
            enabled.append(name)

    if not enabled:
        raise InvalidConfigurationError("At least one test must be enabled in [tests] section.")

    return TestsSection(enabled_tests=tuple(enabled))


def _parse_kolmogorov(
    parser: configparser.ConfigParser, warnings: list[str]
) -> KolmogorovSection:
    quantile = _get_float(parser, "kolmogorov", "quantile", None)
    significance = _get_float(parser, "kolmogorov", "significance", None)
    if quantile is not None and quantile <= 0:
        raise InvalidConfigurationError(
            "Option 'quantile' in [kolmogorov] must be greater than zero."
        )
    if significance is not None and not 0.0 < significance < 1.0:
        raise InvalidConfigurationError(
            "Option 'significance' in [kolmogorov] must be between 0 and 1."
        )
    if quantile is not None and significance is not None:
        warnings.append(
            "Both 'quantile' and 'significance' set in [kolmogorov]; using the quantile."
        )
        significance = None
    if quantile is None and significance is None:
        quantile = 1.36
    return KolmogorovSection(quantile=quantile, significance=significance)


def _parse_pearson(parser: configparser.ConfigParser) -> PearsonSection:
    quantile = _get_float(parser, "pearson", "quantile", 30.14)
    if quantile is None or quantile <= 0:
        raise InvalidConfigurationError(
            "Option 'quantile' in [pearson] must be greater than zero."
        )
    binning = "direct"
    if parser.has_section("pearson") and "binning" in parser["pearson"]:
        binning = parser["pearson"]["binning"].strip().lower()
        if binning not in BINNING_STRATEGIES:
            raise InvalidConfigurationError(
                "Option 'binning' in [pearson] must be either 'direct' or 'legacy'."
            )
    return PearsonSection(
        quantile=quantile,
        cell_count=_get_positive_int(parser, "pearson", "cells", 20),
        binning=binning,
    )


def _parse_output(parser: configparser.ConfigParser, base_dir: Path) -> OutputSection:
    report_path: Path | None = None
    sequence_path: Path | None = None
    histogram_bins = 20
    log_results = False
    log_path = (base_dir / "logs" / "run_log.jsonl").resolve()
    log_format = "jsonl"
    log_retention: int | None = 100

    def _apply_logging_overrides(
        section: configparser.SectionProxy, *, section_name: str, allow_enable: bool = False
    ) -> None:
        nonlocal log_results, log_path, log_format, log_retention
        if allow_enable and "enabled" in section:
            log_results = _section_bool(section, "enabled", section_name)
        if "log_results" in section:
            log_results = _section_bool(section, "log_results", section_name)
        for key in ("log_path", "path"):
            if key in section:
                candidate = _resolve_path(section[key], base_dir)
                if candidate is not None:
                    log_path = candidate
                break
        for key in ("log_format", "format"):
            if key in section:
                raw_format = section[key].strip().lower()
                if raw_format not in {"jsonl", "csv"}:
                    raise InvalidConfigurationError(
                        f"Option '{key}' in [{section_name}] must be either 'jsonl' or 'csv'."
                    )
                log_format = raw_format
                break
        for key in ("log_retention", "retention"):
            if key in section:
                raw_retention = section[key].strip()
                if raw_retention:
                    try:
                        parsed = int(raw_retention)
                    except ValueError as exc:
                        raise InvalidConfigurationError(
                            f"Option '{key}' in [{section_name}] must be an integer value."
                        ) from exc
                    log_retention = parsed if parsed > 0 else None
                break

    if parser.has_section("output"):
        section = parser["output"]
        if "report_path" in section:
            report_path = _resolve_path(section["report_path"], base_dir)
        if "sequence_path" in section:
            sequence_path = _resolve_path(section["sequence_path"], base_dir)
        histogram_bins = _get_positive_int(parser, "output", "histogram_bins", histogram_bins)
        _apply_logging_overrides(section, section_name="output")

    if parser.has_section("logging"):
        _apply_logging_overrides(parser["logging"], section_name="logging", allow_enable=True)

    return OutputSection(
        report_path=report_path,
        sequence_path=sequence_path,
        histogram_bins=histogram_bins,
        log_results=log_results,
        run_log_path=log_path,
        run_log_format=log_format,
        run_log_retention=log_retention,
    )


# ---------------------------------------------------------------------------
# Value helpers
# ---------------------------------------------------------------------------

def parse_integer(raw: str) -> int:
    """Parse a plain integer or a power expression such as ``2**31`` or ``2^31``."""

    match = _POWER_PATTERN.match(raw)
    if match:
        base, exponent = (int(group) for group in match.groups())
        return base**exponent
    return int(raw.strip())


def _get_int(
    parser: configparser.ConfigParser, section: str, option: str, default: int
) -> int:
    if not parser.has_option(section, option):
        return default
    raw = parser.get(section, option)
    try:
        return parse_integer(raw)
    except ValueError as exc:
        raise InvalidConfigurationError(
            f"Option '{option}' in [{section}] must be an integer value."
        ) from exc


def _get_positive_int(
    parser: configparser.ConfigParser, section: str, option: str, default: int
) -> int:
    value = _get_int(parser, section, option, default)
    if value <= 0:
        raise InvalidConfigurationError(
            f"Option '{option}' in [{section}] must be greater than zero."
        )
    return value


def _get_float(
    parser: configparser.ConfigParser, section: str, option: str, default: float | None
) -> float | None:
    if not parser.has_option(section, option):
        return default
    raw = parser.get(section, option).strip()
    try:
        value = float(raw)
    except ValueError as exc:
        raise InvalidConfigurationError(
            f"Option '{option}' in [{section}] must be numeric."
        ) from exc
    if not math.isfinite(value):
        raise InvalidConfigurationError(f"Option '{option}' in [{section}] must be finite.")
    return value


def _get_bool(
    parser: configparser.ConfigParser, section: str, option: str, default: bool
) -> bool:
    if not parser.has_option(section, option):
        return default
    return _section_bool(parser[section], option, section)


def _section_bool(section: configparser.SectionProxy, option: str, section_name: str) -> bool:
    try:
        return section.getboolean(option)
    except ValueError as exc:
        raise InvalidConfigurationError(
            f"Option '{option}' in [{section_name}] must be a boolean value."
        ) from exc


def _resolve_path(raw: str, base_dir: Path) -> Path | None:
    stripped = raw.strip()
    if not stripped:
        return None
    candidate = Path(stripped).expanduser()
    if not candidate.is_absolute():
        candidate = base_dir / candidate
    return candidate.resolve()


__all__ = [
    "BINNING_STRATEGIES",
    "CombinerSection",
    "GeneratorSettings",
    "KNOWN_TESTS",
    "KolmogorovSection",
    "OutputSection",
    "PearsonSection",
    "PrngCheckConfig",
    "SequenceSection",
    "TestsSection",
    "default_config",
    "load_config",
    "parse_integer",
]
