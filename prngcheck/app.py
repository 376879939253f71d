"""Application orchestration for the PRNG uniformity checker CLI."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import List, Sequence, TextIO, Tuple

from .analysis import SequenceAnalysis, all_passed, analyse_sequence
from .combiner import combine
from .config import GeneratorSettings, PrngCheckConfig, default_config, load_config
from .errors import InvalidParameterError, TestExecutionError
from .generators import build_generator, generate
from .io import read_input_file
from .logging import log_run_result
from .reporting import print_console_summary, write_markdown_report, write_sequence_dump
from .tests import UniformityTest, build_test_suite

logger = logging.getLogger(__name__)

COMBINED_LABEL = "MacLaren-Marsaglia"


@dataclass(frozen=True)
class RunResult:
    """Summary of a full application run."""

    config_path: Path | None
    input_path: Path | None
    count: int
    analyses: Tuple[SequenceAnalysis, ...]
    is_uniform: bool
    histogram_bins: int
    started_at: datetime
    duration: timedelta
    settings: Tuple[str, ...] = field(default_factory=tuple)
    warnings: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def passed_tests(self) -> int:
        return sum(
            1 for analysis in self.analyses for verdict in analysis.verdicts if verdict.passed
        )

    @property
    def total_tests(self) -> int:
        return sum(len(analysis.verdicts) for analysis in self.analyses)


class PrngCheckApp:
    """High level service wiring configuration, generation, testing and rendering."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def run(
        self,
        config_path: Path | None = None,
        input_path: Path | None = None,
        report_path: Path | None = None,
        sequence_path: Path | None = None,
        verbose: bool = False,
    ) -> RunResult:
        """Execute the generate-and-test workflow."""

        started_at = datetime.now(timezone.utc)
        config = self._load_config(config_path)
        suite = build_test_suite(config)

        if input_path is not None:
            input_data = read_input_file(input_path, max_entries=None)
            labelled = [(input_data.path.stem or "input", input_data.values)]
            settings: Tuple[str, ...] = (f"Input file: {input_data.path}",)
        else:
            labelled = self._generate_sequences(config)
            settings = self._describe_settings(config)

        analyses = self._execute_tests(labelled, suite)
        result = RunResult(
            config_path=config_path,
            input_path=input_path,
            count=len(labelled[0][1]),
            analyses=analyses,
            is_uniform=all_passed(analyses),
            histogram_bins=config.output.histogram_bins,
            started_at=started_at,
            duration=datetime.now(timezone.utc) - started_at,
            settings=settings,
            warnings=config.warnings,
        )
        logger.debug(
            "Run finished: %d/%d tests passed", result.passed_tests, result.total_tests
        )

        print_console_summary(result, verbose=verbose, stream=self._stream or sys.stdout)
        self._write_outputs(result, config, report_path, sequence_path)
        return result

    # ------------------------------------------------------------------
    # Pipeline stages
    # ------------------------------------------------------------------
    def _load_config(self, path: Path | None) -> PrngCheckConfig:
        if path is None:
            logger.debug("No configuration supplied; using defaults")
            return default_config()
        logger.debug("Loading configuration from %s", path)
        return load_config(path)

    def _generate_sequences(
        self, config: PrngCheckConfig
    ) -> List[Tuple[str, Tuple[float, ...]]]:
        count = config.sequence.count
        first = build_generator(config.generator)
        sequences = [(_label_for(config.generator), generate(first, count))]
        logger.debug("Generated %d values with %s generator", count, first.name)

        if config.combiner.enabled:
            second = build_generator(config.second_generator)
            # Replay the first stream from its seed for the combination.
            first.reset()
            try:
                combined = combine(first, second, config.combiner.offset, count)
            except InvalidParameterError as exc:
                raise TestExecutionError(f"Sequence combination failed: {exc}") from exc
            sequences.append((COMBINED_LABEL, combined))
            logger.debug("Combined streams with lookup table of %d", config.combiner.offset)
        return sequences

    def _execute_tests(
        self,
        labelled: Sequence[Tuple[str, Sequence[float]]],
        suite: Sequence[UniformityTest],
    ) -> Tuple[SequenceAnalysis, ...]:
        analyses: List[SequenceAnalysis] = []
        for label, values in labelled:
            try:
                analyses.append(analyse_sequence(label, values, suite))
            except InvalidParameterError as exc:
                raise TestExecutionError(f"Tests failed for sequence '{label}': {exc}") from exc
        return tuple(analyses)

    def _describe_settings(self, config: PrngCheckConfig) -> Tuple[str, ...]:
        lines = [
            f"Sequence length: {config.sequence.count}",
            f"Generator: {_describe_generator(config.generator)}",
        ]
        if config.combiner.enabled:
            lines.append(f"Second generator: {_describe_generator(config.second_generator)}")
            lines.append(f"Lookup table size: {config.combiner.offset}")
        return tuple(lines)

    # ------------------------------------------------------------------
    # Rendering helpers
    # ------------------------------------------------------------------
    def _write_outputs(
        self,
        result: RunResult,
        config: PrngCheckConfig,
        report_path: Path | None,
        sequence_path: Path | None,
    ) -> None:
        report_target = report_path or config.output.report_path
        written_report: Path | None = None
        if report_target is not None:
            written_report = write_markdown_report(result, report_target)
            logger.debug("Report written to %s", written_report)

        dump_target = sequence_path or config.output.sequence_path
        if dump_target is not None:
            write_sequence_dump(result, dump_target)
            logger.debug("Sequences written to %s", dump_target)

        if config.output.log_results:
            log_run_result(
                result,
                written_report,
                log_path=config.output.run_log_path,
                fmt=config.output.run_log_format,
                retention=config.output.run_log_retention,
            )


def _label_for(settings: GeneratorSettings) -> str:
    return settings.kind.replace("_", " ").title()


def _describe_generator(settings: GeneratorSettings) -> str:
    if settings.kind == "minimal_standard":
        return f"minimal_standard (seed={settings.seed})"
    description = (
        f"{settings.kind} (modulus={settings.modulus}, multiplier={settings.multiplier}, "
        f"seed={settings.seed}"
    )
    if settings.kind == "linear":
        description += f", increment={settings.increment}"
    return description + ")"


__all__ = ["COMBINED_LABEL", "PrngCheckApp", "RunResult"]
