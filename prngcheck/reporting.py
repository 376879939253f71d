"""Reporting utilities for console, markdown and sequence dump output."""

from __future__ import annotations

import re
import sys
import textwrap
from dataclasses import dataclass, field
from datetime import timezone
from pathlib import Path
from string import Template
from typing import Sequence, TYPE_CHECKING, TextIO, Tuple

import numpy as np

from .analysis import UNIFORM_MEAN, UNIFORM_VARIANCE

if TYPE_CHECKING:
    from datetime import timedelta
    from .analysis import SequenceAnalysis
    from .app import RunResult
    from .tests.base import Verdict

HISTOGRAM_WIDTH = 40


@dataclass(frozen=True)
class ReportTemplate:
    """Container for the markdown report template."""

    template: Template = Template(
        textwrap.dedent(
            """
            # PRNG Uniformity Report

            ## Summary
            ${summary}

            ## Settings
            ${settings}

            ## Test Results
            ${test_table}
            ${sequence_notes}
            ## Histograms
            ${histograms}

            ## Warnings
            ${warnings}

            _Generated on ${timestamp} (duration: ${duration})._
            """
        ).strip()
    )


DEFAULT_TEMPLATE = ReportTemplate()


@dataclass(frozen=True)
class HistogramData:
    """Histogram of a sequence over ``[lower, upper)`` ready for plotting."""

    values: Tuple[float, ...]
    bins: int
    lower: float = 0.0
    upper: float = 1.0
    counts: Tuple[int, ...] = field(init=False)
    edges: Tuple[float, ...] = field(init=False)

    def __post_init__(self) -> None:
        counts, edges = np.histogram(
            np.asarray(self.values, dtype=float), bins=self.bins, range=(self.lower, self.upper)
        )
        object.__setattr__(self, "counts", tuple(int(count) for count in counts))
        object.__setattr__(self, "edges", tuple(float(edge) for edge in edges))

    @property
    def width(self) -> float:
        return (self.upper - self.lower) / self.bins


def build_histogram(values: Sequence[float], bins: int = 20) -> HistogramData:
    """Bin ``values`` into ``bins`` equal cells over ``[0, 1)``."""

    if bins <= 0:
        raise ValueError(f"Histogram needs a positive bin count, got {bins}.")
    return HistogramData(values=tuple(values), bins=bins)


def render_text_histogram(histogram: HistogramData, *, width: int = HISTOGRAM_WIDTH) -> str:
    """Render ``histogram`` as horizontal bars of ``#`` characters."""

    peak = max(histogram.counts) if histogram.counts else 0
    lines = []
    for idx, count in enumerate(histogram.counts):
        bar = "#" * (round(count * width / peak) if peak else 0)
        start = histogram.edges[idx]
        end = histogram.edges[idx + 1]
        lines.append(f"[{start:.2f}, {end:.2f}) {count:>6} {bar}".rstrip())
    return "\n".join(lines)


def print_console_summary(result: "RunResult", *, verbose: bool = False, stream: TextIO | None = None) -> None:
    """Print the verdicts of every analysed sequence to ``stream``."""

    output = stream if stream is not None else sys.stdout
    for index, analysis in enumerate(result.analyses):
        if index:
            print("", file=output)
        print(analysis.label, file=output)
        for verdict in analysis.verdicts:
            print(f"{_test_title(verdict)} test: {_format_bool(verdict.passed)}", file=output)
            if verbose:
                print(f"   {verdict.details}", file=output)
        if verbose:
            print(f"   mean {analysis.mean:.4f}, variance {analysis.variance:.4f}", file=output)
            for note in analysis.metadata:
                print(f"   note: {note}", file=output)
            histogram = build_histogram(analysis.values, result.histogram_bins)
            for line in render_text_histogram(histogram).splitlines():
                print(f"   {line}", file=output)

    status = "UNIFORM" if result.is_uniform else "NON-UNIFORM"
    print(f"\nResult: {status} | Passed: {result.passed_tests}/{result.total_tests}", file=output)
    for warning in result.warnings:
        print(f"Warning: {warning}", file=output)


def build_markdown_report(result: "RunResult", *, template: Template | None = None) -> str:
    """Generate a markdown report for ``result`` using ``template``."""

    template = template or DEFAULT_TEMPLATE.template
    return template.substitute(
        summary=_format_summary_section(result),
        settings=_format_settings(result),
        test_table=_format_test_table(result.analyses),
        sequence_notes=_format_sequence_notes(result.analyses),
        histograms=_format_histograms(result),
        warnings=_format_warnings(result.warnings),
        timestamp=result.started_at.astimezone(timezone.utc).isoformat(),
        duration=_format_duration(result.duration),
    )


def write_markdown_report(
    result: "RunResult",
    path: Path | None = None,
    *,
    template: Template | None = None,
) -> Path:
    """Render and persist a markdown report for ``result``."""

    target = _resolve_report_path(result, path)
    target.parent.mkdir(parents=True, exist_ok=True)
    content = build_markdown_report(result, template=template)
    target.write_text(content, encoding="utf-8")
    return target


def write_sequence_dump(result: "RunResult", path: Path) -> Path:
    """Write every analysed sequence with its statistics and verdicts to ``path``.

    Values are written in generation order with six decimals, followed by the
    statistic line and verdict line of each test.
    """

    target = Path(path).expanduser().resolve()
    target.parent.mkdir(parents=True, exist_ok=True)
    blocks = []
    for analysis in result.analyses:
        lines = [analysis.label]
        lines.extend(f"{value:f}" for value in analysis.values)
        for verdict in analysis.verdicts:
            lines.append(f"{_statistic_label(verdict)} = {verdict.statistic:f}")
            lines.append(f"{_test_title(verdict)} test: {_format_bool(verdict.passed)}")
        blocks.append("\n".join(lines))
    target.write_text("\n\n".join(blocks) + "\n", encoding="utf-8")
    return target


# ---------------------------------------------------------------------------
# Helper formatting utilities
# ---------------------------------------------------------------------------

def _format_bool(value: bool) -> str:
    return "true" if value else "false"


def _test_title(verdict: "Verdict") -> str:
    return verdict.name.replace("_", " ").title()


def _statistic_label(verdict: "Verdict") -> str:
    return "Distance" if verdict.name == "kolmogorov" else "Hi"


def _format_summary_section(result: "RunResult") -> str:
    verdict = "UNIFORM" if result.is_uniform else "NON-UNIFORM"
    return textwrap.dedent(
        f"""
        - **Result:** {verdict}
        - **Tests passed:** {result.passed_tests} of {result.total_tests}
        - **Sequence length:** {result.count}
        """
    ).strip()


def _format_settings(result: "RunResult") -> str:
    lines = [f"- **Configuration:** {result.config_path or 'defaults'}"]
    lines.extend(f"- {line}" for line in result.settings)
    return "\n".join(lines)


def _format_test_table(analyses: Sequence["SequenceAnalysis"]) -> str:
    header = "| Sequence | Test | Statistic | Critical value | Outcome |"
    separator = "| --- | --- | --- | --- | --- |"
    rows = [
        "| {} | {} | {:.4f} | {:.4f} | {} |".format(
            analysis.label,
            verdict.name,
            verdict.statistic,
            verdict.critical_value,
            "PASS" if verdict.passed else "FAIL",
        )
        for analysis in analyses
        for verdict in analysis.verdicts
    ]
    if not rows:
        rows.append("| _(no tests executed)_ | - | - | - | - |")
    return "\n".join([header, separator, *rows])


def _format_sequence_notes(analyses: Sequence["SequenceAnalysis"]) -> str:
    sections: list[str] = []
    for analysis in analyses:
        section_lines = [
            f"### {analysis.label}",
            f"- Mean: {analysis.mean:.4f} (uniform {UNIFORM_MEAN:.4f})",
            f"- Variance: {analysis.variance:.4f} (uniform {UNIFORM_VARIANCE:.4f})",
        ]
        section_lines.extend(f"- {verdict.details}" for verdict in analysis.verdicts)
        section_lines.extend(f"- Note: {note}" for note in analysis.metadata)
        sections.append("\n".join(section_lines))
    if not sections:
        return "\n"
    return "\n\n" + "\n\n".join(sections) + "\n"


def _format_histograms(result: "RunResult") -> str:
    blocks = []
    for analysis in result.analyses:
        histogram = build_histogram(analysis.values, result.histogram_bins)
        blocks.append(
            f"### {analysis.label} (n={analysis.size})\n\n```\n{render_text_histogram(histogram)}\n```"
        )
    return "\n\n".join(blocks) if blocks else "- No sequences were analysed."


def _format_warnings(warnings: Sequence[str]) -> str:
    if not warnings:
        return "- No warnings were recorded."
    return "\n".join(f"- {warning}" for warning in warnings)


def _format_duration(duration: "timedelta") -> str:
    total_seconds = duration.total_seconds()
    if total_seconds < 1:
        return f"{total_seconds * 1000:.0f} ms"
    return f"{total_seconds:.2f} s"


def _resolve_report_path(result: "RunResult", path: Path | None) -> Path:
    if path is not None:
        return Path(path).expanduser().resolve()
    base_dir = Path("reports")
    source = result.input_path or result.config_path
    stem = source.stem if source is not None else "prngcheck"
    safe_stem = re.sub(r"[^A-Za-z0-9_.-]+", "-", stem).strip("-") or "prngcheck"
    timestamp = result.started_at.astimezone(timezone.utc).strftime("%Y%m%d-%H%M%S")
    filename = f"{safe_stem}-{timestamp}.md"
    return (base_dir / filename).resolve()


__all__ = [
    "HistogramData",
    "ReportTemplate",
    "build_histogram",
    "build_markdown_report",
    "print_console_summary",
    "render_text_histogram",
    "write_markdown_report",
    "write_sequence_dump",
]
