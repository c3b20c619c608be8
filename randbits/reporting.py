"""Reporting utilities for console and markdown output."""

from __future__ import annotations

import sys
import textwrap
from dataclasses import dataclass
from datetime import timezone
from pathlib import Path
from string import Template
from typing import TYPE_CHECKING, Sequence, TextIO

from .constants import (
    BIT_COUNT,
    INITIAL_SEED,
    LCG_INCREMENT,
    LCG_MULTIPLIER,
)

if TYPE_CHECKING:
    from datetime import timedelta

    from .analysis import MergedTestResult
    from .app import RunResult


@dataclass(frozen=True)
class ReportTemplate:
    """Container for the markdown report template."""

    template: Template = Template(
        textwrap.dedent(
            """
            # Random Bits Battery Report

            ## Summary
            ${summary}

            ## Generator
            ${generator}

            ## Test Results
            ${test_table}
            ${test_notes}
            ## Interpretations
            ${interpretations}

            _Generated on ${timestamp} (duration: ${duration})._
            """
        ).strip()
    )


DEFAULT_TEMPLATE = ReportTemplate()


def verdict_label(passed: bool) -> str:
    return "PASS" if passed else "FAIL"


def print_console_summary(result: "RunResult", *, verbose: bool = False, stream: TextIO | None = None) -> None:
    """Print a short summary of the battery run to ``stream``."""

    output = stream if stream is not None else sys.stdout
    print(
        f"Result: {verdict_label(result.passed)} | "
        f"Tests passed: {result.passed_count}/{result.total_tests}",
        file=output,
    )
    if not verbose:
        return

    print(f"Bits evaluated: {result.bit_count}", file=output)
    for test_result in result.test_results:
        print(
            f" - {test_result.name}: {verdict_label(test_result.passed)} "
            f"(statistic {test_result.statistic:g})",
            file=output,
        )
        print(f"   {test_result.details}", file=output)
    for warning in result.warnings:
        print(f"warning: {warning}", file=output)


def build_markdown_report(result: "RunResult", *, template: Template | None = None) -> str:
    """Generate a markdown report for ``result`` using ``template``."""

    template = template or DEFAULT_TEMPLATE.template
    return template.substitute(
        summary=_format_summary_section(result),
        generator=_format_generator_section(result),
        test_table=_format_test_table(result.test_results),
        test_notes=_format_test_notes(result.test_results),
        interpretations=_format_interpretations(result.report_metadata),
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
    target.write_text(build_markdown_report(result, template=template), encoding="utf-8")
    return target


# ---------------------------------------------------------------------------
# Helper formatting utilities
# ---------------------------------------------------------------------------

def _format_summary_section(result: "RunResult") -> str:
    config = str(result.config_path) if result.config_path is not None else "defaults"
    return "\n".join(
        [
            f"- **Result:** {verdict_label(result.passed)}",
            f"- **Tests passed:** {result.passed_count}/{result.total_tests}",
            f"- **Configuration:** {config}",
        ]
    )


def _format_generator_section(result: "RunResult") -> str:
    return "\n".join(
        [
            f"- **Recurrence:** x = ({LCG_MULTIPLIER} * x + {LCG_INCREMENT}) mod 2^32",
            f"- **Seed:** {INITIAL_SEED}",
            f"- **Bits evaluated:** {result.bit_count} (reference length {BIT_COUNT})",
        ]
    )


def _format_test_table(tests: Sequence["MergedTestResult"]) -> str:
    header = "| Test | Statistic | Outcome |"
    separator = "| --- | --- | --- |"
    rows = [
        f"| {test.name} | {test.statistic:g} | {verdict_label(test.passed)} |"
        for test in tests
    ]
    if not rows:
        rows.append("| _(no tests executed)_ | - | - |")
    return "\n".join([header, separator, *rows])


def _format_test_notes(tests: Sequence["MergedTestResult"]) -> str:
    sections: list[str] = []
    for test in tests:
        lines = [f"### {test.name}", f"> {test.details}"]
        if test.observed:
            lines.append("")
            lines.append("Observed counts: " + ", ".join(str(count) for count in test.observed))
        sections.append("\n".join(lines))
    if not sections:
        return ""
    return "\n" + "\n\n".join(sections) + "\n"


def _format_interpretations(metadata: Sequence[str]) -> str:
    if not metadata:
        return "- No additional interpretations were recorded."
    return "\n".join(f"- {note}" for note in metadata)


def _format_duration(duration: "timedelta") -> str:
    total_seconds = duration.total_seconds()
    if total_seconds < 1:
        return f"{total_seconds * 1000:.0f} ms"
    return f"{total_seconds:.2f} s"


def _resolve_report_path(result: "RunResult", path: Path | None) -> Path:
    if path is not None:
        return Path(path).expanduser().resolve()
    timestamp = result.started_at.astimezone(timezone.utc).strftime("%Y%m%d-%H%M%S")
    return (Path("reports") / f"randbits-{timestamp}.md").resolve()


__all__ = [
    "ReportTemplate",
    "build_markdown_report",
    "print_console_summary",
    "verdict_label",
    "write_markdown_report",
]
