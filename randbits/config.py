"""Configuration parsing utilities for the random bits battery.

Only the presentation of the battery is configurable: which tests run, how
many worker threads execute them, and where reports and run logs go. The
generator parameters and acceptance bounds live in :mod:`randbits.constants`.
"""

from __future__ import annotations

import configparser
from dataclasses import dataclass, field
from pathlib import Path
from typing import Tuple

from .constants import DEFAULT_TEST_ORDER
from .errors import InvalidConfigurationError, MissingFileError

RUN_LOG_FORMATS = ("jsonl", "csv")
DEFAULT_RUN_LOG_RETENTION = 100


@dataclass(frozen=True)
class TestsSection:
    """Names of the enabled tests in execution order."""

    enabled_tests: Tuple[str, ...]


@dataclass(frozen=True)
class ExecutionSection:
    max_workers: int = 1


@dataclass(frozen=True)
class OutputSection:
    """Options controlling reports and the run history log."""

    report_path: Path | None
    log_results: bool
    run_log_path: Path
    run_log_format: str
    run_log_retention: int | None


@dataclass(frozen=True)
class RandBitsConfig:
    """Aggregate configuration container returned by :func:`load_config`."""

    tests: TestsSection
    execution: ExecutionSection
    output: OutputSection
    source: Path | None = None
    warnings: Tuple[str, ...] = field(default_factory=tuple)


def load_config(path: Path | None = None) -> RandBitsConfig:
    """Load and validate an INI configuration file.

    ``path=None`` yields the defaults: every test enabled, sequential
    execution, no report and no run log.
    """

    parser = configparser.ConfigParser()
    if path is None:
        base_dir = Path.cwd()
    else:
        path = Path(path).expanduser()
        try:
            with path.open("r", encoding="utf-8") as config_file:
                parser.read_file(config_file)
        except FileNotFoundError as exc:
            raise MissingFileError(f"Configuration file not found: {path}") from exc
        except OSError as exc:  # pragma: no cover - filesystem guard
            raise MissingFileError(f"Could not read configuration file: {path}") from exc
        except configparser.Error as exc:
            raise InvalidConfigurationError(f"Malformed configuration file {path}: {exc}") from exc
        base_dir = path.resolve().parent

    warnings: list[str] = []
    tests_section = _parse_tests(parser, warnings)
    execution_section = _parse_execution(parser)
    output_section = _parse_output(parser, base_dir)

    return RandBitsConfig(
        tests=tests_section,
        execution=execution_section,
        output=output_section,
        source=path,
        warnings=tuple(warnings),
    )


def _parse_tests(parser: configparser.ConfigParser, warnings: list[str]) -> TestsSection:
    if not parser.has_section("tests"):
        return TestsSection(enabled_tests=DEFAULT_TEST_ORDER)

    switches = {name: True for name in DEFAULT_TEST_ORDER}
    for name in parser["tests"]:
        try:
            switches[name] = parser.getboolean("tests", name)
        except ValueError as exc:
            raise InvalidConfigurationError(
                f"Test '{name}' in [tests] must be a boolean value."
            ) from exc

    enabled = tuple(name for name, is_enabled in switches.items() if is_enabled)
    if not enabled:
        raise InvalidConfigurationError("At least one test must be enabled in [tests] section.")
    disabled = [name for name in DEFAULT_TEST_ORDER if not switches[name]]
    if disabled:
        warnings.append(
            "Battery verdict excludes disabled tests: " + ", ".join(disabled) + "."
        )
    return TestsSection(enabled_tests=enabled)


def _parse_execution(parser: configparser.ConfigParser) -> ExecutionSection:
    if not parser.has_section("execution"):
        return ExecutionSection()
    section = parser["execution"]
    raw_workers = section.get("max_workers", "1").strip()
    try:
        max_workers = int(raw_workers)
    except ValueError as exc:
        raise InvalidConfigurationError(
            "Option 'max_workers' in [execution] must be an integer value."
        ) from exc
    if max_workers < 1:
        raise InvalidConfigurationError(
            "Option 'max_workers' in [execution] must be at least 1."
        )
    return ExecutionSection(max_workers=max_workers)


def _parse_output(parser: configparser.ConfigParser, base_dir: Path) -> OutputSection:
    report_path: Path | None = None
    log_results = False
    log_path = (base_dir / "logs" / "run_log.jsonl").resolve()
    log_format = "jsonl"
    log_retention: int | None = DEFAULT_RUN_LOG_RETENTION

    if parser.has_section("output"):
        section = parser["output"]
        report_path = _read_path(section, ("report_path",), base_dir) or report_path
        log_results = _read_bool(section, "log_results", "output", log_results)

    # [logging] takes precedence over the log options in [output].
    for section_name in ("output", "logging"):
        if not parser.has_section(section_name):
            continue
        section = parser[section_name]
        if section_name == "logging":
            log_results = _read_bool(section, "enabled", section_name, True)
        log_path = _read_path(section, ("log_path", "path"), base_dir) or log_path
        log_format = _read_format(section, section_name) or log_format
        log_retention = _read_retention(section, section_name, log_retention)

    return OutputSection(
        report_path=report_path,
        log_results=log_results,
        run_log_path=log_path,
        run_log_format=log_format,
        run_log_retention=log_retention,
    )


def _read_bool(
    section: configparser.SectionProxy, key: str, section_name: str, default: bool
) -> bool:
    if key not in section:
        return default
    try:
        return section.getboolean(key)
    except ValueError as exc:
        raise InvalidConfigurationError(
            f"Option '{key}' in [{section_name}] must be a boolean value."
        ) from exc


def _read_path(
    section: configparser.SectionProxy, keys: Tuple[str, ...], base_dir: Path
) -> Path | None:
    for key in keys:
        raw_path = section.get(key, "").strip()
        if raw_path:
            candidate = Path(raw_path).expanduser()
            if not candidate.is_absolute():
                candidate = base_dir / candidate
            return candidate.resolve()
    return None


def _read_format(section: configparser.SectionProxy, section_name: str) -> str | None:
    for key in ("log_format", "format"):
        if key in section:
            raw_format = section[key].strip().lower()
            if raw_format not in RUN_LOG_FORMATS:
                raise InvalidConfigurationError(
                    f"Option '{key}' in [{section_name}] must be either 'jsonl' or 'csv'."
                )
            return raw_format
    return None


def _read_retention(
    section: configparser.SectionProxy, section_name: str, default: int | None
) -> int | None:
    for key in ("log_retention", "retention"):
        raw_retention = section.get(key, "").strip()
        if raw_retention:
            try:
                parsed = int(raw_retention)
            except ValueError as exc:
                raise InvalidConfigurationError(
                    f"Option '{key}' in [{section_name}] must be an integer value."
                ) from exc
            return parsed if parsed > 0 else None
    return default


__all__ = [
    "ExecutionSection",
    "OutputSection",
    "RandBitsConfig",
    "TestsSection",
    "load_config",
]
