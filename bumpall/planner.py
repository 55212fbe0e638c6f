"""Turn raw outdated output into the list of packages to install."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from enum import Enum

from bumpall.classifier import ClassifiedDependency, UpgradePolicy, classify
from bumpall.package import (
    DependencyRecord,
    ParseError,
    iter_json_entries,
    load_json_report,
    parse_json_entry,
    parse_line,
)
from bumpall.utils.logging import logger


class ReportFormat(Enum):
    PARSEABLE = "parseable"
    JSON = "json"


def parse_report_lines(text: str) -> list[DependencyRecord]:
    """Parse every line of a ``--parseable`` report, dropping bad lines."""
    records = []
    for line in text.splitlines():
        if not line.strip():
            continue
        try:
            records.append(parse_line(line))
        except ParseError as e:
            logger.debug("Dropping report line {line!r}: {err}", line=line, err=str(e))
    return records


def parse_report_json(text: str) -> list[DependencyRecord]:
    """Parse a ``--json`` report, dropping entries that do not parse."""
    try:
        report = load_json_report(text)
    except ParseError as e:
        logger.warning("Could not read JSON outdated report: {err}", err=str(e))
        return []

    records = []
    for name, entry in iter_json_entries(report):
        try:
            records.append(parse_json_entry(name, entry))
        except ParseError as e:
            logger.debug("Dropping report entry {name!r}: {err}", name=name, err=str(e))
    return records


def parse_report(text: str, fmt: ReportFormat = ReportFormat.PARSEABLE) -> list[DependencyRecord]:
    if fmt is ReportFormat.JSON:
        return parse_report_json(text)
    return parse_report_lines(text)


def classify_all(
    records: Iterable[DependencyRecord], policy: UpgradePolicy
) -> list[ClassifiedDependency]:
    return [classify(record, policy) for record in records]


def plan_upgrades(
    records: Iterable[DependencyRecord],
    policy: UpgradePolicy,
    include: Callable[[str], bool] | None = None,
) -> list[ClassifiedDependency]:
    """Classify records and keep the ones that should be installed.

    Report order is preserved. ``include`` is applied after classification.
    """
    planned = []
    for dep in classify_all(records, policy):
        if dep.should_skip:
            logger.debug(
                "Skipping {name} ({reason})", name=dep.name, reason=dep.skip_reason.value
            )
            continue
        if include is not None and not include(dep.name):
            logger.debug("Skipping {name} (not included)", name=dep.name)
            continue
        planned.append(dep)
    return planned


def build_install_args(
    planned: Iterable[ClassifiedDependency], extra_args: Iterable[str] = ()
) -> list[str]:
    """Install directives in order, followed by the extra npm flags verbatim."""
    return [dep.install_directive for dep in planned] + list(extra_args)
