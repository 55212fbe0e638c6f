"""Upgrade decisions for parsed dependency records."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from bumpall.package import DependencyRecord
from bumpall.utils.constants import MISSING


class UpgradeStyle(Enum):
    """Which version column of the report to install."""

    WANTED = "wanted"
    LATEST = "latest"


class Severity(Enum):
    """Whether the bump stays inside the declared semver range."""

    SAFE = "safe"
    BREAKING = "breaking"


class SkipReason(Enum):
    UP_TO_DATE = "up-to-date"
    NO_TARGET = "no-target"
    WORKSPACE = "workspace"


@dataclass(frozen=True)
class UpgradePolicy:
    """The part of the configuration the classifier reads.

    ``current_project_directory`` is the basename of the directory the tool
    runs in, or None when it could not be determined.
    """

    upgrade_style: UpgradeStyle = UpgradeStyle.WANTED
    current_project_directory: str | None = None


@dataclass(frozen=True)
class ClassifiedDependency:
    record: DependencyRecord
    target_version: str
    install_directive: str
    severity: Severity
    skip_reason: SkipReason | None = None

    @property
    def should_skip(self) -> bool:
        return self.skip_reason is not None

    @property
    def name(self) -> str:
        return self.record.name


def target_version_for(record: DependencyRecord, style: UpgradeStyle) -> str:
    if style is UpgradeStyle.LATEST:
        return record.latest_version
    return record.wanted_version


def severity_for(record: DependencyRecord, style: UpgradeStyle) -> Severity:
    # wanted always satisfies the declared range
    if style is UpgradeStyle.WANTED:
        return Severity.SAFE
    if record.wanted_version == record.latest_version:
        return Severity.SAFE
    return Severity.BREAKING


def skip_reason_for(
    record: DependencyRecord, target_version: str, policy: UpgradePolicy
) -> SkipReason | None:
    """Decide whether a record should be left alone.

    A dependency already at the target is a no-op, and one whose target
    column reads MISSING has nothing to install. A dependency declared by
    another workspace member cannot be bumped from here, and an unknown
    project directory is treated the same way.
    """
    if record.current_version == target_version:
        return SkipReason.UP_TO_DATE
    if target_version == MISSING:
        return SkipReason.NO_TARGET
    if (
        policy.current_project_directory is None
        or record.owning_directory != policy.current_project_directory
    ):
        return SkipReason.WORKSPACE
    return None


def classify(record: DependencyRecord, policy: UpgradePolicy) -> ClassifiedDependency:
    """Compute target version, install directive, severity and skip decision."""
    target = target_version_for(record, policy.upgrade_style)
    return ClassifiedDependency(
        record=record,
        target_version=target,
        install_directive=f"{record.name}@{target}",
        severity=severity_for(record, policy.upgrade_style),
        skip_reason=skip_reason_for(record, target, policy),
    )
