"""Configuration for a single bumpall run."""

from __future__ import annotations

import copy
import fnmatch
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from bumpall.classifier import UpgradePolicy, UpgradeStyle
from bumpall.config_runtime import DEFAULTS, load_runtime_config
from bumpall.planner import ReportFormat
from bumpall.utils.constants import LEGACY_PEER_DEPS_FLAG


def current_dir_name(cwd: str | os.PathLike | None = None) -> str | None:
    """Basename of the working directory, or None if it cannot be read."""
    try:
        path = Path(cwd).resolve() if cwd is not None else Path.cwd()
    except OSError:
        return None
    return path.name or None


@dataclass(frozen=True)
class BumpConfig:
    upgrade_style: UpgradeStyle = UpgradeStyle.WANTED
    additional_install_args: tuple[str, ...] = ()
    current_dir_name: str | None = None
    include_glob: str | None = None
    is_dry_run: bool = False
    is_patch_mode: bool = False
    verbose: bool = False
    report_format: ReportFormat = ReportFormat.PARSEABLE
    project_root: Path = Path(".")
    runtime: dict[str, Any] = field(
        default_factory=lambda: copy.deepcopy(DEFAULTS), compare=False
    )

    @classmethod
    def from_options(
        cls,
        latest: bool = False,
        patch: bool = False,
        legacy_peer_deps: bool = False,
        verbose: bool = False,
        dry_run: bool = False,
        include: str | None = None,
        json_report: bool = False,
        cwd: str | os.PathLike | None = None,
    ) -> BumpConfig:
        """Build the config from CLI options and the working directory."""
        additional_install_args = []
        if legacy_peer_deps:
            additional_install_args.append(LEGACY_PEER_DEPS_FLAG)

        root = Path(cwd) if cwd is not None else Path(".")

        return cls(
            upgrade_style=UpgradeStyle.LATEST if latest else UpgradeStyle.WANTED,
            additional_install_args=tuple(additional_install_args),
            current_dir_name=current_dir_name(cwd),
            include_glob=include or None,
            is_dry_run=dry_run,
            is_patch_mode=patch,
            verbose=verbose,
            report_format=ReportFormat.JSON if json_report else ReportFormat.PARSEABLE,
            project_root=root,
            runtime=load_runtime_config(str(root)),
        )

    @property
    def policy(self) -> UpgradePolicy:
        return UpgradePolicy(
            upgrade_style=self.upgrade_style,
            current_project_directory=self.current_dir_name,
        )

    def includes(self, name: str) -> bool:
        """Glob filter on dependency names; everything passes without a glob."""
        if self.include_glob is None:
            return True
        return fnmatch.fnmatchcase(name, self.include_glob)

    @property
    def npm_executable(self) -> str:
        return self.runtime["npm"]["executable"]

    @property
    def outdated_timeout(self) -> int:
        return self.runtime["timeouts"]["outdated"]

    @property
    def manifest_path(self) -> Path:
        return self.project_root / self.runtime["paths"]["manifest"]

    @property
    def backup_path(self) -> Path:
        return self.project_root / self.runtime["paths"]["backup"]
