"""npm subprocess calls: the outdated report, install, and patch mode.

Patch mode narrows every caret range in package.json to a tilde range while
``npm outdated`` runs, so that "wanted" becomes the latest patch release.
The original manifest is backed up first and always restored afterwards.
"""

from __future__ import annotations

import json
import shutil
import subprocess
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from bumpall.config import BumpConfig
from bumpall.planner import ReportFormat
from bumpall.utils.constants import PATCH_MODE_SECTIONS
from bumpall.utils.logging import logger


class NpmError(RuntimeError):
    """npm could not be run, or patch mode could not prepare the manifest."""


def prefix_with_tilde(version: str) -> str:
    """Turn ``^1.2.3`` into ``~1.2.3``; other ranges just get ``~`` prepended."""
    if version.startswith("^"):
        version = version[1:]
    return f"~{version}"


def prefix_all_entries_with_tilde(manifest: dict[str, Any], section: str) -> None:
    """Rewrite the string values of one dependency section in place."""
    deps = manifest.get(section)
    if not isinstance(deps, dict):
        return

    manifest[section] = {
        name: prefix_with_tilde(spec) if isinstance(spec, str) else spec
        for name, spec in deps.items()
    }


def patch_mode_init(manifest_path: Path, backup_path: Path) -> None:
    """Back up package.json and write the tilde-narrowed version in its place."""
    shutil.copy2(manifest_path, backup_path)

    with open(manifest_path, encoding="utf-8") as f:
        manifest = json.load(f)

    for section in PATCH_MODE_SECTIONS:
        prefix_all_entries_with_tilde(manifest, section)

    with open(manifest_path, "w", encoding="utf-8") as f:
        json.dump(manifest, f, indent=2)
        f.write("\n")


def patch_mode_cleanup(manifest_path: Path, backup_path: Path) -> None:
    """Restore package.json from the backup and remove the backup."""
    shutil.copy2(backup_path, manifest_path)
    backup_path.unlink()


def _restore(manifest_path: Path, backup_path: Path) -> None:
    try:
        patch_mode_cleanup(manifest_path, backup_path)
    except OSError as e:
        raise NpmError(f"Could not restore {manifest_path} from {backup_path}: {e}") from e


@contextmanager
def patch_mode(config: BumpConfig):
    """Hold the narrowed manifest in place for the duration of the block.

    Raises:
        NpmError: the manifest could not be narrowed or restored
    """
    if not config.is_patch_mode:
        yield
        return

    manifest_path, backup_path = config.manifest_path, config.backup_path
    try:
        patch_mode_init(manifest_path, backup_path)
    except (OSError, json.JSONDecodeError) as e:
        if backup_path.exists():
            _restore(manifest_path, backup_path)
        raise NpmError(f"Could not prepare {manifest_path} for patch mode: {e}") from e

    logger.debug("Patch mode: {path} narrowed to tilde ranges", path=manifest_path)
    try:
        yield
    finally:
        _restore(manifest_path, backup_path)
        logger.debug("Patch mode: {path} restored", path=manifest_path)


def outdated_command(config: BumpConfig) -> list[str]:
    fmt_flag = "--json" if config.report_format is ReportFormat.JSON else "--parseable"
    return [config.npm_executable, "outdated", fmt_flag]


def install_command(config: BumpConfig, install_args: list[str]) -> list[str]:
    return [config.npm_executable, "i", *install_args]


def run_outdated(config: BumpConfig) -> str:
    """Run ``npm outdated`` and return its stdout.

    npm exits 1 whenever something is outdated, so the exit status is not
    treated as failure.

    Raises:
        NpmError: npm could not be started or timed out
    """
    cmd = outdated_command(config)
    logger.debug("Running {cmd}", cmd=" ".join(cmd))

    with patch_mode(config):
        try:
            result = subprocess.run(
                cmd,
                cwd=config.project_root,
                capture_output=True,
                text=True,
                encoding="utf-8",
                timeout=config.outdated_timeout,
                check=False,
            )
        except FileNotFoundError as e:
            raise NpmError(f"{config.npm_executable} not found on PATH") from e
        except subprocess.TimeoutExpired as e:
            raise NpmError(f"npm outdated timed out after {config.outdated_timeout}s") from e
        except OSError as e:
            raise NpmError(str(e)) from e

    if result.stderr and config.verbose:
        logger.warning("npm outdated: {stderr}", stderr=result.stderr.strip())

    return result.stdout or ""


def run_install(config: BumpConfig, install_args: list[str]) -> int:
    """Run ``npm i`` with the given arguments and return its exit status.

    npm output is only shown in verbose mode.

    Raises:
        NpmError: npm could not be started
    """
    cmd = install_command(config, install_args)
    logger.debug("Running {cmd}", cmd=" ".join(cmd))

    stream = None if config.verbose else subprocess.DEVNULL
    try:
        result = subprocess.run(
            cmd,
            cwd=config.project_root,
            stdout=stream,
            stderr=stream,
            check=False,
        )
    except FileNotFoundError as e:
        raise NpmError(f"{config.npm_executable} not found on PATH") from e
    except OSError as e:
        raise NpmError(str(e)) from e

    return result.returncode
