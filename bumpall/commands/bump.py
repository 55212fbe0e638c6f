"""Bump outdated npm dependencies."""

import sys

import click

from bumpall.config import BumpConfig
from bumpall.ui import console, print_error, print_message, print_upgrade_line
from bumpall.utils.error_handler import handle_exceptions
from bumpall.utils.exit_codes import ExitCodes


@click.command()
@handle_exceptions
@click.option(
    "-l", "--latest", is_flag=True,
    help="Bump dependencies to latest possible version (includes major changes)",
)
@click.option("-p", "--patch", is_flag=True, help="Update to latest patch version only (experimental)")
@click.option("--legacy-peer-deps", is_flag=True, help="Apply --legacy-peer-deps to npm install")
@click.option(
    "-v", "--verbose", is_flag=True,
    help="Include all possible messages in console output (e.g. warnings from npm itself)",
)
@click.option(
    "-d", "--dry-run", is_flag=True,
    help="List dependencies which would be bumped, but don't update them",
)
@click.option("-i", "--include", default=None, help="Only bump packages which match the glob pattern provided")
@click.option("--json", "json_report", is_flag=True, help="Read npm outdated --json instead of --parseable")
def bump(latest, patch, legacy_peer_deps, verbose, dry_run, include, json_report):
    """Bump npm dependencies, by default to the latest wanted version.

    Runs npm outdated, keeps the direct dependencies of the current project
    that are behind, and installs them in one npm install call.

    \b
    Examples:
      bumpall bump                  # Bump within declared ranges
      bumpall bump --latest         # Include major version changes
      bumpall bump -d -i "@babel/*" # Preview bumps for one scope

    \b
    Exit Codes:
      0  = Bumped, nothing to do, or dry run
      1  = npm install failed
      70 = npm could not be run"""
    from bumpall.npm_cmd import NpmError, run_install, run_outdated
    from bumpall.planner import build_install_args, parse_report, plan_upgrades

    config = BumpConfig.from_options(
        latest=latest,
        patch=patch,
        legacy_peer_deps=legacy_peer_deps,
        verbose=verbose,
        dry_run=dry_run,
        include=include,
        json_report=json_report,
    )

    print_message("Checking for outdated packages...")

    try:
        output = run_outdated(config)
    except NpmError as e:
        print_error(str(e))
        sys.exit(ExitCodes.NPM_FAILURE)

    records = parse_report(output, config.report_format)
    planned = plan_upgrades(records, config.policy, include=config.includes)

    if not planned:
        print_message("No outdated packages found", style="success")
        return

    console.print("Updates required")
    for dep in planned:
        print_upgrade_line(dep)
    console.print()

    if config.is_dry_run:
        print_message("Dry run, exiting...", style="dim")
        return

    print_message("Upgrading packages")

    try:
        status = run_install(config, build_install_args(planned, config.additional_install_args))
    except NpmError as e:
        print_error(str(e))
        sys.exit(ExitCodes.NPM_FAILURE)

    if status == 0:
        print_message("All packages bumped", style="success")
    else:
        print_message("Issue installing packages - try running manually", style="error")
        sys.exit(ExitCodes.INSTALL_FAILED)
