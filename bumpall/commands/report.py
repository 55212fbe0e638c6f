"""Classify a saved npm outdated report without running npm."""

import click

from bumpall.config import BumpConfig, current_dir_name
from bumpall.ui import build_report_table, console, print_message
from bumpall.utils.error_handler import handle_exceptions


@click.command()
@handle_exceptions
@click.argument("report_file", type=click.File("r", encoding="utf-8"), default="-")
@click.option(
    "-l", "--latest", is_flag=True,
    help="Classify against the latest version instead of the wanted one",
)
@click.option("-i", "--include", default=None, help="Only show packages which match the glob pattern provided")
@click.option("--json", "json_report", is_flag=True, help="Report is npm outdated --json output")
@click.option(
    "--project-dir", default=None,
    help="Directory name of the project to bump (default: current directory name)",
)
def report(report_file, latest, include, json_report, project_dir):
    """Show the upgrade decision for every entry of a saved report.

    Reads npm outdated --parseable (or --json) output from REPORT_FILE, or
    from stdin when REPORT_FILE is omitted or "-".

    \b
    Examples:
      npm outdated --parseable | bumpall report
      npm outdated --json > out.json && bumpall report --json out.json
      bumpall report --project-dir web report.txt"""
    from bumpall.classifier import UpgradePolicy
    from bumpall.planner import classify_all, parse_report

    config = BumpConfig.from_options(latest=latest, include=include, json_report=json_report)
    policy = UpgradePolicy(
        upgrade_style=config.upgrade_style,
        current_project_directory=project_dir or current_dir_name(),
    )

    records = parse_report(report_file.read(), config.report_format)
    classified = [dep for dep in classify_all(records, policy) if config.includes(dep.name)]

    if not classified:
        print_message("No entries found in report", style="dim")
        return

    console.print(build_report_table(classified))

    to_bump = sum(1 for dep in classified if not dep.should_skip)
    console.print(f"\n{to_bump} of {len(classified)} packages would be bumped", highlight=False)
