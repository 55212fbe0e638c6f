"""Central UI handler for bumpall.

Single source of truth for Rich console styling. Import this instead of
instantiating Console() in every command file.

Usage:
    from bumpall.ui import console, print_message

    print_message("Checking for outdated packages...")
    console.print("[safe]1.2.3[/safe]")
"""

import sys

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

from bumpall.classifier import ClassifiedDependency, Severity

BUMPALL_THEME = Theme({
    "info": "bold cyan",
    "warning": "bold yellow",
    "error": "bold red",
    "success": "bold green",
    "safe": "cyan",
    "breaking": "yellow",
    "dim": "dim white",
})

# Single console instance - import this, don't create your own
console = Console(
    theme=BUMPALL_THEME,
    force_terminal=sys.stdout.isatty()
)

SEVERITY_STYLES = {
    Severity.SAFE: "safe",
    Severity.BREAKING: "breaking",
}


def print_message(message: str, style: str = "info") -> None:
    """Print a status line followed by a blank line."""
    console.print(f"[{style}]{message}[/{style}]")
    console.print()


def print_error(msg: str) -> None:
    console.print(f"[error]ERROR:[/error] {msg}")


def print_upgrade_line(dep: ClassifiedDependency) -> None:
    """Print ``name current -> target`` with the target coloured by severity."""
    style = SEVERITY_STYLES[dep.severity]
    console.print(
        f"  {escape(dep.name)} {escape(dep.record.current_version)} "
        f"-> [{style}]{escape(dep.target_version)}[/{style}]",
        highlight=False,
    )


def build_report_table(classified: list[ClassifiedDependency]) -> Table:
    """Table of every parsed record with its upgrade decision."""
    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2, 0, 0))
    table.add_column("Package")
    table.add_column("Current")
    table.add_column("Wanted")
    table.add_column("Latest")
    table.add_column("Dependent", style="dim")
    table.add_column("Target")
    table.add_column("Action")

    for dep in classified:
        style = SEVERITY_STYLES[dep.severity]
        action = dep.skip_reason.value if dep.should_skip else "bump"
        table.add_row(
            escape(dep.name),
            escape(dep.record.current_version),
            escape(dep.record.wanted_version),
            escape(dep.record.latest_version),
            escape(dep.record.owning_directory),
            f"[{style}]{escape(dep.target_version)}[/{style}]",
            action,
        )
    return table
