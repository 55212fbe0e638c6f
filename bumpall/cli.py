"""bumpall CLI - Main entry point and command registration hub."""
# ruff: noqa: E402 - Intentional lazy loading: commands imported after cli group definition

import click

from bumpall import __version__


@click.group()
@click.version_option(version=__version__, prog_name="bumpall")
@click.help_option("-h", "--help")
def cli():
    """bumpall - bump outdated npm dependencies

    \b
    QUICK START:
      bumpall bump              # Bump to wanted versions
      bumpall bump --latest     # Bump to latest, including majors
      bumpall bump --dry-run    # Show what would be bumped

    \b
    For detailed options: bumpall <command> --help"""
    pass


from bumpall.commands.bump import bump
from bumpall.commands.report import report

cli.add_command(bump)
cli.add_command(report)


def main():
    """Main entry point for console script."""
    cli()


if __name__ == "__main__":
    main()
