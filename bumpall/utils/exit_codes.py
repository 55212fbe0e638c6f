"""Centralized exit codes for the bumpall CLI."""


class ExitCodes:
    """Standard exit codes for bumpall commands."""

    SUCCESS = 0

    INSTALL_FAILED = 1

    # EX_SOFTWARE from sysexits.h, npm could not be run at all
    NPM_FAILURE = 70

