"""bumpall utilities package."""

from .constants import MANIFEST_BACKUP_FILE, MANIFEST_FILE, MISSING, NPM
from .error_handler import handle_exceptions
from .exit_codes import ExitCodes
from .logging import logger

__all__ = [
    "MANIFEST_FILE",
    "MANIFEST_BACKUP_FILE",
    "MISSING",
    "NPM",
    "handle_exceptions",
    "ExitCodes",
    "logger",
]
