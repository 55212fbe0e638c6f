"""Centralized logging configuration using Loguru.

Usage:
    from bumpall.utils.logging import logger
    logger.warning("Message")
    logger.debug("Debug message")  # Only shows if BUMPALL_LOG_LEVEL=DEBUG

Environment Variables:
    BUMPALL_LOG_LEVEL: DEBUG|INFO|WARNING|ERROR (default: WARNING)
    BUMPALL_LOG_JSON: 0|1 (default: 0, human-readable)
    BUMPALL_LOG_FILE: path to log file (optional)
"""

import json
import os
import sys

from loguru import logger

from .constants import DEFAULT_LOG_LEVEL, ENV_LOG_FILE, ENV_LOG_JSON, ENV_LOG_LEVEL

# Remove default handler
logger.remove()


def resolve_log_level(environ=None) -> str:
    """Level name from BUMPALL_LOG_LEVEL, WARNING when unset or empty."""
    environ = os.environ if environ is None else environ
    return (environ.get(ENV_LOG_LEVEL) or DEFAULT_LOG_LEVEL).upper()


_log_level = resolve_log_level()
_json_mode = os.environ.get(ENV_LOG_JSON, "0") == "1"
_log_file = os.environ.get(ENV_LOG_FILE)


def _to_ndjson(record) -> str:
    """Render a loguru record as a single NDJSON line."""
    entry = {
        "level": record["level"].name,
        "time": int(record["time"].timestamp() * 1000),
        "msg": record["message"],
        "pid": record["process"].id,
    }
    for key, value in record["extra"].items():
        entry[key] = value
    if record["exception"]:
        entry["err"] = {
            "type": record["exception"].type.__name__ if record["exception"].type else "Error",
            "message": str(record["exception"].value) if record["exception"].value else "",
        }
    return json.dumps(entry, default=str)


def ndjson_sink(message):
    """Write log records as NDJSON to stderr.

    stdout is reserved for the command's own output, so machine logs go to
    stderr as well.
    """
    # Never call logger.* inside a sink - causes infinite recursion
    sys.stderr.write(_to_ndjson(message.record) + "\n")
    sys.stderr.flush()


_human_format = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}:{function}:{line}</cyan> - "
    "<level>{message}</level>"
)

logger.level("DEBUG", color="<blue>")
logger.level("INFO", color="<white>")
logger.level("WARNING", color="<yellow>")
logger.level("ERROR", color="<red>")

if _json_mode:
    logger.add(ndjson_sink, level=_log_level, colorize=False)
else:
    logger.add(
        sys.stderr,
        level=_log_level,
        format=_human_format,
        colorize=None,  # Auto-detect: colors if TTY, plain if piped
    )

if _log_file:

    def _file_sink(message):
        """Append NDJSON records to the configured log file."""
        with open(_log_file, "a", encoding="utf-8") as f:
            f.write(_to_ndjson(message.record) + "\n")

    logger.add(_file_sink, level="DEBUG")


__all__ = ["logger", "ndjson_sink", "resolve_log_level"]
