"""Runtime configuration for bumpall - npm executable, timeouts and paths."""

import copy
import json
import os
from pathlib import Path
from typing import Any

from bumpall.utils.constants import (
    ENV_PREFIX,
    MANIFEST_BACKUP_FILE,
    MANIFEST_FILE,
    NPM,
    PROJECT_CONFIG_FILE,
)
from bumpall.utils.logging import logger

DEFAULTS = {
    "npm": {
        "executable": NPM,
    },
    "timeouts": {
        "outdated": 300,
    },
    "paths": {
        "manifest": str(MANIFEST_FILE),
        "backup": str(MANIFEST_BACKUP_FILE),
    },
}


def load_runtime_config(root: str = ".") -> dict[str, Any]:
    """
    Load runtime configuration from .bumpall.json and environment variables.

    Config priority (highest to lowest):
    1. Environment variables (BUMPALL_<SECTION>_<KEY>)
    2. .bumpall.json in the project root
    3. Built-in defaults

    Values whose type does not match the default are ignored.
    """
    cfg = copy.deepcopy(DEFAULTS)

    path = Path(root) / PROJECT_CONFIG_FILE
    try:
        if path.exists():
            with open(path, encoding="utf-8") as f:
                user = json.load(f)

            if isinstance(user, dict):
                for section in cfg:
                    if section in user and isinstance(user[section], dict):
                        for key, value in user[section].items():
                            if key in cfg[section] and isinstance(value, type(cfg[section][key])):
                                cfg[section][key] = value
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Could not load config file from {path}: {err}", path=path, err=str(e))

    for section in cfg:
        for key in cfg[section]:
            env_var = f"{ENV_PREFIX}_{section.upper()}_{key.upper()}"
            if env_var in os.environ:
                value = os.environ[env_var]
                try:
                    if isinstance(cfg[section][key], int):
                        cfg[section][key] = int(value)
                    else:
                        cfg[section][key] = value
                except ValueError:
                    logger.warning(
                        "Invalid value for {var}: {value!r}, using {default!r}",
                        var=env_var,
                        value=value,
                        default=cfg[section][key],
                    )

    return cfg
