"""Centralized constants for bumpall.

Single source of truth for npm names, manifest paths and environment
variable names used across modules.
"""

import platform
from pathlib import Path

IS_WINDOWS = platform.system() == "Windows"

# ============================================================================
# NPM
# ============================================================================

NPM = "npm.cmd" if IS_WINDOWS else "npm"

# npm writes this in place of a version for declared but uninstalled deps
MISSING = "MISSING"

LEGACY_PEER_DEPS_FLAG = "--legacy-peer-deps"

# ============================================================================
# FILES
# ============================================================================

MANIFEST_FILE = Path("package.json")
MANIFEST_BACKUP_FILE = Path("package.json.bkup")
PROJECT_CONFIG_FILE = Path(".bumpall.json")

# Manifest sections rewritten by patch mode
PATCH_MODE_SECTIONS = ("dependencies", "devDependencies")

# ============================================================================
# ENVIRONMENT VARIABLES
# ============================================================================

ENV_PREFIX = "BUMPALL"
ENV_LOG_LEVEL = "BUMPALL_LOG_LEVEL"
ENV_LOG_JSON = "BUMPALL_LOG_JSON"
ENV_LOG_FILE = "BUMPALL_LOG_FILE"
DEFAULT_LOG_LEVEL = "WARNING"
