#!/usr/bin/env python3
"""
paths.py
-------------------
Path constants for dynamo-rename.

Runs leave logs and snapshots of the records they rewrote under a single
state directory:

    STATE_DIR/          # ~/.dynrename, or $DYNRENAME_HOME
    ├── logs/           # Rotating operation and error logs
    └── snapshots/      # Original records captured before each write-back
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import os
from pathlib import Path

STATE_ENV_VAR = "DYNRENAME_HOME"


def _get_state_dir() -> Path:
    """
    Determine the state directory.

    Returns:
        $DYNRENAME_HOME when set, otherwise ~/.dynrename
    """
    override = os.environ.get(STATE_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".dynrename"


# ----- State directory -----
STATE_DIR: Path = _get_state_dir()

# ---- Logs & Snapshots ----
LOG_DIR = STATE_DIR / "logs"
SNAPSHOT_DIR = STATE_DIR / "snapshots"
