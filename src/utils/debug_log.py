"""
Debug Log Utility

Provides optional, safe file-based debug logging for tracing loads and renders.
Logs are written only when enabled via environment variable; failures are
swallowed so the viewer never crashes due to logging.

Inputs:
    - debug_log(location, message, data) calls from application code
    - Environment: MPRVIEWER_DEBUG_LOG (set to 1, true, or yes to enable)

Outputs:
    - When enabled: appends JSON lines to <project_root>/.debug/debug.log
    - When disabled or on error: no side effects

Requirements:
    - Standard library only: pathlib, os, json, time
"""

import json
import os
import time
from pathlib import Path
from typing import Any, Dict

# This file is src/utils/debug_log.py -> parent=utils, parent.parent=src, parent.parent.parent=project root
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

_DEBUG_ENV = os.getenv("MPRVIEWER_DEBUG_LOG", "0").strip().lower()
DEBUG_LOG_ENABLED = _DEBUG_ENV in ("1", "true", "yes")


def get_log_path() -> Path:
    """Location of the debug log file."""
    return _PROJECT_ROOT / ".debug" / "debug.log"


def debug_log(location: str, message: str, data: Dict[str, Any]) -> None:
    """
    Append one JSON log line to .debug/debug.log when debug logging is enabled.

    Failures (missing dir, permission, disk full, unserializable data) are
    caught and ignored.

    Args:
        location: Call site identifier (e.g. "volume_builder.py:build_volume").
        message: Short description of the event.
        data: Arbitrary dict of context (should be JSON-serializable).
    """
    if not DEBUG_LOG_ENABLED:
        return
    try:
        log_path = get_log_path()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "location": location,
            "message": message,
            "data": data,
            "timestamp": int(time.time() * 1000),
        }
        with open(log_path, "a", encoding="utf-8") as f:
            f.write(json.dumps(payload, default=str) + "\n")
    except Exception:
        pass
