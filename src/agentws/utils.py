"""Shared utilities for agentws.

Provides:
  - agentws_dir(): resolve config directory from AGENTWS_DIR env var.
  - atomic_write_json(): crash-safe JSON file writes via temp+rename.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any


def agentws_dir() -> Path:
    """Resolve config directory from AGENTWS_DIR env var, default ~/.agentws."""
    raw = os.environ.get("AGENTWS_DIR", "")
    if raw:
        return Path(raw).expanduser()
    return Path.home() / ".agentws"


def atomic_write_json(path: Path, data: Any, indent: int = 2) -> None:
    """Write JSON data to a file atomically.

    Writes to a temporary file in the same directory, then renames it
    to the target path. A crash mid-write leaves the old file untouched.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    content = json.dumps(data, indent=indent) + "\n"

    fd, tmp_path = tempfile.mkstemp(
        dir=str(path.parent), suffix=".tmp", prefix=f".{path.name}."
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.replace(tmp_path, str(path))
    except BaseException:
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise
