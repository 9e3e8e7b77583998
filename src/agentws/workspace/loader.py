"""Bootstrap file loading — read workspace files for session start-up.

load_workspace_bootstrap_files() returns every logical file in catalogue
order, marking absent ones as missing. The memory slot accepts MEMORY.md
or memory.md and yields at most one entry.

filter_bootstrap_files_for_session() narrows the list for sub-agent
sessions, which only receive AGENTS.md and TOOLS.md.
"""

import logging
from pathlib import Path

from .files import (
    DEFAULT_AGENTS_FILENAME,
    DEFAULT_TOOLS_FILENAME,
    MEMORY_FILENAMES,
    BootstrapFile,
    BootstrapFileKind,
)

logger = logging.getLogger(__name__)

# Files a sub-agent session is allowed to see
_SUBAGENT_ALLOWLIST = {DEFAULT_AGENTS_FILENAME, DEFAULT_TOOLS_FILENAME}


def _read_file(path: Path) -> str | None:
    """Read a file, returning None if it doesn't exist or can't be read.

    Bytes that are not valid UTF-8 are replaced rather than failing the load.
    """
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except FileNotFoundError:
        return None
    except OSError as e:
        logger.warning("Failed to read %s: %s", path, e)
        return None


def _load_memory_entry(workspace_dir: Path) -> BootstrapFile | None:
    for filename in MEMORY_FILENAMES:
        path = workspace_dir / filename
        content = _read_file(path)
        if content is not None:
            return BootstrapFile(name=filename, path=path, missing=False, content=content)
    return None


def load_workspace_bootstrap_files(workspace_dir: Path | str) -> list[BootstrapFile]:
    """Load all workspace bootstrap files in catalogue order."""
    root = Path(workspace_dir).expanduser().resolve()
    files: list[BootstrapFile] = []
    for kind in BootstrapFileKind:
        if kind is BootstrapFileKind.MEMORY:
            memory = _load_memory_entry(root)
            if memory is not None:
                files.append(memory)
            continue
        path = root / kind.filename
        content = _read_file(path)
        if content is None:
            files.append(BootstrapFile(name=kind.filename, path=path, missing=True))
        else:
            files.append(
                BootstrapFile(name=kind.filename, path=path, missing=False, content=content)
            )
    return files


def is_subagent_session_key(session_key: str | None) -> bool:
    """Check for ``subagent:...`` or ``agent:<id>:subagent:...`` keys."""
    raw = (session_key or "").strip().lower()
    if not raw:
        return False
    if raw.startswith("subagent:"):
        return True
    parts = [p for p in raw.split(":") if p]
    if len(parts) < 3 or parts[0] != "agent":
        return False
    return parts[2] == "subagent" and len(parts) > 3


def filter_bootstrap_files_for_session(
    files: list[BootstrapFile], session_key: str | None = None
) -> list[BootstrapFile]:
    """Return the files a session may see; sub-agents get AGENTS.md and TOOLS.md only."""
    if not is_subagent_session_key(session_key):
        return list(files)
    return [f for f in files if f.name in _SUBAGENT_ALLOWLIST]
