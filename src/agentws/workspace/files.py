"""Workspace file catalogue — the closed set of logical workspace files.

Every file the workspace knows about is a BootstrapFileKind member. Each
member maps to a default filename under the workspace root and, except
for MEMORY, to a template bundled with the package.

Key class: BootstrapFileKind, BootstrapFile.
Key functions: load_template(), write_file_if_missing().
"""

import enum
from dataclasses import dataclass
from pathlib import Path

# Template files bundled with the package
_TEMPLATES_DIR = Path(__file__).parent / "templates"

DEFAULT_AGENTS_FILENAME = "AGENTS.md"
DEFAULT_SOUL_FILENAME = "SOUL.md"
DEFAULT_TOOLS_FILENAME = "TOOLS.md"
DEFAULT_IDENTITY_FILENAME = "IDENTITY.md"
DEFAULT_USER_FILENAME = "USER.md"
DEFAULT_HEARTBEAT_FILENAME = "HEARTBEAT.md"
DEFAULT_BOOTSTRAP_FILENAME = "BOOTSTRAP.md"
DEFAULT_MEMORY_FILENAME = "MEMORY.md"
DEFAULT_MEMORY_ALT_FILENAME = "memory.md"


class BootstrapFileKind(enum.Enum):
    """Logical workspace files, in load order.

    The value is the lowercase key used by preset configuration.
    """

    AGENTS = "agents"
    SOUL = "soul"
    TOOLS = "tools"
    IDENTITY = "identity"
    USER = "user"
    HEARTBEAT = "heartbeat"
    BOOTSTRAP = "bootstrap"
    MEMORY = "memory"

    @property
    def filename(self) -> str:
        return _FILENAMES[self]

    @property
    def seedable(self) -> bool:
        """Whether the ensurer may create this file from a template or preset."""
        return self is not BootstrapFileKind.MEMORY

    @classmethod
    def from_key(cls, key: str) -> "BootstrapFileKind | None":
        try:
            return cls(key.strip().lower())
        except ValueError:
            return None


_FILENAMES = {
    BootstrapFileKind.AGENTS: DEFAULT_AGENTS_FILENAME,
    BootstrapFileKind.SOUL: DEFAULT_SOUL_FILENAME,
    BootstrapFileKind.TOOLS: DEFAULT_TOOLS_FILENAME,
    BootstrapFileKind.IDENTITY: DEFAULT_IDENTITY_FILENAME,
    BootstrapFileKind.USER: DEFAULT_USER_FILENAME,
    BootstrapFileKind.HEARTBEAT: DEFAULT_HEARTBEAT_FILENAME,
    BootstrapFileKind.BOOTSTRAP: DEFAULT_BOOTSTRAP_FILENAME,
    BootstrapFileKind.MEMORY: DEFAULT_MEMORY_FILENAME,
}

# Core files repaired on every ensure run (BOOTSTRAP is gated separately)
CORE_FILE_KINDS = [
    BootstrapFileKind.AGENTS,
    BootstrapFileKind.SOUL,
    BootstrapFileKind.TOOLS,
    BootstrapFileKind.IDENTITY,
    BootstrapFileKind.USER,
    BootstrapFileKind.HEARTBEAT,
]

# Files whose customization marks a workspace as onboarded
CUSTOMIZABLE_FILE_KINDS = [
    BootstrapFileKind.IDENTITY,
    BootstrapFileKind.USER,
]

MEMORY_FILENAMES = [DEFAULT_MEMORY_FILENAME, DEFAULT_MEMORY_ALT_FILENAME]


@dataclass
class BootstrapFile:
    """One workspace file as seen at load time."""

    name: str
    path: Path
    missing: bool
    content: str = ""


def load_template(kind: BootstrapFileKind) -> str:
    """Return the bundled default content for a seedable file kind.

    Raises:
        ValueError: If the kind has no template (MEMORY).
    """
    if not kind.seedable:
        raise ValueError(f"No template for {kind.name}")
    return (_TEMPLATES_DIR / kind.filename).read_text(encoding="utf-8")


def write_file_if_missing(path: Path, content: str | bytes) -> bool:
    """Create ``path`` with ``content`` unless it already exists.

    Text is written as UTF-8; bytes are written as-is. Returns True if
    the file was written. Errors other than the file already existing
    propagate.
    """
    data = content.encode("utf-8") if isinstance(content, str) else content
    try:
        with open(path, "xb") as f:
            f.write(data)
    except FileExistsError:
        return False
    return True
