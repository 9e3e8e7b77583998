"""Workspace management — file seeding, onboarding state, and bootstrap file loading.

Provides ensure_agent_workspace() for idempotent workspace initialization,
load_workspace_bootstrap_files() and filter_bootstrap_files_for_session()
for session start-up, and resolve_default_agent_workspace_dir() for the
default location.
"""

from .files import (
    DEFAULT_AGENTS_FILENAME,
    DEFAULT_BOOTSTRAP_FILENAME,
    DEFAULT_HEARTBEAT_FILENAME,
    DEFAULT_IDENTITY_FILENAME,
    DEFAULT_MEMORY_ALT_FILENAME,
    DEFAULT_MEMORY_FILENAME,
    DEFAULT_SOUL_FILENAME,
    DEFAULT_TOOLS_FILENAME,
    DEFAULT_USER_FILENAME,
    BootstrapFile,
    BootstrapFileKind,
)
from .loader import (
    filter_bootstrap_files_for_session,
    is_subagent_session_key,
    load_workspace_bootstrap_files,
)
from .manager import (
    WorkspaceEnsureResult,
    ensure_agent_workspace,
    resolve_default_agent_workspace_dir,
)
from .preset import BootstrapPresetConfig, PresetFileEntry, PresetSourceError
from .state import WorkspaceState, load_state, save_state

__all__ = [
    "DEFAULT_AGENTS_FILENAME",
    "DEFAULT_BOOTSTRAP_FILENAME",
    "DEFAULT_HEARTBEAT_FILENAME",
    "DEFAULT_IDENTITY_FILENAME",
    "DEFAULT_MEMORY_ALT_FILENAME",
    "DEFAULT_MEMORY_FILENAME",
    "DEFAULT_SOUL_FILENAME",
    "DEFAULT_TOOLS_FILENAME",
    "DEFAULT_USER_FILENAME",
    "BootstrapFile",
    "BootstrapFileKind",
    "BootstrapPresetConfig",
    "PresetFileEntry",
    "PresetSourceError",
    "WorkspaceEnsureResult",
    "WorkspaceState",
    "ensure_agent_workspace",
    "filter_bootstrap_files_for_session",
    "is_subagent_session_key",
    "load_state",
    "load_workspace_bootstrap_files",
    "resolve_default_agent_workspace_dir",
    "save_state",
]
