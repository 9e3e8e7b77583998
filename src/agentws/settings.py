"""Workspace settings — reads settings.toml + .env to produce WorkspaceSettings.

Example settings.toml:

    [workspace]
    dir = "~/agents/main"
    ensure_bootstrap_files = true
    create_bootstrap_file = true

    [workspace.bootstrap_preset]
    enabled = true
    base_dir = "presets/bootstrap"
    force = false

    [workspace.bootstrap_preset.files.soul]
    path = "soul.md"

    [workspace.bootstrap_preset.files.bootstrap]
    path = "bootstrap.md"
    enabled = false

Key entities:
  - WorkspaceSettings: frozen dataclass with resolved workspace options.
  - load_settings(): parse .env + settings.toml -> WorkspaceSettings.
"""

from __future__ import annotations

import logging
import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from .utils import agentws_dir
from .workspace.manager import resolve_default_agent_workspace_dir
from .workspace.preset import BootstrapPresetConfig, PresetFileEntry

logger = logging.getLogger(__name__)

SETTINGS_FILENAME = "settings.toml"


@dataclass(frozen=True)
class WorkspaceSettings:
    """Resolved options for ensure_agent_workspace().

    All paths are pre-resolved; no further env lookups needed.
    """

    workspace_dir: Path
    config_dir: Path = field(default_factory=agentws_dir)
    ensure_bootstrap_files: bool = True
    create_bootstrap_file: bool = True
    bootstrap_preset: BootstrapPresetConfig | None = None

    @property
    def bootstrap_preset_base_dir(self) -> Path:
        """Preset paths are relative to the config directory."""
        return self.config_dir


def _require_bool(section: str, key: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"[{section}] {key} must be true or false, got {value!r}")
    return value


def _parse_preset(raw: Mapping[str, Any]) -> BootstrapPresetConfig:
    section = "workspace.bootstrap_preset"
    files_raw = raw.get("files", {})
    if not isinstance(files_raw, dict):
        raise ValueError(f"[{section}] files must be a table")

    files: dict[str, PresetFileEntry] = {}
    for key, entry in files_raw.items():
        if not isinstance(entry, dict):
            raise ValueError(f"[{section}.files.{key}] must be a table")
        path = entry.get("path")
        if not isinstance(path, str) or not path.strip():
            raise ValueError(f"[{section}.files.{key}] must have a 'path' field")
        files[key] = PresetFileEntry(
            path=path,
            enabled=_require_bool(
                f"{section}.files.{key}", "enabled", entry.get("enabled", True)
            ),
        )

    base_dir = raw.get("base_dir", "")
    if not isinstance(base_dir, str):
        raise ValueError(f"[{section}] base_dir must be a string")

    return BootstrapPresetConfig(
        enabled=_require_bool(section, "enabled", raw.get("enabled", True)),
        base_dir=base_dir,
        force=_require_bool(section, "force", raw.get("force", False)),
        files=files,
    )


def load_settings(
    config_dir: Path | None = None, env: Mapping[str, str] | None = None
) -> WorkspaceSettings:
    """Read .env + settings.toml and return WorkspaceSettings.

    Args:
        config_dir: Override for the base config directory.
                    Defaults to ``agentws_dir()``.
        env: Environment used to resolve the default workspace dir.
             Defaults to ``os.environ`` after .env files are loaded.

    Raises:
        FileNotFoundError: If settings.toml does not exist.
        ValueError: If settings.toml has invalid values.
    """
    if config_dir is None:
        config_dir = agentws_dir()

    # Load .env files (local cwd first, then config_dir)
    local_env = Path(".env")
    global_env = config_dir / ".env"
    if local_env.is_file():
        load_dotenv(local_env)
    if global_env.is_file():
        load_dotenv(global_env)

    toml_path = config_dir / SETTINGS_FILENAME
    if not toml_path.is_file():
        raise FileNotFoundError(f"Settings file not found: {toml_path}")

    with open(toml_path, "rb") as f:
        raw = tomllib.load(f)

    section = raw.get("workspace", {})
    if not isinstance(section, dict):
        raise ValueError("[workspace] must be a table")

    dir_raw = section.get("dir", "")
    if not isinstance(dir_raw, str):
        raise ValueError("[workspace] dir must be a string")
    if dir_raw.strip():
        workspace_dir = Path(dir_raw).expanduser()
        if not workspace_dir.is_absolute():
            workspace_dir = config_dir / workspace_dir
    else:
        workspace_dir = resolve_default_agent_workspace_dir(
            os.environ if env is None else env
        )

    preset_raw = section.get("bootstrap_preset")
    preset = None
    if preset_raw is not None:
        if not isinstance(preset_raw, dict):
            raise ValueError("[workspace.bootstrap_preset] must be a table")
        preset = _parse_preset(preset_raw)

    settings = WorkspaceSettings(
        workspace_dir=workspace_dir,
        config_dir=config_dir,
        ensure_bootstrap_files=_require_bool(
            "workspace",
            "ensure_bootstrap_files",
            section.get("ensure_bootstrap_files", True),
        ),
        create_bootstrap_file=_require_bool(
            "workspace",
            "create_bootstrap_file",
            section.get("create_bootstrap_file", True),
        ),
        bootstrap_preset=preset,
    )
    logger.debug("Loaded settings from %s: workspace=%s", toml_path, workspace_dir)
    return settings
