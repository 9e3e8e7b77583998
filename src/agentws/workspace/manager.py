"""Workspace directory initialization and onboarding lifecycle.

Seeds a workspace with its core markdown files and decides whether the
one-time onboarding file (BOOTSTRAP.md) should exist:

  - NEW:       no stamps in the state record -> BOOTSTRAP.md is created
               and ``bootstrap_seeded_at`` is stamped.
  - SEEDED:    BOOTSTRAP.md was seeded; once the user removes it, the
               workspace is stamped ``onboarding_completed_at``.
  - COMPLETED: BOOTSTRAP.md is never recreated, even if deleted.
  - Legacy:    no state record but IDENTITY.md/USER.md already carry
               non-default content -> stamped completed on first sight.

Core files other than BOOTSTRAP.md are recreated whenever missing.

Legacy detection cannot tell a never-onboarded workspace with default
content apart from one whose owner kept the defaults; both read as NEW.

Key functions: ensure_agent_workspace(), resolve_default_agent_workspace_dir().
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

from .files import (
    CORE_FILE_KINDS,
    CUSTOMIZABLE_FILE_KINDS,
    BootstrapFileKind,
    load_template,
    write_file_if_missing,
)
from .preset import (
    BootstrapPresetConfig,
    PresetAction,
    PresetSourceError,
    SeedMode,
    apply_preset,
    read_preset_source,
    resolve_preset,
    write_preset_file,
)
from .state import WorkspaceState, load_state, save_state

logger = logging.getLogger(__name__)

HOME_ENV_VAR = "AGENTWS_HOME"
PROFILE_ENV_VAR = "AGENTWS_PROFILE"
_HOME_SUBDIR = ".agentws"


@dataclass
class WorkspaceEnsureResult:
    """Outcome of one ensure_agent_workspace() call."""

    dir: Path
    state: WorkspaceState
    written: list[str] = field(default_factory=list)
    preset_errors: list[PresetSourceError] = field(default_factory=list)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _iso(ts: datetime) -> str:
    return ts.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


def _resolve_home(env: Mapping[str, str]) -> Path:
    override = env.get(HOME_ENV_VAR, "").strip()
    home = env.get("HOME", "").strip() or env.get("USERPROFILE", "").strip()
    if override:
        if override == "~" or override.startswith("~/"):
            base = home or str(Path.home())
            override = base + override[1:]
        return Path(override).resolve()
    if home:
        return Path(home).resolve()
    return Path.home()


def resolve_default_agent_workspace_dir(
    env: Mapping[str, str] | None = None,
) -> Path:
    """Return the default workspace dir: ``<home>/.agentws/workspace``.

    ``AGENTWS_HOME`` takes precedence over ``HOME``. A non-default
    ``AGENTWS_PROFILE`` selects ``workspace-<profile>`` instead.
    """
    if env is None:
        env = os.environ
    home = _resolve_home(env)
    profile = env.get(PROFILE_ENV_VAR, "").strip()
    if profile and profile.lower() != "default":
        return home / _HOME_SUBDIR / f"workspace-{profile}"
    return home / _HOME_SUBDIR / "workspace"


def _read_if_exists(path: Path) -> bytes | None:
    try:
        return path.read_bytes()
    except FileNotFoundError:
        return None


def _is_legacy_onboarded(workspace_dir: Path) -> bool:
    """True if a customizable core file exists with non-default content.

    Compared as bytes, so content in any encoding counts as customized.
    """
    for kind in CUSTOMIZABLE_FILE_KINDS:
        content = _read_if_exists(workspace_dir / kind.filename)
        if content is not None and content != load_template(kind).encode("utf-8"):
            logger.debug("Legacy workspace detected via %s", kind.filename)
            return True
    return False


def _seed_core_files(
    workspace_dir: Path, actions: list[PresetAction]
) -> tuple[list[str], list[PresetSourceError]]:
    """Apply preset actions, then fill any still-missing core file from templates."""
    written, errors = apply_preset(workspace_dir, actions)
    for kind in CORE_FILE_KINDS:
        target = workspace_dir / kind.filename
        if write_file_if_missing(target, load_template(kind)):
            written.append(kind.filename)
            logger.info("Deployed workspace template: %s", target)
    order = {k.filename: i for i, k in enumerate(BootstrapFileKind)}
    written.sort(key=lambda name: order.get(name, len(order)))
    return written, errors


def _bootstrap_content(
    action: PresetAction, errors: list[PresetSourceError]
) -> bytes:
    """Preset content for BOOTSTRAP.md if configured and readable, else the template."""
    if action.active:
        try:
            return read_preset_source(action)
        except PresetSourceError as e:
            logger.warning("%s", e)
            errors.append(e)
    return load_template(BootstrapFileKind.BOOTSTRAP).encode("utf-8")


def ensure_agent_workspace(
    workspace_dir: Path | str,
    *,
    ensure_bootstrap_files: bool = False,
    create_bootstrap_file: bool = True,
    bootstrap_preset: BootstrapPresetConfig | None = None,
    bootstrap_preset_base_dir: Path | str | None = None,
    now: Callable[[], datetime] = _utc_now,
) -> WorkspaceEnsureResult:
    """Create the workspace directory and seed its files.

    Safe to call multiple times — only creates missing files (or forced
    preset files) and never recreates BOOTSTRAP.md after onboarding.

    Args:
        workspace_dir: Workspace directory; created with parents if absent.
        ensure_bootstrap_files: Master switch for any seeding at all.
        create_bootstrap_file: Set False to skip only the BOOTSTRAP.md step.
        bootstrap_preset: Optional preset supplying file contents.
        bootstrap_preset_base_dir: Root for relative preset paths.
                                   Defaults to the workspace directory.
        now: Clock used for state stamps.

    Returns:
        WorkspaceEnsureResult with the final state and files written.

    Raises:
        OSError: If the directory, a target file, or the state file
                 cannot be written.
    """
    workspace_dir = Path(workspace_dir).expanduser().resolve()
    workspace_dir.mkdir(parents=True, exist_ok=True)

    state = load_state(workspace_dir)
    result = WorkspaceEnsureResult(dir=workspace_dir, state=state)
    if not ensure_bootstrap_files:
        return result

    bootstrap_path = workspace_dir / BootstrapFileKind.BOOTSTRAP.filename
    # First encounter always writes a record so later runs skip legacy probing
    dirty = not state.persisted

    if state.is_new:
        if bootstrap_path.exists():
            # Interrupted earlier run: the guide is there but never stamped
            state.bootstrap_seeded_at = _iso(now())
            dirty = True
        elif not state.persisted and _is_legacy_onboarded(workspace_dir):
            state.onboarding_completed_at = _iso(now())
            dirty = True
            logger.info("Marked legacy workspace %s as onboarded", workspace_dir)
    elif not state.is_completed and not bootstrap_path.exists():
        state.onboarding_completed_at = _iso(now())
        dirty = True
        logger.info("Onboarding completed for %s", workspace_dir)

    preset_root = (
        Path(bootstrap_preset_base_dir).expanduser()
        if bootstrap_preset_base_dir is not None
        else workspace_dir
    )
    actions = resolve_preset(bootstrap_preset, preset_root)
    result.written, result.preset_errors = _seed_core_files(workspace_dir, actions)

    bootstrap_action = next(
        a for a in actions if a.kind is BootstrapFileKind.BOOTSTRAP
    )
    opted_out = bootstrap_preset is not None and bootstrap_preset.opts_out(
        BootstrapFileKind.BOOTSTRAP
    )
    if create_bootstrap_file and not opted_out and not state.is_completed:
        if state.is_new:
            content = _bootstrap_content(bootstrap_action, result.preset_errors)
            if write_file_if_missing(bootstrap_path, content):
                result.written.append(bootstrap_path.name)
                logger.info("Deployed onboarding file: %s", bootstrap_path)
            state.bootstrap_seeded_at = _iso(now())
            dirty = True
        elif bootstrap_action.mode is SeedMode.SEED_FORCED:
            errors_before = len(result.preset_errors)
            content = _bootstrap_content(bootstrap_action, result.preset_errors)
            if len(result.preset_errors) == errors_before:
                write_preset_file(bootstrap_path, content, SeedMode.SEED_FORCED)
                result.written.append(bootstrap_path.name)
                logger.info("Overwrote onboarding file from preset: %s", bootstrap_path)

    if dirty:
        save_state(workspace_dir, state)
    return result
