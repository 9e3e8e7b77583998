"""Workspace onboarding state — persisted in .agentws/workspace-state.json.

The record tracks when the onboarding file was first seeded and when
onboarding was completed. A missing or corrupt file reads as an empty
record; writes go through atomic_write_json.

Key class: WorkspaceState.
Key functions: load_state(), save_state(), state_path().
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..utils import atomic_write_json

logger = logging.getLogger(__name__)

STATE_VERSION = 1

STATE_DIRNAME = ".agentws"
STATE_FILENAME = "workspace-state.json"


@dataclass
class WorkspaceState:
    """Onboarding state of one workspace."""

    version: int = STATE_VERSION
    bootstrap_seeded_at: str | None = None  # ISO 8601
    onboarding_completed_at: str | None = None  # ISO 8601
    # Backed by a valid state file on disk (not serialized)
    persisted: bool = field(default=False, compare=False)

    @property
    def is_new(self) -> bool:
        """True when neither stamp is set (no onboarding history)."""
        return self.bootstrap_seeded_at is None and self.onboarding_completed_at is None

    @property
    def is_completed(self) -> bool:
        return self.onboarding_completed_at is not None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"version": self.version}
        if self.bootstrap_seeded_at:
            d["bootstrapSeededAt"] = self.bootstrap_seeded_at
        if self.onboarding_completed_at:
            d["onboardingCompletedAt"] = self.onboarding_completed_at
        return d

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WorkspaceState:
        version = data.get("version", STATE_VERSION)
        return cls(
            version=version if isinstance(version, int) else STATE_VERSION,
            bootstrap_seeded_at=_stamp(data.get("bootstrapSeededAt")),
            onboarding_completed_at=_stamp(data.get("onboardingCompletedAt")),
        )


def _stamp(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value
    return None


def state_path(workspace_dir: Path) -> Path:
    """Return the state file path for a workspace."""
    return workspace_dir / STATE_DIRNAME / STATE_FILENAME


def load_state(workspace_dir: Path) -> WorkspaceState:
    """Load workspace state. Returns an empty state if absent or corrupt."""
    path = state_path(workspace_dir)
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return WorkspaceState()
    except OSError as e:
        logger.warning("Failed to read %s: %s", path, e)
        return WorkspaceState()

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.warning("Ignoring corrupt workspace state %s: %s", path, e)
        return WorkspaceState()

    if not isinstance(data, dict):
        logger.warning("Ignoring workspace state %s: not a JSON object", path)
        return WorkspaceState()

    state = WorkspaceState.from_dict(data)
    state.persisted = True
    return state


def save_state(workspace_dir: Path, state: WorkspaceState) -> None:
    """Persist workspace state atomically. Errors propagate to the caller."""
    path = state_path(workspace_dir)
    atomic_write_json(path, state.to_dict())
    state.persisted = True
    logger.debug("Saved workspace state to %s", path)
