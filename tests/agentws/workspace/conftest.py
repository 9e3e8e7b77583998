"""Shared fixtures for workspace tests."""

import json
from collections.abc import Callable
from pathlib import Path

import pytest

from agentws.workspace.state import state_path

_PRESET_DEFAULTS = {
    "soul": "preset soul",
    "identity": "preset identity",
    "user": "preset user",
    "heartbeat": "preset heartbeat",
    "bootstrap": "preset bootstrap",
    "agents": "preset agents",
}


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """A workspace path that does not exist yet."""
    return tmp_path / "workspace"


@pytest.fixture
def write_file(workspace: Path) -> Callable[[str, str], Path]:
    """Write a file directly under the workspace root."""

    def _write(name: str, content: str) -> Path:
        workspace.mkdir(parents=True, exist_ok=True)
        path = workspace / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def read_state(workspace: Path) -> Callable[[], dict]:
    """Read the raw persisted state record."""

    def _read() -> dict:
        return json.loads(state_path(workspace).read_text(encoding="utf-8"))

    return _read


@pytest.fixture
def preset_sources(tmp_path: Path) -> Callable[..., Path]:
    """Write ``<key>.md`` preset sources under tmp_path/presets/bootstrap.

    Returns the preset directory; keyword arguments override contents.
    """

    def _write(**contents: str) -> Path:
        preset_dir = tmp_path / "presets" / "bootstrap"
        preset_dir.mkdir(parents=True, exist_ok=True)
        for key, content in {**_PRESET_DEFAULTS, **contents}.items():
            (preset_dir / f"{key}.md").write_text(content, encoding="utf-8")
        return preset_dir

    return _write
