"""Tests for settings.py — WorkspaceSettings and load_settings."""

from pathlib import Path

import pytest

from agentws.settings import WorkspaceSettings, load_settings
from agentws.workspace.preset import PresetFileEntry


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    d = tmp_path / "config"
    d.mkdir()
    return d


def _write_toml(config_dir: Path, text: str) -> None:
    (config_dir / "settings.toml").write_text(text, encoding="utf-8")


class TestLoadSettings:
    def test_missing_file_raises(self, config_dir: Path):
        with pytest.raises(FileNotFoundError, match="settings.toml"):
            load_settings(config_dir=config_dir)

    def test_defaults(self, config_dir: Path):
        _write_toml(config_dir, "")
        settings = load_settings(config_dir=config_dir, env={"HOME": "/home/u"})

        assert settings.workspace_dir == Path("/home/u").resolve() / ".agentws" / "workspace"
        assert settings.ensure_bootstrap_files is True
        assert settings.create_bootstrap_file is True
        assert settings.bootstrap_preset is None
        assert settings.bootstrap_preset_base_dir == config_dir

    def test_workspace_section(self, config_dir: Path, tmp_path: Path):
        _write_toml(
            config_dir,
            f"""
[workspace]
dir = "{tmp_path / 'ws'}"
ensure_bootstrap_files = true
create_bootstrap_file = false
""",
        )
        settings = load_settings(config_dir=config_dir)
        assert settings.workspace_dir == tmp_path / "ws"
        assert settings.create_bootstrap_file is False

    def test_relative_dir_resolved_against_config_dir(self, config_dir: Path):
        _write_toml(config_dir, '[workspace]\ndir = "agents/main"\n')
        settings = load_settings(config_dir=config_dir)
        assert settings.workspace_dir == config_dir / "agents" / "main"

    def test_bootstrap_preset(self, config_dir: Path):
        _write_toml(
            config_dir,
            """
[workspace.bootstrap_preset]
enabled = true
base_dir = "presets/bootstrap"
force = true

[workspace.bootstrap_preset.files.soul]
path = "soul.md"

[workspace.bootstrap_preset.files.bootstrap]
path = "bootstrap.md"
enabled = false
""",
        )
        preset = load_settings(config_dir=config_dir).bootstrap_preset
        assert preset is not None
        assert preset.enabled and preset.force
        assert preset.base_dir == "presets/bootstrap"
        assert preset.files == {
            "soul": PresetFileEntry(path="soul.md"),
            "bootstrap": PresetFileEntry(path="bootstrap.md", enabled=False),
        }

    def test_preset_entry_without_path(self, config_dir: Path):
        _write_toml(
            config_dir,
            "[workspace.bootstrap_preset.files.soul]\nenabled = true\n",
        )
        with pytest.raises(ValueError, match="path"):
            load_settings(config_dir=config_dir)

    def test_non_bool_switch(self, config_dir: Path):
        _write_toml(config_dir, '[workspace]\nensure_bootstrap_files = "yes"\n')
        with pytest.raises(ValueError, match="ensure_bootstrap_files"):
            load_settings(config_dir=config_dir)

    def test_env_file_feeds_default_dir(
        self, config_dir: Path, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ):
        # setenv first so teardown removes the value loaded from .env
        monkeypatch.setenv("AGENTWS_HOME", "placeholder")
        monkeypatch.delenv("AGENTWS_HOME")
        monkeypatch.chdir(tmp_path)
        (config_dir / ".env").write_text(f"AGENTWS_HOME={tmp_path / 'home'}\n")
        _write_toml(config_dir, "")

        settings = load_settings(config_dir=config_dir)
        assert settings.workspace_dir == (tmp_path / "home").resolve() / ".agentws" / "workspace"


class TestWorkspaceSettings:
    def test_frozen(self, tmp_path: Path):
        settings = WorkspaceSettings(workspace_dir=tmp_path)
        with pytest.raises(AttributeError):
            settings.workspace_dir = tmp_path / "other"  # type: ignore[misc]
