"""Bootstrap presets — seed workspace files from configured source files.

A preset maps logical file keys (``soul``, ``identity``, ...) to source
paths. Resolution turns the config into one PresetAction per seedable
file kind; application copies each source into the workspace, either
only when the target is absent or unconditionally when ``force`` is set.

Sources are copied byte for byte. Each action stands alone: a missing
source is recorded as a PresetSourceError and the remaining actions
still run.

Key classes: BootstrapPresetConfig, PresetFileEntry, PresetAction.
Key functions: resolve_preset(), apply_preset(), read_preset_source().
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from pathlib import Path

from .files import BootstrapFileKind, write_file_if_missing

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PresetFileEntry:
    """Source for one logical file."""

    path: str
    enabled: bool = True


@dataclass(frozen=True)
class BootstrapPresetConfig:
    """Declarative mapping of logical file keys to preset sources."""

    enabled: bool = False
    base_dir: str = ""
    force: bool = False
    files: dict[str, PresetFileEntry] = field(default_factory=dict)

    def entry_for(self, kind: BootstrapFileKind) -> PresetFileEntry | None:
        """Entry for ``kind``; keys match case- and whitespace-insensitively."""
        for key, entry in self.files.items():
            if BootstrapFileKind.from_key(key) is kind:
                return entry
        return None

    def opts_out(self, kind: BootstrapFileKind) -> bool:
        """True when an enabled preset explicitly disables ``kind``."""
        entry = self.entry_for(kind)
        return self.enabled and entry is not None and not entry.enabled


class SeedMode(enum.Enum):
    SKIP = "skip"
    SEED_IF_ABSENT = "seed-if-absent"
    SEED_FORCED = "seed-forced"


@dataclass(frozen=True)
class PresetAction:
    """Resolved decision for one logical file."""

    kind: BootstrapFileKind
    mode: SeedMode
    source: Path | None = None

    @property
    def active(self) -> bool:
        return self.mode is not SeedMode.SKIP


class PresetSourceError(Exception):
    """A configured preset source could not be read."""

    def __init__(self, key: str, source: Path, reason: str) -> None:
        super().__init__(f"Preset source for '{key}' unreadable: {source} ({reason})")
        self.key = key
        self.source = source
        self.reason = reason


def _resolve_source(root: Path, base_dir: str, path: str) -> Path:
    """Join ``root / base_dir / path``; absolute components win."""
    return root / Path(base_dir).expanduser() / Path(path).expanduser()


def resolve_preset(
    preset: BootstrapPresetConfig | None, base_dir: Path
) -> list[PresetAction]:
    """Decide skip / seed-if-absent / seed-forced for every seedable file kind.

    Args:
        preset: Preset configuration, or None for no preset.
        base_dir: Root that relative ``preset.base_dir`` and entry paths
                  are joined against.

    Returns:
        One PresetAction per seedable BootstrapFileKind, in declaration order.
    """
    kinds = [k for k in BootstrapFileKind if k.seedable]
    if preset is None or not preset.enabled:
        return [PresetAction(kind=k, mode=SeedMode.SKIP) for k in kinds]

    for key in preset.files:
        kind = BootstrapFileKind.from_key(key)
        if kind is None or not kind.seedable:
            logger.warning("Ignoring unknown bootstrap preset entry: %s", key)

    mode = SeedMode.SEED_FORCED if preset.force else SeedMode.SEED_IF_ABSENT
    actions: list[PresetAction] = []
    for kind in kinds:
        entry = preset.entry_for(kind)
        if entry is None or not entry.enabled or not entry.path:
            actions.append(PresetAction(kind=kind, mode=SeedMode.SKIP))
            continue
        source = _resolve_source(base_dir, preset.base_dir, entry.path)
        actions.append(PresetAction(kind=kind, mode=mode, source=source))
    return actions


def read_preset_source(action: PresetAction) -> bytes:
    """Read the raw source content of an active action.

    Content is returned as bytes so it is copied verbatim whatever its
    encoding.

    Raises:
        ValueError: If the action is SKIP (it has no source).
        PresetSourceError: If the source is missing or unreadable.
    """
    if action.source is None:
        raise ValueError(f"No preset source for {action.kind.value!r}")
    try:
        return action.source.read_bytes()
    except FileNotFoundError:
        raise PresetSourceError(action.kind.value, action.source, "not found") from None
    except OSError as e:
        raise PresetSourceError(action.kind.value, action.source, str(e)) from e


def write_preset_file(target: Path, content: bytes, mode: SeedMode) -> bool:
    """Write preset content to ``target`` according to ``mode``.

    Returns True if the target was written.
    """
    if mode is SeedMode.SEED_FORCED:
        target.write_bytes(content)
        return True
    if mode is SeedMode.SEED_IF_ABSENT:
        return write_file_if_missing(target, content)
    return False


def apply_preset(
    workspace_dir: Path, actions: list[PresetAction]
) -> tuple[list[str], list[PresetSourceError]]:
    """Apply every active action except BOOTSTRAP to the workspace.

    BOOTSTRAP is left to the ensurer, which gates it on onboarding state.

    Returns:
        (filenames written, per-entry source errors).
    """
    written: list[str] = []
    errors: list[PresetSourceError] = []
    for action in actions:
        if not action.active or action.kind is BootstrapFileKind.BOOTSTRAP:
            continue
        target = workspace_dir / action.kind.filename
        if action.mode is SeedMode.SEED_IF_ABSENT and target.exists():
            logger.debug("Preset skipped, %s already exists", target)
            continue
        try:
            content = read_preset_source(action)
        except PresetSourceError as e:
            logger.warning("%s", e)
            errors.append(e)
            continue
        if write_preset_file(target, content, action.mode):
            written.append(action.kind.filename)
            logger.info("Seeded %s from preset %s", target, action.source)
    return written, errors
