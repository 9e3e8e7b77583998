"""Application entry point — CLI dispatcher.

Handles two commands:
  1. `agentws init [DIR] [--no-bootstrap] [-v]` — seeds the workspace
     (DIR, or [workspace] dir from settings.toml, or the default location)
     and prints the files written and any preset errors.
  2. `agentws files [DIR] [--session KEY] [-v]` — lists the bootstrap files
     a session would load, marking missing ones.

settings.toml is optional for both commands; without it built-in
defaults apply and no preset is used.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .settings import WorkspaceSettings

USAGE = """\
usage: agentws init [DIR] [--no-bootstrap] [-v]
       agentws files [DIR] [--session KEY] [-v]
"""


def _parse_args(args: list[str]) -> tuple[list[str], dict[str, str | bool]]:
    """Split argv into positionals and options (--session takes a value)."""
    positionals: list[str] = []
    options: dict[str, str | bool] = {}
    it = iter(args)
    for arg in it:
        if arg in ("-v", "--verbose"):
            options["verbose"] = True
        elif arg == "--no-bootstrap":
            options["no_bootstrap"] = True
        elif arg == "--session":
            value = next(it, None)
            if value is None:
                raise ValueError("--session requires a value")
            options["session"] = value
        elif arg.startswith("-"):
            raise ValueError(f"Unknown option: {arg}")
        else:
            positionals.append(arg)
    if len(positionals) > 1:
        raise ValueError("Too many arguments")
    return positionals, options


def _load_settings_or_defaults(dir_arg: str | None) -> WorkspaceSettings:
    """Load settings.toml if present; DIR on the command line wins."""
    from .settings import WorkspaceSettings, load_settings
    from .utils import agentws_dir
    from .workspace.manager import resolve_default_agent_workspace_dir

    config_dir = agentws_dir()
    try:
        settings = load_settings(config_dir=config_dir)
    except FileNotFoundError:
        settings = WorkspaceSettings(
            workspace_dir=resolve_default_agent_workspace_dir(),
            config_dir=config_dir,
        )
    if dir_arg:
        settings = replace(settings, workspace_dir=Path(dir_arg).expanduser())
    return settings


def _cmd_init(dir_arg: str | None, options: dict[str, str | bool]) -> int:
    from .workspace.manager import ensure_agent_workspace

    settings = _load_settings_or_defaults(dir_arg)
    result = ensure_agent_workspace(
        settings.workspace_dir,
        ensure_bootstrap_files=settings.ensure_bootstrap_files,
        create_bootstrap_file=settings.create_bootstrap_file
        and not options.get("no_bootstrap", False),
        bootstrap_preset=settings.bootstrap_preset,
        bootstrap_preset_base_dir=settings.bootstrap_preset_base_dir,
    )

    print(f"Workspace: {result.dir}")
    for name in result.written:
        print(f"  created {name}")
    if not settings.ensure_bootstrap_files:
        print("  seeding disabled (ensure_bootstrap_files = false)")
    elif not result.written:
        print("  up to date")
    if result.state.onboarding_completed_at:
        print(f"Onboarding completed at {result.state.onboarding_completed_at}")
    elif result.state.bootstrap_seeded_at:
        print(f"Onboarding in progress since {result.state.bootstrap_seeded_at}")
    for err in result.preset_errors:
        print(f"Warning: {err}", file=sys.stderr)
    return 0


def _cmd_files(dir_arg: str | None, options: dict[str, str | bool]) -> int:
    from .workspace.loader import (
        filter_bootstrap_files_for_session,
        load_workspace_bootstrap_files,
    )

    settings = _load_settings_or_defaults(dir_arg)
    files = load_workspace_bootstrap_files(settings.workspace_dir)
    session = options.get("session")
    files = filter_bootstrap_files_for_session(
        files, session if isinstance(session, str) else None
    )
    for f in files:
        status = "missing" if f.missing else f"{len(f.content)} chars"
        print(f"{f.name:<14} {status:<12} {f.path}")
    return 0


def main() -> None:
    """Main entry point."""
    argv = sys.argv[1:]
    if not argv or argv[0] in ("-h", "--help"):
        print(USAGE, end="")
        return

    command = argv[0]
    commands = {"init": _cmd_init, "files": _cmd_files}
    if command not in commands:
        print(f"Unknown command: {command}\n", file=sys.stderr)
        print(USAGE, end="", file=sys.stderr)
        sys.exit(2)

    try:
        positionals, options = _parse_args(argv[1:])
    except ValueError as e:
        print(f"Error: {e}\n", file=sys.stderr)
        print(USAGE, end="", file=sys.stderr)
        sys.exit(2)

    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.WARNING,
    )
    if options.get("verbose"):
        logging.getLogger("agentws").setLevel(logging.DEBUG)

    try:
        code = commands[command](positionals[0] if positionals else None, options)
    except ValueError as e:
        print(f"Error: {e}\n", file=sys.stderr)
        print("Check your settings.toml configuration.", file=sys.stderr)
        sys.exit(1)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    sys.exit(code)


if __name__ == "__main__":
    main()
