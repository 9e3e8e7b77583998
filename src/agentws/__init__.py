"""agentws - idempotent, history-aware agent workspaces.

Seeds a per-agent workspace directory with persona, memory and tooling
markdown files, tracks one-time onboarding in a small JSON state record,
and loads the resulting file set for session start-up.

Package entry point. Exports the version string only; functional modules
live under agentws.workspace and are imported by main.py on demand.
"""

__version__ = "0.1.0"
