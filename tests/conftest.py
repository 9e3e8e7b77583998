"""Root conftest — isolates AGENTWS_DIR and home variables from the real environment.

Force-set (not setdefault) so a developer's own settings.toml or
workspace never leaks into tests.
"""

import os
import tempfile

os.environ["AGENTWS_DIR"] = tempfile.mkdtemp(prefix="agentws-test-")
os.environ.pop("AGENTWS_HOME", None)
os.environ.pop("AGENTWS_PROFILE", None)
