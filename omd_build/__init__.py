"""
omd_build — versioned Go build orchestrator for oh-my-dot.

Resolve a version and commit hash from git, compile with both injected
as link-time variables, then point a debug variable (and PATH) at the
fresh build.

Targets: windows, linux, darwin.
"""

__version__ = "0.1.0"
BUILDER_NAME = "omd_build"
BUILDER_VERSION = "v1"
