"""
BuildReceipt schema.

One JSON record per build run: which version and commit went into the
binary, the exact compiler command, and what environment setup did.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel

from omd_build import BUILDER_NAME, BUILDER_VERSION


class BuilderInfo(BaseModel):
    """Identifies the builder package."""
    name: str = BUILDER_NAME
    version: str = BUILDER_VERSION


class EnvSetupInfo(BaseModel):
    """Outcome of the post-build environment step."""
    debug_var: str
    debug_var_updated: bool = False
    path_updated: bool = False
    instructions: List[str] = []


class BuildReceipt(BaseModel):
    """Provenance of a single build run."""
    builder: BuilderInfo = BuilderInfo()
    version: str
    version_source: str  # "override" or "canary"
    commit: str
    output_path: str  # absolute
    ldflags: str
    command: List[str]
    platform: str
    dry_run: bool = False
    env_setup: Optional[EnvSetupInfo] = None
    created_at: str


def now_iso() -> str:
    """Current UTC time as ISO 8601 string."""
    return datetime.now(timezone.utc).isoformat()
