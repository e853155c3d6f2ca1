"""
Version resolver.

An explicit override wins.  Without one, the latest tag's patch number
is bumped and tagged as a canary build: ``2.5.9`` becomes
``2.5.10-canary``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from omd_build.config import Settings
from omd_build.core.commands import CommandRunner
from omd_build.core.environment import EnvironmentProvider
from omd_build.core.git import latest_tag
from omd_build.errors import VersionTagError

logger = logging.getLogger(__name__)


class VersionSource(str, Enum):
    """Where the resolved version came from."""
    OVERRIDE = "override"
    CANARY = "canary"


@dataclass(frozen=True)
class ResolvedVersion:
    value: str
    source: VersionSource


def bump_canary(tag: str, suffix: str = "canary") -> str:
    """
    Increment the patch component of *tag* and append *suffix*.

    Major and minor are copied as-is (``v1.2.3`` -> ``v1.2.4-canary``).
    Raises VersionTagError unless the tag has exactly three dot-separated
    parts and the last one is a plain decimal integer.
    """
    parts = tag.strip().split(".")
    if len(parts) != 3:
        raise VersionTagError(tag, f"expected MAJOR.MINOR.PATCH, got {len(parts)} part(s)")

    major, minor, patch = parts
    if not patch.isdigit() or not patch.isascii():
        raise VersionTagError(tag, f"patch component {patch!r} is not a number")

    return f"{major}.{minor}.{int(patch) + 1}-{suffix}"


def read_override(env: EnvironmentProvider, name: str) -> Optional[str]:
    """Return the override variable, or None when unset or blank."""
    value = env.get(name)
    if value is None or value.strip() == "":
        return None
    return value


def resolve_version(
    env: EnvironmentProvider,
    runner: CommandRunner,
    settings: Settings,
    repo_dir: Optional[Path] = None,
) -> ResolvedVersion:
    """
    Resolve the version to embed in the build.

    Parameters
    ----------
    env : EnvironmentProvider
        Source of the override variable (``settings.VERSION_ENV_VAR``).
    runner : CommandRunner
        Used for ``git describe`` when no override is set.
    settings : Settings
        Variable name, git binary and canary suffix.

    Returns
    -------
    ResolvedVersion
    """
    override = read_override(env, settings.VERSION_ENV_VAR)
    if override is not None:
        return ResolvedVersion(value=override, source=VersionSource.OVERRIDE)

    print("Version not set, setting to new canary version")
    tag = latest_tag(runner, git=settings.GIT_BINARY, repo_dir=repo_dir)
    value = bump_canary(tag, suffix=settings.CANARY_SUFFIX)
    logger.info("Bumped tag %s to %s", tag, value)
    return ResolvedVersion(value=value, source=VersionSource.CANARY)
