"""
Git queries: short commit hash and latest reachable tag.

Neither has a fallback.  Outside a repository, or in one without tags,
the build stops here.
"""
import logging
from pathlib import Path
from typing import Optional

from omd_build.core.commands import CommandRunner, check_output
from omd_build.errors import VersionTagError

logger = logging.getLogger(__name__)


def resolve_commit(
    runner: CommandRunner,
    git: str = "git",
    repo_dir: Optional[Path] = None,
) -> str:
    """Get current commit hash (short form)"""
    stdout = check_output(runner, [git, "rev-parse", "--short", "HEAD"], cwd=repo_dir)
    return stdout.strip()


def latest_tag(
    runner: CommandRunner,
    git: str = "git",
    repo_dir: Optional[Path] = None,
) -> str:
    """Nearest tag reachable from HEAD, annotated or lightweight."""
    stdout = check_output(runner, [git, "describe", "--tags", "--abbrev=0"], cwd=repo_dir)
    tag = stdout.strip()
    if not tag:
        raise VersionTagError(None, "git describe returned no tag")
    logger.debug("latest tag: %s", tag)
    return tag
