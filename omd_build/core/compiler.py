"""
Go toolchain invocation with link-time version injection.

Produces a single executable; the version and commit hash are written
into two string variables of the target package via ``-ldflags -X``.
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from omd_build.config import Settings
from omd_build.core.commands import CommandRunner, check_output

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LinkFlags:
    """Values substituted into program symbols at link time"""
    version: str
    commit: str
    package: str
    version_symbol: str = "Version"
    commit_symbol: str = "CommitHash"

    @classmethod
    def from_settings(cls, version: str, commit: str, settings: Settings) -> "LinkFlags":
        return cls(
            version=version,
            commit=commit,
            package=settings.LINK_PACKAGE,
            version_symbol=settings.VERSION_SYMBOL,
            commit_symbol=settings.COMMIT_SYMBOL,
        )

    def to_ldflags(self) -> str:
        """Generate the -ldflags value"""
        return " ".join([
            f"-X {self.package}.{self.version_symbol}={self.version}",
            f"-X {self.package}.{self.commit_symbol}={self.commit}",
        ])


class GoBuild:
    """Runs ``go build`` for one target."""

    def __init__(self, runner: CommandRunner, go: str = "go", target: str = "."):
        self.runner = runner
        self.go = go
        self.target = target

    def command(self, flags: LinkFlags, out: str) -> List[str]:
        return [self.go, "build", "-ldflags", flags.to_ldflags(), "-o", out, self.target]

    def build(self, flags: LinkFlags, out: str, cwd: Optional[Path] = None) -> str:
        """Compile; raises CommandFailedError with the compiler's diagnostics."""
        cmd = self.command(flags, out)
        logger.info("Compiling %s -> %s", self.target, out)
        return check_output(self.runner, cmd, cwd=cwd)
