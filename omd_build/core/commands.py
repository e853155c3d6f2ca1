"""
External commands — the only place that starts child processes.

Every tool the build touches (git, go, powershell) goes through a
``CommandRunner`` so tests can substitute a scripted fake.  Calls are
blocking with no timeout; the build waits for each one in turn.
"""
import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Protocol, Sequence

from omd_build.errors import CommandFailedError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Captured outcome of one external command."""
    stdout: str
    stderr: str
    exit_code: int

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


class CommandRunner(Protocol):
    def run(self, args: Sequence[str], cwd: Optional[Path] = None) -> CommandResult:
        ...


class SubprocessRunner:
    """Runs commands with ``subprocess.run``, decoding output as UTF-8."""

    def __init__(self, cwd: Optional[Path] = None):
        self.cwd = cwd

    def run(self, args: Sequence[str], cwd: Optional[Path] = None) -> CommandResult:
        """Execute *args* and return (stdout, stderr, exit_code)"""
        if cwd is None:
            cwd = self.cwd

        logger.debug("exec: %s", " ".join(args))
        try:
            result = subprocess.run(
                list(args),
                cwd=str(cwd) if cwd is not None else None,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as e:
            # Executable missing or not runnable
            return CommandResult(stdout="", stderr=str(e), exit_code=-1)

        return CommandResult(
            stdout=result.stdout or "",
            stderr=result.stderr or "",
            exit_code=result.returncode,
        )


def check_output(
    runner: CommandRunner,
    args: Sequence[str],
    cwd: Optional[Path] = None,
) -> str:
    """Run *args*; return stdout or raise CommandFailedError."""
    result = runner.run(args, cwd=cwd)
    if not result.ok:
        raise CommandFailedError(
            list(args),
            result.exit_code,
            stdout=result.stdout,
            stderr=result.stderr,
        )
    return result.stdout
