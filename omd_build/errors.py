"""
Build errors.

Every failure aborts the run; nothing here is retried.
"""
from typing import List, Optional


class BuildError(Exception):
    """Base class for everything that aborts a build."""


class CommandFailedError(BuildError):
    """An external command exited non-zero or could not be started."""

    def __init__(
        self,
        args: List[str],
        exit_code: int,
        stdout: str = "",
        stderr: str = "",
    ):
        self.command = list(args)
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(self._render())

    def _render(self) -> str:
        detail = self.stderr.strip() or self.stdout.strip() or "no output"
        return (
            f"Command failed ({self.exit_code}): "
            f"{' '.join(self.command)}\n{detail}"
        )


class VersionTagError(BuildError):
    """The latest git tag is missing or cannot be bumped."""

    def __init__(self, tag: Optional[str], reason: str):
        self.tag = tag
        self.reason = reason
        super().__init__(f"Cannot derive canary version from tag {tag!r}: {reason}")
