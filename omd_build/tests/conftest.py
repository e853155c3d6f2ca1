"""
Shared pytest fixtures for omd_build tests.

Nothing here starts a real process: git, go and powershell are replaced
by a scripted runner that records every call.

  - fake_runner: answers commands from a table keyed by argv prefix
  - user_store: in-memory Windows user environment that counts writes
  - build_settings: Settings with fixed, recognisable values
"""
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import pytest

from omd_build.config import Settings
from omd_build.core.commands import CommandResult
from omd_build.core.environment import MappingEnvironment

LINK_PACKAGE = "github.com/example/tool/cmd"
COMMIT = "a1b2c3d"


class FakeRunner:
    """Scripted CommandRunner; longest matching argv prefix wins."""

    def __init__(self):
        self.responses: Dict[Tuple[str, ...], CommandResult] = {}
        self.calls: List[List[str]] = []

    def on(self, prefix: Sequence[str], stdout: str = "", stderr: str = "", exit_code: int = 0):
        self.responses[tuple(prefix)] = CommandResult(stdout, stderr, exit_code)
        return self

    def run(self, args: Sequence[str], cwd: Optional[Path] = None) -> CommandResult:
        args = list(args)
        self.calls.append(args)
        best = None
        for prefix, result in self.responses.items():
            if tuple(args[: len(prefix)]) == prefix:
                if best is None or len(prefix) > len(best[0]):
                    best = (prefix, result)
        if best is None:
            return CommandResult("", f"unexpected command: {args}", 127)
        return best[1]

    def called(self, *prefix: str) -> List[List[str]]:
        return [c for c in self.calls if tuple(c[: len(prefix)]) == prefix]


class InMemoryUserEnvironment:
    """UserEnvironmentStore backed by a dict; records every write."""

    def __init__(self, values: Optional[Dict[str, str]] = None):
        self.values = dict(values or {})
        self.writes: List[Tuple[str, str, bool]] = []

    def get(self, name: str) -> Optional[str]:
        return self.values.get(name)

    def set(self, name: str, value: str, expandable: bool = False) -> None:
        self.values[name] = value
        self.writes.append((name, value, expandable))


@pytest.fixture
def build_settings() -> Settings:
    return Settings(
        VERSION_ENV_VAR="ohmydot_version",
        DEBUG_ENV_VAR="OHMYDOT_DEBUG",
        LINK_PACKAGE=LINK_PACKAGE,
        GIT_BINARY="git",
        GO_BINARY="go",
        POWERSHELL_BINARY="powershell",
    )


@pytest.fixture
def fake_runner() -> FakeRunner:
    """Runner with a working git (commit + tag 2.5.9) and go."""
    runner = FakeRunner()
    runner.on(["git", "rev-parse", "--short", "HEAD"], stdout=COMMIT + "\n")
    runner.on(["git", "describe", "--tags", "--abbrev=0"], stdout="2.5.9\n")
    runner.on(["go", "build"])
    return runner


@pytest.fixture
def empty_env() -> MappingEnvironment:
    return MappingEnvironment({})


@pytest.fixture
def user_store() -> InMemoryUserEnvironment:
    return InMemoryUserEnvironment({"Path": r"C:\Windows\system32;C:\Tools"})
