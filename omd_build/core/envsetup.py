"""
Developer environment setup after a build.

Points a debug variable at the build output and makes sure PATH
references that variable once.

  - Windows: the user-scope environment (registry) is updated in place.
  - Linux / macOS: nothing is touched; shell lines are returned for the
    user to paste into their startup file.

Re-running with the same output path changes nothing.
"""
from __future__ import annotations

import logging
import ntpath
import os
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Union

from omd_build.config import Settings
from omd_build.core.commands import CommandRunner, check_output
from omd_build.core.environment import EnvironmentProvider
from omd_build.core.shell import ShellConfig, detect_shell

logger = logging.getLogger(__name__)

WINDOWS_PATH_VAR = "Path"


@dataclass
class EnvSetupResult:
    """What an environment setup pass did (or asks the user to do)."""
    debug_var_updated: bool = False
    path_updated: bool = False
    instructions: List[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return self.debug_var_updated or self.path_updated


# =============================================================================
# Windows user environment
# =============================================================================

class UserEnvironmentStore(Protocol):
    def get(self, name: str) -> Optional[str]:
        ...

    def set(self, name: str, value: str, expandable: bool = False) -> None:
        ...


def _ps_quote(value: str) -> str:
    """Single-quoted PowerShell literal."""
    return "'" + value.replace("'", "''") + "'"


class PowerShellUserEnvironment:
    """
    User-scope variables under ``HKCU:\\Environment`` via PowerShell.

    Values are read unexpanded so ``%VAR%`` references in PATH are seen
    as written.  Expandable values are stored as REG_EXPAND_SZ.
    """

    def __init__(self, runner: CommandRunner, powershell: str = "powershell"):
        self.runner = runner
        self.powershell = powershell

    def _invoke(self, script: str) -> str:
        return check_output(
            self.runner,
            [self.powershell, "-NoProfile", "-NonInteractive", "-Command", script],
        )

    def get(self, name: str) -> Optional[str]:
        script = (
            "[Console]::OutputEncoding = [Text.Encoding]::UTF8; "
            "(Get-Item -LiteralPath 'HKCU:\\Environment')"
            f".GetValue({_ps_quote(name)}, '', 'DoNotExpandEnvironmentNames')"
        )
        value = self._invoke(script).rstrip("\r\n")
        return value or None

    def set(self, name: str, value: str, expandable: bool = False) -> None:
        if expandable:
            script = (
                "New-ItemProperty -LiteralPath 'HKCU:\\Environment' "
                f"-Name {_ps_quote(name)} -Value {_ps_quote(value)} "
                "-PropertyType ExpandString -Force | Out-Null"
            )
        else:
            script = (
                f"[Environment]::SetEnvironmentVariable("
                f"{_ps_quote(name)}, {_ps_quote(value)}, 'User')"
            )
        self._invoke(script)


def path_references(path_value: str, debug_var: str, abs_path: str) -> bool:
    """True if PATH already names ``%debug_var%`` or contains *abs_path*."""
    haystack = path_value.lower()
    return f"%{debug_var}%".lower() in haystack or abs_path.lower() in haystack


def same_windows_path(current: Optional[str], abs_path: str) -> bool:
    """Case-insensitive, separator-insensitive comparison."""
    if current is None:
        return False
    return ntpath.normcase(current) == ntpath.normcase(abs_path)


def append_path_entry(path_value: str, entry: str) -> str:
    if not path_value:
        return entry
    return path_value.rstrip(";") + ";" + entry


class WindowsEnvironmentConfigurator:
    """Persists the debug variable and its PATH reference for the user."""

    def __init__(self, store: UserEnvironmentStore, debug_var: str):
        self.store = store
        self.debug_var = debug_var

    def configure(self, abs_path: str) -> EnvSetupResult:
        result = EnvSetupResult()

        current = self.store.get(self.debug_var)
        result.debug_var_updated = not same_windows_path(current, abs_path)

        path_value = self.store.get(WINDOWS_PATH_VAR) or ""
        if not path_references(path_value, self.debug_var, abs_path):
            entry = f"%{self.debug_var}%"
            logger.info("Adding %s to user PATH", entry)
            self.store.set(WINDOWS_PATH_VAR, append_path_entry(path_value, entry), expandable=True)
            result.path_updated = True

        # Only the debug variable write broadcasts WM_SETTINGCHANGE; it must
        # run last, and also when PATH alone changed.
        if result.changed:
            logger.info("Setting user %s=%s (was %r)", self.debug_var, abs_path, current)
            self.store.set(self.debug_var, abs_path)
            result.instructions.append(
                "Restart your terminal to pick up the updated user environment."
            )
        else:
            logger.debug("%s already points at %s", self.debug_var, abs_path)
        return result


# =============================================================================
# Unix-like: print, never mutate
# =============================================================================

def render_exports(shell: ShellConfig, debug_var: str, abs_path: str) -> List[str]:
    """Lines that set *debug_var* and put it on PATH in *shell*'s syntax."""
    if shell.uses_fish_syntax:
        return [
            f'set -gx {debug_var} "{abs_path}"',
            f"set -gx PATH $PATH ${debug_var}",
        ]
    if shell.name == "powershell":
        return [
            f'$env:{debug_var} = "{abs_path}"',
            f'$env:PATH += ":$env:{debug_var}"',
        ]
    return [
        f'export {debug_var}="{abs_path}"',
        f'export PATH="$PATH:${debug_var}"',
    ]


class UnixEnvironmentConfigurator:
    """Compares the inherited debug variable and explains how to fix it."""

    def __init__(self, env: EnvironmentProvider, debug_var: str, shell_var: str = "SHELL"):
        self.env = env
        self.debug_var = debug_var
        self.shell_var = shell_var

    def configure(self, abs_path: str) -> EnvSetupResult:
        current = self.env.get(self.debug_var)
        if current and os.path.normpath(current) == abs_path:
            logger.debug("%s already points at %s", self.debug_var, abs_path)
            return EnvSetupResult()

        shell = detect_shell(self.env, self.shell_var)
        lines = render_exports(shell, self.debug_var, abs_path)
        return EnvSetupResult(
            instructions=[
                f"To use the debug build, add the following to {shell.profile_path}:",
                *lines,
            ]
        )


Configurator = Union[WindowsEnvironmentConfigurator, UnixEnvironmentConfigurator]


def configurator_for(
    system: str,
    settings: Settings,
    runner: CommandRunner,
    env: EnvironmentProvider,
    store: Optional[UserEnvironmentStore] = None,
) -> Optional[Configurator]:
    """
    Pick the configurator for *system* (``platform.system().lower()``).

    Returns None for platforms with no known convention.
    """
    if system == "windows":
        if store is None:
            store = PowerShellUserEnvironment(runner, settings.POWERSHELL_BINARY)
        return WindowsEnvironmentConfigurator(store, settings.DEBUG_ENV_VAR)
    if system in ("linux", "darwin"):
        return UnixEnvironmentConfigurator(env, settings.DEBUG_ENV_VAR, settings.SHELL_ENV_VAR)
    return None
