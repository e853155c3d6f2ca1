"""
Shell detection for the Unix environment hints.

Picks the startup file the user should edit from the shell named in
``$SHELL``.  Unknown or missing shells fall back to POSIX ``~/.profile``.
"""
import ntpath
import posixpath
from dataclasses import dataclass
from typing import Dict, Optional

from omd_build.core.environment import EnvironmentProvider


@dataclass(frozen=True)
class ShellConfig:
    """A supported shell and its startup file."""
    name: str
    profile_path: str

    @property
    def uses_fish_syntax(self) -> bool:
        return self.name == "fish"


SUPPORTED_SHELLS: Dict[str, ShellConfig] = {
    "bash": ShellConfig("bash", "~/.bashrc"),
    "zsh": ShellConfig("zsh", "~/.zshrc"),
    "fish": ShellConfig("fish", "~/.config/fish/config.fish"),
    "powershell": ShellConfig("powershell", "$PROFILE"),
    "posix": ShellConfig("posix", "~/.profile"),
}

FALLBACK_SHELL = "posix"

_ALIASES = {
    "pwsh": "powershell",
    "powershell": "powershell",
    "sh": "posix",
    "dash": "posix",
}


def normalize_shell_name(value: str) -> str:
    """``/usr/bin/zsh`` -> ``zsh``, ``pwsh.exe`` -> ``powershell``, ``dash`` -> ``posix``."""
    name = ntpath.basename(posixpath.basename(value.strip()))
    for ext in (".exe", ".bat", ".cmd"):
        if name.lower().endswith(ext):
            name = name[: -len(ext)]
    name = name.lower()
    return _ALIASES.get(name, name)


def get_shell_config(name: str) -> Optional[ShellConfig]:
    return SUPPORTED_SHELLS.get(name)


def detect_shell(env: EnvironmentProvider, hint_var: str = "SHELL") -> ShellConfig:
    """Shell named by *hint_var*, or the POSIX fallback."""
    hint = env.get(hint_var)
    if hint:
        config = get_shell_config(normalize_shell_name(hint))
        if config is not None:
            return config
    return SUPPORTED_SHELLS[FALLBACK_SHELL]
