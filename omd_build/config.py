"""
Build configuration
"""
from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Build settings, overridable via OMD_BUILD_* environment variables"""

    # Environment inputs
    VERSION_ENV_VAR: str = "ohmydot_version"
    DEBUG_ENV_VAR: str = "OHMYDOT_DEBUG"
    SHELL_ENV_VAR: str = "SHELL"

    # Link-time injection
    LINK_PACKAGE: str = "github.com/PatrickMatthiesen/oh-my-dot/cmd"
    VERSION_SYMBOL: str = "Version"
    COMMIT_SYMBOL: str = "CommitHash"

    # Versioning
    CANARY_SUFFIX: str = "canary"

    # Toolchain
    GIT_BINARY: str = "git"
    GO_BINARY: str = "go"
    POWERSHELL_BINARY: str = "powershell"
    BUILD_TARGET: str = "."

    # Output
    DEFAULT_OUT: str = "./build/"

    @property
    def link_symbols(self) -> List[str]:
        """Fully qualified names of the version and commit symbols"""
        return [
            f"{self.LINK_PACKAGE}.{self.VERSION_SYMBOL}",
            f"{self.LINK_PACKAGE}.{self.COMMIT_SYMBOL}",
        ]

    class Config:
        env_prefix = "OMD_BUILD_"
        env_file = ".env"
        case_sensitive = True


settings = Settings()
