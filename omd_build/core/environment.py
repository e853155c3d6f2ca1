"""
Environment providers.

Resolvers ask a provider for variables instead of reading ``os.environ``
themselves, so a build can be driven from a plain dict.
"""
import os
from typing import Mapping, Optional, Protocol


class EnvironmentProvider(Protocol):
    def get(self, name: str) -> Optional[str]:
        ...


class ProcessEnvironment:
    """The environment inherited by this process."""

    def get(self, name: str) -> Optional[str]:
        return os.environ.get(name)


class MappingEnvironment:
    """A fixed set of variables."""

    def __init__(self, values: Optional[Mapping[str, str]] = None):
        self._values = dict(values or {})

    def get(self, name: str) -> Optional[str]:
        return self._values.get(name)
