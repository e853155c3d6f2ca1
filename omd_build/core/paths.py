"""Output path resolution."""
import os
from pathlib import Path
from typing import Optional


def expand_output_path(out: str) -> str:
    """
    Expand a leading ``~`` in *out*.

    ``go build -o`` is started without a shell, so this is the only place
    the home directory gets substituted.
    """
    return os.path.expanduser(out)


def resolve_output_path(out: str, cwd: Optional[Path] = None) -> str:
    """
    Absolute, normalised form of *out*.

    Relative paths are taken against *cwd* (default: the process cwd).
    A trailing separator does not change the result.  No ``~`` expansion;
    pass the result of expand_output_path.
    """
    path = Path(out)
    if not path.is_absolute():
        path = (cwd or Path.cwd()) / path
    return os.path.normpath(str(path))
