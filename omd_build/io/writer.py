"""
Writer — serialize a build receipt to JSON.
"""
import json
from pathlib import Path

from omd_build.io.schema import BuildReceipt


def write_receipt(receipt: BuildReceipt, path: Path) -> Path:
    """
    Write *receipt* to *path* as indented, key-sorted JSON.

    Creates the parent directory if needed.  Returns *path*.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(
            receipt.model_dump(mode="json"),
            indent=2,
            sort_keys=True,
        )
        + "\n"
    )
    return path
