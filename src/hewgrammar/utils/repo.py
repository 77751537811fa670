"""
Repository root detection utility.

Finds the extension repository root by searching upward for a .hewgrammar/
directory, so commands run from any subdirectory operate on the same grammar.
"""
import os
from pathlib import Path

REPO_ROOT_ENV = "HEWGRAMMAR_REPO_ROOT"
CONFIG_DIR_NAME = ".hewgrammar"


def find_repo_root(start: Path = None) -> Path:
    """
    Find repo root by searching upward for .hewgrammar/ directory.

    Args:
        start: Starting directory (default: cwd)

    Returns:
        Path to repo root (directory containing .hewgrammar/)

    Note:
        HEWGRAMMAR_REPO_ROOT, when set, wins over the search (the validator
        runner sets it for its pytest subprocess). If .hewgrammar/ is not
        found, returns the starting directory.
    """
    pinned = os.environ.get(REPO_ROOT_ENV)
    if pinned and start is None:
        return Path(pinned).resolve()

    current = start or Path.cwd()
    current = current.resolve()

    while current != current.parent:
        if (current / CONFIG_DIR_NAME).is_dir():
            return current
        current = current.parent

    return start.resolve() if start else Path.cwd().resolve()
