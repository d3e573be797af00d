"""Locate Pipenv projects (directories holding a Pipfile)."""
from __future__ import annotations

import logging
import os
from typing import List

from constants import Constants

logger = logging.getLogger(__name__)


def _skip_dir(name: str) -> bool:
    return name.startswith(".") or name in Constants.DISCOVERY_SKIP_DIRS


def find_pipenv_projects(dir_name: str, recursive: bool = False) -> List[str]:
    """Return directories under ``dir_name`` that contain a Pipfile.

    Args:
        dir_name: Directory to scan.
        recursive: Descend into subdirectories, skipping hidden, virtualenv
            and ``node_modules`` directories.

    Returns:
        Sorted list of project directories (may be empty).

    Raises:
        FileNotFoundError: If ``dir_name`` is not a directory.
    """
    if not os.path.isdir(dir_name):
        raise FileNotFoundError(f"Directory not found: {dir_name}")

    if not recursive:
        if os.path.isfile(os.path.join(dir_name, Constants.PIPFILE)):
            return [dir_name]
        return []

    found: List[str] = []
    for root, dirs, files in os.walk(dir_name):
        dirs[:] = [d for d in dirs if not _skip_dir(d)]
        if Constants.PIPFILE in files:
            found.append(root)
            if Constants.PIPFILE_LOCK not in files:
                logger.warning("Pipfile without Pipfile.lock in %s; pipenv may need to lock first", root)
    return sorted(found)
