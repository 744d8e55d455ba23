"""Filesystem helpers for working-copy directories."""
from __future__ import annotations

import os
import shutil


def clear_directory(path: str) -> None:
    """Make path an existing, empty directory, discarding anything inside it."""
    if os.path.isdir(path):
        for entry in os.scandir(path):
            if entry.is_dir(follow_symlinks=False):
                shutil.rmtree(entry.path)
            else:
                os.remove(entry.path)
    else:
        if os.path.lexists(path):
            os.remove(path)
        os.makedirs(path, exist_ok=True)
