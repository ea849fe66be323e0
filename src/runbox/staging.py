"""File staging helpers.

These functions only know about paths.  They are used by the workspace
manager to clone template projects and to write the submitted code, but
carry no knowledge of workspaces themselves.  Every file is flushed and
``fsync``ed before the call returns so that a process spawned right after
sees the complete contents.
"""

from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import Union


def copy_file(src: Path, dst: Path) -> None:
    """Copy a single file and flush it to disk."""
    with open(src, "rb") as source, open(dst, "wb") as dest:
        shutil.copyfileobj(source, dest)
        dest.flush()
        os.fsync(dest.fileno())
    shutil.copymode(src, dst)


def copy_tree(src: Path, dst: Path) -> None:
    """Mirror the directory ``src`` into ``dst``.

    ``dst`` may already exist.  Relative structure is preserved; symlinks
    are followed.
    """
    src = Path(src)
    dst = Path(dst)
    if not src.is_dir():
        raise NotADirectoryError(f"Template source is not a directory: {src}")
    dst.mkdir(parents=True, exist_ok=True)
    for dirpath, dirnames, filenames in os.walk(src, followlinks=True):
        rel = Path(dirpath).relative_to(src)
        target_dir = dst / rel
        for name in dirnames:
            (target_dir / name).mkdir(exist_ok=True)
        for name in filenames:
            copy_file(Path(dirpath) / name, target_dir / name)


def place_entry_point(code: Union[str, bytes], root: Path, canonical_name: str) -> Path:
    """Write ``code`` to ``root/canonical_name`` and return the path."""
    if Path(canonical_name).name != canonical_name:
        raise ValueError(f"Entry point name must be a plain file name: {canonical_name!r}")
    data = code.encode("utf-8") if isinstance(code, str) else code
    entry = Path(root) / canonical_name
    with open(entry, "wb") as f:
        f.write(data)
        f.flush()
        os.fsync(f.fileno())
    return entry
