"""
common.base.ops

Filesystem mutation helpers for namefmt.

 - Atomic single-entry rename
 - Refuses to overwrite an existing destination (case-only renames of the
   same file on case-insensitive filesystems are allowed)
"""

from __future__ import annotations

import errno
import os
from pathlib import Path

from .logging import get_logger

log = get_logger(__name__)


def is_same_entry(src: Path | str, dst: Path | str) -> bool:
    """True when both paths name the same filesystem object."""
    try:
        return os.path.samefile(src, dst)
    except OSError:
        return False


def rename_path(src: Path | str, dst: Path | str) -> None:
    """
    Rename a single entry in place using the filesystem's rename primitive.

    Args:
        src: Existing path.
        dst: Destination path (normally in the same directory).

    Raises:
        FileNotFoundError: If ``src`` disappeared.
        FileExistsError: If ``dst`` is occupied by a different entry.
        OSError: Any other failure reported by the OS.
    """
    src, dst = Path(src), Path(dst)

    if not os.path.lexists(src):
        raise FileNotFoundError(errno.ENOENT, "Source no longer exists", str(src))
    if os.path.lexists(dst) and not is_same_entry(src, dst):
        raise FileExistsError(errno.EEXIST, "Destination already exists", str(dst))

    try:
        os.rename(src, dst)
        log.debug(f"Renamed {src} → {dst}")
    except OSError as e:
        log.debug(f"Rename failed {src} → {dst}: {e}")
        raise
