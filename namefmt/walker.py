"""
namefmt.walker

Directory Walker: lazy, depth-first, pre-order enumeration of regular files.

Each directory is listed exactly once, on entry. The listing becomes a
``DirectorySnapshot`` shared by every descriptor from that directory, so
renames performed while the generator is suspended never change how the
remaining siblings are classified. Directories are descended into but never
yielded.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from common.base.fs import is_hidden_name
from common.base.logging import get_logger

from .config import NamingConfig
from .errors import RootPathError
from .models import DirectorySnapshot, FileDescriptor

log = get_logger(__name__)


def _split_extension(name: str) -> str:
    return Path(name).suffix


def _entry_mtime(entry: os.DirEntry) -> Optional[float]:
    try:
        return entry.stat(follow_symlinks=False).st_mtime
    except OSError as exc:
        log.debug(f"Could not stat {entry.path}: {exc}")
        return None


def _list_directory(directory: Path) -> Optional[List[os.DirEntry]]:
    try:
        with os.scandir(directory) as it:
            return sorted(it, key=lambda entry: entry.name)
    except PermissionError:
        log.warning(f"⚠️ Permission denied, skipping directory: {directory}")
    except OSError as exc:
        log.warning(f"⚠️ Cannot read directory {directory}: {exc}")
    return None


def _skip_name(name: str, config: NamingConfig) -> bool:
    if not config.include_hidden and is_hidden_name(name):
        return True
    return config.is_excluded(name)


def snapshot_directory(directory: Path) -> DirectorySnapshot:
    """Capture the current entry names of ``directory``."""
    entries = _list_directory(directory) or []
    return DirectorySnapshot(directory, frozenset(entry.name for entry in entries))


def _scan_directory(
    directory: Path,
    config: NamingConfig,
) -> Tuple[List[FileDescriptor], List[Path]]:
    """Files (as descriptors) and subdirectories of one directory, sorted by name."""
    entries = _list_directory(directory)
    if entries is None:
        return [], []

    snapshot = DirectorySnapshot(directory, frozenset(entry.name for entry in entries))
    files: List[FileDescriptor] = []
    subdirs: List[Path] = []

    for entry in entries:
        if _skip_name(entry.name, config):
            log.debug(f"Skipping excluded entry: {entry.path}")
            continue
        try:
            if entry.is_symlink():
                log.warning(f"⚠️ Skipping symbolic link: {entry.path}")
                continue
            if entry.is_dir(follow_symlinks=False):
                subdirs.append(Path(entry.path))
                continue
            if not entry.is_file(follow_symlinks=False):
                log.debug(f"Skipping special file: {entry.path}")
                continue
        except PermissionError:
            log.warning(f"⚠️ Permission denied, skipping: {entry.path}")
            continue
        except OSError as exc:
            log.warning(f"⚠️ Cannot inspect {entry.path}: {exc}")
            continue

        files.append(
            FileDescriptor(
                path=Path(entry.path),
                name=entry.name,
                extension=_split_extension(entry.name),
                parent=snapshot,
                mtime=_entry_mtime(entry),
            )
        )
    return files, subdirs


def _walk_directory(root: Path, config: NamingConfig) -> Iterator[FileDescriptor]:
    # pending directories; popped in pre-order
    pending: List[Path] = [root]
    while pending:
        directory = pending.pop()
        files, subdirs = _scan_directory(directory, config)
        yield from files
        pending.extend(reversed(subdirs))


def _single_file(path: Path) -> Iterator[FileDescriptor]:
    parent = snapshot_directory(path.parent)
    try:
        mtime: Optional[float] = path.stat().st_mtime
    except OSError as exc:
        log.debug(f"Could not stat {path}: {exc}")
        mtime = None
    yield FileDescriptor(
        path=path,
        name=path.name,
        extension=_split_extension(path.name),
        parent=parent,
        mtime=mtime,
    )


def validate_root(root: Path | str) -> Path:
    """Return ``root`` as a Path, raising ``RootPathError`` if it cannot be walked."""
    path = Path(root).expanduser()
    if not path.exists():
        raise RootPathError(f"Path does not exist: {path}")
    if not (path.is_dir() or path.is_file()):
        raise RootPathError(f"Path is neither a file nor a directory: {path}")
    return path


def walk(root: Path | str, config: Optional[NamingConfig] = None) -> Iterator[FileDescriptor]:
    """
    Yield a ``FileDescriptor`` for every regular file reachable under ``root``.

    ``root`` may also be a single regular file, in which case only that file
    is yielded (classified against its parent directory). Paths keep the
    form of ``root`` as given, so report lines stay relative when the root
    was relative.

    Raises:
        RootPathError: If ``root`` does not exist or is neither a file nor a
            directory. Raised on the first ``next()``.
    """
    config = config or NamingConfig()
    root = validate_root(root)
    if root.is_dir():
        yield from _walk_directory(root, config)
    elif root.is_symlink():
        log.warning(f"⚠️ Skipping symbolic link: {root}")
    else:
        yield from _single_file(root)
