"""
namefmt.collision

Collision Resolver: accepts a candidate name only when nothing else in the
target directory already occupies it and the name fits the filesystem's
name-length limit. There is no automatic suffixing; a collision leaves the
original file untouched.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, Optional, Set

from .models import DirectorySnapshot, SkipReason

DEFAULT_NAME_MAX = 255


@dataclass(frozen=True)
class Resolution:
    accepted: bool
    noop: bool = False
    reason: Optional[SkipReason] = None

    @classmethod
    def accept(cls) -> "Resolution":
        return cls(accepted=True)

    @classmethod
    def unchanged(cls) -> "Resolution":
        return cls(accepted=False, noop=True)

    @classmethod
    def skip(cls, reason: SkipReason) -> "Resolution":
        return cls(accepted=False, reason=reason)


def name_max(directory: Path) -> int:
    """Longest file name (in bytes) ``directory`` accepts, 255 when unknown."""
    try:
        return os.pathconf(directory, "PC_NAME_MAX")
    except (AttributeError, OSError, ValueError):
        return DEFAULT_NAME_MAX


def resolve(
    original_name: str,
    candidate_name: str,
    live_listing: Iterable[str],
    *,
    max_length: int = DEFAULT_NAME_MAX,
    fold_case: bool = False,
) -> Resolution:
    """
    Decide what happens to ``original_name`` → ``candidate_name`` given the
    names currently present in the directory.

    Args:
        max_length: Name-length limit in bytes of the target directory.
        fold_case: The directory ignores case, so ``Foo_Bar.txt`` occupies
            ``foo_bar.txt``. A case-only rename of the file itself is allowed.
    """
    if candidate_name == original_name:
        return Resolution.unchanged()
    if len(os.fsencode(candidate_name)) > max_length:
        return Resolution.skip(SkipReason.INVALID_NAME)
    if fold_case:
        wanted = candidate_name.casefold()
        occupied = any(name != original_name and name.casefold() == wanted for name in live_listing)
    else:
        occupied = candidate_name in set(live_listing)
    if occupied:
        return Resolution.skip(SkipReason.COLLISION)
    return Resolution.accept()


def _ignores_case(snapshot: DirectorySnapshot) -> bool:
    # Look up an existing name with its case flipped.
    for name in sorted(snapshot.names):
        flipped = name.swapcase()
        if flipped != name and flipped not in snapshot.names:
            return os.path.lexists(snapshot.path / flipped)
    return False


@dataclass
class LiveListings:
    """
    Per-directory view of entry names as the run progresses. Starts from the
    walker's snapshot and records every accepted rename, in preview and
    apply mode alike, so both modes reach the same decisions.
    """

    _names: Dict[Path, Set[str]] = field(default_factory=dict)
    _limits: Dict[Path, int] = field(default_factory=dict)
    _folds: Dict[Path, bool] = field(default_factory=dict)

    def names(self, snapshot: DirectorySnapshot) -> Set[str]:
        if snapshot.path not in self._names:
            self._names[snapshot.path] = set(snapshot.names)
        return self._names[snapshot.path]

    def max_length(self, snapshot: DirectorySnapshot) -> int:
        if snapshot.path not in self._limits:
            self._limits[snapshot.path] = name_max(snapshot.path)
        return self._limits[snapshot.path]

    def folds_case(self, snapshot: DirectorySnapshot) -> bool:
        if snapshot.path not in self._folds:
            self._folds[snapshot.path] = _ignores_case(snapshot)
        return self._folds[snapshot.path]

    def record_rename(self, snapshot: DirectorySnapshot, old: str, new: str) -> None:
        names = self.names(snapshot)
        names.discard(old)
        names.add(new)
