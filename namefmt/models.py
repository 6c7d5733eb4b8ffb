"""
namefmt.models

Value types shared by the walker, classifier, transformer, collision
resolver and executor.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, FrozenSet, Optional


class Category(str, Enum):
    REGULAR = "regular"
    EXECUTABLE = "executable"
    PACKAGE_MARKER = "package_marker"
    PACKAGE_SIBLING = "package_sibling"


class NamingStyle(str, Enum):
    SNAKE = "snake_case"
    KEBAB = "kebab-case"
    CAMEL = "camelCase"
    PRESERVE = "preserve"

    @classmethod
    def parse(cls, value: str) -> "NamingStyle":
        """Look up a style by its configuration name (``snake_case``, ``kebab-case``...)."""
        text = str(value).strip()
        for style in cls:
            if style.value == text or style.name.lower() == text.lower():
                return style
        valid = ", ".join(style.value for style in cls)
        raise ValueError(f"Unknown naming style {value!r} (expected one of: {valid})")


@dataclass(frozen=True)
class Ecosystem:
    """A package ecosystem identified by its manifest file name."""

    marker: str
    style: NamingStyle


@dataclass(frozen=True)
class Behavior:
    """Glob pattern that overrides the style of matching regular files."""

    pattern: str
    style: NamingStyle


@dataclass(frozen=True)
class DirectorySnapshot:
    """Entry names of one directory, captured once when the walker enters it."""

    path: Path
    names: FrozenSet[str]

    def __contains__(self, name: object) -> bool:
        return name in self.names


@dataclass(frozen=True)
class FileDescriptor:
    """A regular file found by the walker. Identity is its path."""

    path: Path
    name: str
    extension: str
    parent: DirectorySnapshot = field(compare=False, repr=False)
    mtime: Optional[float] = field(default=None, compare=False)

    @property
    def directory(self) -> Path:
        return self.parent.path

    @property
    def siblings(self) -> FrozenSet[str]:
        """Names of the other entries in the same directory snapshot."""
        return self.parent.names - {self.name}


@dataclass(frozen=True)
class Classification:
    category: Category
    ecosystem: Optional[Ecosystem] = None


class SkipReason(str, Enum):
    COLLISION = "collision"
    INVALID_NAME = "invalid_name"
    FAILED = "failed"


class PlanState(str, Enum):
    PLANNED = "planned"
    UNCHANGED = "unchanged"
    SKIPPED = "skipped"
    REPORTED = "reported"
    APPLIED = "applied"
    FAILED = "failed"


@dataclass
class RenamePlan:
    """Outcome for one file: proposed name, acceptance, and execution state."""

    descriptor: FileDescriptor
    classification: Classification
    proposed_name: str
    accepted: bool = False
    skip_reason: Optional[SkipReason] = None
    state: PlanState = PlanState.PLANNED
    message: str = ""

    @property
    def target(self) -> Path:
        return self.descriptor.directory / self.proposed_name

    def as_row(self) -> Dict[str, str]:
        return {
            "path": str(self.descriptor.path),
            "new_name": self.proposed_name,
            "category": self.classification.category.value,
            "status": self.state.value,
            "reason": self.skip_reason.value if self.skip_reason else "",
            "message": self.message,
        }


@dataclass
class RunSummary:
    processed: int = 0
    renamed: int = 0
    unchanged: int = 0
    skipped: int = 0
    failed: int = 0

    @property
    def ok(self) -> bool:
        return self.failed == 0

    def record(self, plan: RenamePlan) -> None:
        self.processed += 1
        if plan.state in (PlanState.REPORTED, PlanState.APPLIED):
            self.renamed += 1
        elif plan.state is PlanState.UNCHANGED:
            self.unchanged += 1
        elif plan.state is PlanState.SKIPPED:
            self.skipped += 1
        elif plan.state is PlanState.FAILED:
            self.failed += 1

    def as_counts(self, dry_run: bool) -> Dict[str, int]:
        return {
            "Processed": self.processed,
            "Would rename" if dry_run else "Renamed": self.renamed,
            "Unchanged": self.unchanged,
            "Skipped": self.skipped,
            "Failed": self.failed,
        }
