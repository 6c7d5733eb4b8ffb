"""
namefmt.engine

One sequential run: walk the root, plan and execute each file in walk order,
and return the aggregate summary.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import List, Optional

from common.base.logging import get_logger
from common.shared.report import summarize_counts, write_csv
from common.shared.utils import Progress

from .config import NamingConfig
from .executor import Emit, Executor
from .models import RenamePlan, RunSummary
from .walker import validate_root, walk

log = get_logger(__name__)

REPORT_COLUMNS = ["path", "new_name", "category", "status", "reason", "message"]


@dataclass
class RunResult:
    summary: RunSummary
    plans: List[RenamePlan]
    dry_run: bool

    @property
    def exit_code(self) -> int:
        return 0 if self.summary.ok else 1

    def renames(self) -> List[tuple]:
        """
        (old path, new name) pairs that were reported or applied. Empty
        unless the run was started with ``record_plans``.
        """
        return [
            (str(plan.descriptor.path), plan.proposed_name)
            for plan in self.plans
            if plan.accepted
        ]


def run(
    root: Path | str,
    config: Optional[NamingConfig] = None,
    *,
    dry_run: bool = True,
    emit: Optional[Emit] = None,
    show_progress: bool = False,
    today: Optional[date] = None,
    record_plans: bool = False,
) -> RunResult:
    """
    Normalize file names under ``root``.

    Args:
        root: Directory (or single file) to process.
        config: Configuration snapshot; defaults when omitted.
        dry_run: Preview only (default). False renames in place.
        emit: Receives each report line; defaults to stdout.
        show_progress: Show a tqdm progress bar while walking.
        today: Date used for timestamp prefixes when a file's mtime is unknown.
        record_plans: Keep every finished plan on the result (needed for
            ``renames()`` and ``write_plan_report``).

    Raises:
        RootPathError: If ``root`` is missing or not a file/directory.
    """
    config = config or NamingConfig()
    root = validate_root(root)
    progress = Progress(walk(root, config), desc="Scanning", disable=not show_progress)
    executor = Executor(
        config,
        dry_run=dry_run,
        emit=emit or progress.write,
        today=today,
        record_plans=record_plans,
    )

    mode = "preview" if dry_run else "apply"
    log.debug(f"Processing {root} in {mode} mode")
    for descriptor in progress:
        executor.process(descriptor)

    log.info(summarize_counts("Rename Summary", executor.summary.as_counts(dry_run)))
    if dry_run and executor.summary.renamed:
        log.info("[DRY-RUN] No changes were applied. Re-run with --inplace to rename.")
    return RunResult(executor.summary, executor.plans, dry_run)


def write_plan_report(result: RunResult, output_path: Path | str) -> Path:
    """Write one CSV row per processed file."""
    path = Path(output_path).expanduser()
    write_csv([plan.as_row() for plan in result.plans], path, fieldnames=REPORT_COLUMNS)
    log.info(f"📊 Rename report written to: {path}")
    return path
