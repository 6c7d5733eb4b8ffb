"""
namefmt.executor

Executor: turns each file into a ``RenamePlan`` (classify → transform →
collision check) and carries it to a terminal state.

Preview mode reports ``Would rename <old> to <new>`` and never touches the
filesystem. Apply mode renames, then confirms with ``Renamed <old> to <new>``.
A failed rename is logged, counted, and the run continues. Both modes share
the same planning path and the same live directory listings, so a preview
lists exactly the renames an apply run would perform on the same tree.
"""

from __future__ import annotations

from datetime import date
from typing import Callable, List, Optional

from common.base.logging import get_logger
from common.base.ops import rename_path

from .classifier import classify
from .collision import LiveListings, resolve
from .config import NamingConfig
from .models import FileDescriptor, PlanState, RenamePlan, RunSummary, SkipReason
from .transformer import transform

log = get_logger(__name__)

Emit = Callable[[str], None]


class Executor:
    """
    Plans and executes renames one file at a time. Finished plans are only
    kept in ``plans`` when ``record_plans`` is set (for the CSV report).
    """

    def __init__(
        self,
        config: Optional[NamingConfig] = None,
        *,
        dry_run: bool = True,
        emit: Emit = print,
        today: Optional[date] = None,
        record_plans: bool = False,
    ) -> None:
        self.config = config or NamingConfig()
        self.dry_run = dry_run
        self.emit = emit
        self.today = today
        self.record_plans = record_plans
        self.listings = LiveListings()
        self.summary = RunSummary()
        self.plans: List[RenamePlan] = []

    # ------------------------------------------------------------------
    # Planning
    # ------------------------------------------------------------------

    def plan(self, descriptor: FileDescriptor) -> RenamePlan:
        classification = classify(descriptor, config=self.config)
        candidate = transform(
            descriptor.name,
            classification,
            self.config,
            mtime=descriptor.mtime,
            today=self.today,
        )
        plan = RenamePlan(descriptor, classification, candidate)

        parent = descriptor.parent
        resolution = resolve(
            descriptor.name,
            candidate,
            self.listings.names(parent),
            max_length=self.listings.max_length(parent),
            fold_case=self.listings.folds_case(parent),
        )
        if resolution.noop:
            plan.state = PlanState.UNCHANGED
        elif resolution.accepted:
            plan.accepted = True
        else:
            plan.state = PlanState.SKIPPED
            plan.skip_reason = resolution.reason
            if resolution.reason is SkipReason.INVALID_NAME:
                plan.message = f"{candidate} is too long for this filesystem"
            else:
                plan.message = f"{candidate} already exists"

        log.debug(
            f"{descriptor.path}: {classification.category.value} → {candidate} ({plan.state.value})"
        )
        return plan

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def execute(self, plan: RenamePlan) -> RenamePlan:
        if plan.state is PlanState.SKIPPED:
            log.warning(f"⚠️ Skipping {plan.descriptor.path}: {plan.message}")
            return plan
        if not plan.accepted:
            return plan

        old_path = plan.descriptor.path
        if self.dry_run:
            plan.state = PlanState.REPORTED
            self.emit(f"Would rename {old_path} to {plan.proposed_name}")
        else:
            try:
                rename_path(old_path, plan.target)
            except FileExistsError:
                # target appeared after planning, or the filesystem ignores case
                plan.accepted = False
                plan.state = PlanState.SKIPPED
                plan.skip_reason = SkipReason.COLLISION
                plan.message = f"{plan.proposed_name} already exists"
                log.warning(f"⚠️ Skipping {old_path}: {plan.message}")
                return plan
            except OSError as exc:
                plan.accepted = False
                plan.state = PlanState.FAILED
                plan.skip_reason = SkipReason.FAILED
                plan.message = exc.strerror or str(exc)
                log.warning(f"⚠️ Failed to rename {old_path} to {plan.proposed_name}: {plan.message}")
                return plan
            plan.state = PlanState.APPLIED
            self.emit(f"Renamed {old_path} to {plan.proposed_name}")

        self.listings.record_rename(plan.descriptor.parent, plan.descriptor.name, plan.proposed_name)
        return plan

    def process(self, descriptor: FileDescriptor) -> RenamePlan:
        plan = self.execute(self.plan(descriptor))
        self.summary.record(plan)
        if self.record_plans:
            self.plans.append(plan)
        return plan
