"""Per-user progress gate over the step catalog.

A step is reachable when it is completed, when it is the catalog successor
of the highest completed step (the first step when nothing is completed),
or when it was explicitly unlocked. Phase visibility only affects how the
catalog is displayed and is never consulted when deciding reachability.
"""
import logging
from enum import Enum
from typing import Any, Optional

from pathway.program.catalog import PHASE_ORDER, PHASE_TITLES, Catalog, CatalogError, Phase, previous_phase
from pathway.program.progress import fetch_progress, record_completion, record_unlock
from pathway.program.steps import get_catalog
from pathway.session import ProgramSession
from pathway.store import StoreError

logger = logging.getLogger(__name__)


class StepStatus(str, Enum):
    CURRENT = "current"
    COMPLETED = "completed"
    AVAILABLE = "available"
    LOCKED = "locked"


class ProgressGate:
    def __init__(self, session: ProgramSession, catalog: Optional[Catalog] = None):
        if catalog is None:
            catalog = get_catalog()
        self.session = session
        self.catalog = catalog
        self.completed: set[int] = set()
        self.available: set[int] = set()
        self.current_step_id: int = catalog.first_id
        self.error: Optional[str] = None

    def load(self) -> "ProgressGate":
        try:
            rows = fetch_progress(self.session.store, self.session.user_id)
        except StoreError as exc:
            self.error = str(exc)
            self.session.notify("Error", "Failed to load your progress", level="error")
            return self

        self.error = None
        self.completed = {row["step_number"] for row in rows if row["completed"]}
        self.available = {row["step_number"] for row in rows if row["available"]}

        for step in self.catalog:
            if not step.default_completed or step.id in self.completed:
                continue
            try:
                record_completion(self.session.store, self.session.user_id, step.id, step.title)
            except StoreError:
                self.session.notify("Error", "Failed to save progress", level="error")
            self.completed.add(step.id)

        self.current_step_id = self._initial_step_id()
        return self

    def highest_completed(self) -> Optional[int]:
        done = [step_id for step_id in self.completed if step_id in self.catalog]
        return max(done) if done else None

    def frontier_id(self, completed: Optional[set[int]] = None) -> Optional[int]:
        """The step unlocked by sequence alone: successor of the highest completed id."""
        if completed is None:
            completed = self.completed
        done = [step_id for step_id in completed if step_id in self.catalog]
        if not done:
            return self.catalog.first_id
        return self.catalog.successor_id(max(done))

    def _initial_step_id(self) -> int:
        final_id = self.catalog.final_id
        if final_id in self.completed:
            return final_id

        frontier = self.frontier_id()
        pending = sorted(
            step_id
            for step_id in self.available
            if step_id in self.catalog
            and step_id not in self.completed
            and (frontier is None or step_id < frontier)
        )
        if pending:
            return pending[0]
        if frontier is not None:
            return frontier
        highest = self.highest_completed()
        return highest if highest is not None else self.catalog.first_id

    def _enabled(self, step_id: int, completed: set[int]) -> bool:
        if step_id not in self.catalog:
            return False
        return step_id in completed or step_id == self.frontier_id(completed) or step_id in self.available

    def is_enabled(self, step_id: int) -> bool:
        return self._enabled(step_id, self.completed)

    def is_completed(self, step_id: int) -> bool:
        return step_id in self.completed

    @property
    def is_finished(self) -> bool:
        return self.catalog.final_id in self.completed

    def status(self, step_id: int) -> StepStatus:
        if step_id == self.current_step_id:
            return StepStatus.CURRENT
        if step_id in self.completed:
            return StepStatus.COMPLETED
        if self.is_enabled(step_id):
            return StepStatus.AVAILABLE
        return StepStatus.LOCKED

    def select_step(self, step_id: int) -> bool:
        if not self.is_enabled(step_id):
            return False
        self.current_step_id = step_id
        return True

    def mark_complete(self, step_id: int) -> bool:
        step = self.catalog.get(step_id)
        if step is None:
            logger.warning("ignoring completion of unknown step %s", step_id)
            return False

        if step.next_step_id is not None and step.next_step_id in self.catalog:
            target = step.next_step_id
        else:
            target = self.catalog.next_after(step_id)
        completed = self.completed | {step_id}
        needs_unlock = (
            target is not None and target == step.next_step_id and not self._enabled(target, completed)
        )

        store = self.session.store
        try:
            record_completion(store, self.session.user_id, step_id, step.title)
            if needs_unlock:
                record_unlock(store, self.session.user_id, target, self.catalog.get(target).title)
        except StoreError:
            self.session.notify("Error", "Failed to save progress", level="error")
            return False

        self.completed = completed
        if needs_unlock:
            self.available.add(target)
        if target is not None:
            self.current_step_id = target
        self.session.notify("Step completed", "Your progress has been saved")
        return True

    def unlock(self, step_id: int) -> bool:
        step = self.catalog.get(step_id)
        if step is None:
            return False
        try:
            record_unlock(self.session.store, self.session.user_id, step_id, step.title)
        except StoreError:
            self.session.notify("Error", "Failed to save progress", level="error")
            return False
        self.available.add(step_id)
        return True

    def is_phase_visible(self, phase: Phase) -> bool:
        before = previous_phase(phase)
        if before is None:
            return True
        return any(step.id in self.completed for step in self.catalog if step.phase is before)

    def visible_phases(self) -> list[Phase]:
        return [phase for phase in PHASE_ORDER if self.is_phase_visible(phase)]

    def mount(self, step_id: int) -> Any:
        step = self.catalog.get(step_id)
        if step is None:
            raise CatalogError(f"unknown step {step_id}")
        return step.render(self.session, lambda: self.mark_complete(step_id))

    def snapshot(self) -> dict[str, Any]:
        phases = []
        for phase in PHASE_ORDER:
            phases.append(
                {
                    "phase": phase.value,
                    "title": PHASE_TITLES[phase],
                    "visible": self.is_phase_visible(phase),
                    "steps": [
                        {
                            "id": step.id,
                            "title": step.title,
                            "description": step.description,
                            "status": self.status(step.id).value,
                        }
                        for step in self.catalog.in_phase(phase)
                    ],
                }
            )
        return {
            "current_step_id": self.current_step_id,
            "final_step_id": self.catalog.final_id,
            "finished": self.is_finished,
            "completed": sorted(self.completed),
            "phases": phases,
        }
