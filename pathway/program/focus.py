import logging
from typing import Any, Callable, Optional

from pathway.config import settings
from pathway.models import FocusedHabit, HabitDefinition
from pathway.program.progress import record_completion
from pathway.session import ProgramSession
from pathway.store import StoreError

logger = logging.getLogger(__name__)

FOCUS_STEP_NUMBER = 2
FOCUS_STEP_NAME = "Focus Habits"


class FocusLimitError(ValueError):
    pass


class UnknownHabitError(LookupError):
    pass


class FocusedHabits:
    """The user's focused habits, capped at ``MAX_FOCUSED_HABITS``."""

    def __init__(self, session: ProgramSession, on_complete: Optional[Callable[[], Any]] = None):
        self.session = session
        self.on_complete = on_complete
        self.limit = settings.MAX_FOCUSED_HABITS

    def keys(self) -> list[str]:
        rows = self.session.store.select(
            FocusedHabit, {"user_id": self.session.user_id}, order_by="created_at", descending=False
        )
        return [row["habit_key"] for row in rows]

    def is_focused(self, habit_key: str) -> bool:
        return habit_key in self.keys()

    def _require_habit(self, habit_key: str) -> None:
        found = self.session.store.select(HabitDefinition, {"key": habit_key, "is_active": True}, limit=1)
        if not found:
            raise UnknownHabitError(habit_key)

    def toggle(self, habit_key: str) -> list[str]:
        store = self.session.store
        current = self.keys()
        if habit_key in current:
            store.delete(FocusedHabit, {"user_id": self.session.user_id, "habit_key": habit_key})
            self.session.notify("Habits Updated", "Your focused habits have been updated.")
            return [key for key in current if key != habit_key]

        self._require_habit(habit_key)
        if len(current) >= self.limit:
            self.session.notify("Limit Reached", f"You can only focus on {self.limit} habits at a time.", level="error")
            raise FocusLimitError(f"You can only focus on {self.limit} habits at a time.")

        store.insert(FocusedHabit, {"user_id": self.session.user_id, "habit_key": habit_key})
        logger.info("user %s focused habit %s", self.session.user_id, habit_key)
        self.session.notify("Habits Updated", "Your focused habits have been updated.")
        return current + [habit_key]

    def complete_step(self) -> bool:
        if not self.keys():
            raise FocusLimitError("Select at least one habit to focus on.")
        try:
            record_completion(self.session.store, self.session.user_id, FOCUS_STEP_NUMBER, FOCUS_STEP_NAME)
        except StoreError:
            self.session.notify("Error", "Failed to save progress", level="error")
            return False

        self.session.notify("Step completed", "Your progress has been saved")
        if self.on_complete:
            self.on_complete()
        return True


class FocusContent:
    def __call__(self, session: ProgramSession, on_complete: Optional[Callable[[], Any]] = None) -> FocusedHabits:
        return FocusedHabits(session, on_complete=on_complete)
