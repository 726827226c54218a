"""Seven week implementation plan for a focused habit.

State per (user, habit) lives in ``habit_systems``. Weekly notes are keyed
by week number and their completed flag is derived from the current week,
so moving the current week recomputes every badge. Best and worst day
plans hold an ordered list of obstacles, each with a pitfall and a
contingency.
"""
import json
import logging
from typing import Any, Iterable, Mapping, Optional

from pathway.config import settings
from pathway.models import HabitDayPlan, HabitDefinition, HabitSystemState, HabitWeeklyStep
from pathway.program.focus import FocusedHabits
from pathway.program.forms import loads_json, load_latest, save_single_record
from pathway.session import ProgramSession
from pathway.store import StoreError

logger = logging.getLogger(__name__)

PLAN_TYPES = {"best_day": "Best Day Plan", "worst_day": "Worst Day Plan"}
SYSTEM_CONFLICT_KEY = ("user_id", "habit_key")
WEEK_CONFLICT_KEY = ("user_id", "habit_key", "week_number")

WEEKLY_PROMPTS = {
    1: (
        "Foundation Building",
        [
            "What is the minimum version of this habit you can commit to daily?",
            "What time of day will you perform this habit?",
            "What environmental setup do you need?",
        ],
    ),
    2: (
        "Consistency Focus",
        [
            "How will you track your daily progress?",
            "What small rewards will you give yourself for consistency?",
            "What backup plans do you have for missed days?",
        ],
    ),
    3: (
        "Obstacle Planning",
        [
            "What are your 3 most likely obstacles?",
            "What specific backup plans will you use for each obstacle?",
            "How will you quickly recover from setbacks?",
        ],
    ),
    4: (
        "Environment Design",
        [
            "How can you modify your environment to make this habit easier?",
            "What visual cues or reminders will you place?",
            "What barriers to bad habits can you create?",
        ],
    ),
    5: (
        "System Integration",
        [
            "How does this habit connect to your other routines?",
            "What habit stack can you create (After I do X, I will do this habit)?",
            "How will this habit support your other goals?",
        ],
    ),
    6: (
        "Scaling Up",
        [
            "How can you gradually increase the intensity or duration?",
            "What advanced variations might you try?",
            "How will you maintain motivation as difficulty increases?",
        ],
    ),
    7: (
        "Mastery & Maintenance",
        [
            "How will you maintain this habit long-term?",
            "What systems will keep you accountable?",
            "How will you continue evolving and improving this habit?",
        ],
    ),
}


class DayPlanError(ValueError):
    pass


class HabitNotFocusedError(LookupError):
    pass


def weekly_prompt(week_number: int, habit_name: str) -> str:
    if week_number not in WEEKLY_PROMPTS:
        return ""
    title, questions = WEEKLY_PROMPTS[week_number]
    lines = [f'For Week {week_number} - {title} with "{habit_name}":']
    lines.extend(f"• {question}" for question in questions)
    return "\n".join(lines)


def clean_obstacles(obstacles: Iterable[Mapping[str, Any]]) -> list[dict[str, str]]:
    """Keep only obstacles that have both a pitfall and a contingency."""
    cleaned = []
    for obstacle in obstacles:
        pitfall = str(obstacle.get("pitfall") or "").strip()
        contingency = str(obstacle.get("contingency") or "").strip()
        if pitfall and contingency:
            cleaned.append({"pitfall": pitfall, "contingency": contingency})
    return cleaned


class HabitSystem:
    def __init__(self, session: ProgramSession, habit_key: str):
        self.session = session
        self.habit_key = habit_key
        self.weeks_total = settings.HABIT_PLAN_WEEKS
        self.state: Optional[dict[str, Any]] = None
        self.error: Optional[str] = None

    @property
    def key(self) -> dict[str, Any]:
        return {"user_id": self.session.user_id, "habit_key": self.habit_key}

    @property
    def current_week(self) -> int:
        return self.state["current_week"] if self.state else 1

    def _load_failed(self, exc: StoreError) -> None:
        self.error = str(exc)
        self.session.notify("Error", "Failed to load your habit plan", level="error")

    def habit_title(self) -> str:
        try:
            found = self.session.store.select(HabitDefinition, {"key": self.habit_key}, limit=1)
        except StoreError:
            logger.warning("could not load title of habit %s", self.habit_key)
            return self.habit_key
        return found[0]["title"] if found else self.habit_key

    def load(self) -> Optional[dict[str, Any]]:
        """Load or lazily create the plan state.

        A store failure leaves ``state`` empty so the plan reads as week 1;
        the failure is kept in ``error`` and reported as a notice.
        """
        store = self.session.store
        try:
            focused = FocusedHabits(self.session).is_focused(self.habit_key)
        except StoreError as exc:
            self._load_failed(exc)
            return None
        if not focused:
            raise HabitNotFocusedError(self.habit_key)

        try:
            found = store.select(HabitSystemState, self.key, limit=1)
            if found:
                self.state = found[0]
            else:
                self.state = store.upsert(
                    HabitSystemState,
                    {**self.key, "current_week": 1, "is_active": True},
                    SYSTEM_CONFLICT_KEY,
                    update_keys=("is_active",),
                )
        except StoreError as exc:
            self._load_failed(exc)
            return None
        self.error = None
        return self.state

    def _ensure_loaded(self) -> None:
        if self.state is None and self.error is None:
            self.load()

    def advance_week(self) -> int:
        self._ensure_loaded()
        next_week = min(self.current_week + 1, self.weeks_total)
        self.state = self.session.store.upsert(
            HabitSystemState,
            {**self.key, "current_week": next_week},
            SYSTEM_CONFLICT_KEY,
            update_keys=("current_week",),
        )
        logger.info("user %s habit %s now on week %s", self.session.user_id, self.habit_key, next_week)
        return next_week

    def save_strategies(self, obstacles: str, strategies: str) -> dict[str, Any]:
        self._ensure_loaded()
        self.state = self.session.store.upsert(
            HabitSystemState,
            {**self.key, "obstacles": obstacles, "strategies": strategies},
            SYSTEM_CONFLICT_KEY,
            update_keys=("obstacles", "strategies"),
        )
        return self.state

    def _plan_key(self, plan_type: str) -> dict[str, Any]:
        if plan_type not in PLAN_TYPES:
            raise DayPlanError(f"Unknown plan type: {plan_type}")
        return {**self.key, "plan_type": plan_type}

    def save_day_plan(self, plan_type: str, description: str, obstacles: Iterable[Mapping[str, Any]]) -> dict[str, Any]:
        self._ensure_loaded()
        key = self._plan_key(plan_type)
        description = (description or "").strip()
        valid = clean_obstacles(obstacles)
        if not description:
            raise DayPlanError("Please add a description for your plan.")
        if not valid:
            raise DayPlanError("Please add at least one obstacle with a contingency plan.")

        values = {"description": description, "obstacles_json": json.dumps(valid, ensure_ascii=False)}
        try:
            save_single_record(self.session.store, HabitDayPlan, key, values)
        except StoreError:
            self.session.notify("Error", "Failed to save your plan", level="error")
            raise

        self.session.notify("Plan Saved", f"Your {PLAN_TYPES[plan_type].lower()} has been saved successfully.")
        return {"plan_type": plan_type, "description": description, "obstacles": valid}

    def day_plan(self, plan_type: str) -> Optional[dict[str, Any]]:
        self._ensure_loaded()
        key = self._plan_key(plan_type)
        try:
            record = load_latest(self.session.store, HabitDayPlan, key)
        except StoreError as exc:
            self._load_failed(exc)
            return None
        if record is None:
            return None
        obstacles = loads_json(record["obstacles_json"], [])
        if not isinstance(obstacles, list):
            obstacles = []
        return {
            "plan_type": plan_type,
            "description": record["description"],
            "obstacles": clean_obstacles(item for item in obstacles if isinstance(item, dict)),
        }

    def save_week(self, week_number: int, content: str) -> dict[str, Any]:
        self._ensure_loaded()
        if not 1 <= week_number <= self.weeks_total:
            raise ValueError(f"week_number must be between 1 and {self.weeks_total}")
        row = self.session.store.upsert(
            HabitWeeklyStep,
            {**self.key, "week_number": week_number, "content": content},
            WEEK_CONFLICT_KEY,
            update_keys=("content",),
        )
        self.session.notify("Step Saved", f"Week {week_number} implementation step has been saved.")
        return row

    def weeks(self) -> list[dict[str, Any]]:
        self._ensure_loaded()
        try:
            rows = self.session.store.select(HabitWeeklyStep, self.key)
        except StoreError as exc:
            self._load_failed(exc)
            rows = []
        notes = {row["week_number"]: row["content"] for row in rows}
        habit_name = self.habit_title()
        current = self.current_week
        return [
            {
                "week_number": week,
                "title": WEEKLY_PROMPTS.get(week, (f"Week {week}", []))[0],
                "prompt": weekly_prompt(week, habit_name),
                "content": notes.get(week, ""),
                "is_completed": week < current,
                "is_current": week == current,
            }
            for week in range(1, self.weeks_total + 1)
        ]
