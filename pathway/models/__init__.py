from pathway.models.base import Base
from pathway.models.focused_habit import FocusedHabit
from pathway.models.habit_assessment import HabitAssessment
from pathway.models.habit_day_plan import HabitDayPlan
from pathway.models.habit_definition import HabitDefinition
from pathway.models.habit_system import HabitSystemState
from pathway.models.habit_weekly_step import HabitWeeklyStep
from pathway.models.step_answer import StepAnswer
from pathway.models.step_progress import StepProgress

__all__ = [
    "Base",
    "FocusedHabit",
    "HabitAssessment",
    "HabitDayPlan",
    "HabitDefinition",
    "HabitSystemState",
    "HabitWeeklyStep",
    "StepAnswer",
    "StepProgress",
]
