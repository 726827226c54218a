from pathway.schemas.assessment import AssessmentAnswersIn, AssessmentOut, AssessmentResultOut, CategoryOut, QuestionOut
from pathway.schemas.habit import FocusOut, FocusToggleIn, HabitOut
from pathway.schemas.habit_system import (
    DayPlanIn,
    DayPlanOut,
    HabitSystemOut,
    ObstacleIn,
    StrategiesIn,
    WeekIn,
    WeekOut,
)
from pathway.schemas.program import (
    NoticeOut,
    PhaseOut,
    ProgramOut,
    RepairOut,
    StepFormIn,
    StepFormOut,
    StepFormSaveOut,
    StepOut,
)

__all__ = [
    "AssessmentAnswersIn",
    "AssessmentOut",
    "AssessmentResultOut",
    "CategoryOut",
    "DayPlanIn",
    "DayPlanOut",
    "FocusOut",
    "FocusToggleIn",
    "HabitOut",
    "HabitSystemOut",
    "NoticeOut",
    "ObstacleIn",
    "PhaseOut",
    "ProgramOut",
    "QuestionOut",
    "RepairOut",
    "StepFormIn",
    "StepFormOut",
    "StepFormSaveOut",
    "StepOut",
    "StrategiesIn",
    "WeekIn",
    "WeekOut",
]
