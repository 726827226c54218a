from typing import Optional

from pydantic import BaseModel


class ObstacleIn(BaseModel):
    pitfall: str = ""
    contingency: str = ""


class ObstacleOut(BaseModel):
    pitfall: str
    contingency: str


class DayPlanIn(BaseModel):
    description: str = ""
    obstacles: list[ObstacleIn] = []


class DayPlanOut(BaseModel):
    plan_type: str
    description: str
    obstacles: list[ObstacleOut]


class StrategiesIn(BaseModel):
    obstacles: str = ""
    strategies: str = ""


class WeekIn(BaseModel):
    content: str


class WeekOut(BaseModel):
    week_number: int
    title: str
    prompt: str
    content: str
    is_completed: bool
    is_current: bool


class HabitSystemOut(BaseModel):
    habit_key: str
    habit_title: str
    current_week: int
    obstacles: str
    strategies: str
    weeks: list[WeekOut]
    best_day: Optional[DayPlanOut] = None
    worst_day: Optional[DayPlanOut] = None
