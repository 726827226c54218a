from typing import Optional

from pydantic import BaseModel


class HabitOut(BaseModel):
    key: str
    title: str
    category: str
    description: Optional[str] = None

    class Config:
        from_attributes = True


class FocusToggleIn(BaseModel):
    habit_key: str


class FocusOut(BaseModel):
    habit_keys: list[str]
    limit: int
    step_completed: bool = False
