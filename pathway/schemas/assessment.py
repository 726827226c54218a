from typing import Optional

from pydantic import BaseModel


class AssessmentAnswersIn(BaseModel):
    q1: Optional[str] = None
    q2: Optional[str] = None
    q3: Optional[str] = None


class QuestionOut(BaseModel):
    key: str
    text: str
    options: dict[str, str]


class CategoryOut(BaseModel):
    key: str
    title: str
    description: str
    questions: list[QuestionOut]
    identified_habit: Optional[str] = None


class AssessmentOut(BaseModel):
    category_index: int
    current_category: Optional[str] = None
    finished: bool
    categories: list[CategoryOut]


class AssessmentResultOut(BaseModel):
    category: str
    identified_habit: str
    saved: bool
    category_index: int
    finished: bool
