from typing import Any, Optional

from pydantic import BaseModel


class NoticeOut(BaseModel):
    level: str
    title: str
    message: str


class StepOut(BaseModel):
    id: int
    title: str
    description: str
    status: str


class PhaseOut(BaseModel):
    phase: str
    title: str
    visible: bool
    steps: list[StepOut]


class ProgramOut(BaseModel):
    current_step_id: int
    final_step_id: int
    finished: bool
    completed: list[int]
    phases: list[PhaseOut]
    notices: list[NoticeOut] = []


class StepFormOut(BaseModel):
    step_id: int
    namespace: str
    data: dict[str, Any]
    error: Optional[str] = None


class StepFormIn(BaseModel):
    data: dict[str, Any]


class StepFormSaveOut(BaseModel):
    saved: bool
    form: StepFormOut
    program: ProgramOut


class RepairOut(BaseModel):
    repaired: list[int]
    program: ProgramOut
