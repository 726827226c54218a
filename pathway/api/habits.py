from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from pathway.api.deps import get_db, get_program_session
from pathway.crud import get_active_habits
from pathway.program.assessment import AssessmentError, HabitAssessment
from pathway.program.classifier import CATEGORIES, QUESTIONS
from pathway.program.focus import FocusedHabits, FocusLimitError, UnknownHabitError
from pathway.schemas import AssessmentAnswersIn, AssessmentOut, AssessmentResultOut, FocusOut, FocusToggleIn, HabitOut
from pathway.session import ProgramSession

router = APIRouter()


def _focus_out(focus: FocusedHabits, step_completed: bool = False) -> dict[str, Any]:
    return {"habit_keys": focus.keys(), "limit": focus.limit, "step_completed": step_completed}


def _assessment_out(assessment: HabitAssessment) -> dict[str, Any]:
    categories = []
    for key in CATEGORIES:
        category = QUESTIONS[key]
        record = assessment.records.get(key)
        categories.append(
            {
                "key": key,
                "title": category.title,
                "description": category.description,
                "questions": [
                    {"key": question.key, "text": question.text, "options": dict(question.options)}
                    for question in category.questions
                ],
                "identified_habit": record["identified_habit"] if record else None,
            }
        )
    return {
        "category_index": assessment.category_index,
        "current_category": assessment.current_category,
        "finished": assessment.is_finished,
        "categories": categories,
    }


@router.get("/v1/habits", response_model=list[HabitOut])
def list_habits(category: Optional[str] = None, db: Session = Depends(get_db)) -> list:
    return get_active_habits(db, category)


@router.get("/v1/habits/focus", response_model=FocusOut)
def get_focus(session: ProgramSession = Depends(get_program_session)) -> dict[str, Any]:
    return _focus_out(FocusedHabits(session))


@router.put("/v1/habits/focus", response_model=FocusOut)
def toggle_focus(payload: FocusToggleIn, session: ProgramSession = Depends(get_program_session)) -> dict[str, Any]:
    focus = FocusedHabits(session)
    try:
        focus.toggle(payload.habit_key.strip())
    except UnknownHabitError as exc:
        raise HTTPException(status_code=404, detail="habit not found") from exc
    except FocusLimitError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return _focus_out(focus)


@router.post("/v1/habits/focus/complete", response_model=FocusOut)
def complete_focus(session: ProgramSession = Depends(get_program_session)) -> dict[str, Any]:
    focus = FocusedHabits(session)
    try:
        completed = focus.complete_step()
    except FocusLimitError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    if not completed:
        raise HTTPException(status_code=503, detail="failed to save progress")
    return _focus_out(focus, step_completed=True)


@router.get("/v1/assessment", response_model=AssessmentOut)
def get_assessment(session: ProgramSession = Depends(get_program_session)) -> dict[str, Any]:
    assessment = HabitAssessment(session)
    assessment.load()
    return _assessment_out(assessment)


@router.post("/v1/assessment/{category}", response_model=AssessmentResultOut)
def submit_assessment(
    category: str,
    payload: AssessmentAnswersIn,
    session: ProgramSession = Depends(get_program_session),
) -> dict[str, Any]:
    if category not in CATEGORIES:
        raise HTTPException(status_code=404, detail="assessment category not found")

    assessment = HabitAssessment(session)
    assessment.load()
    try:
        result = assessment.submit(category, payload.model_dump())
    except AssessmentError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    if not result["saved"]:
        raise HTTPException(status_code=503, detail="failed to save assessment")
    return {**result, "category_index": assessment.category_index, "finished": assessment.is_finished}
