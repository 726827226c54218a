from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from pathway.api.deps import get_program_session
from pathway.program.habit_system import PLAN_TYPES, DayPlanError, HabitNotFocusedError, HabitSystem
from pathway.schemas import DayPlanIn, DayPlanOut, HabitSystemOut, StrategiesIn, WeekIn
from pathway.session import ProgramSession

router = APIRouter()


def _load_system(habit_key: str, session: ProgramSession) -> HabitSystem:
    system = HabitSystem(session, habit_key)
    try:
        system.load()
    except HabitNotFocusedError as exc:
        raise HTTPException(status_code=404, detail="habit is not one of your focused habits") from exc
    return system


def _require_plan_type(plan_type: str) -> None:
    if plan_type not in PLAN_TYPES:
        raise HTTPException(status_code=404, detail="plan type not found")


def _system_out(system: HabitSystem) -> dict[str, Any]:
    state = system.state or {}
    return {
        "habit_key": system.habit_key,
        "habit_title": system.habit_title(),
        "current_week": system.current_week,
        "obstacles": state.get("obstacles") or "",
        "strategies": state.get("strategies") or "",
        "weeks": system.weeks(),
        "best_day": system.day_plan("best_day"),
        "worst_day": system.day_plan("worst_day"),
    }


@router.get("/v1/habit-systems/{habit_key}", response_model=HabitSystemOut)
def get_habit_system(habit_key: str, session: ProgramSession = Depends(get_program_session)) -> dict[str, Any]:
    return _system_out(_load_system(habit_key, session))


@router.post("/v1/habit-systems/{habit_key}/advance", response_model=HabitSystemOut)
def advance_week(habit_key: str, session: ProgramSession = Depends(get_program_session)) -> dict[str, Any]:
    system = _load_system(habit_key, session)
    system.advance_week()
    return _system_out(system)


@router.put("/v1/habit-systems/{habit_key}/strategies", response_model=HabitSystemOut)
def save_strategies(
    habit_key: str,
    payload: StrategiesIn,
    session: ProgramSession = Depends(get_program_session),
) -> dict[str, Any]:
    system = _load_system(habit_key, session)
    system.save_strategies(payload.obstacles, payload.strategies)
    return _system_out(system)


@router.get("/v1/habit-systems/{habit_key}/day-plans/{plan_type}", response_model=DayPlanOut)
def get_day_plan(
    habit_key: str,
    plan_type: str,
    session: ProgramSession = Depends(get_program_session),
) -> dict[str, Any]:
    _require_plan_type(plan_type)
    plan = _load_system(habit_key, session).day_plan(plan_type)
    if plan is None:
        raise HTTPException(status_code=404, detail="day plan not found")
    return plan


@router.put("/v1/habit-systems/{habit_key}/day-plans/{plan_type}", response_model=DayPlanOut)
def save_day_plan(
    habit_key: str,
    plan_type: str,
    payload: DayPlanIn,
    session: ProgramSession = Depends(get_program_session),
) -> dict[str, Any]:
    _require_plan_type(plan_type)
    system = _load_system(habit_key, session)
    try:
        return system.save_day_plan(
            plan_type, payload.description, [obstacle.model_dump() for obstacle in payload.obstacles]
        )
    except DayPlanError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.put("/v1/habit-systems/{habit_key}/weeks/{week_number}", response_model=HabitSystemOut)
def save_week(
    habit_key: str,
    week_number: int,
    payload: WeekIn,
    session: ProgramSession = Depends(get_program_session),
) -> dict[str, Any]:
    system = _load_system(habit_key, session)
    try:
        system.save_week(week_number, payload.content)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return _system_out(system)
