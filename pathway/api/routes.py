from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from pathway.api.deps import get_program_session
from pathway.program.forms import StepForm
from pathway.program.gate import ProgressGate
from pathway.program.repair import repair_step_completion
from pathway.schemas import ProgramOut, RepairOut, StepFormIn, StepFormOut, StepFormSaveOut
from pathway.session import ProgramSession
from pathway.store import StoreError

router = APIRouter()


def _program_out(gate: ProgressGate) -> dict[str, Any]:
    out = gate.snapshot()
    out["notices"] = [notice.__dict__ for notice in gate.session.drain_notices()]
    return out


def _load_gate(session: ProgramSession) -> ProgressGate:
    return ProgressGate(session).load()


def _require_enabled(gate: ProgressGate, step_id: int) -> None:
    if step_id not in gate.catalog:
        raise HTTPException(status_code=404, detail="step not found")
    if not gate.is_enabled(step_id):
        raise HTTPException(status_code=403, detail="step is not available yet")


def _mount_form(gate: ProgressGate, step_id: int) -> StepForm:
    _require_enabled(gate, step_id)
    form = gate.mount(step_id)
    if not isinstance(form, StepForm):
        raise HTTPException(status_code=404, detail="step has no answer form")
    return form


def _form_out(step_id: int, form: StepForm) -> dict[str, Any]:
    return {
        "step_id": step_id,
        "namespace": form.spec.namespace,
        "data": form.data,
        "error": form.error,
    }


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/v1/program", response_model=ProgramOut)
def get_program(session: ProgramSession = Depends(get_program_session)) -> dict[str, Any]:
    return _program_out(_load_gate(session))


@router.post("/v1/program/steps/{step_id}/select", response_model=ProgramOut)
def select_step(step_id: int, session: ProgramSession = Depends(get_program_session)) -> dict[str, Any]:
    gate = _load_gate(session)
    _require_enabled(gate, step_id)
    gate.select_step(step_id)
    return _program_out(gate)


@router.post("/v1/program/steps/{step_id}/complete", response_model=ProgramOut)
def complete_step(step_id: int, session: ProgramSession = Depends(get_program_session)) -> dict[str, Any]:
    gate = _load_gate(session)
    _require_enabled(gate, step_id)
    if not gate.mark_complete(step_id):
        raise HTTPException(status_code=503, detail="failed to save progress")
    return _program_out(gate)


@router.get("/v1/program/steps/{step_id}/form", response_model=StepFormOut)
def get_step_form(step_id: int, session: ProgramSession = Depends(get_program_session)) -> dict[str, Any]:
    gate = _load_gate(session)
    form = _mount_form(gate, step_id)
    form.load()
    return _form_out(step_id, form)


@router.put("/v1/program/steps/{step_id}/form", response_model=StepFormSaveOut)
def save_step_form(
    step_id: int,
    payload: StepFormIn,
    session: ProgramSession = Depends(get_program_session),
) -> dict[str, Any]:
    gate = _load_gate(session)
    form = _mount_form(gate, step_id)
    form.load()
    try:
        form.update_many(payload.data)
    except KeyError as exc:
        raise HTTPException(status_code=400, detail=f"unknown field: {exc.args[0]}") from exc

    if not form.submit():
        raise HTTPException(status_code=503, detail="Failed to save your response")
    return {"saved": True, "form": _form_out(step_id, form), "program": _program_out(gate)}


@router.post("/v1/program/repair", response_model=RepairOut)
def repair_program(session: ProgramSession = Depends(get_program_session)) -> dict[str, Any]:
    try:
        repaired = repair_step_completion(session)
    except StoreError as exc:
        raise HTTPException(status_code=503, detail="failed to repair step completion") from exc
    return {"repaired": repaired, "program": _program_out(_load_gate(session))}
