import pytest

from pathway.models import StepProgress
from pathway.program.forms import StepForm
from pathway.program.form_registry import CONTROL, reflection_form
from pathway.program.progress import record_completion
from pathway.program.repair import repair_step_completion
from pathway.program.steps import get_catalog
from pathway.store import StoreError


def _save_answer(session, spec, **values):
    form = StepForm(session, spec)
    form.update_many(values)
    assert form.submit()


def test_answered_steps_without_progress_are_marked_complete(session, catalog_factory):
    catalog = catalog_factory(1, 2, 3)
    _save_answer(session, reflection_form(1), response="first")
    _save_answer(session, reflection_form(3), response="third")

    assert repair_step_completion(session, catalog) == [1, 3]
    rows = {row["step_number"]: row for row in session.store.select(StepProgress, {"user_id": "user-1"})}
    assert rows[1]["completed"] and rows[3]["completed"]
    assert 2 not in rows
    assert session.notices[-1].message == "Fixed completion status for 2 step(s)"


def test_already_completed_steps_are_left_alone(session, catalog_factory):
    catalog = catalog_factory(1, 2)
    _save_answer(session, reflection_form(1), response="first")
    record_completion(session.store, session.user_id, 1)

    assert repair_step_completion(session, catalog) == []


def test_repair_uses_the_shipped_catalog_by_default(session):
    _save_answer(session, CONTROL, cant_control="traffic", can_control="my lunch")
    control_step = next(step for step in get_catalog() if getattr(step.content, "spec", None) is CONTROL)

    assert repair_step_completion(session) == [control_step.id]


def test_repair_propagates_store_failures(broken_reads_session, catalog_factory):
    with pytest.raises(StoreError):
        repair_step_completion(broken_reads_session, catalog_factory(1))
