import json
import logging
from datetime import datetime, timedelta

from pathway.models import HabitDayPlan, StepAnswer, StepProgress
from pathway.program import form_registry as forms
from pathway.program.forms import (
    FormSpec,
    StepForm,
    decode_json_field,
    load_latest,
    parse_text,
    parse_text_field,
    save_single_record,
)


def _answers(store, namespace, user_id="user-1"):
    return store.select(StepAnswer, {"namespace": namespace, "user_id": user_id})


def test_goal_values_text_round_trips(session):
    form = StepForm(session, forms.CLARIFYING_VALUES)
    form.load()
    form.update("goal_value_alignment", "Training keeps me present for my kids.")
    assert form.submit()

    reloaded = StepForm(session, forms.CLARIFYING_VALUES)
    data = reloaded.load()
    assert data["goal_value_alignment"] == "Training keeps me present for my kids."
    assert reloaded.record_id == form.record_id


def test_first_visit_uses_initial_values(session):
    form = StepForm(session, forms.VISUALIZE_RESULTS)
    assert form.load() == {"three_months": "", "six_months": "", "one_year": ""}
    assert form.record_id is None
    assert form.loaded


def test_saving_twice_keeps_one_record(session):
    for _ in range(2):
        form = StepForm(session, forms.CONTROL)
        form.load()
        form.update_many({"cant_control": "the weather", "can_control": "my bedtime"})
        assert form.submit()

    rows = _answers(session.store, "control")
    assert len(rows) == 1
    assert json.loads(rows[0]["payload_json"]) == {"cant_control": "the weather", "can_control": "my bedtime"}


def test_discriminator_keeps_records_apart(session):
    spec = FormSpec(namespace="weekly_reflection", initial={"response": ""})
    for week in ("1", "2"):
        form = StepForm(session, spec, discriminator=week)
        form.update("response", f"week {week}")
        assert form.submit()

    assert len(_answers(session.store, "weekly_reflection")) == 2
    assert StepForm(session, spec, discriminator="2").load()["response"] == "week 2"


def test_select_then_branch_save_updates_in_place(session):
    key = {"user_id": "user-1", "habit_key": "h", "plan_type": "best_day"}
    save_single_record(session.store, HabitDayPlan, key, {"description": "first"})
    save_single_record(session.store, HabitDayPlan, key, {"description": "second"})

    rows = session.store.select(HabitDayPlan, key)
    assert len(rows) == 1
    assert rows[0]["description"] == "second"


def test_newest_record_wins_when_duplicates_exist(session, caplog):
    key = {"user_id": "user-1", "habit_key": "h", "plan_type": "worst_day"}
    now = datetime.utcnow()
    session.store.insert(HabitDayPlan, {**key, "description": "newer", "updated_at": now})
    session.store.insert(HabitDayPlan, {**key, "description": "older", "updated_at": now - timedelta(days=1)})

    with caplog.at_level(logging.WARNING):
        record = load_latest(session.store, HabitDayPlan, key)
    assert record["description"] == "newer"
    assert "more than one live" in caplog.text


def test_unknown_field_is_rejected(session):
    form = StepForm(session, forms.CONTROL)
    try:
        form.update("nope", "x")
    except KeyError as exc:
        assert exc.args[0] == "nope"
    else:
        raise AssertionError("expected KeyError")


def test_legacy_encoded_fields_are_decoded(session):
    payload = {"income": json.dumps({"text": "steady salary"}), "job_stability": "secure"}
    session.store.insert(
        StepAnswer,
        {"namespace": "financial_resources", "user_id": "user-1", "payload_json": json.dumps(payload)},
    )
    data = StepForm(session, forms.FINANCIAL_RESOURCES).load()
    assert data["income"] == "steady salary"
    assert data["job_stability"] == "secure"
    assert data["build_resources"] == ""


def test_undecodable_list_field_falls_back_to_empty(session, caplog):
    payload = {"selected_coping_skills": "[broken", "implementation_plan": "{not json"}
    session.store.insert(
        StepAnswer,
        {"namespace": "setbacks_recommit", "user_id": "user-1", "payload_json": json.dumps(payload)},
    )
    with caplog.at_level(logging.WARNING):
        data = StepForm(session, forms.SETBACKS_RECOMMIT).load()
    assert data["selected_coping_skills"] == []
    assert data["implementation_plan"] == "{not json"
    assert "could not decode" in caplog.text


def test_bracketed_free_text_round_trips(session):
    form = StepForm(session, forms.CLARIFYING_VALUES)
    form.update_many({"reasons_alignment": "[draft] family comes first", "selected_value_1": "{health}"})
    assert form.submit()

    data = StepForm(session, forms.CLARIFYING_VALUES).load()
    assert data["reasons_alignment"] == "[draft] family comes first"
    assert data["selected_value_1"] == "{health}"


def test_saving_one_field_keeps_the_others(session):
    first = StepForm(session, forms.CLARIFYING_VALUES)
    first.update_many({"reasons_alignment": "[draft] family comes first", "selected_value_1": "{health}"})
    assert first.submit()

    second = StepForm(session, forms.CLARIFYING_VALUES)
    second.load()
    second.update("goal_value_alignment", "more energy")
    assert second.submit()

    stored = json.loads(_answers(session.store, "clarifying_values")[0]["payload_json"])
    assert stored == {
        "selected_value_1": "{health}",
        "selected_value_2": "",
        "reasons_alignment": "[draft] family comes first",
        "goal_value_alignment": "more energy",
    }


def test_text_that_parses_as_json_is_kept_verbatim(session):
    payload = {"cant_control": "[1,2]", "can_control": json.dumps([{"text": "my sleep"}])}
    session.store.insert(
        StepAnswer, {"namespace": "control", "user_id": "user-1", "payload_json": json.dumps(payload)}
    )
    assert StepForm(session, forms.CONTROL).load() == {"cant_control": "[1,2]", "can_control": "my sleep"}


def test_undecodable_payload_loads_defaults(session):
    session.store.insert(
        StepAnswer, {"namespace": "control", "user_id": "user-1", "payload_json": "not json at all"}
    )
    form = StepForm(session, forms.CONTROL)
    assert form.load() == {"cant_control": "", "can_control": ""}
    assert form.error is None


def test_list_field_ignores_wrong_type(session):
    session.store.insert(
        StepAnswer,
        {
            "namespace": "small_steps",
            "user_id": "user-1",
            "payload_json": json.dumps({"steps": "walk daily"}),
        },
    )
    assert StepForm(session, forms.SMALL_STEPS).load() == {"steps": []}


def test_encoded_list_field_is_decoded(session):
    session.store.insert(
        StepAnswer,
        {
            "namespace": "setbacks_recommit",
            "user_id": "user-1",
            "payload_json": json.dumps({"selected_coping_skills": json.dumps(["breathing", " ", "walks"])}),
        },
    )
    data = StepForm(session, forms.SETBACKS_RECOMMIT).load()
    assert data["selected_coping_skills"] == ["breathing", "walks"]


def test_transforms_map_between_form_and_stored_shapes(session):
    form = StepForm(session, forms.FINAL_WORD)
    form.update("adjustments", "Add a Sunday planning session")
    assert form.submit()

    stored = json.loads(_answers(session.store, "final_word")[0]["payload_json"])
    assert stored == {"plan_adjustments": "Add a Sunday planning session"}
    assert StepForm(session, forms.FINAL_WORD).load() == {"adjustments": "Add a Sunday planning session"}


def test_camel_cased_legacy_key_is_read(session):
    session.store.insert(
        StepAnswer,
        {
            "namespace": "final_word",
            "user_id": "user-1",
            "payload_json": json.dumps({"planAdjustments": "Sleep earlier"}),
        },
    )
    assert StepForm(session, forms.FINAL_WORD).load() == {"adjustments": "Sleep earlier"}


def test_monitoring_ratings_keep_numeric_scores(session):
    payload = {
        "ratings": {"sleep": "4", "training": 5, "protein": "n/a", "stress": 4.0, "energy": "3.5", "mood": None},
        "working_well": "meal prep",
    }
    session.store.insert(
        StepAnswer,
        {"namespace": "monitoring_progress", "user_id": "user-1", "payload_json": json.dumps(payload)},
    )
    data = StepForm(session, forms.MONITORING_PROGRESS).load()
    assert data["ratings"] == {"sleep": 4, "training": 5, "stress": 4, "energy": 3}
    assert data["working_well"] == "meal prep"


def test_submit_reports_completion_and_unlocks_next_step(session):
    calls = []
    form = StepForm(session, forms.BUILD_ON_STRENGTHS, on_complete=lambda: calls.append("done"))
    form.update("top_strengths", "persistence")
    assert form.submit()

    progress = {row["step_number"]: row for row in session.store.select(StepProgress, {"user_id": "user-1"})}
    assert progress[42]["completed"] is True
    assert progress[52]["available"] is True
    assert progress[52]["completed"] is False
    assert calls == ["done"]
    assert session.notices[-1].message == "Your response has been saved"


def test_save_failure_keeps_form_data(broken_writes_session):
    calls = []
    form = StepForm(broken_writes_session, forms.CONTROL, on_complete=lambda: calls.append("done"))
    form.load()
    form.update("can_control", "my bedtime")

    assert not form.submit()
    assert form.data["can_control"] == "my bedtime"
    assert calls == []
    notice = broken_writes_session.notices[-1]
    assert notice.level == "error"
    assert notice.message == "Failed to save your response"


def test_load_failure_falls_back_to_defaults(broken_reads_session):
    form = StepForm(broken_reads_session, forms.CONTROL)
    assert form.load() == {"cant_control": "", "can_control": ""}
    assert form.error
    assert not form.loaded


def test_decode_helpers():
    assert decode_json_field("plain text", "") == "plain text"
    assert decode_json_field('["a"]', []) == ["a"]
    assert decode_json_field("[oops", []) == []
    assert decode_json_field("[draft] notes", "") == "[draft] notes"
    assert parse_text_field("{health}") == "{health}"
    assert parse_text_field(json.dumps({"text": "wrapped"})) == "wrapped"
    assert decode_json_field(None, "") is None
    assert parse_text(None) == ""
    assert parse_text([{"text": "first"}, {"text": "second"}]) == "first"
    assert parse_text(3) == "3"
