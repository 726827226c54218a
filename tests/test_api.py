import pytest
from fastapi.testclient import TestClient

from api_main import app
from pathway.api.deps import get_db

USER = {"X-User-Id": "user-1"}


@pytest.fixture
def client(session_factory, seeded_db):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}
    assert client.get("/health/live").json() == {"status": "alive"}


def test_program_requires_a_user(client):
    response = client.get("/v1/program")
    assert response.status_code == 401


def test_new_user_starts_on_the_first_step(client):
    body = client.get("/v1/program", headers=USER).json()
    assert body["current_step_id"] == 1
    assert body["final_step_id"] == 91
    assert body["finished"] is False
    assert [phase["visible"] for phase in body["phases"]] == [True, False, False]
    first = body["phases"][0]["steps"][0]
    assert first == {
        "id": 1,
        "title": "Ambivalence",
        "description": "Understanding mixed feelings about change",
        "status": "current",
    }


def test_locked_step_cannot_be_selected(client):
    assert client.post("/v1/program/steps/3/select", headers=USER).status_code == 403
    assert client.post("/v1/program/steps/68/select", headers=USER).status_code == 404


def test_completing_a_step_unlocks_the_next(client):
    response = client.post("/v1/program/steps/1/complete", headers=USER)
    assert response.status_code == 200
    body = response.json()
    assert body["completed"] == [1]
    assert body["current_step_id"] == 2
    assert body["notices"][-1]["title"] == "Step completed"

    assert client.post("/v1/program/steps/2/select", headers=USER).status_code == 200


def test_form_round_trip_completes_the_step(client):
    empty = client.get("/v1/program/steps/1/form", headers=USER).json()
    assert empty["data"] == {"response": ""}

    response = client.put(
        "/v1/program/steps/1/form",
        headers=USER,
        json={"data": {"response": "Part of me wants this, part of me is tired."}},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["saved"] is True
    assert body["program"]["completed"] == [1]

    again = client.get("/v1/program/steps/1/form", headers=USER).json()
    assert again["data"]["response"] == "Part of me wants this, part of me is tired."


def test_form_rejects_unknown_fields(client):
    response = client.put("/v1/program/steps/1/form", headers=USER, json={"data": {"bogus": "x"}})
    assert response.status_code == 400
    assert response.json()["detail"] == "unknown field: bogus"


def test_focus_step_has_no_answer_form(client):
    client.post("/v1/program/steps/1/complete", headers=USER)
    assert client.get("/v1/program/steps/2/form", headers=USER).status_code == 404


def test_habit_library_and_focus(client):
    habits = client.get("/v1/habits").json()
    assert {habit["category"] for habit in habits} >= {"sleep", "training"}
    assert len(client.get("/v1/habits", params={"category": "protein"}).json()) == 1

    for key in ("consistent_bedtime", "never_miss_twice"):
        assert client.put("/v1/habits/focus", headers=USER, json={"habit_key": key}).status_code == 200
    full = client.put("/v1/habits/focus", headers=USER, json={"habit_key": "track_calories"})
    assert full.status_code == 400
    missing = client.put("/v1/habits/focus", headers=USER, json={"habit_key": "juggling"})
    assert missing.status_code == 404

    done = client.post("/v1/habits/focus/complete", headers=USER).json()
    assert done["step_completed"] is True
    assert done["habit_keys"] == ["consistent_bedtime", "never_miss_twice"]
    assert 2 in client.get("/v1/program", headers=USER).json()["completed"]


def test_focus_complete_needs_a_habit(client):
    assert client.post("/v1/habits/focus/complete", headers=USER).status_code == 400


def test_assessment_flow(client):
    start = client.get("/v1/assessment", headers=USER).json()
    assert start["current_category"] == "sleep"
    assert len(start["categories"][0]["questions"]) == 3

    result = client.post("/v1/assessment/sleep", headers=USER, json={"q1": "a", "q2": "a", "q3": "c"})
    assert result.status_code == 200
    body = result.json()
    assert body["identified_habit"].startswith("Creating a more consistent pre-sleep routine")
    assert body["category_index"] == 1

    incomplete = client.post("/v1/assessment/calories", headers=USER, json={"q1": "a"})
    assert incomplete.status_code == 400
    assert client.post("/v1/assessment/hydration", headers=USER, json={"q1": "a"}).status_code == 404


def test_habit_system_flow(client):
    assert client.get("/v1/habit-systems/consistent_bedtime", headers=USER).status_code == 404
    client.put("/v1/habits/focus", headers=USER, json={"habit_key": "consistent_bedtime"})

    system = client.get("/v1/habit-systems/consistent_bedtime", headers=USER).json()
    assert system["current_week"] == 1
    assert system["best_day"] is None

    advanced = client.post("/v1/habit-systems/consistent_bedtime/advance", headers=USER).json()
    assert advanced["current_week"] == 2
    assert advanced["weeks"][0]["is_completed"] is True

    plan = {"description": "Home by six", "obstacles": [{"pitfall": "late call", "contingency": "decline politely"}]}
    saved = client.put("/v1/habit-systems/consistent_bedtime/day-plans/best_day", headers=USER, json=plan)
    assert saved.status_code == 200
    assert saved.json()["obstacles"] == plan["obstacles"]

    empty = {"description": "", "obstacles": []}
    rejected = client.put("/v1/habit-systems/consistent_bedtime/day-plans/worst_day", headers=USER, json=empty)
    assert rejected.status_code == 400
    unknown = client.get("/v1/habit-systems/consistent_bedtime/day-plans/lazy_day", headers=USER)
    assert unknown.status_code == 404

    week = client.put("/v1/habit-systems/consistent_bedtime/weeks/9", headers=USER, json={"content": "x"})
    assert week.status_code == 400


def test_repair_endpoint(client):
    response = client.post("/v1/program/repair", headers=USER)
    assert response.status_code == 200
    assert response.json()["repaired"] == []
