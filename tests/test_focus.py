import pytest

from pathway.models import StepProgress
from pathway.program.focus import FocusedHabits, FocusLimitError, UnknownHabitError


def test_toggle_adds_and_removes(session, seeded_db):
    focus = FocusedHabits(session)
    assert focus.toggle("consistent_bedtime") == ["consistent_bedtime"]
    assert focus.toggle("protein_every_meal") == ["consistent_bedtime", "protein_every_meal"]
    assert focus.toggle("consistent_bedtime") == ["protein_every_meal"]
    assert focus.keys() == ["protein_every_meal"]


def test_focus_is_capped(session, seeded_db):
    focus = FocusedHabits(session)
    focus.toggle("consistent_bedtime")
    focus.toggle("track_calories")

    with pytest.raises(FocusLimitError):
        focus.toggle("daily_stress_walk")
    assert focus.keys() == ["consistent_bedtime", "track_calories"]
    assert session.notices[-1].title == "Limit Reached"


def test_unknown_habit_cannot_be_focused(session, seeded_db):
    with pytest.raises(UnknownHabitError):
        FocusedHabits(session).toggle("juggling")


def test_complete_step_marks_focus_step(session, seeded_db):
    calls = []
    focus = FocusedHabits(session, on_complete=lambda: calls.append("done"))
    focus.toggle("never_miss_twice")
    assert focus.complete_step()

    rows = session.store.select(StepProgress, {"user_id": "user-1", "step_number": 2})
    assert rows[0]["completed"] is True
    assert rows[0]["step_name"] == "Focus Habits"
    assert calls == ["done"]


def test_complete_step_needs_a_focused_habit(session, seeded_db):
    with pytest.raises(FocusLimitError):
        FocusedHabits(session).complete_step()
