from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from pathway.models import HabitDefinition

DEFAULT_HABITS = [
    {
        "key": "consistent_bedtime",
        "title": "Keep a consistent bedtime",
        "category": "sleep",
        "description": "Go to bed within the same 30 minute window every night.",
        "sort_order": 1,
    },
    {
        "key": "screen_free_wind_down",
        "title": "Screen-free wind-down",
        "category": "sleep",
        "description": "No phone, TV or tablet in the 30 minutes before sleep.",
        "sort_order": 2,
    },
    {
        "key": "track_calories",
        "title": "Track daily calories",
        "category": "calories",
        "description": "Log what you eat so you know your daily intake.",
        "sort_order": 3,
    },
    {
        "key": "stop_before_full",
        "title": "Stop eating before you are full",
        "category": "calories",
        "description": "Pause mid-meal and stop at comfortably satisfied.",
        "sort_order": 4,
    },
    {
        "key": "protein_every_meal",
        "title": "Protein at every meal",
        "category": "protein",
        "description": "Include a quality protein source in each meal.",
        "sort_order": 5,
    },
    {
        "key": "progressive_overload",
        "title": "Follow a progressive plan",
        "category": "training",
        "description": "Train from a structured program that adds load or reps over time.",
        "sort_order": 6,
    },
    {
        "key": "never_miss_twice",
        "title": "Never miss a workout twice",
        "category": "training",
        "description": "If a session is missed, the next one is non-negotiable.",
        "sort_order": 7,
    },
    {
        "key": "daily_stress_walk",
        "title": "Daily stress walk",
        "category": "lifestyle",
        "description": "Handle stress with a short walk instead of food or screens.",
        "sort_order": 8,
    },
    {
        "key": "screen_time_limit",
        "title": "Limit leisure screen time",
        "category": "lifestyle",
        "description": "Keep non-work screen time under two hours a day.",
        "sort_order": 9,
    },
]


def seed_habits_if_empty(db: Session) -> None:
    existing = db.scalar(select(HabitDefinition.id).limit(1))
    if existing:
        return

    for item in DEFAULT_HABITS:
        db.add(HabitDefinition(**item))
    db.commit()


def get_active_habits(db: Session, category: Optional[str] = None) -> list[HabitDefinition]:
    stmt = select(HabitDefinition).where(HabitDefinition.is_active.is_(True))
    if category:
        stmt = stmt.where(HabitDefinition.category == category)
    return list(db.scalars(stmt.order_by(HabitDefinition.sort_order)))
