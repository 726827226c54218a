from datetime import datetime

from sqlalchemy import DateTime, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from pathway.models.base import Base


class HabitWeeklyStep(Base):
    __tablename__ = "habit_weekly_steps"
    __table_args__ = (
        UniqueConstraint("user_id", "habit_key", "week_number", name="uq_habit_weekly_step_user_habit_week"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[str] = mapped_column(String(64), index=True)
    habit_key: Mapped[str] = mapped_column(String(64), index=True)
    week_number: Mapped[int] = mapped_column(Integer)
    content: Mapped[str] = mapped_column(Text, default="")
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
