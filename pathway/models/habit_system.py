from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from pathway.models.base import Base


class HabitSystemState(Base):
    __tablename__ = "habit_systems"
    __table_args__ = (UniqueConstraint("user_id", "habit_key", name="uq_habit_system_user_habit"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[str] = mapped_column(String(64), index=True)
    habit_key: Mapped[str] = mapped_column(String(64), index=True)
    current_week: Mapped[int] = mapped_column(Integer, default=1)
    obstacles: Mapped[str] = mapped_column(Text, default="")
    strategies: Mapped[str] = mapped_column(Text, default="")
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
