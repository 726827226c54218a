from datetime import datetime

from sqlalchemy import DateTime, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from pathway.models.base import Base


class FocusedHabit(Base):
    __tablename__ = "focused_habits"
    __table_args__ = (UniqueConstraint("user_id", "habit_key", name="uq_focused_habit_user_habit"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[str] = mapped_column(String(64), index=True)
    habit_key: Mapped[str] = mapped_column(String(64), index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
