from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from pathway.models.base import Base


class HabitAssessment(Base):
    __tablename__ = "habit_assessments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[str] = mapped_column(String(64), index=True)
    category: Mapped[str] = mapped_column(String(32), index=True)
    question_1_answer: Mapped[str] = mapped_column(String(8))
    question_2_answer: Mapped[str] = mapped_column(String(8))
    question_3_answer: Mapped[Optional[str]] = mapped_column(String(8), nullable=True)
    identified_habit: Mapped[str] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
