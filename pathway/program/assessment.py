import logging
from typing import Any, Mapping, Optional

from pathway.models import HabitAssessment as HabitAssessmentRecord
from pathway.program.classifier import CATEGORIES, answers_complete, classify, question_keys
from pathway.program.forms import save_single_record
from pathway.session import ProgramSession
from pathway.store import StoreError

logger = logging.getLogger(__name__)


class AssessmentError(ValueError):
    pass


class HabitAssessment:
    """Walks the user through the habit categories one at a time.

    Each category keeps one record per user, written by selecting the
    existing record and updating it or inserting a new one. Which category
    comes next is recomputed from the records that exist.
    """

    def __init__(self, session: ProgramSession):
        self.session = session
        self.records: dict[str, dict[str, Any]] = {}
        self.error: Optional[str] = None

    def load(self) -> dict[str, dict[str, Any]]:
        try:
            rows = self.session.store.select(
                HabitAssessmentRecord, {"user_id": self.session.user_id}, order_by="updated_at"
            )
        except StoreError as exc:
            self.error = str(exc)
            self.session.notify("Error", "Failed to load your assessment", level="error")
            return self.records

        self.error = None
        records: dict[str, dict[str, Any]] = {}
        for row in rows:
            records.setdefault(row["category"], row)
        self.records = records
        return records

    @property
    def category_index(self) -> int:
        for index, category in enumerate(CATEGORIES):
            if category not in self.records:
                return index
        return len(CATEGORIES)

    @property
    def current_category(self) -> Optional[str]:
        index = self.category_index
        return CATEGORIES[index] if index < len(CATEGORIES) else None

    @property
    def is_finished(self) -> bool:
        return self.category_index >= len(CATEGORIES)

    def submit(self, category: str, answers: Mapping[str, Optional[str]]) -> dict[str, Any]:
        if category not in CATEGORIES:
            raise AssessmentError(f"Unknown assessment category: {category}")
        if not answers_complete(category, answers):
            raise AssessmentError("Answer every question before identifying a habit.")

        identified = classify(category, answers)
        keys = question_keys(category)
        values = {
            f"question_{number}_answer": answers.get(key) if key in keys else None
            for number, key in enumerate(("q1", "q2", "q3"), start=1)
        }
        values["identified_habit"] = identified

        try:
            record = save_single_record(
                self.session.store,
                HabitAssessmentRecord,
                {"user_id": self.session.user_id, "category": category},
                values,
            )
        except StoreError:
            self.session.notify("Error", "Failed to save your assessment. Please try again.", level="error")
            return {"category": category, "identified_habit": identified, "saved": False}

        self.records[category] = record
        logger.info("user %s assessed %s", self.session.user_id, category)
        self.session.notify("Assessment Saved", "Your habit assessment has been saved.")
        return {"category": category, "identified_habit": identified, "saved": True}
