import logging
from datetime import datetime
from typing import Any

from pathway.models import StepProgress
from pathway.store import RecordStore

logger = logging.getLogger(__name__)

PROGRESS_CONFLICT_KEY = ("user_id", "step_number")


def fetch_progress(store: RecordStore, user_id: str) -> list[dict[str, Any]]:
    return store.select(StepProgress, {"user_id": user_id}, order_by="step_number", descending=False)


def record_completion(store: RecordStore, user_id: str, step_number: int, step_name: str = "") -> dict[str, Any]:
    """Mark a step completed.

    Re-completing only rewrites the timestamp; the step name keeps the title
    recorded when the row was first written.
    """
    row = store.upsert(
        StepProgress,
        {
            "user_id": user_id,
            "step_number": step_number,
            "step_name": step_name or f"Step {step_number}",
            "completed": True,
            "completed_at": datetime.utcnow(),
        },
        PROGRESS_CONFLICT_KEY,
        update_keys=("completed", "completed_at"),
    )
    logger.info("user %s completed step %s", user_id, step_number)
    return row


def record_unlock(store: RecordStore, user_id: str, step_number: int, step_name: str = "") -> dict[str, Any]:
    """Make a step reachable out of sequence without touching its completion."""
    row = store.upsert(
        StepProgress,
        {
            "user_id": user_id,
            "step_number": step_number,
            "step_name": step_name or f"Step {step_number}",
            "completed": False,
            "available": True,
            "completed_at": None,
        },
        PROGRESS_CONFLICT_KEY,
        update_keys=("available",),
    )
    logger.info("user %s unlocked step %s", user_id, step_number)
    return row
