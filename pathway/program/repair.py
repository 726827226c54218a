import logging
from typing import Optional

from pathway.models import StepAnswer
from pathway.program.catalog import Catalog
from pathway.program.forms import FormContent
from pathway.program.progress import fetch_progress, record_completion
from pathway.program.steps import get_catalog
from pathway.session import ProgramSession

logger = logging.getLogger(__name__)


def repair_step_completion(session: ProgramSession, catalog: Optional[Catalog] = None) -> list[int]:
    """Mark steps completed whose answers were saved without a progress record.

    Returns the ids that were repaired. Store failures propagate as
    ``StoreError``; steps repaired before the failure stay repaired.
    """
    if catalog is None:
        catalog = get_catalog()
    store = session.store
    completed = {row["step_number"] for row in fetch_progress(store, session.user_id) if row["completed"]}

    repaired = []
    for step in catalog:
        if step.id in completed or not isinstance(step.content, FormContent):
            continue
        answers = store.select(
            StepAnswer, {"namespace": step.content.spec.namespace, "user_id": session.user_id}, limit=1
        )
        if not answers:
            continue
        record_completion(store, session.user_id, step.id, step.title)
        completed.add(step.id)
        repaired.append(step.id)

    if repaired:
        logger.info("repaired completion of steps %s for user %s", repaired, session.user_id)
        session.notify("Success", f"Fixed completion status for {len(repaired)} step(s)")
    return repaired
