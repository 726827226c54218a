"""Step catalog and phase model.

The catalog is an explicit ordered list of step descriptors assembled from
per-phase sub-lists. Step ids are unique but not contiguous; consumers look
steps up by id and never by list position. A step's phase is a pure
function of its id.
"""
import logging
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, Iterator, Optional

logger = logging.getLogger(__name__)

CHARTING_PATH_FIRST_ID = 18
ACTIVE_CHANGE_FIRST_ID = 62


class Phase(str, Enum):
    STARTING_POINT = "starting_point"
    CHARTING_PATH = "charting_path"
    ACTIVE_CHANGE = "active_change"


PHASE_ORDER = [Phase.STARTING_POINT, Phase.CHARTING_PATH, Phase.ACTIVE_CHANGE]
PHASE_TITLES = {
    Phase.STARTING_POINT: "Your Starting Point",
    Phase.CHARTING_PATH: "Charting Your Path",
    Phase.ACTIVE_CHANGE: "Active Change",
}


def phase_of(step_id: int) -> Phase:
    if step_id < CHARTING_PATH_FIRST_ID:
        return Phase.STARTING_POINT
    if step_id < ACTIVE_CHANGE_FIRST_ID:
        return Phase.CHARTING_PATH
    return Phase.ACTIVE_CHANGE


def previous_phase(phase: Phase) -> Optional[Phase]:
    index = PHASE_ORDER.index(phase)
    return PHASE_ORDER[index - 1] if index else None


class CatalogError(ValueError):
    pass


@dataclass(frozen=True)
class StepDescriptor:
    id: int
    title: str
    description: str
    content: Optional[Callable[..., Any]] = None
    hide_from_navigation: bool = False
    default_completed: bool = False
    next_step_id: Optional[int] = None

    @property
    def phase(self) -> Phase:
        return phase_of(self.id)

    def render(self, session, on_complete: Callable[[], Any]) -> Any:
        if self.content is None:
            raise CatalogError(f"step {self.id} has no content provider")
        return self.content(session, on_complete)


def validate_catalog(steps: Iterable[StepDescriptor]) -> list[int]:
    """Return the step ids that appear more than once, in ascending order."""
    counts = Counter(step.id for step in steps)
    return sorted(step_id for step_id, count in counts.items() if count > 1)


class Catalog:
    def __init__(self, steps: Iterable[StepDescriptor], strict: bool = True):
        self.steps: tuple[StepDescriptor, ...] = tuple(steps)
        if not self.steps:
            raise CatalogError("catalog has no steps")

        duplicates = validate_catalog(self.steps)
        if duplicates:
            if strict:
                raise CatalogError(f"duplicate step ids in catalog: {duplicates}")
            logger.warning("duplicate step ids %s in catalog, first match in catalog order wins", duplicates)

        self._by_id: dict[int, StepDescriptor] = {}
        for step in self.steps:
            self._by_id.setdefault(step.id, step)
        self._ids = sorted(self._by_id)

    def __iter__(self) -> Iterator[StepDescriptor]:
        return iter(self.steps)

    def __len__(self) -> int:
        return len(self.steps)

    def __contains__(self, step_id: object) -> bool:
        return step_id in self._by_id

    def get(self, step_id: int) -> Optional[StepDescriptor]:
        return self._by_id.get(step_id)

    def ids(self) -> list[int]:
        return list(self._ids)

    @property
    def first_id(self) -> int:
        return self._ids[0]

    @property
    def final_id(self) -> int:
        return self._ids[-1]

    def visible(self) -> list[StepDescriptor]:
        seen: set[int] = set()
        result = []
        for step in self.steps:
            if step.hide_from_navigation or step.id in seen:
                continue
            seen.add(step.id)
            result.append(step)
        return result

    def in_phase(self, phase: Phase) -> list[StepDescriptor]:
        return [step for step in self.visible() if step.phase is phase]

    def successor_id(self, step_id: int) -> Optional[int]:
        """Smallest catalog id strictly greater than ``step_id``."""
        for candidate in self._ids:
            if candidate > step_id:
                return candidate
        return None

    def next_after(self, step_id: int) -> Optional[int]:
        """Next step in catalog order whose id is greater than ``step_id``."""
        position = next((i for i, step in enumerate(self.steps) if step.id == step_id), None)
        if position is None:
            return self.successor_id(step_id)
        for step in self.steps[position + 1 :]:
            if step.id > step_id:
                return step.id
        return None
