from dataclasses import dataclass, field

from pathway.store import RecordStore


@dataclass
class Notice:
    level: str
    title: str
    message: str


@dataclass
class ProgramSession:
    """The current user plus the store every engine component talks to."""

    user_id: str
    store: RecordStore
    notices: list[Notice] = field(default_factory=list)

    def notify(self, title: str, message: str, level: str = "info") -> None:
        self.notices.append(Notice(level=level, title=title, message=message))

    def drain_notices(self) -> list[Notice]:
        notices, self.notices = self.notices, []
        return notices
