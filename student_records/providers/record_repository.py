from typing import Iterable, List, Optional, Protocol, Sequence

from student_records.schemas.student_schemas import StudentRecord


class RecordRepository(Protocol):
    """Persistence collaborator used by the record store."""

    def load(self) -> List[StudentRecord]: ...

    def save(self, records: Sequence[StudentRecord]) -> None: ...


class InMemoryRecordRepository:
    """Keeps the last saved collection in process memory"""

    def __init__(self, records: Optional[Iterable[StudentRecord]] = None):
        self._records = tuple(records or ())
        self.save_count = 0

    def load(self) -> List[StudentRecord]:
        return list(self._records)

    def save(self, records: Sequence[StudentRecord]) -> None:
        self._records = tuple(records)
        self.save_count += 1
