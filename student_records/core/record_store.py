from typing import (
    Any,
    Callable,
    Dict,
    Iterable,
    Iterator,
    List,
    Mapping,
    Optional,
    Tuple,
    Union,
)

from student_records.core.validator import StudentValidator
from student_records.providers.record_repository import (
    InMemoryRecordRepository,
    RecordRepository,
)
from student_records.schemas.student_schemas import (
    RECORD_FIELDS,
    SEARCHABLE_FIELDS,
    StudentRecord,
)
from student_records.utils.errors import (
    DuplicateIdError,
    NotFoundError,
    RecordValidationError,
)

# A target is either a zero-based position (int) or a student ID (str)
Target = Union[int, str]
Snapshot = Tuple[StudentRecord, ...]

SORT_DIRECTIONS = ("asc", "desc")


def _numeric_id(record: StudentRecord) -> Tuple[int, str]:
    # Compare digit strings by magnitude; int() caps out on very long ids
    digits = record.id.lstrip("0")
    return len(digits), digits


_NUMERIC_SORT_KEYS: Dict[str, Callable[[StudentRecord], Any]] = {
    "id": _numeric_id,
    "semester": lambda record: record.semester,
    "gpa": lambda record: record.gpa,
}


def _sort_key(field: str) -> Callable[[StudentRecord], Any]:
    if field in _NUMERIC_SORT_KEYS:
        return _NUMERIC_SORT_KEYS[field]
    return lambda record: str(getattr(record, field)).lower()


class RecordView:
    """
    Lazily filtered view over the records present when the search ran.

    Iterating the view again restarts the filter over the same snapshot, so
    later store mutations never leak into it.
    """

    def __init__(self, records: Snapshot, term: str = ""):
        self._records = records
        self.term = (term or "").strip().lower()

    def _matches(self, record: StudentRecord) -> bool:
        if not self.term:
            return True
        return any(
            self.term in str(getattr(record, field)).lower()
            for field in SEARCHABLE_FIELDS
        )

    def __iter__(self) -> Iterator[StudentRecord]:
        return (record for record in self._records if self._matches(record))

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def to_list(self) -> List[StudentRecord]:
        return list(self)


class RecordStore:
    """
    Authoritative, ordered collection of student records.

    Every mutation is gated by the validator and the unique ID rule and
    returns a snapshot of the collection. A failed operation leaves the
    collection untouched.
    """

    def __init__(
        self,
        validator: Optional[StudentValidator] = None,
        repository: Optional[RecordRepository] = None,
        seed_records: Iterable[Mapping[str, Any]] = (),
    ):
        self.validator = validator or StudentValidator()
        self.repository = repository or InMemoryRecordRepository()
        self.seed_records = tuple(seed_records)
        self._records: List[StudentRecord] = []
        self.load()

    def __len__(self) -> int:
        return len(self._records)

    # Persistence
    def load(self) -> Snapshot:
        """Reload from the repository, seeding the sample records when it is empty"""
        records = [
            self._validated(record.model_dump()) for record in self.repository.load()
        ]
        seen = set()
        for record in records:
            if record.id in seen:
                raise DuplicateIdError(record.id)
            seen.add(record.id)

        self._records = records
        if not self._records:
            for raw in self.seed_records:
                self.add(raw)
        return self.snapshot()

    def save(self) -> None:
        self.repository.save(self.snapshot())

    # Queries
    def snapshot(self) -> Snapshot:
        return tuple(self._records)

    def get(self, target: Target) -> StudentRecord:
        """Fetch one record without changing anything (delete/edit preview)"""
        return self._records[self._locate(target)]

    def search(self, term: str = "") -> RecordView:
        return RecordView(self.snapshot(), term)

    # Mutations
    def add(self, candidate: Mapping[str, Any]) -> Snapshot:
        record = self._validated(candidate)
        if self._index_of_id(record.id) is not None:
            raise DuplicateIdError(record.id)

        self._records.append(record)
        self.save()
        return self.snapshot()

    def update(self, target: Target, candidate: Mapping[str, Any]) -> Snapshot:
        index = self._locate(target)
        record = self._validated(candidate)

        existing = self._index_of_id(record.id)
        if existing is not None and existing != index:
            raise DuplicateIdError(record.id)

        self._records[index] = record
        self.save()
        return self.snapshot()

    def delete(self, target: Target) -> Snapshot:
        index = self._locate(target)
        del self._records[index]
        self.save()
        return self.snapshot()

    def sort_by(self, field: str, direction: str = "asc") -> Snapshot:
        if field not in RECORD_FIELDS:
            raise ValueError(f"Cannot sort by unknown field '{field}'")
        if direction not in SORT_DIRECTIONS:
            raise ValueError(f"Sort direction must be 'asc' or 'desc', got '{direction}'")

        # list.sort is stable in both directions
        self._records.sort(key=_sort_key(field), reverse=direction == "desc")
        self.save()
        return self.snapshot()

    # Helpers
    def _validated(self, candidate: Mapping[str, Any]) -> StudentRecord:
        result = self.validator.validate(candidate)
        if not result.is_valid:
            raise RecordValidationError(result.errors)
        return result.record

    def _index_of_id(self, student_id: str) -> Optional[int]:
        for index, record in enumerate(self._records):
            if record.id == student_id:
                return index
        return None

    def _locate(self, target: Target) -> int:
        if isinstance(target, int) and not isinstance(target, bool):
            if 0 <= target < len(self._records):
                return target
            raise NotFoundError(
                f"No student record at position {target}", "STUDENT_NOT_FOUND"
            )

        index = self._index_of_id(str(target).strip())
        if index is None:
            raise NotFoundError(f"Student {target} not found", "STUDENT_NOT_FOUND")
        return index
