from typing import Any, Dict, List, Mapping, Optional, Sequence

from fastapi import Request

from student_records.config.settings import settings
from student_records.core.record_store import RecordStore, Target
from student_records.core.validator import StudentValidator
from student_records.seeds.sample_students_seed import SAMPLE_STUDENTS
from student_records.schemas.student_schemas import (
    RECORD_FIELDS,
    SortOrder,
    StudentRecord,
)
from student_records.services.sort_preferences import SortPreferences
from student_records.utils.logging import get_logger

logger = get_logger()


class StudentService:
    """Service provider between the HTTP routes and the record store"""

    def __init__(self, store: RecordStore, sort_preferences: SortPreferences):
        self.store = store
        self.sort_preferences = sort_preferences

    @staticmethod
    def serialize(records: Sequence[StudentRecord]) -> List[Dict[str, Any]]:
        return [record.model_dump(by_alias=True) for record in records]

    def list_students(self, term: Optional[str] = None) -> List[Dict[str, Any]]:
        view = self.store.search(term or "")
        records = view.to_list()
        if view.term:
            logger.info(
                f"Search '{view.term}' matched {len(records)} of {len(self.store)} students"
            )
        return self.serialize(records)

    def get_student(self, target: Target) -> Dict[str, Any]:
        return self.store.get(target).model_dump(by_alias=True)

    def add_student(self, raw: Mapping[str, Any]) -> List[Dict[str, Any]]:
        snapshot = self.store.add(raw)
        logger.info(f"Added student {snapshot[-1].id}, {len(snapshot)} students total")
        return self.serialize(snapshot)

    def update_student(
        self, target: Target, raw: Mapping[str, Any]
    ) -> List[Dict[str, Any]]:
        snapshot = self.store.update(target, raw)
        logger.info(f"Updated student {target}")
        return self.serialize(snapshot)

    def delete_student(self, target: Target) -> List[Dict[str, Any]]:
        snapshot = self.store.delete(target)
        logger.info(f"Deleted student {target}, {len(snapshot)} students remaining")
        return self.serialize(snapshot)

    def sort_students(
        self, field: str, order: Optional[SortOrder] = None
    ) -> Dict[str, Any]:
        # Reject before the toggle records a direction for a bogus column
        if field not in RECORD_FIELDS:
            raise ValueError(f"Cannot sort by unknown field '{field}'")

        direction = self.sort_preferences.next_direction(field, order)
        snapshot = self.store.sort_by(field, direction)
        logger.info(f"Sorted {len(snapshot)} students by {field} ({direction})")
        return {
            "field": field,
            "order": direction,
            "students": self.serialize(snapshot),
        }

    @staticmethod
    def build_list_message(count: int, term: Optional[str]) -> str:
        message = f"Retrieved {count} student{'s' if count != 1 else ''}"
        if term and term.strip():
            message += f" matching '{term.strip()}'"
        return message


def build_record_store() -> RecordStore:
    """Create the application's record store from settings"""
    store = RecordStore(
        validator=StudentValidator(courses=settings.COURSE_OFFERINGS),
        seed_records=SAMPLE_STUDENTS if settings.SEED_SAMPLE_DATA else (),
    )
    logger.info(f"Record store ready with {len(store)} students")
    return store


# Dependency injection for service provider
def get_student_service(request: Request) -> StudentService:
    """Dependency to provide StudentService bound to the application state"""
    return StudentService(
        request.app.state.record_store, request.app.state.sort_preferences
    )
