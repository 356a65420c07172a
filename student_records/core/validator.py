from dataclasses import dataclass, field
from typing import Any, Collection, Dict, Mapping, Optional

from pydantic import ValidationError

from student_records.schemas.student_schemas import StudentRecord, StudentRecordForm


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one candidate record."""

    errors: Dict[str, str] = field(default_factory=dict)
    record: Optional[StudentRecord] = None

    @property
    def is_valid(self) -> bool:
        return not self.errors


class StudentValidator:
    """
    Side-effect free checker for raw student record input.

    Every field is checked on its own, so a result lists all violations at
    once rather than only the first.
    """

    def __init__(self, courses: Optional[Collection[str]] = None):
        self.courses = tuple(courses or ())

    def validate(self, raw: Mapping[str, Any]) -> ValidationResult:
        try:
            form = StudentRecordForm.model_validate(
                dict(raw), context={"courses": self.courses}
            )
        except ValidationError as exc:
            errors = {}
            for error in exc.errors():
                errors.setdefault(str(error["loc"][0]), error["msg"])
            return ValidationResult(errors=errors)

        return ValidationResult(record=form.to_record())
