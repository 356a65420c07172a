import math
import re
from typing import Any, Literal, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
)
from pydantic_core import PydanticCustomError

from student_records.schemas.camel_base_model import CamelCaseBaseModel

ID_PATTERN = re.compile(r"\d+", re.ASCII)
NAME_PATTERN = re.compile(r"[A-Za-z\s]+", re.ASCII)
EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
PHONE_PATTERN = re.compile(r"\d{10}", re.ASCII)
NUMBER_PATTERN = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?", re.ASCII)

MIN_SEMESTER, MAX_SEMESTER = 1, 8
MIN_GPA, MAX_GPA = 0.0, 4.0

RECORD_FIELDS = ("id", "name", "email", "phone", "course", "semester", "gpa")
SEARCHABLE_FIELDS = ("id", "name", "email", "course")

SortOrder = Literal["asc", "desc"]


def _reject(error_type: str, message: str):
    raise PydanticCustomError(error_type, message)


def _parse_number(value: str) -> Optional[float]:
    # float() also takes non-ASCII digits and "inf"
    if not NUMBER_PATTERN.fullmatch(value):
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


class StudentRecord(CamelCaseBaseModel):
    """A validated student record as held by the record store."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Numeric student ID, unique in the store")
    name: str = Field(..., description="Student name")
    email: str = Field(..., description="Email address")
    phone: str = Field(..., description="10 digit phone number")
    course: str = Field(..., description="Course offering")
    semester: int = Field(..., description="Semester (1-8)")
    gpa: float = Field(..., description="GPA (0.0-4.0)")


class StudentRecordForm(BaseModel):
    """
    Raw form input for a student record.

    Every value arrives as text and is stripped before the per-field rules run.
    Missing fields are validated as empty so that each one reports its own
    "required" reason. Pass ``context={"courses": [...]}`` to restrict the
    course to a set of offerings.
    """

    model_config = ConfigDict(validate_default=True, extra="ignore")

    id: str = ""
    name: str = ""
    email: str = ""
    phone: str = ""
    course: str = ""
    semester: str = ""
    gpa: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def coerce_raw_value(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value).strip()

    @field_validator("id")
    @classmethod
    def check_id(cls, value: str) -> str:
        if not value:
            _reject("required", "Student ID is required")
        if not ID_PATTERN.fullmatch(value):
            _reject("id_format", "Student ID must be numeric")
        return value

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str) -> str:
        if not value:
            _reject("required", "Student Name is required")
        if not NAME_PATTERN.fullmatch(value):
            _reject("name_format", "Name should contain only letters")
        return value

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        if not value:
            _reject("required", "Email is required")
        if not EMAIL_PATTERN.fullmatch(value):
            _reject("email_format", "Please enter a valid email address")
        return value

    @field_validator("phone")
    @classmethod
    def check_phone(cls, value: str) -> str:
        if not value:
            _reject("required", "Phone number is required")
        if not PHONE_PATTERN.fullmatch(value):
            _reject("phone_format", "Phone number must be exactly 10 digits")
        return value

    @field_validator("course")
    @classmethod
    def check_course(cls, value: str, info: ValidationInfo) -> str:
        if not value:
            _reject("required", "Please select a course")

        offerings = (info.context or {}).get("courses")
        if offerings:
            # Normalize to the offering's own spelling
            for offering in offerings:
                if offering.lower() == value.lower():
                    return offering
            _reject("course_offering", "Please select a valid course")
        return value

    @field_validator("semester")
    @classmethod
    def check_semester(cls, value: str) -> str:
        if not value:
            _reject("required", "Semester is required")
        number = _parse_number(value)
        if number is None or not number.is_integer():
            _reject("semester_type", "Semester must be a whole number")
        if not MIN_SEMESTER <= number <= MAX_SEMESTER:
            _reject("semester_range", "Semester must be between 1 and 8")
        return value

    @field_validator("gpa")
    @classmethod
    def check_gpa(cls, value: str) -> str:
        if not value:
            _reject("required", "GPA is required")
        number = _parse_number(value)
        if number is None:
            _reject("gpa_type", "GPA must be a number")
        if not MIN_GPA <= number <= MAX_GPA:
            _reject("gpa_range", "GPA must be between 0.0 and 4.0")
        return value

    def to_record(self) -> StudentRecord:
        return StudentRecord(
            id=self.id,
            name=self.name,
            email=self.email,
            phone=self.phone,
            course=self.course,
            semester=int(float(self.semester)),
            gpa=float(self.gpa),
        )


class StudentListQueryParams(BaseModel):
    """Query parameters for listing and searching student records"""

    q: Optional[str] = Field(
        None, description="Case-insensitive search over id, name, email and course"
    )


class SortQueryParams(BaseModel):
    """Query parameters for sorting; omit order to toggle the column direction"""

    order: Optional[SortOrder] = Field(None, description="Explicit sort order")
