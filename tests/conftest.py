import pytest
from fastapi.testclient import TestClient

from student_records.core.record_store import RecordStore
from student_records.core.validator import StudentValidator
from student_records.seeds.sample_students_seed import SAMPLE_STUDENTS
from student_records.main import create_application
from student_records.providers.record_repository import InMemoryRecordRepository

COURSES = ["BCA", "BBA", "B.Tech", "B.Sc", "MCA", "MBA"]


def make_form(**overrides):
    """Build a raw, valid form payload; keyword arguments replace fields."""
    form = {
        "id": "1004",
        "name": "Neha Sharma",
        "email": "neha.sharma@email.com",
        "phone": "9123456780",
        "course": "MCA",
        "semester": "2",
        "gpa": "3.9",
    }
    form.update(overrides)
    return form


@pytest.fixture
def valid_form():
    return make_form()


@pytest.fixture
def validator() -> StudentValidator:
    return StudentValidator(courses=COURSES)


@pytest.fixture
def repository() -> InMemoryRecordRepository:
    return InMemoryRecordRepository()


@pytest.fixture
def store(validator, repository) -> RecordStore:
    """Store seeded with the three sample students (1001, 1002, 1003)."""
    return RecordStore(
        validator=validator, repository=repository, seed_records=SAMPLE_STUDENTS
    )


@pytest.fixture
def empty_store(validator) -> RecordStore:
    return RecordStore(validator=validator)


@pytest.fixture
def application(store):
    return create_application(record_store=store)


@pytest.fixture
def client(application):
    with TestClient(application) as test_client:
        yield test_client


@pytest.fixture
def form_factory():
    return make_form
