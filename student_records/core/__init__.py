from .record_store import RecordStore, RecordView
from .validator import StudentValidator, ValidationResult

__all__ = [
    "RecordStore",
    "RecordView",
    "StudentValidator",
    "ValidationResult",
]
