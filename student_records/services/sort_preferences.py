from typing import Dict, Optional

from student_records.schemas.student_schemas import SortOrder


class SortPreferences:
    """Per-column sort direction chosen by the client."""

    def __init__(self):
        self._directions: Dict[str, SortOrder] = {}

    def current(self, field: str) -> Optional[SortOrder]:
        return self._directions.get(field)

    def next_direction(self, field: str, order: Optional[SortOrder] = None) -> SortOrder:
        """
        Return the direction for the next sort on ``field``.

        Without an explicit order, the first sort of a column is ascending and
        each repeat flips it. An explicit order is remembered so the following
        toggle flips from it.
        """
        if order is None:
            order = "desc" if self._directions.get(field) == "asc" else "asc"
        self._directions[field] = order
        return order

    def reset(self) -> None:
        self._directions.clear()
