import pytest
from pydantic import ValidationError

from student_records.core.record_store import RecordStore
from student_records.seeds.sample_students_seed import SAMPLE_STUDENTS
from student_records.providers.record_repository import InMemoryRecordRepository
from student_records.utils.errors import (
    DuplicateIdError,
    NotFoundError,
    RecordValidationError,
)

pytestmark = pytest.mark.unit


def ids(records):
    return [record.id for record in records]


class TestLoading:
    """Test startup loading and sample seeding."""

    def test_empty_repository_is_seeded_with_samples(self, store):
        assert ids(store.snapshot()) == ["1001", "1002", "1003"]
        assert store.get(0).name == "Rahul Kumar"

    def test_seeding_is_skipped_when_repository_has_records(self, validator, store):
        repository = InMemoryRecordRepository(store.snapshot()[:1])
        reloaded = RecordStore(
            validator=validator, repository=repository, seed_records=SAMPLE_STUDENTS
        )

        assert ids(reloaded.snapshot()) == ["1001"]

    def test_store_without_seeds_starts_empty(self, empty_store):
        assert len(empty_store) == 0
        assert empty_store.snapshot() == ()

    def test_duplicate_ids_in_repository_are_rejected(self, validator, store):
        first = store.get(0)
        repository = InMemoryRecordRepository([first, first])

        with pytest.raises(DuplicateIdError):
            RecordStore(validator=validator, repository=repository)

    def test_records_breaking_field_rules_are_rejected_on_load(self, validator, store):
        broken = store.get(0).model_copy(update={"phone": "123", "semester": 12})
        repository = InMemoryRecordRepository([broken])

        with pytest.raises(RecordValidationError) as exc_info:
            RecordStore(validator=validator, repository=repository)

        assert set(exc_info.value.errors) == {"phone", "semester"}

    def test_loaded_records_take_the_offering_spelling(self, validator, store):
        lowercase = store.get(2).model_copy(update={"course": "b.tech"})
        reloaded = RecordStore(
            validator=validator, repository=InMemoryRecordRepository([lowercase])
        )

        assert reloaded.get(0).course == "B.Tech"

    def test_mutations_are_saved_to_repository(self, store, repository, valid_form):
        saves_before = repository.save_count

        store.add(valid_form)

        assert repository.save_count == saves_before + 1
        assert ids(repository.load()) == ["1001", "1002", "1003", "1004"]


class TestAdd:
    """Test adding records."""

    def test_add_appends_and_returns_snapshot(self, store, valid_form):
        snapshot = store.add(valid_form)

        assert len(snapshot) == 4
        assert snapshot[-1].id == "1004"
        assert snapshot[-1].name == "Neha Sharma"
        assert snapshot == store.snapshot()

    def test_add_duplicate_id_leaves_store_unchanged(self, store, form_factory):
        before = store.snapshot()

        with pytest.raises(DuplicateIdError) as exc_info:
            store.add(form_factory(id="1002"))

        assert exc_info.value.student_id == "1002"
        assert exc_info.value.error_code == "STUDENT_ID_EXISTS"
        assert store.snapshot() == before

    def test_add_invalid_lists_violated_fields(self, store):
        before = store.snapshot()

        with pytest.raises(RecordValidationError) as exc_info:
            store.add(
                {
                    "id": "1005",
                    "name": "R@hul",
                    "email": "bad",
                    "phone": "12345",
                    "course": "BCA",
                    "semester": "4",
                    "gpa": "3.5",
                }
            )

        assert set(exc_info.value.errors) == {"name", "email", "phone"}
        assert store.snapshot() == before

    def test_validation_runs_before_duplicate_check(self, store, form_factory):
        with pytest.raises(RecordValidationError) as exc_info:
            store.add(form_factory(id="1001", phone="123"))

        assert set(exc_info.value.errors) == {"phone"}

    def test_stored_records_are_immutable(self, store):
        with pytest.raises(ValidationError):
            store.get(0).name = "Someone Else"


class TestPreviewAndDelete:
    """Test the preview-then-commit delete flow."""

    def test_preview_by_position_and_id(self, store):
        assert store.get(1).id == "1002"
        assert store.get("1003").name == "Amit Patel"

    def test_preview_does_not_mutate(self, store):
        before = store.snapshot()
        store.get("1002")
        assert store.snapshot() == before

    @pytest.mark.parametrize("target", [3, -1, "9999", ""])
    def test_missing_target_is_not_found(self, store, target):
        with pytest.raises(NotFoundError) as exc_info:
            store.get(target)
        assert exc_info.value.error_code == "STUDENT_NOT_FOUND"

    def test_delete_shifts_following_records(self, store):
        snapshot = store.delete(0)

        assert ids(snapshot) == ["1002", "1003"]
        assert store.get(0).id == "1002"

    def test_delete_by_id_then_full_search(self, store):
        store.delete("1002")

        remaining = store.search("").to_list()
        assert ids(remaining) == ["1001", "1003"]

    def test_delete_missing_leaves_store_unchanged(self, store):
        before = store.snapshot()

        with pytest.raises(NotFoundError):
            store.delete("4242")

        assert store.snapshot() == before

    def test_removed_record_cannot_be_updated_or_deleted(self, store, form_factory):
        store.delete("1003")

        with pytest.raises(NotFoundError):
            store.delete("1003")
        with pytest.raises(NotFoundError):
            store.update("1003", form_factory(id="1003"))


class TestUpdate:
    """Test in-place updates."""

    def test_update_replaces_in_place(self, store, form_factory):
        snapshot = store.update("1002", form_factory(id="1002", name="Priya Sharma"))

        assert ids(snapshot) == ["1001", "1002", "1003"]
        assert snapshot[1].name == "Priya Sharma"
        assert snapshot[1].course == "MCA"

    def test_update_can_change_id_to_unused_value(self, store, form_factory):
        snapshot = store.update(1, form_factory(id="2002"))
        assert ids(snapshot) == ["1001", "2002", "1003"]

    def test_update_to_another_records_id_is_duplicate(self, store, form_factory):
        before = store.snapshot()

        with pytest.raises(DuplicateIdError):
            store.update("1002", form_factory(id="1001"))

        assert store.snapshot() == before

    def test_update_nonexistent_is_not_found(self, store, valid_form):
        before = store.snapshot()

        with pytest.raises(NotFoundError):
            store.update("7777", valid_form)

        assert store.snapshot() == before

    def test_update_collects_all_violations(self, store, form_factory):
        before = store.snapshot()

        with pytest.raises(RecordValidationError) as exc_info:
            store.update("1001", form_factory(id="1001", semester="12", gpa="5"))

        assert set(exc_info.value.errors) == {"semester", "gpa"}
        assert store.snapshot() == before


class TestSearch:
    """Test case-insensitive search views."""

    def test_search_matches_course_case_insensitively(self, empty_store, form_factory):
        empty_store.add(form_factory(id="1", course="BCA"))
        empty_store.add(form_factory(id="2", course="B.Tech"))

        assert ids(empty_store.search("bca")) == ["1"]

    @pytest.mark.parametrize(
        "term, expected",
        [
            ("RAHUL", ["1001"]),
            ("priya.singh@", ["1002"]),
            ("100", ["1001", "1002", "1003"]),
            ("b.tech", ["1003"]),
            ("  amit ", ["1003"]),
            ("nobody", []),
        ],
    )
    def test_search_fields(self, store, term, expected):
        assert ids(store.search(term)) == expected

    def test_phone_is_not_searched(self, store):
        assert ids(store.search("9876543210")) == []

    @pytest.mark.parametrize("term", ["", "   "])
    def test_blank_term_returns_everything(self, store, term):
        assert ids(store.search(term)) == ["1001", "1002", "1003"]

    def test_search_is_idempotent_and_restartable(self, store):
        view = store.search("bca")

        assert list(view) == list(view)
        assert len(view) == 2
        assert store.search("bca").to_list() == view.to_list()

    def test_view_is_isolated_from_later_mutations(self, store):
        view = store.search("")
        store.delete(0)

        assert len(view) == 3
        assert len(store) == 2


class TestSort:
    """Test sorting the collection."""

    def test_sort_gpa_ascending_and_descending(self, store):
        assert ids(store.sort_by("gpa", "asc")) == ["1003", "1001", "1002"]
        assert ids(store.sort_by("gpa", "desc")) == ["1002", "1001", "1003"]

    def test_id_sorts_numerically(self, empty_store, form_factory):
        for student_id in ["10", "9", "100"]:
            empty_store.add(form_factory(id=student_id))

        assert ids(empty_store.sort_by("id")) == ["9", "10", "100"]

    def test_id_sort_handles_leading_zeros_and_long_ids(
        self, empty_store, form_factory
    ):
        long_id = "9" * 5000
        for student_id in [long_id, "0010", "7", "010000"]:
            empty_store.add(form_factory(id=student_id))

        assert ids(empty_store.sort_by("id", "asc")) == ["7", "0010", "010000", long_id]
        assert ids(empty_store.sort_by("id", "desc")) == [long_id, "010000", "0010", "7"]

    def test_text_sorts_case_insensitively(self, store, form_factory):
        store.add(form_factory(id="1004", name="aaron lee"))

        names = [record.name for record in store.sort_by("name")]
        assert names == ["aaron lee", "Amit Patel", "Priya Singh", "Rahul Kumar"]

    @pytest.mark.parametrize("direction", ["asc", "desc"])
    def test_sort_is_stable_for_equal_keys(self, empty_store, form_factory, direction):
        for student_id, semester in [("1", "3"), ("2", "5"), ("3", "3"), ("4", "3")]:
            empty_store.add(form_factory(id=student_id, semester=semester))

        sorted_ids = ids(empty_store.sort_by("semester", direction))

        ties = [student_id for student_id in sorted_ids if student_id != "2"]
        assert ties == ["1", "3", "4"]

    def test_sort_reorders_the_store(self, store, valid_form):
        store.sort_by("gpa", "desc")
        snapshot = store.add(valid_form)

        assert ids(snapshot) == ["1002", "1001", "1003", "1004"]
        assert store.get(0).id == "1002"

    def test_unknown_field_is_rejected(self, store):
        with pytest.raises(ValueError):
            store.sort_by("age")

    def test_unknown_direction_is_rejected(self, store):
        with pytest.raises(ValueError):
            store.sort_by("gpa", "sideways")


class TestEndToEnd:
    """Test the documented seeded scenario."""

    def test_seeded_add_duplicate_delete(self, store, valid_form, form_factory):
        assert len(store) == 3
        first = store.get(0)

        assert len(store.add(valid_form)) == 4

        with pytest.raises(DuplicateIdError):
            store.add(form_factory(id="1004", name="Other Person"))
        assert len(store) == 4

        snapshot = store.delete(0)
        assert len(snapshot) == 3
        assert first not in snapshot
