"""Tests for classifying bulk create outcomes."""

from savedimport.import_.extract_errors import extract_errors, partition_results
from savedimport.schemas.import_schemas import (
    ConflictError,
    MissingReferencesError,
    UnknownError,
    UnsupportedTypeError,
)
from savedimport.schemas.saved_objects import FailedSavedObject, SavedObjectError
from tests.conftest import (
    MULTI_NS_TYPE,
    conflict_outcome,
    make_object,
    success_outcome,
    unresolvable_conflict_outcome,
)


class TestExtractErrors:
    """Tests for extract_errors."""

    def test_returns_empty_for_successes(self) -> None:
        obj = make_object(MULTI_NS_TYPE, "id-1")

        assert extract_errors([success_outcome(obj)], [obj]) == []

    def test_conflict_keeps_destination_id(self) -> None:
        obj = make_object(MULTI_NS_TYPE, "id-3")
        outcome = conflict_outcome(obj.type, "id-foo").model_copy(
            update={"id": "id-3", "destination_id": "id-foo"}
        )

        (error,) = extract_errors([outcome], [obj])

        assert error.type == MULTI_NS_TYPE
        assert error.id == "id-3"
        assert error.title == "Title of id-3"
        assert error.meta.title == "Title of id-3"
        assert error.error == ConflictError(destination_id="id-foo")
        assert error.is_resolvable

    def test_unresolvable_conflict_is_unknown(self) -> None:
        obj = make_object(MULTI_NS_TYPE, "id-5")

        (error,) = extract_errors(
            [unresolvable_conflict_outcome(obj.type, obj.id)], [obj]
        )

        assert isinstance(error.error, UnknownError)
        assert error.error.status_code == 409
        assert error.error.metadata == {"isNotOverwritable": True}
        assert not error.is_resolvable

    def test_other_status_is_unknown(self) -> None:
        obj = make_object(MULTI_NS_TYPE, "id-1")
        outcome = FailedSavedObject(
            type=obj.type,
            id=obj.id,
            error=SavedObjectError(
                status_code=400, error="Bad Request", message="bad attributes"
            ),
        )

        (error,) = extract_errors([outcome], [obj])

        assert error.error == UnknownError(message="bad attributes", status_code=400)

    def test_correlates_by_identity_not_position(self) -> None:
        """Titles come from the matching original even when order differs."""
        obj_a = make_object(MULTI_NS_TYPE, "id-a")
        obj_b = make_object(MULTI_NS_TYPE, "id-b")

        errors = extract_errors(
            [
                conflict_outcome(obj_b.type, obj_b.id),
                conflict_outcome(obj_a.type, obj_a.id),
            ],
            [obj_a, obj_b],
        )

        assert [(e.id, e.title) for e in errors] == [
            ("id-b", "Title of id-b"),
            ("id-a", "Title of id-a"),
        ]

    def test_unmatched_outcome_has_no_title(self) -> None:
        (error,) = extract_errors([conflict_outcome(MULTI_NS_TYPE, "stray")], [])

        assert error.title is None
        assert error.meta.title is None


class TestPartitionResults:
    """Tests for partition_results."""

    def test_splits_successes_and_errors(self) -> None:
        ok = make_object(MULTI_NS_TYPE, "id-1")
        bad = make_object(MULTI_NS_TYPE, "id-2")

        result = partition_results(
            [success_outcome(ok), conflict_outcome(bad.type, bad.id)], [ok, bad]
        )

        assert result.created_objects == [success_outcome(ok)]
        assert [(e.id, e.error.type) for e in result.errors] == [("id-2", "conflict")]


class TestTaggedStoreErrors:
    """Failures the store already tagged with an import error kind."""

    def test_missing_references(self) -> None:
        obj = make_object(MULTI_NS_TYPE, "id-1")
        outcome = FailedSavedObject.model_validate(
            {
                "type": obj.type,
                "id": obj.id,
                "error": {
                    "type": "missing_references",
                    "references": [{"type": "index-pattern", "id": "ip-1"}],
                    "blocking": [{"type": "dashboard", "id": "db-1"}],
                },
            }
        )

        (error,) = extract_errors([outcome], [obj])

        assert isinstance(error.error, MissingReferencesError)
        assert [r.id for r in error.error.references] == ["ip-1"]
        assert [b.id for b in error.error.blocking] == ["db-1"]

    def test_unsupported_type(self) -> None:
        obj = make_object(MULTI_NS_TYPE, "id-1")
        outcome = FailedSavedObject.model_validate(
            {"type": obj.type, "id": obj.id, "error": {"type": "unsupported_type"}}
        )

        (error,) = extract_errors([outcome], [obj])

        assert error.error == UnsupportedTypeError()
        assert not error.is_resolvable
