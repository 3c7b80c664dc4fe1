"""Test configuration and fixtures."""

from typing import Any
from unittest.mock import AsyncMock

import pytest

from savedimport.schemas.saved_objects import (
    BulkCreateResponse,
    CreatedSavedObject,
    FailedSavedObject,
    SavedObject,
    SavedObjectError,
    SavedObjectReference,
)
from savedimport.services.saved_objects_service import SavedObjectsService

MULTI_NS_TYPE = "multi"
OTHER_TYPE = "other"


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Configure pytest-anyio to use asyncio."""
    return "asyncio"


def make_object(
    obj_type: str, obj_id: str, origin_id: str | None = None
) -> SavedObject:
    """Create a realistic-looking import object."""
    return SavedObject(
        type=obj_type,
        id=obj_id,
        attributes={"title": f"Title of {obj_id}"},
        references=[
            # not present in the import
            SavedObjectReference(name="name-1", type="other-type", id="other-id"),
            # present, no import ID map entry
            SavedObjectReference(name="name-2", type=MULTI_NS_TYPE, id="id-1"),
            # present, has an import ID map entry
            SavedObjectReference(name="name-3", type=MULTI_NS_TYPE, id="id-3"),
        ],
        origin_id=origin_id,
    )


def success_outcome(
    obj: SavedObject, namespace: str | None = None
) -> CreatedSavedObject:
    """Outcome the store returns for a created object."""
    return CreatedSavedObject(
        type=obj.type,
        id=obj.id,
        attributes=obj.attributes,
        references=obj.references,
        origin_id=obj.origin_id,
        version="some-version",
        updated_at="some-date",
        namespaces=[namespace or "default"],
    )


def conflict_outcome(obj_type: str, obj_id: str) -> FailedSavedObject:
    """Outcome the store returns when the target ID is taken."""
    return FailedSavedObject(
        type=obj_type,
        id=obj_id,
        error=SavedObjectError(
            status_code=409,
            error="Conflict",
            message=f"Saved object [{obj_type}/{obj_id}] conflict",
        ),
    )


def unresolvable_conflict_outcome(obj_type: str, obj_id: str) -> FailedSavedObject:
    """Outcome for a conflict the store refuses to overwrite."""
    conflict = conflict_outcome(obj_type, obj_id)
    error = conflict.error.model_copy(
        update={"metadata": {"isNotOverwritable": True}}
    )
    return conflict.model_copy(update={"error": error})


@pytest.fixture
def mock_store() -> AsyncMock:
    """Mock saved objects store for testing."""
    mock = AsyncMock(spec=SavedObjectsService)
    mock.bulk_create.return_value = BulkCreateResponse(saved_objects=[])
    return mock


@pytest.fixture
def bulk_create_body() -> dict[str, Any]:
    """Raw bulk create response body with one success and one conflict."""
    return {
        "saved_objects": [
            {
                "type": MULTI_NS_TYPE,
                "id": "id-1",
                "attributes": {"title": "Title of id-1"},
                "references": [],
                "originId": "originId-a",
                "version": "WzEsMV0=",
                "updated_at": "2020-09-01T00:00:00.000Z",
                "namespaces": ["default"],
            },
            {
                "type": MULTI_NS_TYPE,
                "id": "id-2",
                "error": {
                    "statusCode": 409,
                    "error": "Conflict",
                    "message": "Saved object [multi/id-2] conflict",
                },
            },
        ]
    }
