"""
Classify bulk create outcomes into created objects and typed import errors.

Outcomes are correlated with the submitted objects by (type, id), never by
position, so results may arrive in any order.
"""

from collections.abc import Sequence

from savedimport.import_.import_id_map import ImportIdKey
from savedimport.schemas.import_schemas import (
    AmbiguousConflictError,
    ConflictError,
    CreateSavedObjectsResult,
    ImportErrorDetail,
    ImportErrorMeta,
    MissingReferencesError,
    SavedObjectsImportError,
    UnknownError,
    UnsupportedTypeError,
)
from savedimport.schemas.saved_objects import (
    CreatedSavedObject,
    FailedSavedObject,
    SavedObject,
)

CONFLICT_STATUS_CODE = 409


def extract_errors(
    results: Sequence[CreatedSavedObject | FailedSavedObject],
    originals: Sequence[SavedObject],
) -> list[SavedObjectsImportError]:
    """
    Turn failed outcomes into import errors.

    A failure the store already tagged with an import error kind keeps that
    kind and its payload. Otherwise a plain 409 becomes a ``conflict``
    error. A 409 the store marks as not overwritable cannot be fixed by
    another resolution round, so it is reported as ``unknown`` along with
    every other failure.

    Args:
        results: Bulk create outcomes, already remapped to import IDs
        originals: The objects as the caller submitted them

    Returns:
        One import error per failed outcome, in outcome order
    """
    originals_by_key = {ImportIdKey(obj.type, obj.id): obj for obj in originals}
    errors: list[SavedObjectsImportError] = []

    for result in results:
        if not isinstance(result, FailedSavedObject):
            continue

        original = originals_by_key.get(ImportIdKey(result.type, result.id))
        title = original.attributes.get("title") if original else None
        if not isinstance(title, str):
            title = None
        meta = ImportErrorMeta(title=title)

        errors.append(
            SavedObjectsImportError(
                type=result.type,
                id=result.id,
                title=title,
                meta=meta,
                error=_error_detail(result),
            )
        )

    return errors


def _error_detail(result: FailedSavedObject) -> ImportErrorDetail:
    """Map a store failure onto the import error it represents."""
    store_error = result.error

    if store_error.type == "ambiguous_conflict":
        return AmbiguousConflictError.model_validate(
            {"destinations": store_error.destinations}
        )
    if store_error.type == "missing_references":
        return MissingReferencesError.model_validate(
            {
                "references": store_error.references,
                "blocking": store_error.blocking,
            }
        )
    if store_error.type == "unsupported_type":
        return UnsupportedTypeError()

    # Untagged failures are classified by status code
    is_conflict = store_error.type == "conflict" or (
        store_error.type is None and store_error.status_code == CONFLICT_STATUS_CODE
    )
    if is_conflict and not store_error.is_not_overwritable:
        return ConflictError(destination_id=result.destination_id)
    return UnknownError(
        message=store_error.message,
        status_code=store_error.status_code,
        metadata=store_error.metadata,
    )


def partition_results(
    results: Sequence[CreatedSavedObject | FailedSavedObject],
    originals: Sequence[SavedObject],
) -> CreateSavedObjectsResult:
    """Split outcomes into created objects and import errors."""
    return CreateSavedObjectsResult(
        created_objects=[r for r in results if isinstance(r, CreatedSavedObject)],
        errors=extract_errors(results, originals),
    )
