"""
Create imported saved objects in bulk.

This module handles the create step of an import:
1. Refuse to write anything while resolvable errors are outstanding
2. Rewrite IDs and origin IDs according to the import ID map
3. Bulk create the objects in a single store call
4. Remap outcomes onto the IDs the caller submitted
5. Split outcomes into created objects and typed import errors
"""

import logging
from collections.abc import Sequence

from savedimport.exceptions import BulkCreateMismatchError
from savedimport.import_.extract_errors import partition_results
from savedimport.import_.import_id_map import ImportIdKey, ImportIdMap
from savedimport.schemas.import_schemas import (
    RESOLVABLE_ERROR_TYPES,
    CreateSavedObjectsOptions,
    CreateSavedObjectsResult,
    SavedObjectsImportError,
)
from savedimport.schemas.saved_objects import (
    CreatedSavedObject,
    FailedSavedObject,
    SavedObject,
)
from savedimport.services.saved_objects_service import SavedObjectsStore

logger = logging.getLogger(__name__)


async def create_saved_objects(
    objects: Sequence[SavedObject],
    accumulated_errors: Sequence[SavedObjectsImportError],
    *,
    store: SavedObjectsStore,
    import_id_map: ImportIdMap,
    options: CreateSavedObjectsOptions | None = None,
) -> CreateSavedObjectsResult:
    """
    Create a batch of imported saved objects.

    Errors from the store for individual objects are returned as import
    errors. A failure of the bulk create call itself propagates unchanged.

    Args:
        objects: Objects to import, as submitted by the caller
        accumulated_errors: Errors already collected by earlier import phases
        store: Store used for the single bulk create call
        import_id_map: ID substitutions from conflict resolution
        options: Namespace and overwrite flag for the bulk create call

    Returns:
        CreateSavedObjectsResult keyed by the caller's original IDs

    Raises:
        BulkCreateMismatchError: If outcomes do not line up with the objects
    """
    if options is None:
        options = CreateSavedObjectsOptions()

    if not objects:
        return CreateSavedObjectsResult()

    if any(e.error.type in RESOLVABLE_ERROR_TYPES for e in accumulated_errors):
        logger.info(
            "Skipping creation of %d objects: resolvable errors are outstanding",
            len(objects),
        )
        return CreateSavedObjectsResult()

    objects_to_create = [_apply_import_id(obj, import_id_map) for obj in objects]

    logger.info(
        "Creating %d saved objects (%d with substituted IDs)",
        len(objects_to_create),
        sum(1 for new, old in zip(objects_to_create, objects) if new.id != old.id),
    )

    response = await store.bulk_create(
        objects_to_create,
        namespace=options.namespace,
        overwrite=options.overwrite,
    )

    results = _remap_results(response.saved_objects, objects, objects_to_create)
    result = partition_results(results, objects)

    logger.info(
        "Created %d saved objects, %d failed",
        len(result.created_objects),
        len(result.errors),
    )
    return result


def _apply_import_id(obj: SavedObject, import_id_map: ImportIdMap) -> SavedObject:
    """Return the object as it must be created, per its import ID map entry."""
    entry = import_id_map.get(ImportIdKey(obj.type, obj.id))
    if entry is None:
        return obj

    if obj.origin_id == "":
        logger.warning(
            "Object %s/%s has an empty origin ID; keeping it as-is",
            obj.type,
            obj.id,
        )

    if entry.omit_origin_id:
        origin_id = None
    elif entry.origin_id is not None:
        origin_id = entry.origin_id
    elif obj.origin_id is not None:
        origin_id = obj.origin_id
    else:
        # Keep provenance when the store has to use a different ID
        origin_id = obj.id

    return obj.model_copy(update={"id": entry.id, "origin_id": origin_id})


def _remap_results(
    outcomes: Sequence[CreatedSavedObject | FailedSavedObject],
    objects: Sequence[SavedObject],
    objects_to_create: Sequence[SavedObject],
) -> list[CreatedSavedObject | FailedSavedObject]:
    """Restore the caller's IDs on outcomes whose object was created under a new ID."""
    if len(outcomes) != len(objects_to_create):
        logger.error(
            "Bulk create returned %d outcomes for %d objects",
            len(outcomes),
            len(objects_to_create),
        )
        raise BulkCreateMismatchError(
            f"Expected {len(objects_to_create)} bulk create outcomes, "
            f"got {len(outcomes)}",
            expected=len(objects_to_create),
            received=len(outcomes),
        )

    remapped: list[CreatedSavedObject | FailedSavedObject] = []
    for i, (outcome, original, created) in enumerate(
        zip(outcomes, objects, objects_to_create)
    ):
        if (outcome.type, outcome.id) != (created.type, created.id):
            logger.error(
                "Bulk create outcome %d is %s/%s, expected %s/%s",
                i,
                outcome.type,
                outcome.id,
                created.type,
                created.id,
            )
            raise BulkCreateMismatchError(
                f"Bulk create outcome {i} is {outcome.type}/{outcome.id}, "
                f"expected {created.type}/{created.id}",
                expected=len(objects_to_create),
                received=len(outcomes),
            )

        if created.id != original.id:
            outcome = outcome.model_copy(
                update={"id": original.id, "destination_id": created.id}
            )
        remapped.append(outcome)

    return remapped
