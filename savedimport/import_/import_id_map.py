"""
Import ID map: identifier substitutions produced by conflict resolution.

An entry for a (type, id) pair means the imported object already exists in
the destination under a different identifier, and creating it must target
that identifier instead of the one the caller supplied.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, Field

from savedimport.exceptions import ValidationError

logger = logging.getLogger(__name__)


class ImportIdKey(NamedTuple):
    """Composite key of an imported object."""

    type: str
    id: str


class ImportIdEntry(BaseModel):
    """Substitution for one imported object."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(description="Identifier to create the object under")
    omit_origin_id: bool = Field(
        default=False,
        alias="omitOriginId",
        description="Create the object without any origin ID",
    )
    origin_id: str | None = Field(
        default=None,
        alias="originId",
        description="Origin ID to stamp instead of the object's own",
    )


ImportIdMap = Mapping[ImportIdKey, ImportIdEntry]


def build_import_id_map(
    entries: Iterable[tuple[str, str, ImportIdEntry]],
) -> dict[ImportIdKey, ImportIdEntry]:
    """
    Build an import ID map from (type, id, entry) triples.

    Raises:
        ValidationError: If the same (type, id) pair appears twice
    """
    import_id_map: dict[ImportIdKey, ImportIdEntry] = {}
    for obj_type, obj_id, entry in entries:
        key = ImportIdKey(obj_type, obj_id)
        if key in import_id_map:
            raise ValidationError(
                f"Duplicate import ID map entry for {obj_type}/{obj_id}"
            )
        import_id_map[key] = entry

    logger.debug("Built import ID map with %d entries", len(import_id_map))
    return import_id_map
