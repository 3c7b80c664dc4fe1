"""Schemas for import options, typed import errors and import results."""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag

from savedimport.schemas.saved_objects import CreatedSavedObject

# Errors that another round of conflict resolution can clear. While any of
# these are outstanding nothing is written to the store.
RESOLVABLE_ERROR_TYPES = frozenset(
    {"conflict", "ambiguous_conflict", "missing_references"}
)


class CreateSavedObjectsOptions(BaseModel):
    """Options for creating a batch of imported saved objects."""

    model_config = ConfigDict(frozen=True, extra="allow")

    namespace: str | None = Field(
        default=None,
        description="Target namespace (tenant). None addresses the default namespace.",
    )
    overwrite: bool = Field(
        default=False,
        description="Allow the store to replace an existing object at the target ID",
    )


class ConflictError(BaseModel):
    """An object with the same ID already exists at the destination."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: Literal["conflict"] = "conflict"
    destination_id: str | None = Field(default=None, alias="destinationId")


class ConflictDestination(BaseModel):
    """One candidate destination for an ambiguous conflict."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str | None = None
    updated_at: str | None = None


class AmbiguousConflictError(BaseModel):
    """More than one existing object could be the destination."""

    model_config = ConfigDict(frozen=True)

    type: Literal["ambiguous_conflict"] = "ambiguous_conflict"
    destinations: list[ConflictDestination] = Field(default_factory=list)


class MissingReference(BaseModel):
    """A referenced object that could not be found."""

    model_config = ConfigDict(frozen=True)

    type: str
    id: str


class MissingReferencesError(BaseModel):
    """The object references objects that are neither imported nor present."""

    model_config = ConfigDict(frozen=True)

    type: Literal["missing_references"] = "missing_references"
    references: list[MissingReference] = Field(default_factory=list)
    blocking: list[MissingReference] = Field(default_factory=list)


class UnsupportedTypeError(BaseModel):
    """The object's type cannot be imported."""

    model_config = ConfigDict(frozen=True)

    type: Literal["unsupported_type"] = "unsupported_type"


class UnknownError(BaseModel):
    """Any other failure reported by the store."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: Literal["unknown"] = "unknown"
    message: str = ""
    status_code: int | None = Field(default=None, alias="statusCode")
    metadata: dict[str, Any] | None = None


class UnrecognizedError(BaseModel):
    """An error tag this package does not know; always treated as unresolvable."""

    model_config = ConfigDict(frozen=True, extra="allow")

    type: str


_KNOWN_ERROR_TAGS = RESOLVABLE_ERROR_TYPES | {"unsupported_type", "unknown"}


def _error_tag(value: Any) -> str:
    if isinstance(value, dict):
        tag = value.get("type")
    else:
        tag = getattr(value, "type", None)
    if isinstance(value, UnrecognizedError) or tag not in _KNOWN_ERROR_TAGS:
        return "unrecognized"
    return str(tag)


ImportErrorDetail = Annotated[
    Union[
        Annotated[ConflictError, Tag("conflict")],
        Annotated[AmbiguousConflictError, Tag("ambiguous_conflict")],
        Annotated[MissingReferencesError, Tag("missing_references")],
        Annotated[UnsupportedTypeError, Tag("unsupported_type")],
        Annotated[UnknownError, Tag("unknown")],
        Annotated[UnrecognizedError, Tag("unrecognized")],
    ],
    Discriminator(_error_tag),
]


class ImportErrorMeta(BaseModel):
    """Display metadata of the object an error belongs to."""

    model_config = ConfigDict(frozen=True)

    title: str | None = None


class SavedObjectsImportError(BaseModel):
    """A typed import error, keyed by the caller's original import ID."""

    model_config = ConfigDict(frozen=True)

    type: str
    id: str
    title: str | None = None
    meta: ImportErrorMeta = Field(default_factory=ImportErrorMeta)
    error: ImportErrorDetail

    @property
    def is_resolvable(self) -> bool:
        """True if another resolution round could clear this error."""
        return self.error.type in RESOLVABLE_ERROR_TYPES


class CreateSavedObjectsResult(BaseModel):
    """Outcome of creating one import batch."""

    model_config = ConfigDict(frozen=True)

    created_objects: list[CreatedSavedObject] = Field(default_factory=list)
    errors: list[SavedObjectsImportError] = Field(default_factory=list)
