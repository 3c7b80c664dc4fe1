"""Schemas for saved objects and the store's bulk create outcomes."""

from typing import Annotated, Any, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
)


class SavedObjectReference(BaseModel):
    """A named reference from one saved object to another."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: str
    id: str


class SavedObject(BaseModel):
    """
    A saved object submitted for import.

    ``origin_id`` is tri-state: ``None`` means the object carries no origin,
    ``""`` is an explicit empty origin, anything else is a real origin.
    The empty string is kept as a value and never collapsed into ``None``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: str = Field(min_length=1, description="Saved object type")
    id: str = Field(description="Identifier, unique within type for the batch")
    attributes: dict[str, Any] = Field(
        default_factory=dict,
        description="Opaque payload, never inspected by the import core",
    )
    references: list[SavedObjectReference] = Field(
        default_factory=list,
        description="Outbound references, passed through verbatim",
    )
    origin_id: str | None = Field(
        default=None,
        alias="originId",
        description="Provenance identifier carried across import/export",
    )

    def to_document(self) -> dict[str, Any]:
        """Serialize to the store's wire shape (camelCase, absent origin omitted)."""
        document = self.model_dump(mode="json", by_alias=True, exclude={"origin_id"})
        if self.origin_id is not None:
            document["originId"] = self.origin_id
        return document


class SavedObjectError(BaseModel):
    """Error payload attached to a failed bulk create outcome."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    type: str | None = Field(
        default=None,
        description="Import error kind, when the store classifies the failure itself",
    )
    status_code: int | None = Field(default=None, alias="statusCode")
    error: str | None = None
    message: str = ""
    metadata: dict[str, Any] | None = None
    destinations: list[dict[str, Any]] = Field(default_factory=list)
    references: list[dict[str, Any]] = Field(default_factory=list)
    blocking: list[dict[str, Any]] = Field(default_factory=list)

    @property
    def is_not_overwritable(self) -> bool:
        """True for conflicts the store refuses to overwrite."""
        return bool(self.metadata and self.metadata.get("isNotOverwritable"))


class CreatedSavedObject(SavedObject):
    """A saved object the store created."""

    version: str | None = None
    updated_at: str | None = None
    namespaces: list[str] | None = None
    destination_id: str | None = Field(
        default=None,
        alias="destinationId",
        description="Identifier actually used when it differs from the import ID",
    )


class FailedSavedObject(BaseModel):
    """A saved object the store refused to create."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: str
    id: str
    error: SavedObjectError
    destination_id: str | None = Field(default=None, alias="destinationId")


def _outcome_tag(value: Any) -> str:
    if isinstance(value, dict):
        return "failed" if value.get("error") is not None else "created"
    return "failed" if isinstance(value, FailedSavedObject) else "created"


CreationOutcome = Annotated[
    Union[
        Annotated[CreatedSavedObject, Tag("created")],
        Annotated[FailedSavedObject, Tag("failed")],
    ],
    Discriminator(_outcome_tag),
]


class BulkCreateResponse(BaseModel):
    """Response of a single bulk create call, one outcome per document."""

    saved_objects: list[CreationOutcome]
