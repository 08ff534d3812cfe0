from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ClassificationAnnotation(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID | None = None
    data_id: UUID
    classification_id: UUID
    value: Any = None
    version: int | None = None  # set on rows read back from storage

    @property
    def key(self) -> tuple[UUID, UUID]:
        return (self.data_id, self.classification_id)


class ObjectAnnotation(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID | None = None  # None for objects that have never been saved
    data_id: UUID
    geometry: Any = None
    attributes: dict[str, Any] = Field(default_factory=dict)
    version: int | None = None


class AnnotationResult(BaseModel):
    """Read-only view of everything annotated on one data record."""

    model_config = ConfigDict(frozen=True)

    data_id: UUID
    classification_values: list[ClassificationAnnotation] = Field(default_factory=list)
    objects: list[ObjectAnnotation] = Field(default_factory=list)


class AnnotationSaveRequest(BaseModel):
    classifications: list[ClassificationAnnotation] = Field(default_factory=list)
    objects: list[ObjectAnnotation] = Field(default_factory=list)
    deleted_data_ids: set[UUID] = Field(default_factory=set)


class AnnotationSaveResponse(BaseModel):
    objects: list[ObjectAnnotation] = Field(default_factory=list)
