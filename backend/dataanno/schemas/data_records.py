from uuid import UUID

from pydantic import BaseModel, Field


class DataRecordCreate(BaseModel):
    name: str | None = Field(default=None, max_length=255)


class DataRecordOut(BaseModel):
    id: UUID
    name: str | None = None
