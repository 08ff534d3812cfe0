from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import DateTime, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from dataanno.db.base import Base, JSONType


class AnnotationObject(Base):
    __tablename__ = "data_annotation_objects"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    data_id: Mapped[UUID] = mapped_column(
        ForeignKey("data_records.id", ondelete="CASCADE"), nullable=False, index=True
    )
    geometry: Mapped[Any] = mapped_column(JSONType, nullable=True)
    attributes: Mapped[dict] = mapped_column(JSONType, default=dict, nullable=False)
    created_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), server_default=func.now())
    position: Mapped[int] = mapped_column(Integer, default=0, nullable=False)  # order within the saving batch
    version: Mapped[int] = mapped_column(Integer, default=1, nullable=False)

    data_record: Mapped["DataRecord"] = relationship(back_populates="objects")

    __mapper_args__ = {"version_id_col": version}
