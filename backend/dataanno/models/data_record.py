from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from dataanno.db.base import Base


class DataRecord(Base):
    __tablename__ = "data_records"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    name: Mapped[str | None] = mapped_column(String(255))
    created_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), server_default=func.now())

    classification_values: Mapped[list["ClassificationValue"]] = relationship(
        back_populates="data_record", cascade="all, delete-orphan", passive_deletes=True
    )
    objects: Mapped[list["AnnotationObject"]] = relationship(
        back_populates="data_record", cascade="all, delete-orphan", passive_deletes=True
    )
