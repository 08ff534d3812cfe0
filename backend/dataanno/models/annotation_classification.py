from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from dataanno.db.base import Base, JSONType


class ClassificationValue(Base):
    __tablename__ = "data_annotation_classifications"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    data_id: Mapped[UUID] = mapped_column(
        ForeignKey("data_records.id", ondelete="CASCADE"), nullable=False, index=True
    )
    classification_id: Mapped[UUID] = mapped_column(nullable=False)
    value: Mapped[Any] = mapped_column(JSONType, nullable=True)
    version: Mapped[int] = mapped_column(Integer, default=1, nullable=False)

    data_record: Mapped["DataRecord"] = relationship(back_populates="classification_values")

    __table_args__ = (
        UniqueConstraint("data_id", "classification_id", name="uq_classification_data_classification"),
    )
    __mapper_args__ = {"version_id_col": version}
