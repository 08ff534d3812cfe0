import logging
from collections.abc import Iterable, Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dataanno.core.errors import ConflictError
from dataanno.models.annotation_classification import ClassificationValue
from dataanno.schemas.annotations import ClassificationAnnotation

logger = logging.getLogger(__name__)


class SqlClassificationStore:
    """Classification values stored in ``data_annotation_classifications``."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_data_ids(self, data_ids: Iterable[UUID]) -> list[ClassificationAnnotation]:
        ids = set(data_ids)
        if not ids:
            return []
        result = await self.session.execute(
            select(ClassificationValue)
            .where(ClassificationValue.data_id.in_(ids))
            .order_by(ClassificationValue.data_id, ClassificationValue.classification_id)
        )
        return [ClassificationAnnotation.model_validate(row) for row in result.scalars().all()]

    async def upsert(self, rows: Sequence[ClassificationAnnotation]) -> None:
        """Update rows carrying a stored id, insert the others."""
        known_ids = {row.id for row in rows if row.id is not None}
        existing: dict[UUID, ClassificationValue] = {}
        if known_ids:
            result = await self.session.execute(
                select(ClassificationValue).where(ClassificationValue.id.in_(known_ids))
            )
            existing = {record.id: record for record in result.scalars().all()}

        updates = 0
        for row in rows:
            record = existing.get(row.id) if row.id is not None else None
            if record is None:
                self.session.add(
                    ClassificationValue(
                        data_id=row.data_id,
                        classification_id=row.classification_id,
                        value=row.value,
                    )
                )
                continue
            # Optimistic locking: a client-supplied version must match the stored one
            if row.version is not None and record.version != row.version:
                raise ConflictError(
                    f"Classification value {record.id} was modified by another user "
                    f"(expected version {row.version}, found {record.version})"
                )
            record.value = row.value
            updates += 1

        await self.session.flush()
        logger.debug("Upserted %d classification values (%d updates)", len(rows), updates)
