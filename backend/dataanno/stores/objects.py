import logging
from datetime import datetime, timezone
from collections.abc import Iterable, Sequence
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from dataanno.core.errors import ConflictError
from dataanno.models.annotation_object import AnnotationObject
from dataanno.schemas.annotations import ObjectAnnotation

logger = logging.getLogger(__name__)


class SqlObjectPersistence:
    """Object annotations stored in ``data_annotation_objects``."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_data_ids(self, data_ids: Iterable[UUID]) -> list[ObjectAnnotation]:
        ids = set(data_ids)
        if not ids:
            return []
        result = await self.session.execute(
            select(AnnotationObject)
            .where(AnnotationObject.data_id.in_(ids))
            .order_by(AnnotationObject.created_at, AnnotationObject.position, AnnotationObject.id)
        )
        return [ObjectAnnotation.model_validate(row) for row in result.scalars().all()]

    async def save(
        self,
        rows: Sequence[ObjectAnnotation],
        deleted_data_ids: Iterable[UUID] = (),
    ) -> list[ObjectAnnotation]:
        """Drop every object of the deleted data records, then upsert *rows* by id.

        Rows without an id, or whose id is no longer stored, are inserted under a
        fresh id. The returned list follows the order of *rows*.
        """
        deleted = set(deleted_data_ids)
        if deleted:
            result = await self.session.execute(
                delete(AnnotationObject).where(AnnotationObject.data_id.in_(deleted))
            )
            logger.debug("Deleted %s objects for %d data records", result.rowcount, len(deleted))

        known_ids = {row.id for row in rows if row.id is not None}
        existing: dict[UUID, AnnotationObject] = {}
        if known_ids:
            result = await self.session.execute(
                select(AnnotationObject).where(AnnotationObject.id.in_(known_ids))
            )
            existing = {record.id: record for record in result.scalars().all()}

        # One timestamp per batch; position keeps the batch order among equal timestamps
        created_at = datetime.now(timezone.utc)
        saved: list[AnnotationObject] = []
        for position, row in enumerate(rows):
            record = existing.get(row.id) if row.id is not None else None
            if record is None:
                record = AnnotationObject(
                    data_id=row.data_id,
                    geometry=row.geometry,
                    attributes=row.attributes,
                    created_at=created_at,
                    position=position,
                )
                self.session.add(record)
            else:
                if row.version is not None and record.version != row.version:
                    raise ConflictError(
                        f"Object {record.id} was modified by another user "
                        f"(expected version {row.version}, found {record.version})"
                    )
                record.data_id = row.data_id
                record.geometry = row.geometry
                record.attributes = row.attributes
            saved.append(record)

        await self.session.flush()
        return [ObjectAnnotation.model_validate(record) for record in saved]
