from collections.abc import Iterable, Sequence
from uuid import UUID

from dataanno.core.errors import ValidationError
from dataanno.schemas.annotations import ObjectAnnotation


class ObjectStore:
    """Saves object annotations and tombstones the objects of deleted data records."""

    def __init__(self, persistence, data_records=None):
        self.persistence = persistence
        self.data_records = data_records

    async def save(
        self,
        batch: Sequence[ObjectAnnotation],
        deleted_data_ids: Iterable[UUID] = (),
    ) -> list[ObjectAnnotation]:
        if self.data_records is not None and batch:
            data_ids = {item.data_id for item in batch}
            unknown = data_ids - await self.data_records.find_existing_ids(data_ids)
            if unknown:
                raise ValidationError(
                    "Object annotations reference unknown data records",
                    {"data_ids": sorted(str(i) for i in unknown)},
                )
        return await self.persistence.save(batch, set(deleted_data_ids))
