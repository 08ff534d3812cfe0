from collections.abc import Iterable
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dataanno.models.data_record import DataRecord


class SqlDataRecordStore:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_existing_ids(self, data_ids: Iterable[UUID]) -> set[UUID]:
        ids = set(data_ids)
        if not ids:
            return set()
        result = await self.session.execute(select(DataRecord.id).where(DataRecord.id.in_(ids)))
        return set(result.scalars().all())

    async def create(self, name: str | None = None) -> DataRecord:
        record = DataRecord(name=name)
        self.session.add(record)
        await self.session.flush()
        return record
