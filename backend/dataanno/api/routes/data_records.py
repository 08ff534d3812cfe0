from fastapi import APIRouter, Depends

from dataanno.api.deps import get_runner
from dataanno.db.session import TransactionRunner
from dataanno.schemas.data_records import DataRecordCreate, DataRecordOut
from dataanno.stores.data_records import SqlDataRecordStore

router = APIRouter(prefix="/data", tags=["data"])


@router.post("", response_model=DataRecordOut, status_code=201)
async def create_data_record(
    payload: DataRecordCreate,
    runner: TransactionRunner = Depends(get_runner),
) -> DataRecordOut:
    async def _exec(session):
        record = await SqlDataRecordStore(session).create(payload.name)
        return DataRecordOut(id=record.id, name=record.name)

    return await runner.run_atomic(_exec)
