from uuid import uuid4

import pytest

from dataanno.core.errors import NotFoundError
from dataanno.models import ClassificationValue
from dataanno.schemas.annotations import ClassificationAnnotation
from dataanno.services.classification_reconciler import ClassificationReconciler
from dataanno.stores.classification import SqlClassificationStore
from dataanno.stores.data_records import SqlDataRecordStore


class FakeClassificationStore:
    def __init__(self, rows=None):
        self.rows = list(rows or [])
        self.find_calls = []
        self.upserted = []

    async def find_by_data_ids(self, data_ids):
        self.find_calls.append(set(data_ids))
        return [row for row in self.rows if row.data_id in data_ids]

    async def upsert(self, rows):
        self.upserted.extend(rows)


class FakeDataRecords:
    def __init__(self, ids):
        self.ids = set(ids)

    async def find_existing_ids(self, data_ids):
        return self.ids & set(data_ids)


async def test_existing_rows_are_fetched_once_for_the_whole_batch():
    data_a, data_b, cls = uuid4(), uuid4(), uuid4()
    stored = ClassificationAnnotation(id=uuid4(), data_id=data_a, classification_id=cls, value="old", version=1)
    store = FakeClassificationStore([stored])

    await ClassificationReconciler(store).save([
        ClassificationAnnotation(data_id=data_a, classification_id=cls, value="new"),
        ClassificationAnnotation(data_id=data_b, classification_id=cls, value="other"),
        ClassificationAnnotation(data_id=data_a, classification_id=uuid4(), value="more"),
    ])

    assert store.find_calls == [{data_a, data_b}]
    assert len(store.upserted) == 3
    update = store.upserted[0]
    assert update.id == stored.id
    assert update.value == "new"
    assert [row.id for row in store.upserted[1:]] == [None, None]


async def test_duplicate_keys_in_one_batch_collapse_to_last_value():
    data_id, cls = uuid4(), uuid4()
    store = FakeClassificationStore()

    await ClassificationReconciler(store).save([
        ClassificationAnnotation(data_id=data_id, classification_id=cls, value="first"),
        ClassificationAnnotation(data_id=data_id, classification_id=cls, value="second"),
    ])

    assert [row.value for row in store.upserted] == ["second"]


async def test_empty_batch_touches_nothing():
    store = FakeClassificationStore()
    await ClassificationReconciler(store).save([])
    assert store.find_calls == []
    assert store.upserted == []


async def test_unknown_data_record_raises_not_found():
    known, unknown = uuid4(), uuid4()
    store = FakeClassificationStore()
    reconciler = ClassificationReconciler(store, FakeDataRecords([known]))

    with pytest.raises(NotFoundError) as exc_info:
        await reconciler.save([
            ClassificationAnnotation(data_id=known, classification_id=uuid4(), value=1),
            ClassificationAnnotation(data_id=unknown, classification_id=uuid4(), value=2),
        ])

    assert exc_info.value.missing_ids == {unknown}
    assert store.upserted == []


async def test_upsert_against_database_updates_in_place(runner, make_data_records, count_rows):
    (data_id,) = await make_data_records(1)
    cls = uuid4()

    async def _save(value):
        async def _exec(session):
            reconciler = ClassificationReconciler(SqlClassificationStore(session), SqlDataRecordStore(session))
            await reconciler.save([ClassificationAnnotation(data_id=data_id, classification_id=cls, value=value)])
            return await SqlClassificationStore(session).find_by_data_ids([data_id])
        return await runner.run_atomic(_exec)

    (first,) = await _save("A")
    (second,) = await _save("B")

    assert second.id == first.id
    assert second.value == "B"
    assert second.version == first.version + 1
    assert await count_rows(ClassificationValue, data_id=data_id) == 1
