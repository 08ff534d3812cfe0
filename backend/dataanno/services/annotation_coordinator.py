import logging
from collections import defaultdict
from collections.abc import Callable, Iterable, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from dataanno.db.session import TransactionRunner
from dataanno.schemas.annotations import AnnotationResult, ClassificationAnnotation, ObjectAnnotation
from dataanno.services.classification_reconciler import ClassificationReconciler
from dataanno.services.object_store import ObjectStore
from dataanno.stores import SqlClassificationStore, SqlDataRecordStore, SqlObjectPersistence

logger = logging.getLogger(__name__)


class AnnotationCoordinator:
    """Saves and reads the annotations of data records.

    Store factories take the session of the current unit of work, so both
    kinds of annotation are written through the same transaction.
    """

    def __init__(
        self,
        runner: TransactionRunner,
        classification_store: Callable[[AsyncSession], object] = SqlClassificationStore,
        object_persistence: Callable[[AsyncSession], object] = SqlObjectPersistence,
        data_records: Callable[[AsyncSession], object] | None = SqlDataRecordStore,
    ):
        self.runner = runner
        self.classification_store = classification_store
        self.object_persistence = object_persistence
        self.data_records = data_records

    async def save(
        self,
        classifications: Sequence[ClassificationAnnotation],
        objects: Sequence[ObjectAnnotation],
        deleted_data_ids: Iterable[UUID] = (),
    ) -> list[ObjectAnnotation]:
        """Apply classification values, objects and object deletions atomically.

        Returns the saved objects, including ids assigned to new ones. When any
        part fails nothing is committed and the error reaches the caller as is.
        """
        deleted = set(deleted_data_ids)

        async def _exec(session: AsyncSession) -> list[ObjectAnnotation]:
            records = self.data_records(session) if self.data_records else None
            reconciler = ClassificationReconciler(self.classification_store(session), records)
            object_store = ObjectStore(self.object_persistence(session), records)
            await reconciler.save(classifications)
            return await object_store.save(objects, deleted)

        saved = await self.runner.run_atomic(_exec)
        logger.info(
            "Saved %d classification values and %d objects (%d data records cleared)",
            len(classifications), len(saved), len(deleted),
        )
        return saved

    async def find_by_data_ids(self, data_ids: Sequence[UUID]) -> list[AnnotationResult]:
        """Return one result per requested id, in request order.

        Duplicated ids yield duplicated results; ids without annotations yield
        empty lists.
        """
        requested = list(data_ids)
        if not requested:
            return []

        async def _exec(session: AsyncSession):
            classifications = await self.classification_store(session).find_by_data_ids(set(requested))
            objects = await self.object_persistence(session).find_by_data_ids(set(requested))
            return classifications, objects

        classifications, objects = await self.runner.run(_exec)

        classifications_by_data: dict[UUID, list[ClassificationAnnotation]] = defaultdict(list)
        for item in classifications:
            classifications_by_data[item.data_id].append(item)
        objects_by_data: dict[UUID, list[ObjectAnnotation]] = defaultdict(list)
        for item in objects:
            objects_by_data[item.data_id].append(item)

        return [
            AnnotationResult(
                data_id=data_id,
                classification_values=list(classifications_by_data.get(data_id, [])),
                objects=list(objects_by_data.get(data_id, [])),
            )
            for data_id in requested
        ]
