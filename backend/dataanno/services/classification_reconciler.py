import logging
from collections.abc import Sequence
from uuid import UUID

from dataanno.core.errors import NotFoundError
from dataanno.schemas.annotations import ClassificationAnnotation

logger = logging.getLogger(__name__)


class ClassificationReconciler:
    """Upserts classification values keyed by ``(data_id, classification_id)``.

    A data record holds at most one value per classification, so every
    incoming value either replaces the stored one for its key or becomes a new
    row. Existing rows are fetched once for the whole batch and matched in
    memory.
    """

    def __init__(self, store, data_records=None):
        self.store = store
        self.data_records = data_records

    async def save(self, batch: Sequence[ClassificationAnnotation]) -> None:
        if not batch:
            return
        data_ids = {item.data_id for item in batch}
        if self.data_records is not None:
            missing = data_ids - await self.data_records.find_existing_ids(data_ids)
            if missing:
                raise NotFoundError("Data record not found", missing)

        existing = {row.key: row for row in await self.store.find_by_data_ids(data_ids)}

        # Later entries for the same key win
        pending: dict[tuple[UUID, UUID], ClassificationAnnotation] = {}
        for item in batch:
            match = existing.get(item.key)
            pending[item.key] = item.model_copy(update={"id": match.id if match else None})

        updates = sum(1 for row in pending.values() if row.id is not None)
        logger.debug("Reconciled %d classification values: %d updates, %d inserts",
                     len(pending), updates, len(pending) - updates)
        await self.store.upsert(list(pending.values()))
