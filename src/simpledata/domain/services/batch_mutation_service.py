"""Batch mutator for collection records.

Create, update and delete up to ``max_items`` records per call. Shape
validation happens before any store access. Updates and deletes have
partial-success semantics: every item gets an outcome, and only the
succeeded ones are reported to the caller. Items are processed sequentially.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from simpledata.core.logging import get_logger
from simpledata.domain.entities import Record
from simpledata.domain.exceptions import PayloadValidationError
from simpledata.domain.services.document_store import DocumentStore
from simpledata.domain.services.record_query_service import require_collection

logger = get_logger(__name__)

MAX_BATCH_ITEMS = 100


class BatchItemStatus(str, Enum):
    """Outcome of one item in a batch call."""

    SUCCEEDED = "succeeded"
    SKIPPED_MISSING = "skipped_missing"
    SKIPPED_INVALID = "skipped_invalid"


@dataclass
class BatchItemOutcome:
    """What happened to one item of a batch."""

    index: int
    status: BatchItemStatus
    record_id: str | None = None
    record: Record | None = None


@dataclass
class BatchResult:
    """Per-item outcomes of a batch call."""

    outcomes: list[BatchItemOutcome] = field(default_factory=list)

    @property
    def succeeded(self) -> list[BatchItemOutcome]:
        return [o for o in self.outcomes if o.status is BatchItemStatus.SUCCEEDED]

    @property
    def records(self) -> list[Record]:
        return [o.record for o in self.succeeded if o.record is not None]

    @property
    def record_ids(self) -> list[str]:
        return [o.record_id for o in self.succeeded if o.record_id is not None]

    @property
    def count(self) -> int:
        return len(self.succeeded)

    def skipped(self, status: BatchItemStatus) -> list[BatchItemOutcome]:
        return [o for o in self.outcomes if o.status is status]


class BatchMutationService:
    """Bounded batch writes against one collection."""

    def __init__(self, store: DocumentStore, max_items: int = MAX_BATCH_ITEMS) -> None:
        self.store = store
        self.max_items = max_items

    def _validate_items(self, items: Any, message: str) -> list[Any]:
        if not isinstance(items, list) or not items:
            raise PayloadValidationError(message)
        if len(items) > self.max_items:
            raise PayloadValidationError(f"Maximum {self.max_items} records per batch")
        return items

    async def create_many(
        self, project_id: str, collection_name: str, records: Any
    ) -> BatchResult:
        """Insert every payload, or none if the batch is malformed.

        A storage failure after some rows were written propagates; the
        caller cannot assume atomicity across the batch.

        Raises:
            PayloadValidationError: If ``records`` is not a list of 1 to
                ``max_items`` non-empty objects.
            CollectionNotFoundError: If the collection does not exist.
        """
        payloads = self._validate_items(records, "Request body must contain an array of records")
        for index, payload in enumerate(payloads):
            if not isinstance(payload, dict) or not payload:
                raise PayloadValidationError(f"Record at index {index} must be a non-empty object")

        collection = await require_collection(self.store, project_id, collection_name)
        created = await self.store.insert_many(collection.id, payloads)
        await self.store.commit()

        result = BatchResult(
            outcomes=[
                BatchItemOutcome(
                    index=index,
                    status=BatchItemStatus.SUCCEEDED,
                    record_id=record.id,
                    record=record,
                )
                for index, record in enumerate(created)
            ]
        )
        logger.info("Batch create completed", collection_id=collection.id, count=result.count)
        return result

    async def update_many(
        self, project_id: str, collection_name: str, updates: Any
    ) -> BatchResult:
        """Replace payloads for a list of ``{"id": ..., "data": {...}}`` entries.

        Entries without an id or a non-empty object ``data`` are skipped as
        invalid; entries whose id does not exist are skipped as missing.

        Raises:
            PayloadValidationError: If ``updates`` is not a list of 1 to
                ``max_items`` entries.
            CollectionNotFoundError: If the collection does not exist.
        """
        entries = self._validate_items(
            updates, "Request body must contain an array of updates with id and data"
        )
        collection = await require_collection(self.store, project_id, collection_name)

        result = BatchResult()
        for index, entry in enumerate(entries):
            record_id = entry.get("id") if isinstance(entry, dict) else None
            data = entry.get("data") if isinstance(entry, dict) else None
            if not record_id or not isinstance(record_id, str) or not isinstance(data, dict) or not data:
                result.outcomes.append(
                    BatchItemOutcome(index=index, status=BatchItemStatus.SKIPPED_INVALID)
                )
                continue

            record = await self.store.update(collection.id, record_id, data)
            if record is None:
                result.outcomes.append(
                    BatchItemOutcome(
                        index=index, status=BatchItemStatus.SKIPPED_MISSING, record_id=record_id
                    )
                )
                continue

            result.outcomes.append(
                BatchItemOutcome(
                    index=index,
                    status=BatchItemStatus.SUCCEEDED,
                    record_id=record_id,
                    record=record,
                )
            )

        await self.store.commit()
        logger.info(
            "Batch update completed",
            collection_id=collection.id,
            count=result.count,
            skipped_missing=len(result.skipped(BatchItemStatus.SKIPPED_MISSING)),
            skipped_invalid=len(result.skipped(BatchItemStatus.SKIPPED_INVALID)),
        )
        return result

    async def delete_many(self, project_id: str, collection_name: str, ids: Any) -> BatchResult:
        """Delete whichever of ``ids`` exist in the collection.

        Raises:
            PayloadValidationError: If ``ids`` is not a list of 1 to
                ``max_items`` entries.
            CollectionNotFoundError: If the collection does not exist.
        """
        entries = self._validate_items(ids, "Request body must contain an array of record IDs")
        collection = await require_collection(self.store, project_id, collection_name)

        valid_ids: list[str] = []
        for entry in entries:
            if isinstance(entry, str) and entry and entry not in valid_ids:
                valid_ids.append(entry)

        deleted = set(await self.store.delete_many(collection.id, valid_ids)) if valid_ids else set()
        await self.store.commit()

        result = BatchResult()
        seen: set[str] = set()
        for index, entry in enumerate(entries):
            if not isinstance(entry, str) or not entry or entry in seen:
                status = BatchItemStatus.SKIPPED_INVALID
            elif entry in deleted:
                status = BatchItemStatus.SUCCEEDED
            else:
                status = BatchItemStatus.SKIPPED_MISSING
            if isinstance(entry, str):
                seen.add(entry)
            result.outcomes.append(
                BatchItemOutcome(
                    index=index,
                    status=status,
                    record_id=entry if isinstance(entry, str) else None,
                )
            )

        logger.info("Batch delete completed", collection_id=collection.id, count=result.count)
        return result
