"""Single-record write operations."""

from typing import Any

from simpledata.core.logging import get_logger
from simpledata.domain.entities import Record
from simpledata.domain.exceptions import PayloadValidationError, RecordNotFoundError
from simpledata.domain.services.document_store import DocumentStore
from simpledata.domain.services.record_query_service import require_collection

logger = get_logger(__name__)


def validate_payload(data: Any) -> dict[str, Any]:
    """Ensure a record payload is a non-empty JSON object.

    Raises:
        PayloadValidationError: If the payload is empty or not an object.
    """
    if not isinstance(data, dict) or not data:
        raise PayloadValidationError("Request body cannot be empty")
    return data


class RecordService:
    """Create, replace and delete individual records."""

    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    async def create_record(self, project_id: str, collection_name: str, data: Any) -> Record:
        payload = validate_payload(data)
        collection = await require_collection(self.store, project_id, collection_name)
        record = await self.store.insert(collection.id, payload)
        await self.store.commit()

        logger.info(
            "Record created successfully",
            collection_id=collection.id,
            record_id=record.id,
        )
        return record

    async def update_record(
        self, project_id: str, collection_name: str, record_id: str, data: Any
    ) -> Record:
        """Replace a record's payload.

        Concurrent updates are not detected; the last writer wins.
        """
        payload = validate_payload(data)
        collection = await require_collection(self.store, project_id, collection_name)
        record = await self.store.update(collection.id, record_id, payload)
        if record is None:
            raise RecordNotFoundError()
        await self.store.commit()

        logger.info("Record updated successfully", collection_id=collection.id, record_id=record_id)
        return record

    async def delete_record(self, project_id: str, collection_name: str, record_id: str) -> None:
        collection = await require_collection(self.store, project_id, collection_name)
        if not await self.store.delete(collection.id, record_id):
            raise RecordNotFoundError()
        await self.store.commit()

        logger.info("Record deleted successfully", collection_id=collection.id, record_id=record_id)
