"""Document store capability consumed by the query, batch and schema services.

The request layer constructs a store handle and passes it in; services never
reach for a process-wide client.
"""

from datetime import datetime
from typing import Any, Protocol

from simpledata.core.query import FilterPredicate
from simpledata.domain.entities import Collection, Record


class DocumentStore(Protocol):
    """Insert/select/update/delete of JSON documents addressed by collection.

    ``select_many`` orders newest first by ``created_at`` with ties broken by
    insertion order; ``sample`` returns records in natural (insertion) order.
    """

    async def get_collection(self, project_id: str, name: str) -> Collection | None: ...

    async def insert(self, collection_id: str, payload: dict[str, Any]) -> Record: ...

    async def insert_many(
        self, collection_id: str, payloads: list[dict[str, Any]]
    ) -> list[Record]: ...

    async def select_many(
        self,
        collection_id: str,
        predicates: list[FilterPredicate],
        limit: int,
        offset: int,
    ) -> list[Record]: ...

    async def count(self, collection_id: str, predicates: list[FilterPredicate]) -> int: ...

    async def select_one(self, collection_id: str, record_id: str) -> Record | None: ...

    async def update(
        self, collection_id: str, record_id: str, payload: dict[str, Any]
    ) -> Record | None: ...

    async def delete(self, collection_id: str, record_id: str) -> bool: ...

    async def delete_many(self, collection_id: str, record_ids: list[str]) -> list[str]: ...

    async def sample(self, collection_id: str, limit: int) -> list[Record]: ...

    async def created_at_bounds(
        self, collection_id: str
    ) -> tuple[datetime, datetime] | None: ...

    async def commit(self) -> None: ...
