"""In-process document store.

Implements the ``DocumentStore`` capability over plain dictionaries, with
filters evaluated by ``PredicateEvaluator``. Used by service-level tests and
for running the domain services without a database.
"""

import uuid
from datetime import UTC, datetime
from typing import Any

from simpledata.core.query import FilterPredicate, PredicateEvaluator
from simpledata.domain.entities import Collection, Record


class InMemoryDocumentStore:
    """Document store keeping collections and records in memory."""

    def __init__(self) -> None:
        self.collections: dict[tuple[str, str], Collection] = {}
        self.records: dict[str, list[Record]] = {}
        self.commits = 0
        self._seq = 0

    def add_collection(self, project_id: str, name: str) -> Collection:
        collection = Collection(id=str(uuid.uuid4()), project_id=project_id, name=name)
        self.collections[(project_id, name)] = collection
        self.records[collection.id] = []
        return collection

    async def get_collection(self, project_id: str, name: str) -> Collection | None:
        return self.collections.get((project_id, name))

    async def insert(self, collection_id: str, payload: dict[str, Any]) -> Record:
        records = await self.insert_many(collection_id, [payload])
        return records[0]

    async def insert_many(
        self, collection_id: str, payloads: list[dict[str, Any]]
    ) -> list[Record]:
        now = datetime.now(UTC)
        created = []
        for payload in payloads:
            self._seq += 1
            record = Record(
                id=str(uuid.uuid4()),
                collection_id=collection_id,
                data=dict(payload),
                created_at=now,
                updated_at=now,
                seq=self._seq,
            )
            self.records.setdefault(collection_id, []).append(record)
            created.append(record)
        return created

    def _matching(self, collection_id: str, predicates: list[FilterPredicate]) -> list[Record]:
        evaluator = PredicateEvaluator(predicates)
        return [r for r in self.records.get(collection_id, []) if evaluator.matches(r.data)]

    async def select_many(
        self,
        collection_id: str,
        predicates: list[FilterPredicate],
        limit: int,
        offset: int,
    ) -> list[Record]:
        matching = sorted(
            self._matching(collection_id, predicates),
            key=lambda r: (r.created_at, r.seq),
            reverse=True,
        )
        return matching[offset : offset + limit]

    async def count(self, collection_id: str, predicates: list[FilterPredicate]) -> int:
        return len(self._matching(collection_id, predicates))

    async def select_one(self, collection_id: str, record_id: str) -> Record | None:
        for record in self.records.get(collection_id, []):
            if record.id == record_id:
                return record
        return None

    async def update(
        self, collection_id: str, record_id: str, payload: dict[str, Any]
    ) -> Record | None:
        record = await self.select_one(collection_id, record_id)
        if record is None:
            return None
        record.data = dict(payload)
        record.updated_at = datetime.now(UTC)
        return record

    async def delete(self, collection_id: str, record_id: str) -> bool:
        return bool(await self.delete_many(collection_id, [record_id]))

    async def delete_many(self, collection_id: str, record_ids: list[str]) -> list[str]:
        wanted = set(record_ids)
        kept, deleted = [], []
        for record in self.records.get(collection_id, []):
            if record.id in wanted:
                deleted.append(record.id)
            else:
                kept.append(record)
        self.records[collection_id] = kept
        return deleted

    async def sample(self, collection_id: str, limit: int) -> list[Record]:
        return self.records.get(collection_id, [])[:limit]

    async def created_at_bounds(self, collection_id: str) -> tuple[datetime, datetime] | None:
        records = self.records.get(collection_id, [])
        if not records:
            return None
        stamps = [r.created_at for r in records]
        return min(stamps), max(stamps)

    async def commit(self) -> None:
        self.commits += 1
