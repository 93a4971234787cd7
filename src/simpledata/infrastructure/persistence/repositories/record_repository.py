"""Repository for record operations.

``SqlDocumentStore`` is the SQL implementation of the ``DocumentStore``
capability. Filters are lowered to SQL by ``SQLCompiler`` for the dialect of
the session's bind and appended to the statement as a text clause with
named bind parameters.
"""

import uuid
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import delete, func, select, text
from sqlalchemy.ext.asyncio import AsyncSession

from simpledata.core.logging import get_logger
from simpledata.core.query import FilterPredicate, SQLCompiler
from simpledata.domain.entities import Collection, Record
from simpledata.infrastructure.persistence.models import CollectionModel, RecordModel

logger = get_logger(__name__)

DATA_COLUMN = "records.data"


def _aware(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; every stored timestamp is UTC.
    return value if value.tzinfo is not None else value.replace(tzinfo=UTC)


def to_record(model: RecordModel) -> Record:
    return Record(
        id=model.id,
        collection_id=model.collection_id,
        data=model.data,
        created_at=_aware(model.created_at),
        updated_at=_aware(model.updated_at),
        seq=model.seq,
    )


class SqlDocumentStore:
    """Document store backed by the shared ``records`` table."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the store with a database session.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    @property
    def dialect(self) -> str:
        return self.session.get_bind().dialect.name

    def _filtered(self, statement, collection_id: str, predicates: list[FilterPredicate]):
        statement = statement.where(RecordModel.collection_id == collection_id)
        if predicates:
            where_sql, params = SQLCompiler(self.dialect, DATA_COLUMN).compile(predicates)
            statement = statement.where(text(where_sql).bindparams(**params))
        return statement

    async def get_collection(self, project_id: str, name: str) -> Collection | None:
        result = await self.session.execute(
            select(CollectionModel).where(
                CollectionModel.project_id == project_id,
                CollectionModel.name == name,
            )
        )
        model = result.scalar_one_or_none()
        if model is None:
            return None
        return Collection(
            id=model.id,
            project_id=model.project_id,
            name=model.name,
            created_at=_aware(model.created_at),
        )

    async def insert(self, collection_id: str, payload: dict[str, Any]) -> Record:
        records = await self.insert_many(collection_id, [payload])
        return records[0]

    async def insert_many(
        self, collection_id: str, payloads: list[dict[str, Any]]
    ) -> list[Record]:
        """Insert payloads in order, all stamped with one creation time.

        Args:
            collection_id: Owning collection.
            payloads: JSON object payloads.

        Returns:
            The created records, in input order.
        """
        now = datetime.now(UTC)
        models = [
            RecordModel(
                id=str(uuid.uuid4()),
                collection_id=collection_id,
                data=payload,
                created_at=now,
                updated_at=now,
            )
            for payload in payloads
        ]
        self.session.add_all(models)
        await self.session.flush()

        logger.debug("Records inserted", collection_id=collection_id, count=len(models))
        return [to_record(model) for model in models]

    async def select_many(
        self,
        collection_id: str,
        predicates: list[FilterPredicate],
        limit: int,
        offset: int,
    ) -> list[Record]:
        """Select one page of matching records, newest first."""
        statement = self._filtered(select(RecordModel), collection_id, predicates)
        statement = (
            statement.order_by(RecordModel.created_at.desc(), RecordModel.seq.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(statement)
        return [to_record(model) for model in result.scalars().all()]

    async def count(self, collection_id: str, predicates: list[FilterPredicate]) -> int:
        statement = self._filtered(
            select(func.count()).select_from(RecordModel), collection_id, predicates
        )
        result = await self.session.execute(statement)
        return result.scalar_one()

    async def _get_model(self, collection_id: str, record_id: str) -> RecordModel | None:
        result = await self.session.execute(
            select(RecordModel).where(
                RecordModel.collection_id == collection_id,
                RecordModel.id == record_id,
            )
        )
        return result.scalar_one_or_none()

    async def select_one(self, collection_id: str, record_id: str) -> Record | None:
        model = await self._get_model(collection_id, record_id)
        return to_record(model) if model is not None else None

    async def update(
        self, collection_id: str, record_id: str, payload: dict[str, Any]
    ) -> Record | None:
        """Replace a record's payload wholesale.

        Returns:
            The updated record, or None if it does not exist.
        """
        model = await self._get_model(collection_id, record_id)
        if model is None:
            return None
        model.data = payload
        model.updated_at = datetime.now(UTC)
        await self.session.flush()
        return to_record(model)

    async def delete(self, collection_id: str, record_id: str) -> bool:
        result = await self.session.execute(
            delete(RecordModel).where(
                RecordModel.collection_id == collection_id,
                RecordModel.id == record_id,
            )
        )
        return result.rowcount > 0

    async def delete_many(self, collection_id: str, record_ids: list[str]) -> list[str]:
        """Delete whichever of ``record_ids`` exist.

        Returns:
            The IDs that were actually deleted.
        """
        result = await self.session.execute(
            select(RecordModel.id).where(
                RecordModel.collection_id == collection_id,
                RecordModel.id.in_(record_ids),
            )
        )
        existing = list(result.scalars().all())
        if existing:
            await self.session.execute(
                delete(RecordModel).where(
                    RecordModel.collection_id == collection_id,
                    RecordModel.id.in_(existing),
                )
            )
        return existing

    async def sample(self, collection_id: str, limit: int) -> list[Record]:
        """First ``limit`` records in insertion order."""
        result = await self.session.execute(
            select(RecordModel)
            .where(RecordModel.collection_id == collection_id)
            .order_by(RecordModel.seq.asc())
            .limit(limit)
        )
        return [to_record(model) for model in result.scalars().all()]

    async def created_at_bounds(self, collection_id: str) -> tuple[datetime, datetime] | None:
        result = await self.session.execute(
            select(func.min(RecordModel.created_at), func.max(RecordModel.created_at)).where(
                RecordModel.collection_id == collection_id
            )
        )
        first, last = result.one()
        if first is None or last is None:
            return None
        return _aware(first), _aware(last)

    async def commit(self) -> None:
        await self.session.commit()
