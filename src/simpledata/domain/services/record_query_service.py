"""Query executor for collection records.

Combines filter predicates with pagination, ordering and counting into one
read. The page and the total are computed from the identical predicate set.
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass

from simpledata.core.logging import get_logger
from simpledata.core.query import FilterPredicate, parse_filters
from simpledata.domain.entities import Collection, Record
from simpledata.domain.exceptions import (
    CollectionNotFoundError,
    PayloadValidationError,
    RecordNotFoundError,
)
from simpledata.domain.services.document_store import DocumentStore

logger = get_logger(__name__)

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 500
# Largest row offset the SQL backends accept (signed 64-bit).
MAX_OFFSET = 2**63 - 1


@dataclass
class RecordPage:
    """One page of a filtered record listing."""

    items: list[Record]
    total: int
    page: int
    limit: int

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.limit)

    def pagination(self) -> dict[str, int]:
        return {
            "total": self.total,
            "page": self.page,
            "limit": self.limit,
            "pages": self.pages,
        }


def _positive_int(params: Mapping[str, str], name: str, default: int) -> int:
    raw = params.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise PayloadValidationError(f"'{name}' must be a positive integer")
    if value < 1:
        raise PayloadValidationError(f"'{name}' must be a positive integer")
    return value


def parse_pagination(
    params: Mapping[str, str],
    default_limit: int = DEFAULT_PAGE_SIZE,
    max_limit: int = MAX_PAGE_SIZE,
) -> tuple[int, int]:
    """Read ``page`` and ``limit`` from query parameters.

    ``limit`` is capped at ``max_limit``.

    Returns:
        Tuple of (page, limit).

    Raises:
        PayloadValidationError: If either value is not a positive integer,
            or the page starts beyond the largest storable offset.
    """
    page = _positive_int(params, "page", 1)
    limit = min(_positive_int(params, "limit", default_limit), max_limit)
    if (page - 1) * limit > MAX_OFFSET:
        raise PayloadValidationError("'page' is out of range")
    return page, limit


async def require_collection(store: DocumentStore, project_id: str, name: str) -> Collection:
    """Look up a collection or fail with a not-found outcome."""
    collection = await store.get_collection(project_id, name)
    if collection is None:
        logger.info("Collection lookup failed", project_id=project_id, collection=name)
        raise CollectionNotFoundError()
    return collection


class RecordQueryService:
    """Read operations over one project's collections."""

    def __init__(
        self,
        store: DocumentStore,
        default_limit: int = DEFAULT_PAGE_SIZE,
        max_limit: int = MAX_PAGE_SIZE,
    ) -> None:
        self.store = store
        self.default_limit = default_limit
        self.max_limit = max_limit

    async def list_records(
        self, project_id: str, collection_name: str, params: Mapping[str, str]
    ) -> RecordPage:
        """List records matching the filters in ``params``.

        Args:
            project_id: Resolved project.
            collection_name: Collection name from the path.
            params: All query parameters; ``page`` and ``limit`` control
                pagination, every other parameter is a filter.

        Returns:
            The requested page and the total match count.

        Raises:
            PayloadValidationError: On bad pagination values.
            QueryError: On invalid filters.
            CollectionNotFoundError: If the collection does not exist.
        """
        page, limit = parse_pagination(params, self.default_limit, self.max_limit)
        predicates = parse_filters(params)
        collection = await require_collection(self.store, project_id, collection_name)
        return await self.execute(collection, predicates, page, limit)

    async def execute(
        self,
        collection: Collection,
        predicates: list[FilterPredicate],
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> RecordPage:
        """Run one filtered, paginated read against a resolved collection."""
        offset = (page - 1) * limit
        items = await self.store.select_many(collection.id, predicates, limit, offset)
        total = await self.store.count(collection.id, predicates)

        logger.debug(
            "Records listed",
            collection_id=collection.id,
            filters=len(predicates),
            page=page,
            limit=limit,
            total=total,
        )
        return RecordPage(items=items, total=total, page=page, limit=limit)

    async def get_record(self, project_id: str, collection_name: str, record_id: str) -> Record:
        """Get a single record by ID.

        Raises:
            CollectionNotFoundError: If the collection does not exist.
            RecordNotFoundError: If the record does not exist.
        """
        collection = await require_collection(self.store, project_id, collection_name)
        record = await self.store.select_one(collection.id, record_id)
        if record is None:
            raise RecordNotFoundError()
        return record
