"""Record API routes.

Per-collection CRUD, filtered listing, batch operations and the stats view.
Batch and stats routes are registered before ``/{record_id}`` so those path
segments are never taken for a record ID.
"""

from typing import Any

from fastapi import APIRouter, Body, Request, status

from simpledata.infrastructure.api.dependencies import (
    AuthorizedProject,
    BatchService,
    InferenceService,
    QueryService,
    WriteService,
)
from simpledata.infrastructure.api.schemas import (
    BatchDeleteEnvelope,
    BatchEnvelope,
    DataEnvelope,
    MessageEnvelope,
    PaginationMeta,
    RecordEnvelope,
    RecordListEnvelope,
)

router = APIRouter()


def _field(body: Any, name: str) -> Any:
    return body.get(name) if isinstance(body, dict) else None


@router.post(
    "/{project_id}/{collection}/batch",
    status_code=status.HTTP_201_CREATED,
    response_model=BatchEnvelope,
)
async def batch_create_records(
    project_id: str,
    collection: str,
    project: AuthorizedProject,
    batch: BatchService,
    body: Any = Body(None),
) -> BatchEnvelope:
    """Create up to the batch limit of records from ``{"records": [...]}``."""
    result = await batch.create_many(project.id, collection, _field(body, "records"))
    return BatchEnvelope(
        message=f"{result.count} records created successfully",
        data=[record.to_document() for record in result.records],
        count=result.count,
    )


@router.put("/{project_id}/{collection}/batch", response_model=BatchEnvelope)
async def batch_update_records(
    project_id: str,
    collection: str,
    project: AuthorizedProject,
    batch: BatchService,
    body: Any = Body(None),
) -> BatchEnvelope:
    """Replace payloads from ``{"updates": [{"id": ..., "data": {...}}]}``.

    Entries that are malformed or name a missing record are left out of
    the response.
    """
    result = await batch.update_many(project.id, collection, _field(body, "updates"))
    return BatchEnvelope(
        message=f"{result.count} records updated successfully",
        data=[record.to_document() for record in result.records],
        count=result.count,
    )


@router.delete("/{project_id}/{collection}/batch", response_model=BatchDeleteEnvelope)
async def batch_delete_records(
    project_id: str,
    collection: str,
    project: AuthorizedProject,
    batch: BatchService,
    body: Any = Body(None),
) -> BatchDeleteEnvelope:
    """Delete the records listed in ``{"ids": [...]}`` that exist."""
    result = await batch.delete_many(project.id, collection, _field(body, "ids"))
    return BatchDeleteEnvelope(
        message=f"{result.count} records deleted successfully",
        count=result.count,
        deletedIds=result.record_ids,
    )


@router.get("/{project_id}/{collection}/stats", response_model=DataEnvelope)
async def get_collection_stats(
    project_id: str,
    collection: str,
    project: AuthorizedProject,
    inference: InferenceService,
) -> DataEnvelope:
    """Field statistics over a sample of the collection."""
    return DataEnvelope(data=await inference.stats(project.id, collection))


@router.post(
    "/{project_id}/{collection}",
    status_code=status.HTTP_201_CREATED,
    response_model=RecordEnvelope,
)
async def create_record(
    project_id: str,
    collection: str,
    project: AuthorizedProject,
    records: WriteService,
    body: Any = Body(None),
) -> RecordEnvelope:
    record = await records.create_record(project.id, collection, body)
    return RecordEnvelope(data=record.to_document())


@router.get("/{project_id}/{collection}", response_model=RecordListEnvelope)
async def list_records(
    project_id: str,
    collection: str,
    request: Request,
    project: AuthorizedProject,
    query: QueryService,
) -> RecordListEnvelope:
    """List records, newest first.

    ``page`` and ``limit`` paginate; every other query parameter is a
    filter, e.g. ``age_gte=18``, ``status_in=active,pending`` or
    ``email_exists=true``.
    """
    page = await query.list_records(project.id, collection, request.query_params)
    return RecordListEnvelope(
        data=[record.to_document() for record in page.items],
        pagination=PaginationMeta(**page.pagination()),
    )


@router.get("/{project_id}/{collection}/{record_id}", response_model=RecordEnvelope)
async def get_record(
    project_id: str,
    collection: str,
    record_id: str,
    project: AuthorizedProject,
    query: QueryService,
) -> RecordEnvelope:
    record = await query.get_record(project.id, collection, record_id)
    return RecordEnvelope(data=record.to_document())


@router.put("/{project_id}/{collection}/{record_id}", response_model=RecordEnvelope)
async def update_record(
    project_id: str,
    collection: str,
    record_id: str,
    project: AuthorizedProject,
    records: WriteService,
    body: Any = Body(None),
) -> RecordEnvelope:
    """Replace a record's payload."""
    record = await records.update_record(project.id, collection, record_id, body)
    return RecordEnvelope(data=record.to_document())


@router.delete("/{project_id}/{collection}/{record_id}", response_model=MessageEnvelope)
async def delete_record(
    project_id: str,
    collection: str,
    record_id: str,
    project: AuthorizedProject,
    records: WriteService,
) -> MessageEnvelope:
    await records.delete_record(project.id, collection, record_id)
    return MessageEnvelope(message="Record deleted successfully")
