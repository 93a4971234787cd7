"""Unit tests for single-record writes."""

import pytest

from simpledata.domain.exceptions import (
    CollectionNotFoundError,
    PayloadValidationError,
    RecordNotFoundError,
)
from simpledata.domain.services import RecordService

PROJECT_ID = "project-1"


@pytest.fixture
def collection(memory_store):
    return memory_store.add_collection(PROJECT_ID, "notes")


@pytest.fixture
def service(memory_store):
    return RecordService(memory_store)


@pytest.mark.asyncio
async def test_create_record(memory_store, collection, service):
    record = await service.create_record(PROJECT_ID, "notes", {"title": "hello"})

    assert record.data == {"title": "hello"}
    assert record.created_at == record.updated_at
    assert memory_store.commits == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [None, {}, [], "text", [{"a": 1}]])
async def test_create_rejects_empty_or_non_object_body(collection, service, body):
    with pytest.raises(PayloadValidationError, match="Request body cannot be empty"):
        await service.create_record(PROJECT_ID, "notes", body)


@pytest.mark.asyncio
async def test_create_in_unknown_collection(service):
    with pytest.raises(CollectionNotFoundError):
        await service.create_record(PROJECT_ID, "missing", {"a": 1})


@pytest.mark.asyncio
async def test_update_replaces_payload(collection, service):
    record = await service.create_record(PROJECT_ID, "notes", {"title": "a", "tag": "x"})

    updated = await service.update_record(PROJECT_ID, "notes", record.id, {"title": "b"})

    assert updated.data == {"title": "b"}
    assert updated.created_at == record.created_at
    assert updated.updated_at >= record.created_at


@pytest.mark.asyncio
async def test_update_missing_record(collection, service):
    with pytest.raises(RecordNotFoundError):
        await service.update_record(PROJECT_ID, "notes", "nope", {"a": 1})


@pytest.mark.asyncio
async def test_delete_record(memory_store, collection, service):
    record = await service.create_record(PROJECT_ID, "notes", {"title": "a"})

    await service.delete_record(PROJECT_ID, "notes", record.id)

    assert await memory_store.select_one(collection.id, record.id) is None
    with pytest.raises(RecordNotFoundError):
        await service.delete_record(PROJECT_ID, "notes", record.id)
