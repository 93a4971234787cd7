"""Pydantic schemas for API requests and responses."""

from simpledata.infrastructure.api.schemas.collection_schemas import (
    CollectionEnvelope,
    CollectionListEnvelope,
    CollectionResponse,
    CreateCollectionRequest,
)
from simpledata.infrastructure.api.schemas.project_schemas import (
    CreateProjectRequest,
    ProjectCreatedResponse,
    ProjectEnvelope,
    ProjectListEnvelope,
    ProjectResponse,
)
from simpledata.infrastructure.api.schemas.record_schemas import (
    BatchDeleteEnvelope,
    BatchEnvelope,
    DataEnvelope,
    MessageEnvelope,
    PaginationMeta,
    RecordEnvelope,
    RecordListEnvelope,
)

__all__ = [
    "BatchDeleteEnvelope",
    "BatchEnvelope",
    "CollectionEnvelope",
    "CollectionListEnvelope",
    "CollectionResponse",
    "CreateCollectionRequest",
    "CreateProjectRequest",
    "DataEnvelope",
    "MessageEnvelope",
    "PaginationMeta",
    "ProjectCreatedResponse",
    "ProjectEnvelope",
    "ProjectListEnvelope",
    "ProjectResponse",
    "RecordEnvelope",
    "RecordListEnvelope",
]
