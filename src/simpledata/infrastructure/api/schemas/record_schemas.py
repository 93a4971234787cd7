"""Pydantic schemas for record, batch and schema endpoints.

Record payloads are arbitrary JSON objects, so request bodies are accepted
as raw JSON and validated by the domain services.
"""

from typing import Any

from pydantic import BaseModel, Field


class PaginationMeta(BaseModel):
    """Pagination metadata for list responses."""

    total: int = Field(..., description="Number of records matching the filters")
    page: int = Field(..., description="Current page (1-based)")
    limit: int = Field(..., description="Page size")
    pages: int = Field(..., description="Number of pages, ceil(total / limit)")


class RecordEnvelope(BaseModel):
    success: bool = True
    message: str | None = None
    data: dict[str, Any]


class RecordListEnvelope(BaseModel):
    success: bool = True
    data: list[dict[str, Any]]
    pagination: PaginationMeta


class BatchEnvelope(BaseModel):
    """Response for batch create and update."""

    success: bool = True
    message: str
    data: list[dict[str, Any]]
    count: int


class BatchDeleteEnvelope(BaseModel):
    success: bool = True
    message: str
    count: int
    deletedIds: list[str]


class MessageEnvelope(BaseModel):
    success: bool = True
    message: str


class DataEnvelope(BaseModel):
    """Envelope for computed views (schema, stats, snippets)."""

    success: bool = True
    data: dict[str, Any]
