"""Pydantic schemas for collection endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field

from simpledata.domain.entities import Collection


class CreateCollectionRequest(BaseModel):
    """Request body for creating a new collection."""

    name: str = Field(
        ...,
        description="Collection name (1-50 chars, letters, digits and underscores)",
    )


class CollectionResponse(BaseModel):
    """A collection as returned by the API."""

    id: str = Field(..., description="Collection ID (UUID)")
    name: str = Field(..., description="Collection name")
    created_at: datetime = Field(..., description="Creation timestamp")
    endpoint: str = Field(..., description="Record endpoint path for the collection")

    @classmethod
    def from_entity(cls, collection: Collection) -> "CollectionResponse":
        return cls(
            id=collection.id,
            name=collection.name,
            created_at=collection.created_at,
            endpoint=f"/api/{collection.project_id}/{collection.name}",
        )


class CollectionEnvelope(BaseModel):
    success: bool = True
    message: str | None = None
    data: CollectionResponse


class CollectionListEnvelope(BaseModel):
    success: bool = True
    data: list[CollectionResponse]
