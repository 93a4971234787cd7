"""Collections API routes.

Authenticated by API key; every route acts on the key's project.
"""

from fastapi import APIRouter, status

from simpledata.infrastructure.api.dependencies import Collections, CurrentProject
from simpledata.infrastructure.api.schemas import (
    CollectionEnvelope,
    CollectionListEnvelope,
    CollectionResponse,
    CreateCollectionRequest,
    MessageEnvelope,
)

router = APIRouter()


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=CollectionEnvelope,
    responses={
        400: {"description": "Invalid collection name"},
        401: {"description": "Missing or invalid API key"},
        409: {"description": "Collection already exists"},
    },
)
async def create_collection(
    body: CreateCollectionRequest,
    project: CurrentProject,
    collections: Collections,
) -> CollectionEnvelope:
    collection = await collections.create_collection(project.id, body.name)
    return CollectionEnvelope(
        message="Collection created successfully",
        data=CollectionResponse.from_entity(collection),
    )


@router.get("", response_model=CollectionListEnvelope)
async def list_collections(
    project: CurrentProject, collections: Collections
) -> CollectionListEnvelope:
    """List the project's collections, newest first."""
    items = await collections.list_collections(project.id)
    return CollectionListEnvelope(data=[CollectionResponse.from_entity(c) for c in items])


@router.delete(
    "/{name}",
    response_model=MessageEnvelope,
    responses={404: {"description": "Collection not found"}},
)
async def delete_collection(
    name: str, project: CurrentProject, collections: Collections
) -> MessageEnvelope:
    """Delete a collection and all of its records."""
    await collections.delete_collection(project.id, name)
    return MessageEnvelope(message="Collection deleted successfully")
