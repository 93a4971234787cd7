"""Schema introspection routes: inferred schema and client code snippets."""

from fastapi import APIRouter, Query

from simpledata.domain.services import get_snippet_generator, require_collection
from simpledata.infrastructure.api.dependencies import (
    AppSettings,
    AuthorizedProject,
    InferenceService,
    Store,
)
from simpledata.infrastructure.api.schemas import DataEnvelope

router = APIRouter()


@router.get("/{project_id}/{collection}/schema", response_model=DataEnvelope)
async def get_collection_schema(
    project_id: str,
    collection: str,
    project: AuthorizedProject,
    inference: InferenceService,
) -> DataEnvelope:
    """Schema inferred from the first records of the collection."""
    inferred = await inference.infer(project.id, collection)
    return DataEnvelope(data=inferred.to_schema_response())


@router.get("/{project_id}/{collection}/snippets", response_model=DataEnvelope)
async def get_code_snippets(
    project_id: str,
    collection: str,
    project: AuthorizedProject,
    store: Store,
    settings: AppSettings,
    language: str = Query(default="javascript", description="Snippet language"),
) -> DataEnvelope:
    """Client code for the collection's endpoints, using its first record as the example body."""
    resolved = await require_collection(store, project.id, collection)
    sample = await store.sample(resolved.id, 1)
    sample_data = sample[0].data if sample else None

    snippets = get_snippet_generator().generate(
        language,
        settings.public_api_url,
        project.id,
        collection,
        sample_data,
    )
    return DataEnvelope(
        data={
            "language": language,
            "collection": collection,
            "sampleData": sample_data,
            "snippets": snippets,
        }
    )
