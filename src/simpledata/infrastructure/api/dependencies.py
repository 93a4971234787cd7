"""FastAPI dependencies for API key authentication and service wiring.

The document store is built per request from the request's database
session and passed into the domain services.
"""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from simpledata.core.config import Settings, get_settings
from simpledata.core.logging import get_logger
from simpledata.domain.entities import Project
from simpledata.domain.exceptions import ProjectAccessError
from simpledata.domain.services import (
    BatchMutationService,
    DocumentStore,
    RecordQueryService,
    RecordService,
    SchemaInferenceService,
)
from simpledata.domain.services.collection_service import CollectionService
from simpledata.domain.services.project_service import ProjectService
from simpledata.infrastructure.persistence.database import get_db_session
from simpledata.infrastructure.persistence.repositories import SqlDocumentStore

logger = get_logger(__name__)

DbSession = Annotated[AsyncSession, Depends(get_db_session)]
AppSettings = Annotated[Settings, Depends(get_settings)]


async def get_document_store(session: DbSession) -> DocumentStore:
    return SqlDocumentStore(session)


Store = Annotated[DocumentStore, Depends(get_document_store)]


async def get_current_project(
    request: Request, session: DbSession, settings: AppSettings
) -> Project:
    """Resolve the project from the API key header.

    Raises:
        HTTPException: 401 if the key is missing or unknown.
    """
    api_key = request.headers.get(settings.api_key_header)
    if not api_key:
        logger.info("Authentication failed: missing API key")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="API key is required",
        )

    project = await ProjectService(session).resolve_api_key(api_key)
    if project is None:
        logger.info("Authentication failed: invalid API key", key_prefix=api_key[:8])
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid API key",
        )
    return project


CurrentProject = Annotated[Project, Depends(get_current_project)]


async def get_authorized_project(project_id: str, project: CurrentProject) -> Project:
    """Check that the path's project is the one the API key resolves to.

    Raises:
        ProjectAccessError: If the key belongs to another project.
    """
    if project.id != project_id:
        logger.info(
            "Authorization failed: project mismatch",
            key_project_id=project.id,
            path_project_id=project_id,
        )
        raise ProjectAccessError()
    return project


AuthorizedProject = Annotated[Project, Depends(get_authorized_project)]


async def get_account_id(request: Request, settings: AppSettings) -> str:
    """Read the owning account from the header set by the identity layer.

    Raises:
        HTTPException: 401 if the header is absent.
    """
    account_id = request.headers.get(settings.account_header)
    if not account_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Account ID is required",
        )
    return account_id


AccountId = Annotated[str, Depends(get_account_id)]


async def get_record_query_service(store: Store, settings: AppSettings) -> RecordQueryService:
    return RecordQueryService(store, settings.default_page_size, settings.max_page_size)


async def get_record_service(store: Store) -> RecordService:
    return RecordService(store)


async def get_batch_mutation_service(
    store: Store, settings: AppSettings
) -> BatchMutationService:
    return BatchMutationService(store, settings.batch_max_items)


async def get_schema_inference_service(
    store: Store, settings: AppSettings
) -> SchemaInferenceService:
    return SchemaInferenceService(
        store,
        sample_size=settings.schema_sample_size,
        required_threshold=settings.required_field_threshold,
        example_count=settings.schema_example_count,
    )


async def get_project_service(session: DbSession) -> ProjectService:
    return ProjectService(session)


async def get_collection_service(session: DbSession) -> CollectionService:
    return CollectionService(session)


QueryService = Annotated[RecordQueryService, Depends(get_record_query_service)]
WriteService = Annotated[RecordService, Depends(get_record_service)]
BatchService = Annotated[BatchMutationService, Depends(get_batch_mutation_service)]
InferenceService = Annotated[SchemaInferenceService, Depends(get_schema_inference_service)]
Projects = Annotated[ProjectService, Depends(get_project_service)]
Collections = Annotated[CollectionService, Depends(get_collection_service)]
