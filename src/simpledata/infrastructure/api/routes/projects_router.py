"""Project API routes.

Projects are owned by the account named in the account header. Creating a
project issues its API key, which is returned only in the creation response.
"""

from fastapi import APIRouter, Request, status

from simpledata.infrastructure.api.dependencies import AccountId, AppSettings, Projects
from simpledata.infrastructure.api.schemas import (
    CreateProjectRequest,
    MessageEnvelope,
    ProjectCreatedResponse,
    ProjectEnvelope,
    ProjectListEnvelope,
    ProjectResponse,
)

router = APIRouter()


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ProjectEnvelope,
    responses={
        400: {"description": "Invalid project name"},
        401: {"description": "Account header missing"},
    },
)
async def create_project(
    body: CreateProjectRequest,
    account_id: AccountId,
    projects: Projects,
    settings: AppSettings,
    request: Request,
) -> ProjectEnvelope:
    """Create a project and issue its API key."""
    api_key, project = await projects.create_project(body.name, account_id)
    base_url = settings.public_api_url.rstrip("/") or str(request.base_url).rstrip("/")

    return ProjectEnvelope(
        message="Project created successfully",
        data=ProjectCreatedResponse(
            **ProjectResponse.from_entity(project).model_dump(),
            api_key=api_key,
            base_url=f"{base_url}/api/{project.id}",
        ),
    )


@router.get("", response_model=ProjectListEnvelope)
async def list_projects(account_id: AccountId, projects: Projects) -> ProjectListEnvelope:
    """List the account's projects, newest first."""
    items = await projects.list_projects(account_id)
    return ProjectListEnvelope(data=[ProjectResponse.from_entity(p) for p in items])


@router.get(
    "/{project_id}",
    response_model=ProjectEnvelope,
    responses={404: {"description": "Project not found or access denied"}},
)
async def get_project(
    project_id: str, account_id: AccountId, projects: Projects
) -> ProjectEnvelope:
    project = await projects.get_project(project_id, account_id)
    return ProjectEnvelope(data=ProjectResponse.from_entity(project))


@router.delete(
    "/{project_id}",
    response_model=MessageEnvelope,
    responses={404: {"description": "Project not found or access denied"}},
)
async def delete_project(
    project_id: str, account_id: AccountId, projects: Projects
) -> MessageEnvelope:
    """Delete a project with all of its collections and records."""
    await projects.delete_project(project_id, account_id)
    return MessageEnvelope(message="Project deleted successfully")
