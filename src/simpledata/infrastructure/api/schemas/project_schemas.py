"""Pydantic schemas for project endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field

from simpledata.domain.entities import Project


class CreateProjectRequest(BaseModel):
    """Request body for creating a new project."""

    name: str = Field(..., description="Project display name (1-100 chars)")


class ProjectResponse(BaseModel):
    """A project as returned by the API. Never carries the secret key."""

    id: str = Field(..., description="Project ID (UUID)")
    name: str = Field(..., description="Project display name")
    key_prefix: str = Field(..., description="First characters of the API key")
    created_at: datetime = Field(..., description="Creation timestamp")

    @classmethod
    def from_entity(cls, project: Project) -> "ProjectResponse":
        return cls(
            id=project.id,
            name=project.name,
            key_prefix=project.key_prefix,
            created_at=project.created_at,
        )


class ProjectCreatedResponse(ProjectResponse):
    """Response for a newly created project.

    ``api_key`` is the plaintext key; it is shown only here.
    """

    api_key: str = Field(..., description="Secret API key, shown once")
    base_url: str = Field(..., description="Base URL of the project's data API")


class ProjectEnvelope(BaseModel):
    success: bool = True
    message: str | None = None
    data: ProjectResponse | ProjectCreatedResponse


class ProjectListEnvelope(BaseModel):
    success: bool = True
    data: list[ProjectResponse]
