"""Repository for project database operations."""

from typing import Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from simpledata.infrastructure.persistence.models import (
    CollectionModel,
    ProjectModel,
    RecordModel,
)


class ProjectRepository:
    """Repository for project database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, project: ProjectModel) -> ProjectModel:
        """Create a new project.

        Args:
            project: Project model to create.

        Returns:
            Created project model.
        """
        self.session.add(project)
        await self.session.flush()
        return project

    async def get_by_id(self, project_id: str) -> ProjectModel | None:
        result = await self.session.execute(
            select(ProjectModel).where(ProjectModel.id == project_id)
        )
        return result.scalar_one_or_none()

    async def get_by_key_hash(self, key_hash: str) -> ProjectModel | None:
        """Get a project by the hash of its API key.

        Args:
            key_hash: SHA-256 hash of the API key.

        Returns:
            Project model if found, None otherwise.
        """
        result = await self.session.execute(
            select(ProjectModel).where(ProjectModel.api_key_hash == key_hash)
        )
        return result.scalar_one_or_none()

    async def list_by_owner(self, owner_account_id: str) -> Sequence[ProjectModel]:
        """List an account's projects, newest first."""
        result = await self.session.execute(
            select(ProjectModel)
            .where(ProjectModel.owner_account_id == owner_account_id)
            .order_by(ProjectModel.created_at.desc())
        )
        return result.scalars().all()

    async def delete(self, project: ProjectModel) -> None:
        """Delete a project with all of its collections and records.

        Rows are removed explicitly so the cascade does not depend on the
        backend enforcing foreign keys.
        """
        collection_ids = select(CollectionModel.id).where(
            CollectionModel.project_id == project.id
        )
        await self.session.execute(
            delete(RecordModel).where(RecordModel.collection_id.in_(collection_ids))
        )
        await self.session.execute(
            delete(CollectionModel).where(CollectionModel.project_id == project.id)
        )
        await self.session.execute(delete(ProjectModel).where(ProjectModel.id == project.id))
        await self.session.flush()
