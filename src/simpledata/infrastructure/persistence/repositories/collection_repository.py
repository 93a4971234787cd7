"""Repository for collection operations.

Provides CRUD operations for the collections table.
"""

from typing import Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from simpledata.infrastructure.persistence.models import CollectionModel, RecordModel


class CollectionRepository:
    """Repository for collection database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository with a database session.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, collection: CollectionModel) -> CollectionModel:
        """Create a new collection.

        Args:
            collection: The collection model to create.

        Returns:
            The created collection model.
        """
        self.session.add(collection)
        await self.session.flush()
        return collection

    async def get_by_name(self, project_id: str, name: str) -> CollectionModel | None:
        """Get a collection by name within a project.

        Args:
            project_id: The owning project ID.
            name: The collection name.

        Returns:
            The collection model if found, None otherwise.
        """
        result = await self.session.execute(
            select(CollectionModel).where(
                CollectionModel.project_id == project_id,
                CollectionModel.name == name,
            )
        )
        return result.scalar_one_or_none()

    async def list_by_project(self, project_id: str) -> Sequence[CollectionModel]:
        """List a project's collections, newest first."""
        result = await self.session.execute(
            select(CollectionModel)
            .where(CollectionModel.project_id == project_id)
            .order_by(CollectionModel.created_at.desc())
        )
        return result.scalars().all()

    async def delete(self, collection: CollectionModel) -> None:
        """Delete a collection and all of its records."""
        await self.session.execute(
            delete(RecordModel).where(RecordModel.collection_id == collection.id)
        )
        await self.session.execute(
            delete(CollectionModel).where(CollectionModel.id == collection.id)
        )
        await self.session.flush()
