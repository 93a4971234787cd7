"""Collection service for business logic.

Handles collection creation, listing and deletion within one project.
"""

import uuid

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from simpledata.core.logging import get_logger
from simpledata.domain.entities import Collection
from simpledata.domain.exceptions import (
    CollectionConflictError,
    CollectionNotFoundError,
    PayloadValidationError,
)
from simpledata.domain.services.collection_validator import CollectionValidator, format_errors
from simpledata.infrastructure.persistence.models import CollectionModel
from simpledata.infrastructure.persistence.repositories import CollectionRepository

logger = get_logger(__name__)


def to_collection(model: CollectionModel) -> Collection:
    return Collection(
        id=model.id,
        project_id=model.project_id,
        name=model.name,
        created_at=model.created_at,
    )


class CollectionService:
    """Service for collection business logic."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the service.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session
        self.repository = CollectionRepository(session)

    async def create_collection(self, project_id: str, name: str) -> Collection:
        """Create a new, empty collection.

        Args:
            project_id: Owning project.
            name: Collection name.

        Returns:
            The created collection.

        Raises:
            PayloadValidationError: If the name is invalid.
            CollectionConflictError: If the name is taken in the project.
        """
        errors = CollectionValidator.validate_name(name)
        if errors:
            raise PayloadValidationError(format_errors(errors))

        if await self.repository.get_by_name(project_id, name) is not None:
            raise CollectionConflictError()

        try:
            collection = await self.repository.create(
                CollectionModel(id=str(uuid.uuid4()), project_id=project_id, name=name)
            )
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            logger.warning(
                "Collection creation failed: name already exists",
                collection_name=name,
                project_id=project_id,
            )
            raise CollectionConflictError()
        await self.session.refresh(collection)

        logger.info(
            "Collection created successfully",
            collection_id=collection.id,
            collection_name=name,
            project_id=project_id,
        )
        return to_collection(collection)

    async def list_collections(self, project_id: str) -> list[Collection]:
        models = await self.repository.list_by_project(project_id)
        return [to_collection(model) for model in models]

    async def delete_collection(self, project_id: str, name: str) -> None:
        """Delete a collection and its records.

        Raises:
            CollectionNotFoundError: If the collection does not exist.
        """
        collection = await self.repository.get_by_name(project_id, name)
        if collection is None:
            raise CollectionNotFoundError()

        await self.repository.delete(collection)
        await self.session.commit()

        logger.info(
            "Collection deleted successfully",
            collection_id=collection.id,
            collection_name=name,
            project_id=project_id,
        )
