"""Project service: project lifecycle and API key resolution.

Each project owns one secret API key. The plaintext key is returned once on
creation; only its SHA-256 hash is stored.
"""

import hashlib
import secrets
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from simpledata.core.logging import get_logger
from simpledata.domain.entities import Project
from simpledata.domain.exceptions import PayloadValidationError, ProjectNotFoundError
from simpledata.domain.services.collection_validator import ProjectValidator, format_errors
from simpledata.infrastructure.persistence.models import ProjectModel
from simpledata.infrastructure.persistence.repositories import ProjectRepository

logger = get_logger(__name__)

KEY_PREFIX_LENGTH = 8


def to_project(model: ProjectModel) -> Project:
    return Project(
        id=model.id,
        name=model.name,
        owner_account_id=model.owner_account_id,
        key_prefix=model.key_prefix,
        created_at=model.created_at,
    )


class ProjectService:
    """Service for project business logic."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repository = ProjectRepository(session)

    @staticmethod
    def generate_key() -> str:
        """Generate a new plaintext API key (64 hex characters)."""
        return secrets.token_hex(32)

    @staticmethod
    def hash_key(key: str) -> str:
        """Compute SHA-256 hash of a key.

        Args:
            key: Plaintext API key.

        Returns:
            SHA-256 hex digest.
        """
        return hashlib.sha256(key.encode()).hexdigest()

    async def create_project(self, name: str, owner_account_id: str) -> tuple[str, Project]:
        """Create a project and issue its API key.

        Returns:
            tuple: (plaintext_key, Project)

        Raises:
            PayloadValidationError: If the name is invalid.
        """
        errors = ProjectValidator.validate_name(name)
        if errors:
            raise PayloadValidationError(format_errors(errors))

        plaintext_key = self.generate_key()
        model = await self.repository.create(
            ProjectModel(
                id=str(uuid.uuid4()),
                name=name.strip(),
                api_key_hash=self.hash_key(plaintext_key),
                key_prefix=plaintext_key[:KEY_PREFIX_LENGTH],
                owner_account_id=owner_account_id,
            )
        )
        await self.session.commit()
        await self.session.refresh(model)

        logger.info("Project created", project_id=model.id, owner_account_id=owner_account_id)
        return plaintext_key, to_project(model)

    async def list_projects(self, owner_account_id: str) -> list[Project]:
        models = await self.repository.list_by_owner(owner_account_id)
        return [to_project(model) for model in models]

    async def _get_owned(self, project_id: str, owner_account_id: str) -> ProjectModel:
        model = await self.repository.get_by_id(project_id)
        if model is None or model.owner_account_id != owner_account_id:
            raise ProjectNotFoundError()
        return model

    async def get_project(self, project_id: str, owner_account_id: str) -> Project:
        """Get one of the account's projects.

        Raises:
            ProjectNotFoundError: If the project does not exist or belongs to
                another account.
        """
        return to_project(await self._get_owned(project_id, owner_account_id))

    async def delete_project(self, project_id: str, owner_account_id: str) -> None:
        """Delete a project with all of its collections and records.

        Raises:
            ProjectNotFoundError: If the project does not exist or belongs to
                another account.
        """
        model = await self._get_owned(project_id, owner_account_id)
        await self.repository.delete(model)
        await self.session.commit()

        logger.info("Project deleted", project_id=project_id, owner_account_id=owner_account_id)

    async def resolve_api_key(self, key: str) -> Project | None:
        """Resolve a plaintext API key to its project."""
        model = await self.repository.get_by_key_hash(self.hash_key(key))
        return to_project(model) if model is not None else None
