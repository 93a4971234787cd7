"""Repository implementations for data access."""

from simpledata.infrastructure.persistence.repositories.collection_repository import (
    CollectionRepository,
)
from simpledata.infrastructure.persistence.repositories.project_repository import (
    ProjectRepository,
)
from simpledata.infrastructure.persistence.repositories.record_repository import (
    SqlDocumentStore,
)

__all__ = ["CollectionRepository", "ProjectRepository", "SqlDocumentStore"]
