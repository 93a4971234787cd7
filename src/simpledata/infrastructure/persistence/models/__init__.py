"""SQLAlchemy ORM models."""

from simpledata.infrastructure.persistence.models.collection import CollectionModel
from simpledata.infrastructure.persistence.models.project import ProjectModel
from simpledata.infrastructure.persistence.models.record import RecordModel

__all__ = ["CollectionModel", "ProjectModel", "RecordModel"]
