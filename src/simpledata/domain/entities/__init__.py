"""Domain entities for SimpleData."""

from simpledata.domain.entities.collection import Collection
from simpledata.domain.entities.project import Project
from simpledata.domain.entities.record import Record

__all__ = ["Collection", "Project", "Record"]
