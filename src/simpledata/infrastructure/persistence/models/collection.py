"""SQLAlchemy model for the collections table.

Collections are named buckets of schema-less records inside one project.
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from simpledata.infrastructure.persistence.database import Base


class CollectionModel(Base):
    """SQLAlchemy model for the collections table.

    Attributes:
        id: Primary key (UUID string).
        project_id: Foreign key to projects (cascade delete).
        name: Collection name, unique within the project.
        created_at: Timestamp when the collection was created.
    """

    __tablename__ = "collections"
    __table_args__ = (UniqueConstraint("project_id", "name", name="uq_collections_project_name"),)

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        comment="Collection ID (UUID)",
    )
    project_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        comment="Collection name (alphanumeric + underscores)",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    project: Mapped["ProjectModel"] = relationship(  # noqa: F821
        "ProjectModel", back_populates="collections"
    )

    def __repr__(self) -> str:
        return f"<Collection(id={self.id}, name={self.name})>"
