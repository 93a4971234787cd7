"""SQLAlchemy model for the projects table.

Projects are the tenant boundary. Only SHA-256 hashes of API keys are stored.
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from simpledata.infrastructure.persistence.database import Base


class ProjectModel(Base):
    """SQLAlchemy model for the projects table.

    Attributes:
        id: Primary key (UUID string).
        name: Display name.
        api_key_hash: SHA-256 hash of the project's secret API key.
        key_prefix: First characters of the API key, for display.
        owner_account_id: Account that owns the project.
        created_at: Timestamp when the project was created.
    """

    __tablename__ = "projects"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        comment="Project ID (UUID)",
    )
    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Project display name",
    )
    api_key_hash: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        unique=True,
        index=True,
        comment="SHA-256 hash of the API key",
    )
    key_prefix: Mapped[str] = mapped_column(
        String(8),
        nullable=False,
        comment="First characters of the API key",
    )
    owner_account_id: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        index=True,
        comment="Owning account reference",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    collections: Mapped[list["CollectionModel"]] = relationship(  # noqa: F821
        "CollectionModel",
        back_populates="project",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Project(id={self.id}, name={self.name})>"
