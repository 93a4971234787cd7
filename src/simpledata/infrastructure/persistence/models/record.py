"""SQLAlchemy model for the records table.

All collections share one table. Each row holds its payload in a JSON
column (JSONB on PostgreSQL), so records need no declared schema.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from simpledata.infrastructure.persistence.database import Base


class RecordModel(Base):
    """SQLAlchemy model for the records table.

    Attributes:
        seq: Insertion sequence (primary key), breaks created_at ties.
        id: Public record ID (UUID string).
        collection_id: Foreign key to collections (cascade delete).
        data: JSON object payload.
        created_at: Timestamp when the record was created.
        updated_at: Timestamp when the record was last replaced.
    """

    __tablename__ = "records"
    __table_args__ = (
        Index("ix_records_collection_created", "collection_id", "created_at"),
    )

    seq: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    id: Mapped[str] = mapped_column(
        String(36),
        nullable=False,
        unique=True,
        index=True,
        comment="Record ID (UUID)",
    )
    collection_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("collections.id", ondelete="CASCADE"),
        nullable=False,
    )
    data: Mapped[dict[str, Any]] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"),
        nullable=False,
        comment="Record payload",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Record(id={self.id}, collection_id={self.collection_id})>"
