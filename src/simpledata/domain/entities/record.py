"""Record entity for schema-less JSON documents."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

SYSTEM_KEYS = ("id", "created_at", "updated_at")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Record:
    """A stored JSON document.

    Records in the same collection share no schema: two records may have
    disjoint field sets or conflicting types for the same field name.

    Attributes:
        id: Server-generated identifier (UUID string).
        collection_id: Owning collection.
        data: The JSON object payload.
        created_at: Creation timestamp.
        updated_at: Last-modified timestamp.
        seq: Insertion sequence number, used to break created_at ties.
    """

    id: str
    collection_id: str
    data: dict[str, Any]
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)
    seq: int = 0

    def to_document(self) -> dict[str, Any]:
        """Merge the payload with the system fields for API output.

        System fields win over payload keys of the same name.
        """
        payload = {k: v for k, v in self.data.items() if k not in SYSTEM_KEYS}
        return {
            "id": self.id,
            **payload,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }
