"""Collection entity.

A collection is a named bucket of schema-less records scoped to one project.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class Collection:
    """Collection entity.

    Attributes:
        id: Unique identifier (UUID string).
        project_id: Owning project.
        name: Collection name, unique within the project.
        created_at: Timestamp when the collection was created.
    """

    id: str
    project_id: str
    name: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        """Validate collection data after initialization."""
        if not self.id:
            raise ValueError("Collection ID is required")
        if not self.name:
            raise ValueError("Collection name is required")
