"""Project entity.

Projects are the tenant boundary: every collection and record belongs to
exactly one project, and a project's API key resolves to it uniquely.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class Project:
    """Project entity.

    Only the SHA-256 hash of the API key is persisted; ``key_prefix`` keeps
    the first characters for display.
    """

    id: str
    name: str
    owner_account_id: str
    key_prefix: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
