"""Infrastructure layer - External dependencies and implementations.

This layer contains the database adapters (SQLAlchemy) and the HTTP API
(FastAPI). It implements the store capability defined in the domain layer.
"""

from simpledata.infrastructure.persistence.database import (
    Base,
    DatabaseManager,
    close_database,
    get_db_manager,
    get_db_session,
    init_database,
)

__all__ = [
    "Base",
    "DatabaseManager",
    "get_db_manager",
    "get_db_session",
    "init_database",
    "close_database",
]
