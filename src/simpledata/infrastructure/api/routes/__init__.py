"""API route modules."""

from simpledata.infrastructure.api.routes.collections_router import router as collections_router
from simpledata.infrastructure.api.routes.projects_router import router as projects_router
from simpledata.infrastructure.api.routes.records_router import router as records_router
from simpledata.infrastructure.api.routes.schema_router import router as schema_router

__all__ = ["collections_router", "projects_router", "records_router", "schema_router"]
