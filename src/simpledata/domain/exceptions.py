"""Domain exceptions.

Each exception class maps to one outcome of the HTTP surface: validation
errors are reported before any store access, not-found and conflict errors
after a lookup.
"""


class SimpleDataError(Exception):
    """Base class for classified domain errors."""

    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class PayloadValidationError(SimpleDataError):
    """Raised when a request payload or parameter is malformed."""

    status_code = 400


class NotFoundError(SimpleDataError):
    """Raised after a lookup miss."""

    status_code = 404


class ProjectNotFoundError(NotFoundError):
    def __init__(self, message: str = "Project not found or access denied"):
        super().__init__(message)


class CollectionNotFoundError(NotFoundError):
    def __init__(self, message: str = "Collection not found"):
        super().__init__(message)


class RecordNotFoundError(NotFoundError):
    def __init__(self, message: str = "Record not found"):
        super().__init__(message)


class CollectionConflictError(SimpleDataError):
    """Raised when a collection name is already taken in the project."""

    status_code = 409

    def __init__(self, message: str = "Collection already exists"):
        super().__init__(message)


class ProjectAccessError(SimpleDataError):
    """Raised when the API key's project differs from the requested project."""

    status_code = 403

    def __init__(self, message: str = "API key does not grant access to this project"):
        super().__init__(message)
