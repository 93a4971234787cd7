"""Exceptions for filter parsing and compilation."""


class QueryError(Exception):
    """Base class for all filter-related errors."""

    pass


class InvalidFieldNameError(QueryError):
    """Raised when a filter targets a field name outside the identifier grammar."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Invalid field name in filter: '{field}'")


class InvalidOperandError(QueryError):
    """Raised when a filter operand cannot be parsed for its operator."""

    def __init__(self, parameter: str, message: str):
        self.parameter = parameter
        super().__init__(f"Invalid value for '{parameter}': {message}")
