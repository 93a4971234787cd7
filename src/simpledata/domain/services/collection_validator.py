"""Validation for collection and project names."""

import re
from dataclasses import dataclass

# Pattern for valid collection names
NAME_PATTERN = re.compile(r"^[A-Za-z0-9_]+$")


@dataclass
class NameValidationError:
    """A single name validation error."""

    field: str
    message: str
    code: str


class CollectionValidator:
    """Validator for collection creation requests."""

    # Collection name constraints
    MIN_NAME_LENGTH = 1
    MAX_NAME_LENGTH = 50

    @classmethod
    def validate_name(cls, name: str | None) -> list[NameValidationError]:
        """Validate a collection name.

        Args:
            name: The collection name to validate.

        Returns:
            List of validation errors (empty if valid).
        """
        errors = []

        if not name or not isinstance(name, str):
            errors.append(
                NameValidationError(
                    field="name",
                    message="Collection name is required",
                    code="name_required",
                )
            )
            return errors

        if len(name) > cls.MAX_NAME_LENGTH:
            errors.append(
                NameValidationError(
                    field="name",
                    message=f"Collection name must be at most {cls.MAX_NAME_LENGTH} characters",
                    code="name_too_long",
                )
            )

        if not NAME_PATTERN.match(name):
            errors.append(
                NameValidationError(
                    field="name",
                    message="Collection name can only contain letters, numbers, and underscores",
                    code="name_invalid_format",
                )
            )

        return errors


class ProjectValidator:
    """Validator for project creation requests."""

    MAX_NAME_LENGTH = 100

    @classmethod
    def validate_name(cls, name: str | None) -> list[NameValidationError]:
        errors = []
        if not name or not isinstance(name, str) or not name.strip():
            errors.append(
                NameValidationError(
                    field="name",
                    message="Project name is required",
                    code="name_required",
                )
            )
            return errors

        if len(name) > cls.MAX_NAME_LENGTH:
            errors.append(
                NameValidationError(
                    field="name",
                    message=f"Project name must be at most {cls.MAX_NAME_LENGTH} characters",
                    code="name_too_long",
                )
            )
        return errors


def format_errors(errors: list[NameValidationError]) -> str:
    return "; ".join(e.message for e in errors)
