"""Typed filter descriptors produced from query parameters."""

from dataclasses import dataclass
from enum import Enum


class FilterOperator(str, Enum):
    """Comparison operators a query parameter can resolve to."""

    EQ = "eq"
    NE = "ne"
    GT = "gt"
    LT = "lt"
    GTE = "gte"
    LTE = "lte"
    IN = "in"
    REGEX = "regex"
    EXISTS = "exists"

    @property
    def is_numeric(self) -> bool:
        return self in NUMERIC_OPERATORS


NUMERIC_OPERATORS = frozenset(
    {FilterOperator.GT, FilterOperator.LT, FilterOperator.GTE, FilterOperator.LTE}
)


@dataclass(frozen=True)
class FilterPredicate:
    """A single comparison extracted from one query parameter.

    Attributes:
        field: Document field name (already validated).
        operator: Comparison operator.
        operands: Typed operands. Numeric operators carry one float, IN
            carries one string per token, EXISTS carries one bool.
        parameter: The original query parameter name, kept for error messages.
    """

    field: str
    operator: FilterOperator
    operands: tuple
    parameter: str = ""

    @property
    def operand(self):
        """The single operand of a non-IN predicate."""
        return self.operands[0]
