"""Parser turning URL query parameters into filter predicates.

Operator resolution is by parameter-name suffix. Unsuffixed names are exact
matches. Parameters combine with AND; there is no OR or grouping.
"""

import re
from collections.abc import Mapping

from .ast import FilterOperator, FilterPredicate
from .exceptions import InvalidFieldNameError, InvalidOperandError
from .values import parse_number

# Pagination controls never become predicates.
RESERVED_PARAMETERS = frozenset({"limit", "page"})

FIELD_NAME_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

# Most specific suffix first.
SUFFIX_OPERATORS: tuple[tuple[str, FilterOperator], ...] = (
    ("_regex", FilterOperator.REGEX),
    ("_exists", FilterOperator.EXISTS),
    ("_gte", FilterOperator.GTE),
    ("_lte", FilterOperator.LTE),
    ("_gt", FilterOperator.GT),
    ("_lt", FilterOperator.LT),
    ("_ne", FilterOperator.NE),
    ("_in", FilterOperator.IN),
)

EXISTS_TRUE_VALUES = frozenset({"true", "1"})


def resolve_operator(parameter: str) -> tuple[str, FilterOperator]:
    """Split a parameter name into (field, operator)."""
    for suffix, operator in SUFFIX_OPERATORS:
        if parameter.endswith(suffix):
            return parameter[: -len(suffix)], operator
    return parameter, FilterOperator.EQ


def validate_field_name(field: str) -> str:
    """Validate a field name against the identifier grammar.

    Raises:
        InvalidFieldNameError: If the name is empty or contains characters
            outside ``[A-Za-z0-9_]`` or starts with a digit.
    """
    if not FIELD_NAME_PATTERN.match(field):
        raise InvalidFieldNameError(field)
    return field


def parse_filter(parameter: str, value: str) -> FilterPredicate:
    """Parse one query parameter into a predicate.

    Args:
        parameter: Query parameter name, e.g. ``age_gte``.
        value: Raw query parameter value.

    Returns:
        The typed predicate.

    Raises:
        InvalidFieldNameError: If the derived field name is not an identifier.
        InvalidOperandError: If a numeric operand is not a number or a
            regular expression does not compile.
    """
    field, operator = resolve_operator(parameter)
    validate_field_name(field)

    if operator.is_numeric:
        number = parse_number(value)
        if number is None:
            raise InvalidOperandError(parameter, "expected a number")
        operands: tuple = (number,)
    elif operator is FilterOperator.IN:
        operands = tuple(value.split(","))
    elif operator is FilterOperator.EXISTS:
        operands = (value in EXISTS_TRUE_VALUES,)
    elif operator is FilterOperator.REGEX:
        try:
            re.compile(value)
        except re.error as e:
            raise InvalidOperandError(parameter, f"invalid regular expression ({e})") from e
        operands = (value,)
    else:
        operands = (value,)

    return FilterPredicate(field=field, operator=operator, operands=operands, parameter=parameter)


def parse_filters(params: Mapping[str, str]) -> list[FilterPredicate]:
    """Parse every non-pagination query parameter into predicates.

    Args:
        params: Mapping of parameter name to string value.

    Returns:
        Predicates in parameter order.
    """
    return [
        parse_filter(parameter, value)
        for parameter, value in params.items()
        if parameter not in RESERVED_PARAMETERS
    ]
