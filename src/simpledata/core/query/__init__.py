"""Filter query API.

Turns URL query parameters into typed predicates, lowers them to SQL and
evaluates them in memory.
"""

from collections.abc import Mapping

from .ast import FilterOperator, FilterPredicate
from .evaluator import PredicateEvaluator
from .exceptions import InvalidFieldNameError, InvalidOperandError, QueryError
from .parser import RESERVED_PARAMETERS, parse_filter, parse_filters
from .sql_compiler import SQLCompiler


def compile_filters(
    params: Mapping[str, str], dialect: str, column: str = "data"
) -> tuple[str, dict]:
    """Parse query parameters and lower them to a SQL fragment in one step."""
    return SQLCompiler(dialect, column).compile(parse_filters(params))


__all__ = [
    "FilterOperator",
    "FilterPredicate",
    "InvalidFieldNameError",
    "InvalidOperandError",
    "PredicateEvaluator",
    "QueryError",
    "RESERVED_PARAMETERS",
    "SQLCompiler",
    "compile_filters",
    "parse_filter",
    "parse_filters",
]
