"""SQL compiler for filter predicates.

Lowers typed predicates to a SQL WHERE fragment with named bind parameters.
Field names are embedded only after validation against the identifier
grammar; operand values are always bound.
"""

from typing import Any

from .ast import FilterOperator, FilterPredicate
from .exceptions import QueryError
from .parser import validate_field_name
from .values import PG_NUMBER_PATTERN

COMPARISON_SQL = {
    FilterOperator.GT: ">",
    FilterOperator.LT: "<",
    FilterOperator.GTE: ">=",
    FilterOperator.LTE: "<=",
    FilterOperator.EQ: "=",
    FilterOperator.NE: "<>",
}

SUPPORTED_DIALECTS = ("sqlite", "postgresql")


class SQLCompiler:
    """Compiles filter predicates to SQL for one dialect.

    SQLite lowering relies on the ``sd_text``, ``sd_to_number`` and
    ``sd_iregex`` functions registered on every connection by the
    persistence layer.
    """

    def __init__(self, dialect: str, column: str = "data"):
        if dialect not in SUPPORTED_DIALECTS:
            raise QueryError(f"Unsupported SQL dialect for filters: {dialect}")
        self.dialect = dialect
        self.column = column
        self.param_counter = 0
        self.params: dict[str, Any] = {}

    def compile(self, predicates: list[FilterPredicate]) -> tuple[str, dict[str, Any]]:
        """Compile predicates to one AND-combined SQL fragment.

        Args:
            predicates: Predicates to combine.

        Returns:
            Tuple of (SQL fragment, parameter bindings). The fragment is
            empty when there are no predicates.
        """
        self.param_counter = 0
        self.params = {}
        clauses = [self._compile_predicate(p) for p in predicates]
        return " AND ".join(f"({c})" for c in clauses), self.params

    def _bind(self, value: Any) -> str:
        param_name = f"filter_{self.param_counter}"
        self.param_counter += 1
        self.params[param_name] = value
        return f":{param_name}"

    def _compile_predicate(self, predicate: FilterPredicate) -> str:
        field = validate_field_name(predicate.field)
        op = predicate.operator

        if op is FilterOperator.EXISTS:
            return self._compile_exists(field, predicate.operand)

        text_expr = self._text_expr(field)

        if op.is_numeric:
            return f"{self._number_expr(text_expr)} {COMPARISON_SQL[op]} {self._bind(predicate.operand)}"

        if op in (FilterOperator.EQ, FilterOperator.NE):
            return f"{text_expr} {COMPARISON_SQL[op]} {self._bind(predicate.operand)}"

        if op is FilterOperator.IN:
            placeholders = ", ".join(self._bind(token) for token in predicate.operands)
            return f"{text_expr} IN ({placeholders})"

        if op is FilterOperator.REGEX:
            pattern = self._bind(predicate.operand)
            if self.dialect == "postgresql":
                return f"{text_expr} ~* {pattern}"
            return f"sd_iregex({text_expr}, {pattern}) = 1"

        raise QueryError(f"Unknown filter operator: {op}")

    def _json_path(self, field: str) -> str:
        return f"'$.\"{field}\"'"

    def _text_expr(self, field: str) -> str:
        """SQL expression for the field's text representation (NULL when absent)."""
        if self.dialect == "postgresql":
            return f"({self.column} ->> '{field}')"
        return f"sd_text({self.column}, '{field}')"

    def _number_expr(self, text_expr: str) -> str:
        """SQL expression casting text to a number, NULL when non-numeric."""
        if self.dialect == "postgresql":
            return (
                f"(CASE WHEN {text_expr} ~ '{PG_NUMBER_PATTERN}' "
                f"THEN CAST({text_expr} AS double precision) END)"
            )
        return f"sd_to_number({text_expr})"

    def _compile_exists(self, field: str, present: bool) -> str:
        if self.dialect == "postgresql":
            clause = f"jsonb_exists({self.column}, '{field}')"
            return clause if present else f"NOT {clause}"
        clause = f"json_type({self.column}, {self._json_path(field)})"
        return f"{clause} IS NOT NULL" if present else f"{clause} IS NULL"
