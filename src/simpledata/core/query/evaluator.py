"""Evaluator for filter predicates against in-memory documents."""

import json
import re
from typing import Any

from .ast import FilterOperator, FilterPredicate
from .exceptions import QueryError
from .values import parse_number, to_text


class PredicateEvaluator:
    """Evaluates predicates against a decoded JSON document.

    Semantics match the SQL lowering in ``SQLCompiler``: a missing field or
    JSON null has no text value and only matches ``exists`` predicates.
    """

    def __init__(self, predicates: list[FilterPredicate]):
        self.predicates = predicates
        self._patterns: dict[str, re.Pattern] = {}

    def matches(self, document: dict[str, Any]) -> bool:
        """Check whether the document satisfies every predicate."""
        return all(self._evaluate(p, document) for p in self.predicates)

    def _evaluate(self, predicate: FilterPredicate, document: dict[str, Any]) -> bool:
        op = predicate.operator

        if op is FilterOperator.EXISTS:
            return (predicate.field in document) == predicate.operand

        text = to_text(document.get(predicate.field))
        if text is None:
            return False

        if op.is_numeric:
            return self._compare_numeric(op, parse_number(text), predicate.operand)
        if op is FilterOperator.EQ:
            return text == predicate.operand
        if op is FilterOperator.NE:
            return text != predicate.operand
        if op is FilterOperator.IN:
            return text in predicate.operands
        if op is FilterOperator.REGEX:
            return self._pattern(predicate.operand).search(text) is not None

        raise QueryError(f"Unknown filter operator: {op}")

    def _compare_numeric(self, op: FilterOperator, left: float | None, right: float) -> bool:
        if left is None:
            return False
        if op is FilterOperator.GT:
            return left > right
        if op is FilterOperator.LT:
            return left < right
        if op is FilterOperator.GTE:
            return left >= right
        return left <= right

    def _pattern(self, pattern: str) -> re.Pattern:
        compiled = self._patterns.get(pattern)
        if compiled is None:
            compiled = re.compile(pattern, re.IGNORECASE)
            self._patterns[pattern] = compiled
        return compiled


def iregex_match(value: Any, pattern: Any) -> int | None:
    """Case-insensitive regex search used as the SQLite ``sd_iregex`` function."""
    if value is None or pattern is None:
        return None
    return 1 if re.search(pattern, str(value), re.IGNORECASE) else 0


def to_number(value: Any) -> float | None:
    """Numeric cast used as the SQLite ``sd_to_number`` function."""
    return parse_number(value)


def field_text(document: Any, field: str) -> str | None:
    """Text representation of a top-level field, used as the SQLite ``sd_text`` function.

    ``document`` is the stored JSON text, decoded here so values keep their
    full precision.
    """
    if document is None:
        return None
    if isinstance(document, (str, bytes)):
        document = json.loads(document)
    if not isinstance(document, dict):
        return None
    return to_text(document.get(field))
