"""Value coercions shared by the SQL functions and the in-memory evaluator.

The SQL store and the in-memory store use these definitions of a JSON value's
"text representation" and of which texts count as numbers.
"""

import json
import math
import re
from typing import Any

NUMBER_PATTERN = re.compile(r"^\s*[-+]?(\d+(\.\d*)?|\.\d+)([eE][-+]?\d+)?\s*$")

# PostgreSQL flavour of the same grammar, embedded in lowered SQL.
PG_NUMBER_PATTERN = r"^\s*[-+]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][-+]?[0-9]+)?\s*$"


def to_text(value: Any) -> str | None:
    """Return the text representation of a JSON value.

    JSON null and missing values have no text representation.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return json.dumps(value)


def parse_number(text: Any) -> float | None:
    """Parse a text value as a number, returning None when it is not numeric."""
    if text is None or isinstance(text, bool):
        return None
    if isinstance(text, (int, float)):
        return float(text) if math.isfinite(text) else None
    if not isinstance(text, str) or not NUMBER_PATTERN.match(text):
        return None
    return float(text)


def is_json_number(value: Any) -> bool:
    """Check whether a decoded JSON value is a number (booleans excluded)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)
