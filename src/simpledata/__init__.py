"""SimpleData - instant schema-less JSON document store.

Projects hold named collections of arbitrary JSON records, queried over
HTTP with suffix filters, batch writes and inferred schemas.
"""

__version__ = "1.0.0"

__all__ = ["__version__"]
