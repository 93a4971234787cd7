"""Schema and statistics inference from stored documents.

Samples the first records of a collection in natural order (not a random
sample, so output depends on insertion order) and derives, per field, the
observed type tags, a "required" classification, example values, coverage
and numeric summary statistics. Results are recomputed on every call.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from simpledata.core.logging import get_logger
from simpledata.core.query.values import is_json_number
from simpledata.domain.entities import Collection, Record
from simpledata.domain.services.document_store import DocumentStore
from simpledata.domain.services.record_query_service import require_collection

logger = get_logger(__name__)

SAMPLE_SIZE = 100
REQUIRED_THRESHOLD = 0.8
EXAMPLE_COUNT = 3


def type_tag(value: Any) -> str:
    """Dynamic type tag of a decoded JSON value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if is_json_number(value):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


@dataclass
class NumericSummary:
    """Summary statistics over the numeric values observed for a field.

    The median is the element at index ``n // 2`` of the ascending-sorted
    values, i.e. the upper-middle element for even-sized samples.
    """

    min: float
    max: float
    mean: float
    median: float

    @classmethod
    def from_values(cls, values: list[float]) -> "NumericSummary":
        ordered = sorted(values)
        return cls(
            min=ordered[0],
            max=ordered[-1],
            mean=round(sum(ordered) / len(ordered), 2),
            median=ordered[len(ordered) // 2],
        )

    def to_dict(self) -> dict[str, float]:
        return {"min": self.min, "max": self.max, "mean": self.mean, "median": self.median}


@dataclass
class FieldProfile:
    """Everything observed about one field across the sample."""

    name: str
    types: list[str] = field(default_factory=list)
    present: int = 0
    examples: list[Any] = field(default_factory=list)
    numbers: list[float] = field(default_factory=list)
    required: bool = False
    coverage: str = "0.00%"

    @property
    def numeric(self) -> NumericSummary | None:
        return NumericSummary.from_values(self.numbers) if self.numbers else None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "types": self.types,
            "required": self.required,
            "examples": self.examples,
            "present": self.present,
            "coverage": self.coverage,
        }
        numeric = self.numeric
        if numeric is not None:
            result["numeric"] = numeric.to_dict()
        return result


@dataclass
class InferredSchema:
    """Schema snapshot of one collection."""

    collection: str
    record_count: int
    fields: dict[str, FieldProfile]
    sample_data: dict[str, Any] | None = None
    first_created_at: datetime | None = None
    last_created_at: datetime | None = None

    @property
    def is_empty(self) -> bool:
        return self.record_count == 0

    def created_at_range(self) -> dict[str, str] | None:
        if self.first_created_at is None or self.last_created_at is None:
            return None
        return {
            "first": self.first_created_at.isoformat(),
            "last": self.last_created_at.isoformat(),
        }

    def to_schema_response(self) -> dict[str, Any]:
        """Render the ``/schema`` view."""
        if self.is_empty:
            return {
                "collection": self.collection,
                "schema": {},
                "sampleData": None,
                "recordCount": 0,
                "fields": [],
                "message": "No records found in collection",
            }
        response: dict[str, Any] = {
            "collection": self.collection,
            "recordCount": self.record_count,
            "schema": {name: profile.to_dict() for name, profile in self.fields.items()},
            "sampleData": self.sample_data,
            "fields": list(self.fields),
        }
        created_at = self.created_at_range()
        if created_at is not None:
            response["createdAt"] = created_at
        return response

    def to_stats_response(self, total_records: int) -> dict[str, Any]:
        """Render the ``/stats`` view."""
        stats: dict[str, Any] = {
            "collection": self.collection,
            "totalRecords": total_records,
            "sampledRecords": self.record_count,
            "fields": {},
        }
        for name, profile in self.fields.items():
            entry: dict[str, Any] = {
                "present": profile.present,
                "coverage": profile.coverage,
                "types": profile.types,
            }
            numeric = profile.numeric
            if numeric is not None:
                entry["numeric"] = numeric.to_dict()
            stats["fields"][name] = entry
        created_at = self.created_at_range()
        if created_at is not None:
            stats["createdAt"] = created_at
        return stats


def profile_documents(
    documents: list[dict[str, Any]],
    required_threshold: float = REQUIRED_THRESHOLD,
    example_count: int = EXAMPLE_COUNT,
) -> dict[str, FieldProfile]:
    """Profile every field observed across ``documents``.

    A field is required when it is present in strictly more than
    ``required_threshold`` of the documents.
    """
    profiles: dict[str, FieldProfile] = {}
    for document in documents:
        for name, value in document.items():
            profile = profiles.get(name)
            if profile is None:
                profile = profiles[name] = FieldProfile(name=name)

            profile.present += 1
            tag = type_tag(value)
            if tag not in profile.types:
                profile.types.append(tag)
            if value is not None and len(profile.examples) < example_count:
                profile.examples.append(value)
            if is_json_number(value):
                profile.numbers.append(value)

    total = len(documents)
    for profile in profiles.values():
        profile.required = profile.present > total * required_threshold
        profile.coverage = f"{profile.present / total * 100:.2f}%"
    return profiles


class SchemaInferenceService:
    """Infers schema and statistics for collections."""

    def __init__(
        self,
        store: DocumentStore,
        sample_size: int = SAMPLE_SIZE,
        required_threshold: float = REQUIRED_THRESHOLD,
        example_count: int = EXAMPLE_COUNT,
    ) -> None:
        self.store = store
        self.sample_size = sample_size
        self.required_threshold = required_threshold
        self.example_count = example_count

    async def infer(self, project_id: str, collection_name: str) -> InferredSchema:
        """Infer the schema of a collection from its first records.

        Raises:
            CollectionNotFoundError: If the collection does not exist.
        """
        collection = await require_collection(self.store, project_id, collection_name)
        return await self.infer_collection(collection)

    async def infer_collection(self, collection: Collection) -> InferredSchema:
        sample: list[Record] = await self.store.sample(collection.id, self.sample_size)
        if not sample:
            return InferredSchema(collection=collection.name, record_count=0, fields={})

        documents = [record.data for record in sample]
        profiles = profile_documents(documents, self.required_threshold, self.example_count)
        bounds = await self.store.created_at_bounds(collection.id)

        logger.debug(
            "Schema inferred",
            collection_id=collection.id,
            sampled=len(sample),
            fields=len(profiles),
        )
        return InferredSchema(
            collection=collection.name,
            record_count=len(sample),
            fields=profiles,
            sample_data=documents[0],
            first_created_at=bounds[0] if bounds else None,
            last_created_at=bounds[1] if bounds else None,
        )

    async def stats(self, project_id: str, collection_name: str) -> dict[str, Any]:
        """Field statistics plus the full-collection record count.

        Raises:
            CollectionNotFoundError: If the collection does not exist.
        """
        collection = await require_collection(self.store, project_id, collection_name)
        inferred = await self.infer_collection(collection)
        total = await self.store.count(collection.id, [])
        return inferred.to_stats_response(total)
