"""Domain services for SimpleData.

Services contain the business logic of the document store: querying,
batch mutation, schema inference, project and collection management.
"""

from simpledata.domain.services.batch_mutation_service import (
    MAX_BATCH_ITEMS,
    BatchItemOutcome,
    BatchItemStatus,
    BatchMutationService,
    BatchResult,
)
from simpledata.domain.services.collection_validator import (
    CollectionValidator,
    NameValidationError,
    ProjectValidator,
)
from simpledata.domain.services.document_store import DocumentStore
from simpledata.domain.services.record_query_service import (
    RecordPage,
    RecordQueryService,
    parse_pagination,
    require_collection,
)
from simpledata.domain.services.record_service import RecordService, validate_payload
from simpledata.domain.services.schema_inference_service import (
    FieldProfile,
    InferredSchema,
    NumericSummary,
    SchemaInferenceService,
    profile_documents,
    type_tag,
)
from simpledata.domain.services.snippet_generator import (
    SUPPORTED_LANGUAGES,
    SnippetGenerator,
    get_snippet_generator,
)

__all__ = [
    "MAX_BATCH_ITEMS",
    "SUPPORTED_LANGUAGES",
    "BatchItemOutcome",
    "BatchItemStatus",
    "BatchMutationService",
    "BatchResult",
    "CollectionValidator",
    "DocumentStore",
    "FieldProfile",
    "InferredSchema",
    "NameValidationError",
    "NumericSummary",
    "ProjectValidator",
    "RecordPage",
    "RecordQueryService",
    "RecordService",
    "SchemaInferenceService",
    "SnippetGenerator",
    "get_snippet_generator",
    "parse_pagination",
    "profile_documents",
    "require_collection",
    "type_tag",
    "validate_payload",
]
