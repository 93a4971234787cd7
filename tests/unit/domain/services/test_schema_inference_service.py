"""Unit tests for schema and statistics inference."""

import pytest

from simpledata.domain.exceptions import CollectionNotFoundError
from simpledata.domain.services import (
    NumericSummary,
    SchemaInferenceService,
    profile_documents,
    type_tag,
)

PROJECT_ID = "project-1"


@pytest.fixture
def collection(memory_store):
    return memory_store.add_collection(PROJECT_ID, "people")


@pytest.fixture
def service(memory_store):
    return SchemaInferenceService(memory_store)


@pytest.mark.parametrize(
    "value,tag",
    [
        (None, "null"),
        (True, "boolean"),
        (0, "number"),
        (1.5, "number"),
        ("x", "string"),
        ([1], "array"),
        ({"a": 1}, "object"),
    ],
)
def test_type_tag(value, tag):
    assert type_tag(value) == tag


def test_numeric_summary_uses_upper_middle_median():
    summary = NumericSummary.from_values([4, 1, 3, 2])
    assert summary.to_dict() == {"min": 1, "max": 4, "mean": 2.5, "median": 3}


def test_numeric_summary_rounds_mean():
    assert NumericSummary.from_values([1, 1, 2]).mean == 1.33


def test_profile_documents_age_field():
    ages = [10, 20, 20, 30, 40, 50, 60, 70, 80]
    documents = [{"age": age} for age in ages] + [{"name": "no age"}]

    profiles = profile_documents(documents)
    age = profiles["age"]

    assert age.types == ["number"]
    assert age.present == 9
    assert age.required is True
    assert age.coverage == "90.00%"
    assert age.examples == [10, 20, 20]
    assert age.numeric.to_dict() == {"min": 10, "max": 80, "mean": 42.22, "median": 40}
    assert profiles["name"].required is False


def test_required_threshold_is_strict():
    documents = [{"a": 1}] * 8 + [{}] * 2
    assert profile_documents(documents)["a"].required is False


def test_types_in_first_appearance_order():
    documents = [{"v": "x"}, {"v": 1}, {"v": None}, {"v": [1]}, {"v": "y"}]
    assert profile_documents(documents)["v"].types == ["string", "number", "null", "array"]


def test_examples_skip_nulls():
    documents = [{"v": None}, {"v": "a"}, {"v": None}, {"v": "b"}]
    assert profile_documents(documents)["v"].examples == ["a", "b"]


def test_booleans_are_not_numeric():
    profile = profile_documents([{"flag": True}, {"flag": False}])["flag"]
    assert profile.numeric is None
    assert "numeric" not in profile.to_dict()


@pytest.mark.asyncio
async def test_infer_empty_collection(collection, service):
    inferred = await service.infer(PROJECT_ID, "people")

    assert inferred.to_schema_response() == {
        "collection": "people",
        "schema": {},
        "sampleData": None,
        "recordCount": 0,
        "fields": [],
        "message": "No records found in collection",
    }


@pytest.mark.asyncio
async def test_infer_schema(memory_store, collection, service):
    await memory_store.insert(collection.id, {"name": "Ada", "age": 36})
    await memory_store.insert(collection.id, {"name": "Alan"})

    response = (await service.infer(PROJECT_ID, "people")).to_schema_response()

    assert response["recordCount"] == 2
    assert response["sampleData"] == {"name": "Ada", "age": 36}
    assert response["fields"] == ["name", "age"]
    assert response["schema"]["name"]["required"] is True
    assert response["schema"]["age"]["required"] is False
    assert response["schema"]["age"]["coverage"] == "50.00%"
    assert set(response["createdAt"]) == {"first", "last"}


@pytest.mark.asyncio
async def test_sample_is_bounded(memory_store, collection):
    service = SchemaInferenceService(memory_store, sample_size=5)
    await memory_store.insert_many(collection.id, [{"i": i} for i in range(8)])

    inferred = await service.infer(PROJECT_ID, "people")

    assert inferred.record_count == 5
    assert inferred.fields["i"].numeric.max == 4


@pytest.mark.asyncio
async def test_stats(memory_store, collection):
    service = SchemaInferenceService(memory_store, sample_size=2)
    await memory_store.insert_many(collection.id, [{"score": 1}, {"score": 3}, {"score": 5}])

    stats = await service.stats(PROJECT_ID, "people")

    assert stats["totalRecords"] == 3
    assert stats["sampledRecords"] == 2
    assert stats["fields"]["score"] == {
        "present": 2,
        "coverage": "100.00%",
        "types": ["number"],
        "numeric": {"min": 1, "max": 3, "mean": 2.0, "median": 3},
    }


@pytest.mark.asyncio
async def test_unknown_collection(service):
    with pytest.raises(CollectionNotFoundError):
        await service.infer(PROJECT_ID, "missing")
    with pytest.raises(CollectionNotFoundError):
        await service.stats(PROJECT_ID, "missing")
