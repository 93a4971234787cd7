"""Tests for SqlDocumentStore against a real SQLite database."""

import pytest
import pytest_asyncio
from sqlalchemy import func, select

from simpledata.core.query import PredicateEvaluator, parse_filters
from simpledata.domain.services.collection_service import CollectionService
from simpledata.infrastructure.persistence.models import RecordModel
from simpledata.infrastructure.persistence.repositories import SqlDocumentStore

PEOPLE = [
    {"name": "Ada", "age": 36, "city": "London", "active": True},
    {"name": "alan", "age": "41", "city": "Manchester"},
    {"name": "Grace", "age": 85, "city": "NYC", "active": False},
    {"name": "Linus", "age": None},
    {"name": "Ken", "age": "n/a", "tags": ["unix", "c"]},
]


@pytest_asyncio.fixture
async def store(db_session):
    return SqlDocumentStore(db_session)


@pytest_asyncio.fixture
async def people(db_session, project, store):
    collection = await CollectionService(db_session).create_collection(project["id"], "people")
    await store.insert_many(collection.id, PEOPLE)
    await store.commit()
    return collection


async def names(store, collection_id, params):
    records = await store.select_many(collection_id, parse_filters(params), limit=100, offset=0)
    return {r.data["name"] for r in records}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "params,expected",
    [
        ({"name": "Ada"}, {"Ada"}),
        ({"name_ne": "Ada"}, {"alan", "Grace", "Linus", "Ken"}),
        ({"age_gte": "40"}, {"alan", "Grace"}),
        ({"age_gt": "85"}, set()),
        ({"age_lt": "40"}, {"Ada"}),
        ({"age_lte": "41"}, {"Ada", "alan"}),
        ({"age": "36"}, {"Ada"}),
        ({"city_in": "London,NYC"}, {"Ada", "Grace"}),
        ({"name_regex": "^a"}, {"Ada", "alan"}),
        ({"active": "true"}, {"Ada"}),
        ({"active": "false"}, {"Grace"}),
        ({"active_exists": "false"}, {"alan", "Linus", "Ken"}),
        ({"age_exists": "true"}, {"Ada", "alan", "Grace", "Linus", "Ken"}),
        ({"age_gte": "30", "city": "London"}, {"Ada"}),
    ],
)
async def test_filters(store, people, params, expected):
    assert await names(store, people.id, params) == expected


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "params",
    [
        {"age_gte": "40"},
        {"name_ne": "Ada"},
        {"active": "true"},
        {"age_exists": "false"},
        {"name_regex": "A"},
        {"city_in": "NYC,Paris"},
    ],
)
async def test_sql_matches_in_memory_evaluation(store, people, params):
    evaluator = PredicateEvaluator(parse_filters(params))
    expected = {doc["name"] for doc in PEOPLE if evaluator.matches(doc)}
    assert await names(store, people.id, params) == expected


@pytest.mark.asyncio
async def test_count_matches_filtered_select(store, people):
    predicates = parse_filters({"age_lte": "50"})
    records = await store.select_many(people.id, predicates, limit=100, offset=0)
    assert await store.count(people.id, predicates) == len(records) == 2
    assert await store.count(people.id, []) == len(PEOPLE)


@pytest.mark.asyncio
async def test_filter_values_are_bound(store, people):
    assert await names(store, people.id, {"name": "Ada' OR '1'='1"}) == set()


@pytest.mark.asyncio
async def test_newest_first_with_insertion_tiebreak(store, people):
    records = await store.select_many(people.id, [], limit=100, offset=0)
    assert [r.data["name"] for r in records] == ["Ken", "Linus", "Grace", "alan", "Ada"]


@pytest.mark.asyncio
async def test_pagination_window(store, people):
    page = await store.select_many(people.id, [], limit=2, offset=2)
    assert [r.data["name"] for r in page] == ["Grace", "alan"]


@pytest.mark.asyncio
async def test_records_are_scoped_to_collection(db_session, project, store, people):
    other = await CollectionService(db_session).create_collection(project["id"], "other")
    await store.insert(other.id, {"name": "Ada"})

    assert await store.count(people.id, parse_filters({"name": "Ada"})) == 1
    assert await store.count(other.id, []) == 1


@pytest.mark.asyncio
async def test_get_collection(store, project, people):
    found = await store.get_collection(project["id"], "people")
    assert found.id == people.id
    assert await store.get_collection(project["id"], "nope") is None
    assert await store.get_collection("other-project", "people") is None


@pytest.mark.asyncio
async def test_select_update_delete(store, people):
    record = await store.insert(people.id, {"name": "Barbara"})

    fetched = await store.select_one(people.id, record.id)
    assert fetched.data == {"name": "Barbara"}
    assert fetched.created_at.tzinfo is not None

    updated = await store.update(people.id, record.id, {"name": "Barbara", "age": 70})
    assert updated.data == {"name": "Barbara", "age": 70}
    assert updated.created_at == record.created_at
    assert updated.updated_at >= record.updated_at

    assert await store.delete(people.id, record.id) is True
    assert await store.delete(people.id, record.id) is False
    assert await store.select_one(people.id, record.id) is None
    assert await store.update(people.id, record.id, {"name": "x"}) is None


@pytest.mark.asyncio
async def test_delete_many_returns_existing_ids(store, people):
    records = await store.select_many(people.id, [], limit=2, offset=0)
    ids = [r.id for r in records]

    deleted = await store.delete_many(people.id, ids + ["missing"])

    assert sorted(deleted) == sorted(ids)
    assert await store.count(people.id, []) == len(PEOPLE) - 2


@pytest.mark.asyncio
async def test_sample_in_insertion_order(store, people):
    sample = await store.sample(people.id, 3)
    assert [r.data["name"] for r in sample] == ["Ada", "alan", "Grace"]


@pytest.mark.asyncio
async def test_created_at_bounds(db_session, project, store, people):
    first, last = await store.created_at_bounds(people.id)
    assert first <= last

    empty = await CollectionService(db_session).create_collection(project["id"], "empty")
    assert await store.created_at_bounds(empty.id) is None


@pytest.mark.asyncio
async def test_records_persist_json(db_session, store, people):
    result = await db_session.execute(
        select(func.count()).select_from(RecordModel).where(RecordModel.collection_id == people.id)
    )
    assert result.scalar_one() == len(PEOPLE)
    ken = (await store.select_many(people.id, parse_filters({"name": "Ken"}), 1, 0))[0]
    assert ken.data["tags"] == ["unix", "c"]


PRECISE = [
    {"name": "a", "score": 0.30000000000000004},
    {"name": "b", "score": 0.3},
    {"name": "c", "big": 12345678901234567890},
    {"name": "d", "meta": {"k": 1}, "tags": ["x", "y"]},
]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "params",
    [
        {"score": "0.30000000000000004"},
        {"score": "0.3"},
        {"score_ne": "0.3"},
        {"score_gt": "0.3"},
        {"big": "12345678901234567890"},
        {"big_in": "12345678901234567890,1"},
        {"meta": '{"k": 1}'},
        {"meta": '{"k":1}'},
        {"meta_regex": '"k": 1'},
        {"tags": '["x", "y"]'},
    ],
)
async def test_exact_values_match_in_memory_evaluation(db_session, project, store, params):
    collection = await CollectionService(db_session).create_collection(project["id"], "precise")
    await store.insert_many(collection.id, PRECISE)

    evaluator = PredicateEvaluator(parse_filters(params))
    expected = {doc["name"] for doc in PRECISE if evaluator.matches(doc)}

    assert await names(store, collection.id, params) == expected


@pytest.mark.asyncio
async def test_stored_values_are_found_by_exact_match(db_session, project, store):
    collection = await CollectionService(db_session).create_collection(project["id"], "precise")
    await store.insert_many(collection.id, PRECISE)

    assert await names(store, collection.id, {"score": "0.30000000000000004"}) == {"a"}
    assert await names(store, collection.id, {"big": "12345678901234567890"}) == {"c"}
    assert await names(store, collection.id, {"meta": '{"k": 1}'}) == {"d"}
