"""Unit tests for the entry store wrapper."""

from unittest.mock import MagicMock, patch

import pytest
from bson import ObjectId

from backend.src.services import database as database_module
from backend.src.services.config import AppConfig
from backend.src.services.database import EntryStore


@pytest.fixture
def collection() -> MagicMock:
    mock_collection = MagicMock()
    cursor = mock_collection.find.return_value
    cursor.skip.return_value = cursor
    cursor.limit.return_value = cursor
    cursor.__iter__.return_value = iter([{"_id": ObjectId("64b7f0c2a1b2c3d4e5f60718"), "dictionaryId": "d1"}])
    return mock_collection


@pytest.fixture
def store(collection: MagicMock) -> EntryStore:
    return EntryStore(config=AppConfig(), collection=collection)


def test_find_applies_collation_and_pagination(store: EntryStore, collection: MagicMock) -> None:
    results = store.find({"dictionaryId": "d1"}, collation={"locale": "en", "strength": 1}, skip=20, limit=10)

    collection.find.assert_called_once_with(
        {"dictionaryId": "d1"}, collation={"locale": "en", "strength": 1}
    )
    cursor = collection.find.return_value
    cursor.skip.assert_called_once_with(20)
    cursor.limit.assert_called_once_with(10)
    assert results == [{"_id": "64b7f0c2a1b2c3d4e5f60718", "dictionaryId": "d1"}]


def test_find_first_page_does_not_skip(store: EntryStore, collection: MagicMock) -> None:
    store.find({"dictionaryId": "d1"}, limit=100)

    cursor = collection.find.return_value
    cursor.skip.assert_not_called()
    cursor.limit.assert_called_once_with(100)


def test_aggregate_appends_pagination_stages(store: EntryStore, collection: MagicMock) -> None:
    collection.aggregate.return_value = iter([{"dictionaryId": "d1"}])
    pipeline = [{"$match": {"a": 1}}, {"$match": {"b": 2}}]

    results = store.aggregate(pipeline, skip=10, limit=5)

    collection.aggregate.assert_called_once_with(
        [{"$match": {"a": 1}}, {"$match": {"b": 2}}, {"$skip": 10}, {"$limit": 5}]
    )
    assert pipeline == [{"$match": {"a": 1}}, {"$match": {"b": 2}}]
    assert results == [{"dictionaryId": "d1"}]


def test_aggregate_without_pagination_reads_everything(store: EntryStore, collection: MagicMock) -> None:
    collection.aggregate.return_value = iter([])

    store.aggregate([{"$match": {"a": 1}}])

    collection.aggregate.assert_called_once_with([{"$match": {"a": 1}}])


def test_count_with_and_without_collation(store: EntryStore, collection: MagicMock) -> None:
    collection.count_documents.return_value = 4

    assert store.count({"a": 1}) == 4
    collection.count_documents.assert_called_with({"a": 1})

    assert store.count({"a": 1}, collation={"locale": "fr", "strength": 3}) == 4
    collection.count_documents.assert_called_with({"a": 1}, collation={"locale": "fr", "strength": 3})


def test_collection_resolves_configured_names() -> None:
    client = MagicMock()
    config = AppConfig(db_name="dicts", entries_collection="entries")

    store = EntryStore(config=config, client=client)

    assert store.collection is client["dicts"]["entries"]
    client.__getitem__.assert_called_with("dicts")


@patch("backend.src.services.database.MongoClient")
def test_mongo_client_is_cached_and_closed(mock_client_cls) -> None:
    database_module.get_mongo_client.cache_clear()
    try:
        first = database_module.get_mongo_client()
        second = database_module.get_mongo_client()

        assert first is second
        mock_client_cls.assert_called_once()

        database_module.close_mongo_client()

        first.close.assert_called_once()
        assert database_module.get_mongo_client.cache_info().currsize == 0
    finally:
        database_module.get_mongo_client.cache_clear()
