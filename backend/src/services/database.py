"""MongoDB access for the dictionary entries collection."""

from __future__ import annotations

from functools import lru_cache
import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence

from pymongo import MongoClient
from pymongo.collection import Collection

from ..models.entry import DictionaryEntry
from .config import AppConfig, get_config

logger = logging.getLogger(__name__)

Filter = Dict[str, Any]
Collation = Dict[str, Any]


@lru_cache(maxsize=1)
def get_mongo_client() -> MongoClient:
    """Return the process-wide client, creating it on first use."""
    config = get_config()
    logger.info("Creating MongoDB client", extra={"db_name": config.db_name})
    return MongoClient(
        config.db_url,
        serverSelectionTimeoutMS=config.server_selection_timeout_ms,
    )


def close_mongo_client() -> None:
    """Close the cached client if one was created."""
    if get_mongo_client.cache_info().currsize:
        get_mongo_client().close()
    get_mongo_client.cache_clear()


def _serialize(documents: Iterable[Dict[str, Any]]) -> List[DictionaryEntry]:
    entries: List[DictionaryEntry] = []
    for document in documents:
        entry = dict(document)
        if "_id" in entry:
            entry["_id"] = str(entry["_id"])
        entries.append(entry)
    return entries


class EntryStore:
    """Read-only find/aggregate/count over dictionary entries."""

    def __init__(
        self,
        config: AppConfig | None = None,
        client: MongoClient | None = None,
        collection: Collection | None = None,
    ) -> None:
        self.config = config or get_config()
        self._client = client
        self._collection = collection

    @property
    def collection(self) -> Collection:
        if self._collection is None:
            client = self._client or get_mongo_client()
            self._collection = client[self.config.db_name][self.config.entries_collection]
        return self._collection

    def find(
        self,
        query: Filter,
        *,
        collation: Optional[Collation] = None,
        skip: int = 0,
        limit: int = 0,
    ) -> List[DictionaryEntry]:
        """Run a find; limit=0 means no limit."""
        cursor = self.collection.find(query, collation=collation)
        if skip:
            cursor = cursor.skip(skip)
        if limit:
            cursor = cursor.limit(limit)
        return _serialize(cursor)

    def aggregate(
        self,
        pipeline: Sequence[Filter],
        *,
        skip: int = 0,
        limit: int = 0,
    ) -> List[DictionaryEntry]:
        """Run a staged pipeline, paginating with trailing $skip/$limit stages."""
        stages = list(pipeline)
        if skip:
            stages.append({"$skip": skip})
        if limit:
            stages.append({"$limit": limit})
        return _serialize(self.collection.aggregate(stages))

    def count(self, query: Filter, *, collation: Optional[Collation] = None) -> int:
        if collation is not None:
            return int(self.collection.count_documents(query, collation=collation))
        return int(self.collection.count_documents(query))


__all__ = [
    "EntryStore",
    "Filter",
    "Collation",
    "get_mongo_client",
    "close_mongo_client",
]
