"""Pydantic models for data validation and serialization."""

from .entry import DictionaryEntry, EntryPaths
from .search import (
    MAX_PAGE_LIMIT,
    CountResult,
    EnvelopeStatus,
    MissingSearchTextError,
    ResultEnvelope,
    SearchFailure,
    SearchRequest,
    SearchStrategy,
)

__all__ = [
    "DictionaryEntry",
    "EntryPaths",
    "MAX_PAGE_LIMIT",
    "CountResult",
    "EnvelopeStatus",
    "MissingSearchTextError",
    "ResultEnvelope",
    "SearchFailure",
    "SearchRequest",
    "SearchStrategy",
]
