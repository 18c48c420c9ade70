"""Search request/response models."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

MAX_PAGE_LIMIT = 100
DEFAULT_STEMMING_LANGUAGE = "none"


class MissingSearchTextError(ValueError):
    """Raised when a search is requested without any text."""

    def __init__(self, message: str = "Search text must be specified."):
        self.message = message
        super().__init__(self.message)


class SearchStrategy(str, Enum):
    """Query construction path chosen for a single request."""

    SEMANTIC_DOMAIN = "semantic_domain"
    PARTIAL_MATCH = "partial_match"
    FULL_TEXT_SCOPED = "full_text_scoped"
    FULL_TEXT_UNSCOPED = "full_text_unscoped"


def _flag(value: Optional[str]) -> bool:
    return value == "1"


def _optional(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value if value.strip() else None


def _clamp_int(value: Any, default: int, low: int, high: Optional[int] = None) -> int:
    if value is None or value == "":
        number = default
    else:
        try:
            number = int(value)
        except (TypeError, ValueError):
            number = default
    number = max(number, low)
    if high is not None:
        number = min(number, high)
    return number


class SearchRequest(BaseModel):
    """Normalized dictionary entry search parameters."""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "dictionary_id": "moore",
                "text": "cat",
                "lang": "en",
                "main_lang": "mos",
                "match_partial": True,
                "page_number": 1,
                "page_limit": 20,
            }
        },
    )

    dictionary_id: str = Field(..., min_length=1)
    text: str = Field(..., min_length=1)
    lang: Optional[str] = Field(None, description="Restrict matching to this language")
    main_lang: Optional[str] = Field(
        None, description="Main headword language of the dictionary"
    )
    part_of_speech: Optional[str] = None
    match_partial: bool = False
    match_accents: bool = False
    search_sem_doms: bool = False
    sem_dom_abbrev: Optional[str] = None
    count_total_only: bool = False
    page_number: int = Field(1, ge=1)
    page_limit: int = Field(MAX_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT)
    stemming_language: str = Field(
        DEFAULT_STEMMING_LANGUAGE,
        description="Text index stemming language; 'none' disables stemming",
    )

    @classmethod
    def from_query_params(
        cls, dictionary_id: str, params: Mapping[str, Optional[str]]
    ) -> "SearchRequest":
        """
        Build a request from raw query string values.

        Boolean flags are enabled only by the value "1". Page number and page
        limit are clamped into range instead of being rejected.

        Raises MissingSearchTextError when no search text is supplied.
        """
        text = params.get("text")
        if not text or not text.strip():
            raise MissingSearchTextError()

        return cls(
            dictionary_id=dictionary_id,
            text=text,
            lang=_optional(params.get("lang")),
            main_lang=_optional(params.get("mainLang")),
            part_of_speech=_optional(params.get("partOfSpeech")),
            match_partial=_flag(params.get("matchPartial")),
            match_accents=_flag(params.get("matchAccents")),
            search_sem_doms=_flag(params.get("searchSemDoms")),
            sem_dom_abbrev=_optional(params.get("semDomAbbrev")),
            count_total_only=_flag(params.get("countTotalOnly")),
            page_number=_clamp_int(params.get("pageNumber"), 1, 1),
            page_limit=_clamp_int(
                params.get("pageLimit"), MAX_PAGE_LIMIT, 1, MAX_PAGE_LIMIT
            ),
            stemming_language=_optional(params.get("stemmingLanguage"))
            or DEFAULT_STEMMING_LANGUAGE,
        )


class CountResult(BaseModel):
    """Payload returned for count-only searches."""

    count: int = Field(..., ge=0)


class SearchFailure(BaseModel):
    """Payload describing a store error."""

    error_type: str
    error_message: str


class EnvelopeStatus(str, Enum):
    SUCCESS = "success"
    NOT_FOUND = "not_found"
    FAILURE = "failure"


class ResultEnvelope(BaseModel):
    """Uniform search outcome: success, not found, or failure."""

    model_config = ConfigDict(frozen=True)

    status: EnvelopeStatus
    payload: Union[CountResult, SearchFailure, List[Dict[str, Any]]]

    @classmethod
    def success(
        cls, payload: Union[CountResult, List[Dict[str, Any]]]
    ) -> "ResultEnvelope":
        return cls(status=EnvelopeStatus.SUCCESS, payload=payload)

    @classmethod
    def not_found(cls) -> "ResultEnvelope":
        # Placeholder element keeps the body a list; callers ignore its contents.
        return cls(status=EnvelopeStatus.NOT_FOUND, payload=[{}])

    @classmethod
    def failure(cls, exc: BaseException) -> "ResultEnvelope":
        return cls(
            status=EnvelopeStatus.FAILURE,
            payload=SearchFailure(
                error_type=type(exc).__name__, error_message=str(exc)
            ),
        )

    @property
    def is_success(self) -> bool:
        return self.status is EnvelopeStatus.SUCCESS


__all__ = [
    "MAX_PAGE_LIMIT",
    "DEFAULT_STEMMING_LANGUAGE",
    "MissingSearchTextError",
    "SearchStrategy",
    "SearchRequest",
    "CountResult",
    "SearchFailure",
    "EnvelopeStatus",
    "ResultEnvelope",
]
