"""HTTP API routes for dictionary entry search."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from ...models.search import EnvelopeStatus, ResultEnvelope, SearchRequest
from ...services.search_planner import SearchPlanner

router = APIRouter()

ENVELOPE_STATUS_CODES = {
    EnvelopeStatus.SUCCESS: status.HTTP_200_OK,
    EnvelopeStatus.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    EnvelopeStatus.FAILURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def get_search_planner() -> SearchPlanner:
    """Planner backed by the shared entry store."""
    return SearchPlanner()


def envelope_response(envelope: ResultEnvelope) -> JSONResponse:
    """Translate a result envelope into an HTTP response."""
    if envelope.status is EnvelopeStatus.FAILURE:
        content = {
            "errorType": envelope.payload.error_type,
            "errorMessage": envelope.payload.error_message,
        }
    else:
        content = jsonable_encoder(envelope.payload)
    return JSONResponse(
        status_code=ENVELOPE_STATUS_CODES[envelope.status], content=content
    )


@router.get("/search/entry/{dictionary_id}")
async def search_entries(
    dictionary_id: str,
    text: Optional[str] = Query(None),
    lang: Optional[str] = Query(None, description="Language to search through"),
    main_lang: Optional[str] = Query(
        None, alias="mainLang", description="Main language of the dictionary"
    ),
    part_of_speech: Optional[str] = Query(None, alias="partOfSpeech"),
    match_partial: Optional[str] = Query(None, alias="matchPartial"),
    match_accents: Optional[str] = Query(None, alias="matchAccents"),
    sem_dom_abbrev: Optional[str] = Query(None, alias="semDomAbbrev"),
    search_sem_doms: Optional[str] = Query(None, alias="searchSemDoms"),
    count_total_only: Optional[str] = Query(None, alias="countTotalOnly"),
    page_number: Optional[str] = Query(None, alias="pageNumber"),
    page_limit: Optional[str] = Query(None, alias="pageLimit"),
    stemming_language: Optional[str] = Query(None, alias="stemmingLanguage"),
    planner: SearchPlanner = Depends(get_search_planner),
):
    """
    Search a dictionary's entries by text, partial match, or semantic domain.

    A missing text parameter raises MissingSearchTextError, which the shared
    error handlers turn into a 400.
    """
    request = SearchRequest.from_query_params(
        dictionary_id,
        {
            "text": text,
            "lang": lang,
            "mainLang": main_lang,
            "partOfSpeech": part_of_speech,
            "matchPartial": match_partial,
            "matchAccents": match_accents,
            "semDomAbbrev": sem_dom_abbrev,
            "searchSemDoms": search_sem_doms,
            "countTotalOnly": count_total_only,
            "pageNumber": page_number,
            "pageLimit": page_limit,
            "stemmingLanguage": stemming_language,
        },
    )
    return envelope_response(planner.search(request))


__all__ = ["router", "get_search_planner", "envelope_response"]
