"""Strategy selection and query construction for dictionary entry search."""

from __future__ import annotations

from dataclasses import dataclass
import json
import logging
import re
from typing import Any, Dict, List, Optional

from ..models.entry import EntryPaths
from ..models.search import CountResult, ResultEnvelope, SearchRequest, SearchStrategy
from .database import Collation, EntryStore, Filter

logger = logging.getLogger(__name__)

COLLATION_LOCALE_DEFAULT = "en"
# ICU strength 1 compares base letters only; 3 also compares accents and case.
COLLATION_STRENGTH_CASE_INSENSITIVE = 1
COLLATION_STRENGTH_SENSITIVE = 3

# Locales accepted by MongoDB collation.
COLLATION_LOCALES = frozenset(
    {
        "af", "ar", "as", "az", "be", "bg", "bn", "bs", "ca", "chr", "cs",
        "cy", "da", "de", "de_AT", "dsb", "ee", "el", "en", "en_US",
        "en_US_POSIX", "eo", "es", "et", "fa", "fa_AF", "fi", "fil", "fo",
        "fr", "fr_CA", "ga", "gl", "gu", "ha", "haw", "he", "hi", "hr",
        "hsb", "hu", "hy", "id", "ig", "is", "it", "ja", "ka", "kk", "kl",
        "km", "kn", "ko", "kok", "ky", "lb", "lkt", "ln", "lt", "lv", "mk",
        "ml", "mn", "mr", "ms", "mt", "my", "nb", "ne", "nl", "nn", "om",
        "or", "pa", "pl", "ps", "pt", "ro", "ru", "se", "si", "sk", "sl",
        "smn", "sq", "sr", "sr_Latn", "sv", "sw", "ta", "te", "th", "to",
        "tr", "uk", "ur", "vi", "wae", "yi", "yo", "zh", "zh_Hant", "zu",
    }
)


def classify_strategy(request: SearchRequest) -> SearchStrategy:
    """Pick the single strategy for a request; semantic domains win over everything."""
    if request.search_sem_doms:
        return SearchStrategy.SEMANTIC_DOMAIN
    if request.match_partial:
        return SearchStrategy.PARTIAL_MATCH
    if request.lang:
        return SearchStrategy.FULL_TEXT_SCOPED
    return SearchStrategy.FULL_TEXT_UNSCOPED


def page_skip(page_number: int, page_limit: int) -> int:
    return (page_number - 1) * page_limit


def build_abbreviation_matcher(abbreviation: str) -> Dict[str, Any]:
    """
    Match an abbreviation exactly or any dotted extension of it.

    "1" matches "1", "1.2" and "1.2.3" but not "10".
    """
    return {
        "$in": [abbreviation, re.compile(rf"^{re.escape(abbreviation)}\.")],
    }


def build_semantic_domain_filter(request: SearchRequest) -> Filter:
    query: Filter = {EntryPaths.DICTIONARY_ID: request.dictionary_id}
    if request.sem_dom_abbrev:
        matcher = build_abbreviation_matcher(request.sem_dom_abbrev)
        if request.lang:
            query[EntryPaths.SEM_DOMS_ABBREV] = {
                "$elemMatch": {"lang": request.lang, "value": matcher}
            }
        else:
            query[EntryPaths.SEM_DOMS_ABBREV_VALUE] = matcher
    else:
        query[EntryPaths.SEM_DOMS_NAME_VALUE] = request.text
    return query


def build_text_regex(text: str) -> Dict[str, str]:
    """Case-insensitive literal substring match."""
    return {"$regex": re.escape(text), "$options": "i"}


def build_primary_filter(request: SearchRequest) -> Filter:
    query: Filter = {EntryPaths.DICTIONARY_ID: request.dictionary_id}
    if request.part_of_speech:
        query[EntryPaths.PART_OF_SPEECH_VALUE] = request.part_of_speech
    return query


def build_language_filter(request: SearchRequest) -> Filter:
    """
    Select headword or definition fields for the text match.

    Without a language both field groups are searched regardless of tag.
    With a language the match must hold within one tagged value, on the
    headword when the language is the dictionary's main language and on
    definitions/glosses otherwise.
    """
    regex = build_text_regex(request.text)
    if not request.lang:
        return {
            "$or": [
                {EntryPaths.MAIN_HEADWORD_VALUE: regex},
                {EntryPaths.DEFINITION_OR_GLOSS_VALUE: regex},
            ]
        }

    if request.main_lang and request.main_lang == request.lang:
        field = EntryPaths.MAIN_HEADWORD
    else:
        field = EntryPaths.DEFINITION_OR_GLOSS
    return {field: {"$elemMatch": {"lang": request.lang, "value": regex}}}


def build_partial_match_filter(request: SearchRequest) -> Filter:
    return {"$and": [build_primary_filter(request), build_language_filter(request)]}


def build_collation(request: SearchRequest) -> Collation:
    locale = COLLATION_LOCALE_DEFAULT
    if request.lang and request.lang in COLLATION_LOCALES:
        locale = request.lang
    strength = COLLATION_STRENGTH_CASE_INSENSITIVE
    if request.match_accents:
        strength = COLLATION_STRENGTH_SENSITIVE
    return {"locale": locale, "strength": strength}


def build_text_search_filter(request: SearchRequest) -> Filter:
    """
    Full-text phrase search.

    Stemming follows request.stemming_language, which defaults to "none" so
    the text index never stems unless the caller asks for one language for
    every document.
    """
    # $text has no escape syntax; a stray quote would split the phrase.
    phrase = " ".join(request.text.replace('"', " ").split())
    query = build_primary_filter(request)
    query["$text"] = {
        "$search": f'"{phrase}"',
        "$language": request.stemming_language,
        "$diacriticSensitive": request.match_accents,
    }
    return query


def build_full_text_pipeline(request: SearchRequest) -> List[Filter]:
    """Text match first, then the per-language field match over its output."""
    return [
        {"$match": build_text_search_filter(request)},
        {"$match": build_language_filter(request)},
    ]


@dataclass(frozen=True)
class SearchPlan:
    """Store-ready query for one request."""

    strategy: SearchStrategy
    filter: Optional[Filter] = None
    collation: Optional[Collation] = None
    pipeline: Optional[List[Filter]] = None

    @property
    def is_staged(self) -> bool:
        return self.pipeline is not None

    def describe(self) -> str:
        body: Any = self.pipeline if self.is_staged else self.filter
        return json.dumps(body, default=str, ensure_ascii=False)


def plan_search(request: SearchRequest) -> SearchPlan:
    strategy = classify_strategy(request)
    if strategy is SearchStrategy.SEMANTIC_DOMAIN:
        return SearchPlan(strategy, filter=build_semantic_domain_filter(request))
    if strategy is SearchStrategy.PARTIAL_MATCH:
        return SearchPlan(
            strategy,
            filter=build_partial_match_filter(request),
            collation=build_collation(request),
        )
    if strategy is SearchStrategy.FULL_TEXT_SCOPED:
        return SearchPlan(strategy, pipeline=build_full_text_pipeline(request))
    return SearchPlan(strategy, filter=build_text_search_filter(request))


class SearchPlanner:
    """Execute dictionary entry searches against the entry store."""

    def __init__(self, store: EntryStore | None = None) -> None:
        self.store = store or EntryStore()

    def search(self, request: SearchRequest) -> ResultEnvelope:
        """
        Plan and run a search, mapping the outcome to a result envelope.

        Store errors are not retried; they become a failure envelope.
        """
        try:
            plan = plan_search(request)
            logger.info(
                "Searching dictionary entries",
                extra={
                    "dictionary_id": request.dictionary_id,
                    "strategy": plan.strategy.value,
                    "collation": plan.collation,
                    "query": plan.describe(),
                },
            )
            if request.count_total_only:
                return ResultEnvelope.success(CountResult(count=self._count(plan)))
            entries = self._fetch(plan, request)
        except Exception as exc:
            logger.exception(
                "Dictionary entry search failed",
                extra={"dictionary_id": request.dictionary_id},
            )
            return ResultEnvelope.failure(exc)

        if not entries:
            return ResultEnvelope.not_found()
        return ResultEnvelope.success(entries)

    def _count(self, plan: SearchPlan) -> int:
        if plan.is_staged:
            # count_documents cannot take a pipeline, so the whole result is read.
            return len(self.store.aggregate(plan.pipeline))
        # Under partial matching this is an upper bound on the paged total, not exact.
        return self.store.count(plan.filter, collation=plan.collation)

    def _fetch(self, plan: SearchPlan, request: SearchRequest) -> List[Dict[str, Any]]:
        skip = page_skip(request.page_number, request.page_limit)
        if plan.is_staged:
            return self.store.aggregate(plan.pipeline, skip=skip, limit=request.page_limit)
        return self.store.find(
            plan.filter, collation=plan.collation, skip=skip, limit=request.page_limit
        )


__all__ = [
    "SearchPlan",
    "SearchPlanner",
    "classify_strategy",
    "page_skip",
    "plan_search",
    "build_abbreviation_matcher",
    "build_semantic_domain_filter",
    "build_text_regex",
    "build_primary_filter",
    "build_language_filter",
    "build_partial_match_filter",
    "build_collation",
    "build_text_search_filter",
    "build_full_text_pipeline",
]
