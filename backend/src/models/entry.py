"""Dictionary entry document paths."""

from __future__ import annotations

from typing import Any, Dict

# Entries are owned by the import pipeline; the search service only reads them.
DictionaryEntry = Dict[str, Any]


class EntryPaths:
    """Dotted field paths into a stored dictionary entry."""

    DICTIONARY_ID = "dictionaryId"
    MAIN_HEADWORD = "mainHeadWord"
    MAIN_HEADWORD_VALUE = "mainHeadWord.value"
    DEFINITION_OR_GLOSS = "senses.definitionOrGloss"
    DEFINITION_OR_GLOSS_VALUE = "senses.definitionOrGloss.value"
    PART_OF_SPEECH_VALUE = "senses.partOfSpeech.value"
    SEM_DOMS_ABBREV = "semanticDomains.abbreviation"
    SEM_DOMS_ABBREV_VALUE = "semanticDomains.abbreviation.value"
    SEM_DOMS_NAME_VALUE = "semanticDomains.name.value"


__all__ = ["DictionaryEntry", "EntryPaths"]
