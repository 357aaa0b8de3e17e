"""
dimensions/classifier.py

Dictionary-based tagging of a keyword into one semantic dimension.
"""

from __future__ import annotations

from functools import lru_cache

from dimensions.vocabulary import DEFAULT_DIMENSION_VOCABULARY, Dimension, DimensionVocabulary


class DimensionClassifier:
    """
    First-match-wins classifier over an ordered vocabulary.

    A dimension matches when the keyword contains one of its triggers or a
    trigger contains the keyword (case-insensitive). Blank keywords and
    keywords matching nothing are ``other``.
    """

    def __init__(self, vocabulary: DimensionVocabulary = DEFAULT_DIMENSION_VOCABULARY) -> None:
        self._entries = tuple(
            (dimension, tuple(trigger.casefold() for trigger in triggers if trigger.strip()))
            for dimension, triggers in vocabulary.entries
        )

    def classify(self, keyword: str | None) -> str:
        needle = (keyword or "").strip().casefold()
        if not needle:
            return Dimension.OTHER
        for dimension, triggers in self._entries:
            for trigger in triggers:
                if trigger in needle or needle in trigger:
                    return dimension
        return Dimension.OTHER


@lru_cache(maxsize=1)
def get_dimension_classifier() -> DimensionClassifier:
    return DimensionClassifier()


def classify(keyword: str | None) -> str:
    return get_dimension_classifier().classify(keyword)
