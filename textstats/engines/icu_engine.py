"""ICU-based boundary analyzers (locale-aware, dictionary breaking)."""

from functools import lru_cache
from typing import Iterator, Optional

import icu

from ..models import SegmentClass
from .base import (
    GraphemeBoundaryAnalyzer,
    ROOT_LOCALE,
    WordBoundaryAnalyzer,
    classify_rule_status,
    is_well_formed_tag,
)


@lru_cache(maxsize=1)
def _iso_languages() -> frozenset:
    return frozenset(icu.Locale.getISOLanguages())


def icu_supports_locale(tag: str) -> bool:
    """Check that a tag parses and names a language ICU knows about."""
    if tag == ROOT_LOCALE:
        return True
    if not is_well_formed_tag(tag):
        return False
    try:
        locale = icu.Locale.forLanguageTag(tag)
    except icu.ICUError:
        return False
    return locale.getLanguage() in _iso_languages()


def to_icu_locale(tag: str) -> "icu.Locale":
    if tag == ROOT_LOCALE:
        return icu.Locale("")
    return icu.Locale.forLanguageTag(tag)


def utf16_to_scalar_offsets(text: str) -> Optional[list[int]]:
    """Map UTF-16 code unit offsets to scalar-value offsets.

    ICU reports boundaries in UTF-16 units, so every character outside the
    BMP shifts later offsets by one. Returns None when the text is
    BMP-only and the offsets already agree.
    """
    if all(ord(char) <= 0xFFFF for char in text):
        return None
    offsets = []
    for index, char in enumerate(text):
        offsets.append(index)
        if ord(char) > 0xFFFF:
            offsets.append(index)  # trailing surrogate, never a boundary
    offsets.append(len(text))
    return offsets


def _iterate_boundaries(iterator, text: str) -> Iterator[int]:
    """Yield each boundary after 0, as scalar-value offsets."""
    utext = icu.UnicodeString(text)
    iterator.setText(utext)
    offsets = utf16_to_scalar_offsets(text)
    iterator.first()
    for end in iterator:
        yield end if offsets is None else offsets[end]


class IcuWordAnalyzer(WordBoundaryAnalyzer):
    """Word analyzer backed by ICU's word BreakIterator and rule status."""

    engine = "icu"

    def supports_locale(self, locale: str) -> bool:
        return icu_supports_locale(locale)

    def _scan(self, text: str, locale: str) -> Iterator[tuple[int, SegmentClass]]:
        iterator = icu.BreakIterator.createWordInstance(to_icu_locale(locale))
        for end in _iterate_boundaries(iterator, text):
            # Rule status describes the boundary just returned, i.e. the
            # segment that ends here.
            yield end, classify_rule_status(iterator.getRuleStatus())


class IcuGraphemeAnalyzer(GraphemeBoundaryAnalyzer):
    """Grapheme analyzer backed by ICU's character BreakIterator."""

    engine = "icu"

    def supports_locale(self, locale: str) -> bool:
        return icu_supports_locale(locale)

    def _scan(self, text: str, locale: str) -> Iterator[tuple[int, None]]:
        iterator = icu.BreakIterator.createCharacterInstance(to_icu_locale(locale))
        for end in _iterate_boundaries(iterator, text):
            yield end, None
