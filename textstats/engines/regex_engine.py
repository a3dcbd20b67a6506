"""Regex-based boundary analyzers (default Unicode rules, no tailoring)."""

from typing import Iterator

import regex

from ..models import SegmentClass
from .base import (
    GraphemeBoundaryAnalyzer,
    ROOT_LOCALE,
    WordBoundaryAnalyzer,
    classify_by_category,
    is_well_formed_tag,
)


GRAPHEME_PATTERN = regex.compile(r"\X")

# With the WORD flag, \b follows the default Unicode word boundary rules
WORD_BOUNDARY_PATTERN = regex.compile(r"\b", flags=regex.WORD)


def _regex_supports_locale(tag: str) -> bool:
    # Rules are locale-independent, so any well-formed tag gets the defaults
    return tag == ROOT_LOCALE or is_well_formed_tag(tag)


class RegexWordAnalyzer(WordBoundaryAnalyzer):
    """
    Word analyzer using default word boundaries and category classification.

    The default rules have no dictionary, so scripts written without spaces
    (Thai, Lao, Khmer, Japanese, Chinese) break into small clusters rather
    than dictionary words. Tags such as "th" or "ja" are still accepted and
    get the default rules: "สวัสดีครับ" counts 7 words here and 2 with ICU.
    """

    engine = "regex"

    def supports_locale(self, locale: str) -> bool:
        return _regex_supports_locale(locale)

    def _scan(self, text: str, locale: str) -> Iterator[tuple[int, SegmentClass]]:
        if not text:
            return
        ends = {m.start() for m in WORD_BOUNDARY_PATTERN.finditer(text)}
        ends.discard(0)
        ends.add(len(text))

        start = 0
        for end in sorted(ends):
            yield end, classify_by_category(text[start:end])
            start = end


class RegexGraphemeAnalyzer(GraphemeBoundaryAnalyzer):
    """Grapheme analyzer using extended grapheme clusters (\\X)."""

    engine = "regex"

    def supports_locale(self, locale: str) -> bool:
        return _regex_supports_locale(locale)

    def _scan(self, text: str, locale: str) -> Iterator[tuple[int, None]]:
        for match in GRAPHEME_PATTERN.finditer(text):
            yield match.end(), None
