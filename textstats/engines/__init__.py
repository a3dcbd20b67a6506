"""Boundary analysis engines."""

from ..exceptions import TextStatsConfigError
from .base import (
    BoundaryAnalyzer,
    GraphemeBoundaryAnalyzer,
    ROOT_LOCALE,
    WordBoundaryAnalyzer,
)
from .icu_engine import IcuGraphemeAnalyzer, IcuWordAnalyzer
from .regex_engine import RegexGraphemeAnalyzer, RegexWordAnalyzer

ENGINES = {
    "icu": (IcuWordAnalyzer, IcuGraphemeAnalyzer),
    "regex": (RegexWordAnalyzer, RegexGraphemeAnalyzer),
}


def create_analyzers(
    engine: str = "icu",
) -> tuple[WordBoundaryAnalyzer, GraphemeBoundaryAnalyzer]:
    """Create the (word, grapheme) analyzer pair for an engine name."""
    try:
        word_cls, grapheme_cls = ENGINES[engine]
    except KeyError:
        raise TextStatsConfigError(
            f"Unknown engine: {engine!r}. Available: {', '.join(sorted(ENGINES))}",
            config_key="segmentation.engine",
        ) from None
    return word_cls(), grapheme_cls()


__all__ = [
    "BoundaryAnalyzer",
    "WordBoundaryAnalyzer",
    "GraphemeBoundaryAnalyzer",
    "IcuWordAnalyzer",
    "IcuGraphemeAnalyzer",
    "RegexWordAnalyzer",
    "RegexGraphemeAnalyzer",
    "ENGINES",
    "ROOT_LOCALE",
    "create_analyzers",
]
