"""Aggregation of word and grapheme counts."""

import logging
from typing import Optional, Union

from .config import Config, SegmentationConfig
from .engines import (
    GraphemeBoundaryAnalyzer,
    ROOT_LOCALE,
    WordBoundaryAnalyzer,
    create_analyzers,
)
from .engines.base import is_default_locale, normalize_locale_tag
from .exceptions import TextStatsConfigError, UnsupportedLocale
from .models import Segmentation, StatisticsResult, TextSnapshot

logger = logging.getLogger(__name__)


class StatisticsAggregator:
    """
    Computes word and grapheme counts for a text snapshot.

    Holds no per-call state: the analyzers are stateless and the default
    locale is fixed at construction, so one aggregator can serve many
    threads.
    """

    def __init__(
        self,
        word_analyzer: Optional[WordBoundaryAnalyzer] = None,
        grapheme_analyzer: Optional[GraphemeBoundaryAnalyzer] = None,
        default_locale: str = "en-US",
    ):
        """
        Initialize the aggregator.

        Args:
            word_analyzer: Word-mode analyzer (ICU if omitted).
            grapheme_analyzer: Grapheme-mode analyzer (ICU if omitted).
            default_locale: Locale used for "default" and as the fallback
                for unsupported locales.
        """
        if is_default_locale(default_locale):
            raise TextStatsConfigError(
                "default_locale must be a concrete language tag",
                config_key="segmentation.default_locale",
            )
        if word_analyzer is None or grapheme_analyzer is None:
            default_word, default_grapheme = create_analyzers("icu")
            word_analyzer = word_analyzer or default_word
            grapheme_analyzer = grapheme_analyzer or default_grapheme
        self.word_analyzer = word_analyzer
        self.grapheme_analyzer = grapheme_analyzer
        self.default_locale = normalize_locale_tag(default_locale)

    @classmethod
    def from_config(
        cls, config: Optional[Union[Config, SegmentationConfig]] = None
    ) -> "StatisticsAggregator":
        """Build an aggregator from a Config or SegmentationConfig."""
        if config is None:
            config = SegmentationConfig()
        elif isinstance(config, Config):
            config = config.segmentation
        word_analyzer, grapheme_analyzer = create_analyzers(config.engine)
        return cls(word_analyzer, grapheme_analyzer, config.default_locale)

    def resolve_locale(self, locale: Optional[str]) -> str:
        """Replace "default"/empty/None with the configured default."""
        if is_default_locale(locale):
            return self.default_locale
        return normalize_locale_tag(locale)

    def _fallback_chain(self, locale: str) -> list[str]:
        chain = [locale]
        for candidate in (self.default_locale, ROOT_LOCALE):
            if candidate not in chain:
                chain.append(candidate)
        return chain

    def _segment(self, analyzer, snapshot: TextSnapshot, locale: str) -> Segmentation:
        """Run one analyzer, substituting fallback locales when unsupported."""
        chain = self._fallback_chain(locale)
        for candidate, fallback in zip(chain, chain[1:]):
            try:
                return analyzer.segment(snapshot, candidate)
            except UnsupportedLocale:
                logger.warning(
                    f"Locale {candidate!r} not supported by {analyzer.engine} "
                    f"{analyzer.mode} analyzer, falling back to {fallback!r}"
                )
        # Root locale is supported by every engine
        return analyzer.segment(snapshot, chain[-1])

    def compute(
        self, snapshot: TextSnapshot, locale: Optional[str] = None
    ) -> StatisticsResult:
        """
        Compute statistics for a snapshot.

        Args:
            snapshot: Validated text.
            locale: BCP-47 tag, or None/""/"default" for the configured default.

        Returns:
            StatisticsResult with both counts.
        """
        locale = self.resolve_locale(locale)

        words = self._segment(self.word_analyzer, snapshot, locale)
        graphemes = self._segment(self.grapheme_analyzer, snapshot, locale)

        grapheme_count = graphemes.segment_count if len(snapshot) else 0
        result = StatisticsResult(
            word_count=words.word_count, grapheme_count=grapheme_count
        )
        logger.debug(
            f"Computed {result.word_count} words / {result.grapheme_count} graphemes "
            f"for {len(snapshot)} scalar values (locale={words.locale})"
        )
        return result


def compute_statistics(
    text: Union[str, bytes, TextSnapshot],
    locale: Optional[str] = None,
    config: Optional[Union[Config, SegmentationConfig]] = None,
) -> StatisticsResult:
    """
    Compute word and grapheme counts for text.

    Args:
        text: A str, UTF-8 bytes or an existing TextSnapshot.
        locale: BCP-47 tag, or None/""/"default" for the configured default.
        config: Optional configuration selecting engine and default locale.

    Returns:
        StatisticsResult

    Raises:
        InvalidText: If the text is not valid Unicode.
    """
    if isinstance(text, TextSnapshot):
        snapshot = text
    elif isinstance(text, bytes):
        snapshot = TextSnapshot.from_bytes(text)
    else:
        snapshot = TextSnapshot(text)
    return StatisticsAggregator.from_config(config).compute(snapshot, locale)
