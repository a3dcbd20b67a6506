"""Tests for the statistics aggregator."""

import logging
from concurrent.futures import ThreadPoolExecutor

import pytest

from textstats.aggregator import StatisticsAggregator, compute_statistics
from textstats.config import Config, SegmentationConfig
from textstats.engines import ENGINES, RegexGraphemeAnalyzer, RegexWordAnalyzer
from textstats.exceptions import InvalidText, TextStatsConfigError, UnsupportedLocale
from textstats.models import StatisticsResult, TextSnapshot

FAMILY = "\U0001F468\u200d\U0001F469\u200d\U0001F467\u200d\U0001F466"


@pytest.fixture(params=sorted(ENGINES))
def aggregator(request):
    return StatisticsAggregator.from_config(SegmentationConfig(engine=request.param))


class TestScenarios:
    """Reference scenarios, checked against every engine."""

    @pytest.mark.parametrize(
        "text,words,graphemes",
        [
            ("", 0, 0),
            ("Hello, world!", 2, 13),
            ("cafe\u0301", 1, 4),
            ("   ", 0, 3),
            ("one two  three\n", 3, 15),
        ],
    )
    def test_counts(self, aggregator, text, words, graphemes):
        result = aggregator.compute(TextSnapshot(text))
        assert result == StatisticsResult(word_count=words, grapheme_count=graphemes)

    def test_family_emoji_is_one_grapheme(self, aggregator):
        result = aggregator.compute(TextSnapshot(FAMILY))
        assert len(FAMILY) > 1
        assert result.grapheme_count == 1

    def test_unsupported_locale_falls_back_to_default(self, aggregator, caplog):
        snapshot = TextSnapshot("Hello, world!")
        with caplog.at_level(logging.WARNING, logger="textstats.aggregator"):
            fallback = aggregator.compute(snapshot, "not a locale!")
        assert fallback == aggregator.compute(snapshot, "default")
        assert "falling back" in caplog.text

    def test_idempotent(self, aggregator):
        snapshot = TextSnapshot("Idempotent: the same input, the same result.")
        assert aggregator.compute(snapshot, "en-US") == aggregator.compute(
            snapshot, "en-US"
        )

    def test_concurrent_compute_matches_sequential(self, aggregator):
        snapshots = [
            TextSnapshot(text)
            for text in ["Hello, world!", "café au lait", FAMILY, "", "a b c " * 50]
        ] * 4
        expected = [aggregator.compute(snapshot) for snapshot in snapshots]

        with ThreadPoolExecutor(max_workers=4) as executor:
            results = list(executor.map(aggregator.compute, snapshots))

        assert results == expected


class TestLocaleResolution:
    """Tests for default locale handling."""

    def test_default_aliases_resolve_to_configured_default(self):
        aggregator = StatisticsAggregator.from_config(
            SegmentationConfig(default_locale="fr-FR")
        )
        assert aggregator.resolve_locale(None) == "fr-FR"
        assert aggregator.resolve_locale("") == "fr-FR"
        assert aggregator.resolve_locale("default") == "fr-FR"
        assert aggregator.resolve_locale("de_DE") == "de-DE"

    @pytest.mark.parametrize("locale", ["", "default", " Default "])
    def test_default_locale_must_be_concrete(self, locale):
        with pytest.raises(TextStatsConfigError) as exc_info:
            StatisticsAggregator(
                RegexWordAnalyzer(), RegexGraphemeAnalyzer(), default_locale=locale
            )
        assert exc_info.value.config_key == "segmentation.default_locale"

    def test_unsupported_default_falls_back_to_root(self):
        class PickyWordAnalyzer(RegexWordAnalyzer):
            def supports_locale(self, locale):
                return locale == "und"

        aggregator = StatisticsAggregator(
            PickyWordAnalyzer(), RegexGraphemeAnalyzer(), default_locale="en-US"
        )
        result = aggregator.compute(TextSnapshot("two words"), "fr")
        assert result == StatisticsResult(word_count=2, grapheme_count=9)

    def test_root_unsupported_propagates(self):
        class NoLocaleAnalyzer(RegexWordAnalyzer):
            def supports_locale(self, locale):
                return False

        aggregator = StatisticsAggregator(NoLocaleAnalyzer(), RegexGraphemeAnalyzer())
        with pytest.raises(UnsupportedLocale):
            aggregator.compute(TextSnapshot("text"))

    def test_from_full_config(self):
        config = Config(segmentation=SegmentationConfig(engine="regex"))
        aggregator = StatisticsAggregator.from_config(config)
        assert aggregator.word_analyzer.engine == "regex"
        assert aggregator.grapheme_analyzer.engine == "regex"

    def test_defaults_to_icu(self):
        aggregator = StatisticsAggregator()
        assert aggregator.word_analyzer.engine == "icu"
        assert aggregator.default_locale == "en-US"


class TestComputeStatistics:
    """Tests for the convenience entry point."""

    def test_str_input(self):
        assert compute_statistics("Hello, world!") == StatisticsResult(2, 13)

    def test_bytes_input(self):
        assert compute_statistics("Gr\u00fc\u00dfe".encode("utf-8")) == StatisticsResult(1, 5)

    def test_snapshot_input(self):
        assert compute_statistics(TextSnapshot("   ")) == StatisticsResult(0, 3)

    def test_invalid_bytes(self):
        with pytest.raises(InvalidText):
            compute_statistics(b"\xff\xfe")

    def test_lone_surrogate(self):
        with pytest.raises(InvalidText):
            compute_statistics("broken \udc80 text")

    def test_config_selects_engine(self):
        config = SegmentationConfig(engine="regex")
        assert compute_statistics("a b c", config=config) == StatisticsResult(3, 5)

    def test_unsupported_locale_matches_default(self):
        text = "Locale fallback keeps counting."
        assert compute_statistics(text, "xx-!!") == compute_statistics(text, "default")
