"""Base classes and constants for boundary analyzers."""

import re
import unicodedata
from abc import ABC, abstractmethod
from typing import Iterator, Optional

from ..exceptions import SegmentationError, UnsupportedLocale
from ..models import Segmentation, SegmentClass, TextSnapshot


# Root locale (language-neutral rules); every engine supports it
ROOT_LOCALE = "und"

# Tags that mean "use the configured default"
DEFAULT_LOCALE_ALIASES = {"", "default"}

# ICU word-break rule status ranges (ubrk.h, UWordBreak)
WORD_NONE = 0
WORD_NONE_LIMIT = 100
WORD_NUMBER = 100
WORD_LETTER = 200
WORD_KANA = 300
WORD_IDEO = 400
WORD_IDEO_LIMIT = 500

# General categories that make a segment word-like: letters and numbers.
# Kana and ideographs are Lo, so they are covered by the "L" prefix.
WORD_CATEGORY_PREFIXES = ("L", "N")

LANGUAGE_TAG_PATTERN = re.compile(r"^[A-Za-z]{2,8}(?:-[A-Za-z0-9]{1,8})*$")


def normalize_locale_tag(tag: str) -> str:
    """Normalize POSIX-style separators to BCP-47 ("en_US" -> "en-US")."""
    return tag.strip().replace("_", "-")


def is_default_locale(tag: Optional[str]) -> bool:
    return tag is None or tag.strip().lower() in DEFAULT_LOCALE_ALIASES


def is_well_formed_tag(tag: str) -> bool:
    return bool(LANGUAGE_TAG_PATTERN.match(tag))


def classify_rule_status(status: int) -> SegmentClass:
    """Map an ICU word-break rule status to a segment class."""
    if WORD_NONE <= status < WORD_NONE_LIMIT:
        return SegmentClass.NON_WORD
    return SegmentClass.WORD


def classify_by_category(segment_text: str) -> SegmentClass:
    """Classify a segment by the general categories of its characters."""
    for char in segment_text:
        if unicodedata.category(char).startswith(WORD_CATEGORY_PREFIXES):
            return SegmentClass.WORD
    return SegmentClass.NON_WORD


class BoundaryAnalyzer(ABC):
    """Base class for boundary analyzers.

    Subclasses implement ``_scan`` which yields the end offset of every
    segment, in scalar-value units, together with the segment class (or
    None when the analyzer does not classify). ``segment`` wraps the scan
    with locale checking and verifies that the boundaries partition the
    whole snapshot.
    """

    engine = "base"
    mode = "base"
    classifies = False

    def segment(self, snapshot: TextSnapshot, locale: str) -> Segmentation:
        """Segment a snapshot.

        Args:
            snapshot: Validated input text
            locale: BCP-47 language tag (already resolved, not "default")

        Returns:
            Segmentation whose boundaries start at 0 and end at len(snapshot)

        Raises:
            UnsupportedLocale: If this analyzer has no rules for the locale
            SegmentationError: If the scan does not cover the snapshot
        """
        locale = normalize_locale_tag(locale)
        if not self.supports_locale(locale):
            raise UnsupportedLocale(locale, self.engine)

        boundaries = [0]
        classes: Optional[list[SegmentClass]] = [] if self.classifies else None
        for end, segment_class in self._scan(snapshot.text, locale):
            if end <= boundaries[-1]:
                raise SegmentationError(
                    f"{self.engine} {self.mode} boundaries not increasing: "
                    f"{end} after {boundaries[-1]}",
                    mode=self.mode,
                )
            boundaries.append(end)
            if classes is not None:
                classes.append(segment_class)

        if boundaries[-1] != len(snapshot):
            raise SegmentationError(
                f"{self.engine} {self.mode} scan stopped at {boundaries[-1]} "
                f"of {len(snapshot)}",
                mode=self.mode,
            )

        return Segmentation(
            boundaries=tuple(boundaries),
            classes=tuple(classes) if classes is not None else None,
            locale=locale,
        )

    @abstractmethod
    def supports_locale(self, locale: str) -> bool:
        """Check if this analyzer has segmentation rules for a locale."""
        pass

    @abstractmethod
    def _scan(
        self, text: str, locale: str
    ) -> Iterator[tuple[int, Optional[SegmentClass]]]:
        """Yield (end_offset, segment_class) for each segment of text."""
        pass


class WordBoundaryAnalyzer(BoundaryAnalyzer):
    """Word-mode analyzer: every segment is classified word-like or not."""

    mode = "word"
    classifies = True


class GraphemeBoundaryAnalyzer(BoundaryAnalyzer):
    """Grapheme-mode analyzer: every segment is one user-perceived character."""

    mode = "grapheme"
    classifies = False
