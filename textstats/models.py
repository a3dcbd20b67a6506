"""Data models for text segmentation and statistics."""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Optional

from .exceptions import InvalidText


@dataclass(frozen=True)
class TextSnapshot:
    """Immutable, validated document text at one point in time.

    Offsets into a snapshot are counted in Unicode scalar values, which is
    what indexing a Python ``str`` already does. The only way a ``str`` can
    fail to be valid Unicode is by holding a lone surrogate, so that is the
    one check made here.
    """

    text: str

    def __post_init__(self):
        if not isinstance(self.text, str):
            raise TypeError(
                f"TextSnapshot expects str, got {type(self.text).__name__}"
            )
        try:
            self.text.encode("utf-8")
        except UnicodeEncodeError as e:
            raise InvalidText(
                f"Lone surrogate U+{ord(self.text[e.start]):04X} at offset {e.start}",
                position=e.start,
            ) from e

    @classmethod
    def from_bytes(cls, data: bytes, encoding: str = "utf-8") -> "TextSnapshot":
        """Decode raw bytes strictly; malformed or truncated input is rejected."""
        try:
            text = data.decode(encoding)
        except UnicodeDecodeError as e:
            raise InvalidText(
                f"Cannot decode {encoding} input at byte {e.start}: {e.reason}",
                position=e.start,
            ) from e
        return cls(text)

    @classmethod
    def from_code_points(cls, code_points: Iterable[int]) -> "TextSnapshot":
        """Build a snapshot from integer code points."""
        chars = []
        for index, cp in enumerate(code_points):
            try:
                chars.append(chr(cp))
            except (ValueError, OverflowError) as e:
                raise InvalidText(
                    f"Code point {cp!r} at offset {index} is out of range",
                    position=index,
                ) from e
        return cls("".join(chars))

    def __len__(self) -> int:
        return len(self.text)


class SegmentClass(Enum):
    """Classification of a word-mode segment."""

    WORD = "word"
    NON_WORD = "non_word"


@dataclass(frozen=True)
class Segment:
    """A span between two adjacent boundaries."""

    start: int
    end: int
    segment_class: Optional[SegmentClass] = None  # None in grapheme mode

    @property
    def is_word(self) -> bool:
        return self.segment_class is SegmentClass.WORD


@dataclass(frozen=True)
class Segmentation:
    """Boundaries produced by one analyzer pass over a snapshot."""

    boundaries: tuple[int, ...]
    classes: Optional[tuple[SegmentClass, ...]] = None
    locale: str = ""

    @property
    def segment_count(self) -> int:
        return len(self.boundaries) - 1

    @property
    def word_count(self) -> int:
        """Number of word-like segments (0 for grapheme segmentations)."""
        if self.classes is None:
            return 0
        return sum(1 for c in self.classes if c is SegmentClass.WORD)

    def segments(self) -> Iterator[Segment]:
        for i in range(self.segment_count):
            segment_class = self.classes[i] if self.classes is not None else None
            yield Segment(self.boundaries[i], self.boundaries[i + 1], segment_class)


@dataclass(frozen=True)
class StatisticsResult:
    """Word and grapheme counts for one snapshot."""

    word_count: int
    grapheme_count: int

    def as_dict(self) -> dict:
        return {"word_count": self.word_count, "grapheme_count": self.grapheme_count}


@dataclass
class FileStatistics:
    """Statistics row for one input file."""

    path: str
    word_count: Optional[int] = None
    grapheme_count: Optional[int] = None
    scalar_count: Optional[int] = None
    error: Optional[str] = None


def format_status(result: StatisticsResult) -> str:
    """Render a result the way the editor status bar shows it."""
    return f"Words: {result.word_count} | Characters: {result.grapheme_count}"
