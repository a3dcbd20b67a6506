"""textstats - Unicode word and grapheme counts for editable text."""

__version__ = "0.1.0"

from .aggregator import StatisticsAggregator, compute_statistics
from .config import Config, SegmentationConfig, get_default_config, load_config
from .exceptions import (
    InvalidText,
    SegmentationError,
    TextStatsConfigError,
    TextStatsError,
    UnsupportedLocale,
)
from .models import (
    Segment,
    SegmentClass,
    Segmentation,
    StatisticsResult,
    TextSnapshot,
    format_status,
)
from .worker import StatisticsWorker

__all__ = [
    "StatisticsAggregator",
    "compute_statistics",
    "StatisticsWorker",
    "Config",
    "SegmentationConfig",
    "load_config",
    "get_default_config",
    "TextSnapshot",
    "Segment",
    "SegmentClass",
    "Segmentation",
    "StatisticsResult",
    "format_status",
    "TextStatsError",
    "InvalidText",
    "UnsupportedLocale",
    "SegmentationError",
    "TextStatsConfigError",
]
