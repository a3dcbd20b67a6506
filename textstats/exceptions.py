"""Custom exceptions for textstats."""

from typing import Optional


class TextStatsError(Exception):
    """Base exception for all textstats errors."""

    pass


class InvalidText(TextStatsError):
    """Raised when input is not valid Unicode text."""

    def __init__(self, message: str, position: Optional[int] = None):
        super().__init__(message)
        self.position = position


class UnsupportedLocale(TextStatsError):
    """Raised when an engine has no segmentation rules for a locale."""

    def __init__(self, locale: str, engine: Optional[str] = None):
        message = f"Unsupported locale: {locale!r}"
        if engine:
            message += f" (engine: {engine})"
        super().__init__(message)
        self.locale = locale
        self.engine = engine


class SegmentationError(TextStatsError):
    """Raised when an analyzer returns boundaries that do not cover the text."""

    def __init__(self, message: str, mode: Optional[str] = None):
        super().__init__(message)
        self.mode = mode


class TextStatsConfigError(TextStatsError):
    """Raised when configuration is invalid."""

    def __init__(self, message: str, config_key: Optional[str] = None):
        super().__init__(message)
        self.config_key = config_key
