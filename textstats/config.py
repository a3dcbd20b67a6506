"""Configuration management for text statistics."""

from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from .exceptions import TextStatsConfigError


class SegmentationConfig(BaseModel):
    """Configuration for segmentation engine and locale."""

    engine: Literal["icu", "regex"] = "icu"
    default_locale: str = Field(
        default="en-US",
        description="BCP-47 tag used when a call asks for the default locale",
    )

    @field_validator("default_locale")
    @classmethod
    def validate_default_locale(cls, v: str) -> str:
        """Reject empty or self-referential defaults."""
        v = v.strip()
        if not v or v.lower() == "default":
            raise ValueError("default_locale must be a concrete language tag")
        return v


class InputConfig(BaseModel):
    """Configuration for input files."""

    paths: list[Path] = Field(default_factory=list)
    pattern: str = "*.txt"
    recursive: bool = True
    encoding: str = "utf-8"

    @field_validator("paths", mode="before")
    @classmethod
    def convert_to_paths(cls, v):
        """Accept a single path or a list of strings."""
        if v is None:
            return []
        if isinstance(v, (str, Path)):
            v = [v]
        return [Path(p) if isinstance(p, str) else p for p in v]

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        """Reject names that are not text encodings."""
        try:
            b"".decode(v)
        except LookupError:
            raise ValueError(f"Unknown encoding: {v}")
        return v


class OutputConfig(BaseModel):
    """Configuration for output options."""

    output_path: Optional[Path] = None
    format: Literal["csv", "json"] = "csv"


class ProcessingConfig(BaseModel):
    """Configuration for processing options."""

    workers: int = Field(default=1, ge=1)
    show_progress: bool = True


class Config(BaseModel):
    """Main configuration for text statistics."""

    segmentation: SegmentationConfig = Field(default_factory=SegmentationConfig)
    input: InputConfig = Field(default_factory=InputConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Config":
        """Load configuration from a YAML file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise TextStatsConfigError(f"Config file must contain a mapping: {path}")
        return cls(**data)

    def to_yaml(self, path: str | Path) -> None:
        """Save configuration to a YAML file."""
        data = self.model_dump(mode="json")
        with open(path, "w", encoding="utf-8") as f:
            yaml.dump(data, f, default_flow_style=False, allow_unicode=True)


def load_config(config_path: Optional[str | Path] = None) -> Config:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, looks for textstats.yaml in current directory.

    Returns:
        Config object

    Raises:
        FileNotFoundError: If config file not found
        ValueError: If config is invalid
    """
    if config_path is None:
        config_path = Path("textstats.yaml")

    return Config.from_yaml(config_path)


def get_default_config() -> Config:
    """Get default configuration."""
    return Config()
