"""Configuration loader for the rulebook indexer."""

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, model_validator


class AppInfo(BaseModel):
    """Application metadata."""

    name: str = "Rulebook Indexer"
    version: str = "1.0.0"


class ChunkingConfig(BaseModel):
    """Chunk size bounds, in characters."""

    target_size: int = Field(default=1800, gt=0)
    min_size: int = Field(default=500, gt=0)
    max_size: int = Field(default=2500, gt=0)
    overlap_size: int = Field(default=200, ge=0)
    word_boundary_window: int = Field(default=50, ge=0)

    @model_validator(mode="after")
    def _check_bounds(self) -> "ChunkingConfig":
        if not self.min_size < self.target_size < self.max_size:
            raise ValueError(
                "Chunk sizes must satisfy min_size < target_size < max_size "
                f"(got {self.min_size}, {self.target_size}, {self.max_size})"
            )
        if self.overlap_size >= self.min_size:
            raise ValueError(
                f"overlap_size ({self.overlap_size}) must be smaller than "
                f"min_size ({self.min_size})"
            )
        return self


class SectionConfig(BaseModel):
    """Header detection limits."""

    min_header_length: int = 3
    max_header_length: int = 80


class CleaningConfig(BaseModel):
    """Page text cleanup applied before section extraction."""

    enabled: bool = True
    remove_repeated_lines: bool = True
    repeated_line_ratio: float = Field(default=0.6, gt=0.0, le=1.0)
    min_pages_for_repeat_detection: int = 3


class IndexingConfig(BaseModel):
    """Batch indexing configuration."""

    workers: int = Field(default=4, ge=1)


class StorageConfig(BaseModel):
    """Storage paths configuration."""

    pages_dir: str = "./data/pages"
    processed_dir: str = "./data/processed"


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"


class AppConfig(BaseModel):
    """Root application configuration."""

    app: AppInfo = Field(default_factory=AppInfo)
    chunking: ChunkingConfig = Field(default_factory=ChunkingConfig)
    sections: SectionConfig = Field(default_factory=SectionConfig)
    cleaning: CleaningConfig = Field(default_factory=CleaningConfig)
    indexing: IndexingConfig = Field(default_factory=IndexingConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config(config_path: str | Path = "config.yaml") -> AppConfig:
    """Load configuration from YAML file and environment variables.

    Args:
        config_path: Path to the YAML configuration file.

    Returns:
        Fully populated AppConfig instance.
    """
    load_dotenv()

    yaml_data: dict = {}
    config_file = Path(config_path)
    if config_file.exists():
        with open(config_file) as f:
            yaml_data = yaml.safe_load(f) or {}

    config = AppConfig(**yaml_data)

    # Environment wins over the YAML file
    log_level = os.getenv("LOG_LEVEL")
    if log_level:
        config.logging.level = log_level.upper()

    workers = os.getenv("INDEX_WORKERS")
    if workers:
        config.indexing = IndexingConfig(workers=int(workers))

    return config
