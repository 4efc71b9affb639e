"""Settings models.

Runtime configuration for scoring, preview sessions, layout, persistence and
logging. Every section has working defaults so an empty file is valid.
"""

from typing import Literal

from pydantic import BaseModel, Field

ScorerProvider = Literal["lexical", "embedding"]


class ScorerConfig(BaseModel):
    """Similarity scorer configuration."""

    provider: ScorerProvider = Field(
        default="lexical", description="Scorer backend: lexical (offline) or embedding"
    )
    model: str = Field(
        default="all-MiniLM-L6-v2", description="sentence-transformers model for embedding"
    )
    threshold: float | None = Field(
        default=None, description="Match threshold; None keeps the scorer's own default"
    )
    cache_dir: str | None = Field(default=None, description="Model cache directory")


class SessionConfig(BaseModel):
    """Preview session behaviour."""

    end_message: str = Field(
        default="To be continued...", description="Shown when a leaf node is reached"
    )
    max_auto_advance_hops: int | None = Field(
        default=None,
        ge=1,
        description="Abort auto-advance chains longer than this (None = unbounded)",
    )
    seed: int | None = Field(
        default=None, description="Seed for random auto-advance picks (None = unseeded)"
    )


class LayoutConfig(BaseModel):
    """Auto-layout spacing, in canvas units."""

    node_width: float = Field(default=162.0, gt=0)
    x_spacing: float = Field(default=462.0, gt=0)
    y_spacing: float = Field(default=260.0, gt=0)


class PersistenceConfig(BaseModel):
    """Graph store configuration."""

    backend: Literal["memory", "file"] = Field(default="file", description="memory or file")
    path: str = Field(default="graphs", description="Directory for the file backend")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", description="DEBUG, INFO, WARNING or ERROR")
    json_file: str | None = Field(default=None, description="Optional rotating JSON log file")


class DialographConfig(BaseModel):
    """Top-level configuration."""

    scorer: ScorerConfig = Field(default_factory=ScorerConfig)
    session: SessionConfig = Field(default_factory=SessionConfig)
    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    persistence: PersistenceConfig = Field(default_factory=PersistenceConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
