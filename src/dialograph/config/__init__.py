"""Configuration module for dialograph."""

from dialograph.config.loader import ConfigLoader
from dialograph.config.settings import (
    DialographConfig,
    LayoutConfig,
    LoggingConfig,
    PersistenceConfig,
    ScorerConfig,
    SessionConfig,
)

__all__ = [
    "ConfigLoader",
    "DialographConfig",
    "ScorerConfig",
    "SessionConfig",
    "LayoutConfig",
    "PersistenceConfig",
    "LoggingConfig",
]
