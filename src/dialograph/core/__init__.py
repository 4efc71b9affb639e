"""Core infrastructure shared by all dialograph packages."""

from dialograph.core.errors import (
    AutoAdvanceDeadEnd,
    ConfigurationError,
    DialographError,
    NotFoundError,
    NotReadyError,
    PersistenceError,
    ScorerError,
    SessionBusyError,
    ValidationError,
)

__all__ = [
    "DialographError",
    "ConfigurationError",
    "AutoAdvanceDeadEnd",
    "NotReadyError",
    "NotFoundError",
    "ValidationError",
    "ScorerError",
    "PersistenceError",
    "SessionBusyError",
]
