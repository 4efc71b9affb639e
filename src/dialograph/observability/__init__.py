"""Observability helpers."""

from dialograph.observability.logging import ContextLogger, setup_logging

__all__ = ["ContextLogger", "setup_logging"]
