"""Conversation runtime."""

from dialograph.runtime.session import DialogSession, TranscriptItem, TurnResult

__all__ = ["DialogSession", "TranscriptItem", "TurnResult"]
