"""Structured game logging for wwbot."""

from wwbot.logging.game_logger import GameLogger
from wwbot.logging.formats import LogEntry, EventType

__all__ = [
    "GameLogger",
    "LogEntry",
    "EventType",
]
