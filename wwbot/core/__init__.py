"""Core framework components for wwbot."""

from wwbot.core.types import GamePhase, ActionType, Team, GameResult, PlayerID
from wwbot.core.exceptions import (
    WWBotException,
    ReadOnlyError,
    InvalidArgumentsError,
    IncompatibleConfigurationError,
    EventsSupportError,
    ConfigurationError,
    InvalidActionError,
    InvalidStateError,
    ChatError,
)
from wwbot.core.utils import seed_everything, random_between, deep_merge

__all__ = [
    "GamePhase",
    "ActionType",
    "Team",
    "GameResult",
    "PlayerID",
    "WWBotException",
    "ReadOnlyError",
    "InvalidArgumentsError",
    "IncompatibleConfigurationError",
    "EventsSupportError",
    "ConfigurationError",
    "InvalidActionError",
    "InvalidStateError",
    "ChatError",
    "seed_everything",
    "random_between",
    "deep_merge",
]
