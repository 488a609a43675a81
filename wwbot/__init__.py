"""wwbot - Werewolf played over chat, built on an ordered keyed collection."""

__version__ = "0.1.0"

from wwbot.collections import BulletproofCollection, CollectionConfig
from wwbot.core.exceptions import (
    WWBotException,
    ReadOnlyError,
    InvalidArgumentsError,
    IncompatibleConfigurationError,
    EventsSupportError,
)
from wwbot.game import Game, GameConfig, Player

__all__ = [
    "__version__",
    "BulletproofCollection",
    "CollectionConfig",
    "WWBotException",
    "ReadOnlyError",
    "InvalidArgumentsError",
    "IncompatibleConfigurationError",
    "EventsSupportError",
    "Game",
    "GameConfig",
    "Player",
]
