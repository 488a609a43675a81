"""Collection utilities used across the game."""

from wwbot.collections.bulletproof import (
    BulletproofCollection,
    CollectionConfig,
    EVENT_ADD,
    EVENT_REMOVE,
)

__all__ = [
    "BulletproofCollection",
    "CollectionConfig",
    "EVENT_ADD",
    "EVENT_REMOVE",
]
