"""Werewolf game layer."""

from wwbot.game.action import Action
from wwbot.game.config import GameConfig
from wwbot.game.game import Game
from wwbot.game.player import Player
from wwbot.game.roles import Role, Villager, Werewolf, Seer, Doctor, Elder, create_role

__all__ = [
    "Action",
    "GameConfig",
    "Game",
    "Player",
    "Role",
    "Villager",
    "Werewolf",
    "Seer",
    "Doctor",
    "Elder",
    "create_role",
]
