"""Shared fixtures: a local table of scripted members."""

from typing import Dict, List, Optional

import pytest

from wwbot.chat import ChatUser, LocalChannel, LocalGuild, ScriptedMember
from wwbot.game import Game, GameConfig
from wwbot.logging import GameLogger


class Table:
    """A local guild, its channel and one scripted member per user."""

    def __init__(self, names: List[str]):
        self.guild = LocalGuild("test-guild")
        self.channel = LocalChannel(self.guild, "werewolf")
        self.users: Dict[str, ChatUser] = {}
        self.members: Dict[str, ScriptedMember] = {}
        for name in names:
            user = ChatUser(id=name, name=name.upper())
            self.users[name] = user
            self.members[name] = self.guild.add_member(ScriptedMember(user, self.guild))

    def script(self, **answers: List[Optional[str]]) -> None:
        for name, queue in answers.items():
            self.members[name].script(*queue)

    def game(
        self,
        roles: Optional[Dict[str, str]] = None,
        config: Optional[GameConfig] = None,
        join: bool = True,
    ) -> Game:
        game = Game(
            self.channel,
            config=config or GameConfig(seed=0),
            logger=GameLogger(game_id="test-game"),
            role_assignment=roles,
        )
        if join:
            for user in self.users.values():
                game.join(user)
        return game


@pytest.fixture
def table():
    """Five seats: one werewolf, a seer, a doctor and two villagers."""
    return Table(["w", "s", "d", "v1", "v2"])


@pytest.fixture
def classic_roles():
    return {"w": "werewolf", "s": "seer", "d": "doctor", "v1": "villager", "v2": "villager"}


@pytest.fixture
def make_table():
    """Factory for tables with custom seat names."""
    return Table
