"""Tests for Player: member resolution, read-only state, kill flow, DMs."""

import asyncio

import pytest

from wwbot.chat import ChatUser
from wwbot.core.exceptions import ChatError, ReadOnlyError
from wwbot.game import Elder, Player, Villager, Werewolf
from wwbot.game.roles import CAUSE_VOTE, CAUSE_WEREWOLVES, Role


class DeathDefyingRole(Role):
    name = "immortal"

    async def on_dead(self, game, cause):
        return False


def _player(table, name="v1", role=None):
    game = table.game(join=False)
    return Player(table.users[name], role or Villager(), game), game


class TestPlayerConstruction:
    def test_resolves_guild_member(self, table):
        player, game = _player(table)
        assert player.guild_member is table.members["v1"]
        assert player.display_name == "V1"
        assert player.id == "v1"
        assert player.game is game
        assert player.alive

    def test_accepts_member_as_user(self, table):
        game = table.game(join=False)
        player = Player(table.members["s"], Villager(), game)
        assert player.id == "s"

    def test_binds_role(self, table):
        role = Werewolf()
        player, _ = _player(table, role=role)
        assert role.player is player

    def test_unknown_user_raises(self, table):
        game = table.game(join=False)
        with pytest.raises(ChatError):
            Player(ChatUser(id="ghost", name="Ghost"), Villager(), game)


class TestPlayerReadOnly:
    def test_alive_is_read_only(self, table):
        player, _ = _player(table)
        with pytest.raises(ReadOnlyError, match="'alive'"):
            player.alive = False
        assert player.alive

    def test_id_is_read_only(self, table):
        player, _ = _player(table)
        with pytest.raises(ReadOnlyError) as exc_info:
            player.id = "other"
        assert exc_info.value.prop_name == "id"
        assert player.id == "v1"


class TestPlayerKill:
    def test_kill_confirmed(self, table):
        player, game = _player(table)
        killed = []
        game.on("kill", lambda g, p: killed.append((g, p)))

        assert asyncio.run(player.kill()) is True
        assert not player.alive
        assert killed == [(game, player)]

    def test_kill_cancelled_by_role(self, table):
        player, game = _player(table, role=DeathDefyingRole())
        killed = []
        game.on("kill", lambda g, p: killed.append(p))

        assert asyncio.run(player.kill()) is False
        assert player.alive
        assert killed == []

    def test_kill_dead_player_is_noop(self, table):
        player, game = _player(table)
        killed = []
        game.on("kill", lambda g, p: killed.append(p))

        asyncio.run(player.kill())
        assert asyncio.run(player.kill()) is False
        assert len(killed) == 1

    def test_elder_survives_first_werewolf_attack_only(self, table):
        player, _ = _player(table, role=Elder())

        assert asyncio.run(player.kill(CAUSE_WEREWOLVES)) is False
        assert player.alive
        assert "survived" in table.members["v1"].inbox[-1]

        assert asyncio.run(player.kill(CAUSE_WEREWOLVES)) is True
        assert not player.alive

    def test_elder_does_not_resist_the_vote(self, table):
        player, _ = _player(table, role=Elder())
        assert asyncio.run(player.kill(CAUSE_VOTE)) is True

    def test_on_turn_without_night_action(self, table):
        player, _ = _player(table)
        assert asyncio.run(player.on_turn()) is None


class TestPlayerMessages:
    def test_send_text(self, table):
        player, _ = _player(table)
        asyncio.run(player.send("hello"))
        assert table.members["v1"].inbox == ["hello"]

    def test_send_lines_are_joined(self, table):
        player, _ = _player(table)
        asyncio.run(player.send(["line one", "line two"]))
        assert table.members["v1"].inbox == ["line one\nline two"]

    def test_ask_goes_to_member(self, table):
        player, _ = _player(table)
        table.script(v1=["s"])
        picked = asyncio.run(player.ask("Pick", {"s": "S", "d": "D"}))
        assert picked == "s"
        assert table.members["v1"].questions == ["Pick"]
