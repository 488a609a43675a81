"""Tests for the local chat layer."""

import asyncio

import pytest

from wwbot.chat import (
    ChatUser,
    LocalChannel,
    LocalGuild,
    RandomMember,
    ScriptedMember,
    render_message,
)
from wwbot.core.exceptions import ChatError


@pytest.fixture
def guild():
    return LocalGuild("g")


def test_render_message():
    assert render_message("hi") == "hi"
    assert render_message(["a", "b"]) == "a\nb"


def test_guild_member_lookup(guild):
    user = ChatUser(id="u1", name="Una")
    member = guild.add_member(ScriptedMember(user, guild))
    assert guild.member(user) is member
    assert member.display_name == "Una"

    with pytest.raises(ChatError) as exc_info:
        guild.member(ChatUser(id="u2", name="Ghost"))
    assert exc_info.value.details["user_id"] == "u2"


def test_scripted_member_skips_invalid_answers(guild):
    member = ScriptedMember(ChatUser(id="u1", name="Una"), guild, answers=["zz", "b", None])
    choices = {"a": "A", "b": "B"}

    assert asyncio.run(member.ask("first", choices)) == "b"
    assert asyncio.run(member.ask("second", choices)) is None
    assert asyncio.run(member.ask("third", choices)) is None
    assert member.questions == ["first", "second", "third"]


def test_random_member_is_seeded(guild):
    choices = {str(i): str(i) for i in range(10)}
    first = RandomMember(ChatUser(id="a", name="A"), guild, seed=3)
    second = RandomMember(ChatUser(id="b", name="B"), guild, seed=3)
    picks = [asyncio.run(first.ask("?", choices)) for _ in range(5)]
    assert picks == [asyncio.run(second.ask("?", choices)) for _ in range(5)]
    assert asyncio.run(first.ask("?", {})) is None


def test_channel_history(guild):
    channel = LocalChannel(guild)
    asyncio.run(channel.send(["Night 1 falls...", "Sleep."]))
    assert channel.history == ["Night 1 falls...\nSleep."]
    assert channel.name == "werewolf"
