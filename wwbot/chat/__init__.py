"""Chat platform surface used by the game."""

from wwbot.chat.base import ChatUser, ChatMember, Guild, Channel, render_message
from wwbot.chat.local import (
    LocalMember,
    RandomMember,
    ScriptedMember,
    ConsoleMember,
    LocalGuild,
    LocalChannel,
)

__all__ = [
    "ChatUser",
    "ChatMember",
    "Guild",
    "Channel",
    "render_message",
    "LocalMember",
    "RandomMember",
    "ScriptedMember",
    "ConsoleMember",
    "LocalGuild",
    "LocalChannel",
]
