"""A player in a game."""

from typing import TYPE_CHECKING, Mapping, Optional, Union

from wwbot.chat.base import ChatMember, ChatUser, Message
from wwbot.core.exceptions import ReadOnlyError

if TYPE_CHECKING:
    from wwbot.game.action import Action
    from wwbot.game.game import Game
    from wwbot.game.roles import Role

KILL_EVENT = "kill"


class Player:
    """Represents a player in a game.

    Wraps the guild member the user resolves to in the game's guild and the
    role the player was dealt.
    """

    def __init__(self, user: Union[ChatUser, ChatMember], role: "Role", game: "Game"):
        """Initialize player.

        Args:
            user: Platform user or member of any guild
            role: Role dealt to the player; bound to this player
            game: Game the player takes part in

        Raises:
            ChatError: If the user is not a member of the game's guild
        """
        self.guild_member = game.channel.guild.member(user)
        self.display_name = self.guild_member.display_name
        self.game = game
        self.role = role
        role.bind(self)

        self._alive = True

    @property
    def alive(self) -> bool:
        return self._alive

    @alive.setter
    def alive(self, value):
        raise ReadOnlyError("alive")

    @property
    def id(self) -> str:
        return self.guild_member.id

    @id.setter
    def id(self, value):
        raise ReadOnlyError("id")

    async def kill(self, cause: str = "werewolves") -> bool:
        """Kill the player. Returns whether the player actually died.

        The role may cancel the death from ``on_dead``; the game emits
        ``kill`` only for confirmed deaths.
        """
        if not self._alive:
            return False

        died = await self.on_dead(cause)
        if died:
            self._alive = False
            self.game.emit(KILL_EVENT, self.game, self)

        return died

    async def on_dead(self, cause: str = "werewolves") -> bool:
        """Called when the player is about to die; False cancels the kill."""
        return bool(await self.role.on_dead(self.game, cause))

    async def on_turn(self) -> Optional["Action"]:
        """Called on the player's night turn."""
        return await self.role.on_turn(self.game)

    async def send(self, msg: Message) -> None:
        """Send a DM to the player."""
        await self.guild_member.send(msg)

    async def ask(self, prompt: str, choices: Mapping[str, str]) -> Optional[str]:
        """Ask the player to pick an option id from choices, or None."""
        return await self.guild_member.ask(prompt, choices)

    def __repr__(self) -> str:
        state = "alive" if self._alive else "dead"
        return f"Player(id={self.id!r}, name={self.display_name!r}, role={self.role.name}, {state})"
