"""Abstract chat surface the game talks to.

A chat platform adapter implements these classes; the game only relies on
resolving users inside a guild, direct messages and channel messages.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Mapping, Optional, Union

Message = Union[str, List[str]]


def render_message(message: Message) -> str:
    """Flatten a message given as a list of lines."""
    if isinstance(message, (list, tuple)):
        return "\n".join(str(line) for line in message)
    return str(message)


@dataclass(frozen=True)
class ChatUser:
    """A platform user, independent of any guild."""

    id: str
    name: str


class ChatMember(ABC):
    """A user resolved inside a guild."""

    def __init__(self, user: ChatUser, guild: "Guild", display_name: Optional[str] = None):
        self.user = user
        self.guild = guild
        self.display_name = display_name or user.name

    @property
    def id(self) -> str:
        return self.user.id

    async def send(self, message: Message) -> None:
        """Send a direct message to this member.

        Args:
            message: Text, or a list of lines joined with newlines
        """
        await self.deliver(render_message(message))

    @abstractmethod
    async def deliver(self, text: str) -> None:
        """Deliver an already rendered direct message."""
        pass

    @abstractmethod
    async def ask(self, prompt: str, choices: Mapping[str, str]) -> Optional[str]:
        """Ask the member to pick one option.

        Args:
            prompt: Question shown to the member
            choices: Option id -> label

        Returns:
            The chosen option id, or None to abstain
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self.id!r}, display_name={self.display_name!r})"


class Guild(ABC):
    """A community of members (a server)."""

    def __init__(self, name: str):
        self.name = name

    @abstractmethod
    def member(self, user: Union[ChatUser, ChatMember]) -> ChatMember:
        """Resolve a user (or a member of any guild) in this guild.

        Raises:
            ChatError: If the user is not a member of this guild
        """
        pass


class Channel(ABC):
    """A public text channel inside a guild."""

    def __init__(self, guild: Guild, name: str):
        self.guild = guild
        self.name = name

    @abstractmethod
    async def send(self, message: Message) -> None:
        """Post a message in the channel."""
        pass
