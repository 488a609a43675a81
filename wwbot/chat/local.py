"""In-process chat implementation used by the CLI and the tests."""

import asyncio
import random
from typing import Dict, Iterable, List, Mapping, Optional, Union

from wwbot.chat.base import Channel, ChatMember, ChatUser, Guild, Message, render_message
from wwbot.core.exceptions import ChatError


class LocalMember(ChatMember):
    """Member that keeps every direct message in an inbox."""

    def __init__(self, user: ChatUser, guild: Guild, display_name: Optional[str] = None):
        super().__init__(user, guild, display_name)
        self.inbox: List[str] = []

    async def deliver(self, text: str) -> None:
        self.inbox.append(text)

    async def ask(self, prompt: str, choices: Mapping[str, str]) -> Optional[str]:
        return None


class RandomMember(LocalMember):
    """Member that always picks a random option."""

    def __init__(
        self,
        user: ChatUser,
        guild: Guild,
        display_name: Optional[str] = None,
        seed: Optional[int] = None,
    ):
        super().__init__(user, guild, display_name)
        self.rng = random.Random(seed)

    async def ask(self, prompt: str, choices: Mapping[str, str]) -> Optional[str]:
        if not choices:
            return None
        return self.rng.choice(sorted(choices))


class ScriptedMember(LocalMember):
    """Member answering from a queue of option ids.

    An answer of None abstains. Once the queue is empty the member abstains.
    Answers that are not among the offered choices are skipped.
    """

    def __init__(
        self,
        user: ChatUser,
        guild: Guild,
        answers: Iterable[Optional[str]] = (),
        display_name: Optional[str] = None,
    ):
        super().__init__(user, guild, display_name)
        self.answers: List[Optional[str]] = list(answers)
        self.questions: List[str] = []

    def script(self, *answers: Optional[str]) -> None:
        """Queue more answers."""
        self.answers.extend(answers)

    async def ask(self, prompt: str, choices: Mapping[str, str]) -> Optional[str]:
        self.questions.append(prompt)
        while self.answers:
            answer = self.answers.pop(0)
            if answer is None or answer in choices:
                return answer
        return None


class ConsoleMember(LocalMember):
    """Member driven by a human on stdin/stdout."""

    async def deliver(self, text: str) -> None:
        await super().deliver(text)
        print(f"[DM to {self.display_name}] {text}")

    async def ask(self, prompt: str, choices: Mapping[str, str]) -> Optional[str]:
        options = list(choices.items())
        lines = [f"[{self.display_name}] {prompt}"]
        lines += [f"  {i}. {label}" for i, (_, label) in enumerate(options, start=1)]
        lines.append("  0. (skip)")
        print("\n".join(lines))

        loop = asyncio.get_running_loop()
        while True:
            raw = await loop.run_in_executor(None, input, "> ")
            raw = raw.strip()
            if raw.isdigit():
                picked = int(raw)
                if picked == 0:
                    return None
                if 1 <= picked <= len(options):
                    return options[picked - 1][0]
            print(f"Please enter a number between 0 and {len(options)}.")


class LocalGuild(Guild):
    """Guild holding local members."""

    def __init__(self, name: str = "local"):
        super().__init__(name)
        self.members: Dict[str, ChatMember] = {}

    def add_member(self, member: ChatMember) -> ChatMember:
        self.members[member.id] = member
        return member

    def member(self, user: Union[ChatUser, ChatMember]) -> ChatMember:
        try:
            return self.members[user.id]
        except KeyError:
            raise ChatError(
                f"User {user.id} is not a member of guild '{self.name}'",
                details={"user_id": user.id, "guild": self.name},
            ) from None


class LocalChannel(Channel):
    """Channel recording its history, optionally echoing to stdout."""

    def __init__(self, guild: Guild, name: str = "werewolf", echo: bool = False):
        super().__init__(guild, name)
        self.echo = echo
        self.history: List[str] = []

    async def send(self, message: Message) -> None:
        text = render_message(message)
        self.history.append(text)
        if self.echo:
            print(f"#{self.name}: {text}")
