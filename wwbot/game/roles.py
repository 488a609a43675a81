"""Roles a player can be dealt."""

from typing import TYPE_CHECKING, Dict, Optional, Type

from wwbot.core.types import ActionType, Team
from wwbot.game.action import Action

if TYPE_CHECKING:
    from wwbot.game.game import Game
    from wwbot.game.player import Player

CAUSE_WEREWOLVES = "werewolves"
CAUSE_VOTE = "vote"


class Role:
    """Base role: no night turn, dies when killed.

    Subclasses override ``on_turn`` to act at night and ``on_dead`` to
    react to (or cancel) their own death.
    """

    name = "role"
    team = Team.VILLAGE
    description = ""

    def __init__(self):
        self.player: Optional["Player"] = None

    def bind(self, player: "Player") -> None:
        self.player = player

    async def on_turn(self, game: "Game") -> Optional[Action]:
        return None

    async def on_dead(self, game: "Game", cause: str) -> bool:
        return True

    async def _pick(self, game: "Game", prompt: str, candidates) -> Optional["Player"]:
        """Ask the bound player to pick among candidate players."""
        choices = {p.id: p.display_name for p in candidates}
        if not choices:
            return None
        picked = await self.player.ask(prompt, choices)
        if picked is None or picked not in choices:
            return None
        return game.players.key(picked)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class Villager(Role):
    name = "villager"
    description = "No night ability. Find the werewolves and vote them out."


class Werewolf(Role):
    name = "werewolf"
    team = Team.WEREWOLVES
    description = "Each night, the pack chooses a villager to eliminate."

    async def on_turn(self, game: "Game") -> Optional[Action]:
        candidates = game.alive_players.filter_to_array(
            lambda p, *_: p.role.team != Team.WEREWOLVES
        )
        target = await self._pick(game, "Who should the pack eliminate tonight?", candidates)
        if target is None:
            return None
        return Action(self.player, ActionType.KILL, target)


class Seer(Role):
    name = "seer"
    description = "Each night, learn which team one player belongs to."

    async def on_turn(self, game: "Game") -> Optional[Action]:
        candidates = game.alive_players.filter_to_array(lambda p, *_: p is not self.player)
        target = await self._pick(game, "Whose allegiance do you want to learn?", candidates)
        if target is None:
            return None
        return Action(self.player, ActionType.INVESTIGATE, target)


class Doctor(Role):
    """Protects one player per night, never the same player twice in a row."""

    name = "doctor"
    description = "Each night, protect one player from the werewolves."

    def __init__(self):
        super().__init__()
        self.last_protected_id: Optional[str] = None

    async def on_turn(self, game: "Game") -> Optional[Action]:
        candidates = game.alive_players.filter_to_array(
            lambda p, *_: p.id != self.last_protected_id
        )
        target = await self._pick(game, "Who do you want to protect tonight?", candidates)
        self.last_protected_id = target.id if target else None
        if target is None:
            return None
        return Action(self.player, ActionType.PROTECT, target)


class Elder(Role):
    """Survives the first werewolf attack."""

    name = "elder"
    description = "You survive the first werewolf attack against you."

    def __init__(self):
        super().__init__()
        self.shielded = True

    async def on_dead(self, game: "Game", cause: str) -> bool:
        if cause == CAUSE_WEREWOLVES and self.shielded:
            self.shielded = False
            await self.player.send("The werewolves attacked you tonight, but you survived.")
            return False
        return True


ROLE_CLASSES: Dict[str, Type[Role]] = {
    cls.name: cls for cls in (Villager, Werewolf, Seer, Doctor, Elder)
}


def create_role(name: str) -> Role:
    """Instantiate a role by name."""
    try:
        return ROLE_CLASSES[name]()
    except KeyError:
        raise ValueError(f"Unknown role: {name}") from None
