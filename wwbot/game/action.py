"""Night actions produced by roles."""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from wwbot.core.types import ActionType

if TYPE_CHECKING:
    from wwbot.game.player import Player

# Lower resolves first: protection must be known before the kill lands
ACTION_PRIORITY = {
    ActionType.PROTECT: 0,
    ActionType.INVESTIGATE: 1,
    ActionType.KILL: 2,
}


@dataclass
class Action:
    """A night action of one player against another."""

    actor: "Player"
    action_type: ActionType
    target: "Player"

    @property
    def priority(self) -> int:
        return ACTION_PRIORITY[self.action_type]

