"""Game log records.

Each record is one line of a game's JSONL file. Whether a record is private
(hidden from spectators and from exports by default) depends only on its
event type: roles, night actions and investigation results are private.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from wwbot.core.utils import safe_json_dumps


class EventType(Enum):
    """What happened in a game."""

    # Lobby
    PLAYER_JOINED = "player_joined"
    PLAYER_LEFT = "player_left"

    # Lifecycle
    GAME_START = "game_start"
    ROLES_DEALT = "roles_dealt"
    ROUND_START = "round_start"
    PHASE_CHANGE = "phase_change"
    GAME_END = "game_end"

    # Night
    NIGHT_ACTION = "night_action"
    INVESTIGATION = "investigation"
    KILL_CANCELLED = "kill_cancelled"

    # Day
    VOTE = "vote"
    VOTE_RESULT = "vote_result"

    PLAYER_ELIMINATED = "player_eliminated"
    REJECTED = "rejected"

    @property
    def private(self) -> bool:
        return self in PRIVATE_EVENTS


PRIVATE_EVENTS = frozenset({
    EventType.ROLES_DEALT,
    EventType.NIGHT_ACTION,
    EventType.INVESTIGATION,
})


@dataclass
class LogEntry:
    """A single game record, stamped with the round and phase it happened in."""

    event_type: EventType
    game_id: str
    round_number: int
    phase: str
    player_id: Optional[str] = None
    data: Dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def private(self) -> bool:
        return self.event_type.private

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event": self.event_type.value,
            "game_id": self.game_id,
            "round": self.round_number,
            "phase": self.phase,
            "player_id": self.player_id,
            "data": self.data,
            "timestamp": self.timestamp.isoformat(),
        }

    def to_json(self) -> str:
        return safe_json_dumps(self.to_dict())

