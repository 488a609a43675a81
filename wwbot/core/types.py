"""Common types and enums used across the game."""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Optional


class GamePhase(Enum):
    """Phases a game moves through."""

    LOBBY = auto()
    NIGHT = auto()
    DAY = auto()
    ENDED = auto()


class ActionType(Enum):
    """Night actions a role can take."""

    PROTECT = auto()
    INVESTIGATE = auto()
    KILL = auto()


class Team(Enum):
    """Teams in Werewolf."""

    VILLAGE = "village"
    WEREWOLVES = "werewolves"


@dataclass
class GameResult:
    """Represents the outcome of a game."""

    game_id: str
    winner: Optional[str]
    win_reason: str
    num_rounds: int
    duration_seconds: float
    player_stats: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    eliminations: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary."""
        return {
            "game_id": self.game_id,
            "winner": self.winner,
            "win_reason": self.win_reason,
            "num_rounds": self.num_rounds,
            "duration_seconds": self.duration_seconds,
            "player_stats": self.player_stats,
            "eliminations": self.eliminations,
            "metadata": self.metadata,
        }


# Type aliases for common patterns
PlayerID = str
