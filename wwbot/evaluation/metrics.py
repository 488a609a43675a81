"""Metrics over batches of finished games."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd

from wwbot.core.types import GameResult, Team


@dataclass
class GameMetrics:
    """Team performance over many games."""

    games_played: int = 0
    draws: int = 0
    wins: Dict[str, int] = field(default_factory=lambda: {team.value: 0 for team in Team})
    rounds: List[int] = field(default_factory=list)

    def update(self, result: GameResult) -> None:
        """Update metrics with a finished game.

        Args:
            result: Result returned by ``Game.play``
        """
        self.games_played += 1
        self.rounds.append(result.num_rounds)
        if result.winner is None:
            self.draws += 1
        else:
            self.wins[result.winner] = self.wins.get(result.winner, 0) + 1

    def win_rate(self, team: Team) -> float:
        if self.games_played == 0:
            return 0.0
        return self.wins.get(team.value, 0) / self.games_played

    @property
    def average_game_length(self) -> float:
        return float(np.mean(self.rounds)) if self.rounds else 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "games_played": self.games_played,
            "draws": self.draws,
            "wins": dict(self.wins),
            "win_rates": {team.value: self.win_rate(team) for team in Team},
            "average_game_length": self.average_game_length,
        }


def results_to_frame(results: List[GameResult]) -> pd.DataFrame:
    """One row per game: id, winner, reason, rounds, duration, survivors."""
    rows = []
    for result in results:
        survivors = sum(1 for stats in result.player_stats.values() if stats.get("alive"))
        rows.append({
            "game_id": result.game_id,
            "winner": result.winner or "draw",
            "win_reason": result.win_reason,
            "num_rounds": result.num_rounds,
            "duration_seconds": result.duration_seconds,
            "n_players": len(result.player_stats),
            "survivors": survivors,
        })
    return pd.DataFrame(
        rows,
        columns=["game_id", "winner", "win_reason", "num_rounds",
                 "duration_seconds", "n_players", "survivors"],
    )


def summarize(results: List[GameResult], by: Optional[str] = "winner") -> pd.DataFrame:
    """Games, mean rounds and mean survivors grouped by a result column."""
    frame = results_to_frame(results)
    if frame.empty:
        return frame
    return (
        frame.groupby(by)
        .agg(games=("game_id", "count"), mean_rounds=("num_rounds", "mean"),
             mean_survivors=("survivors", "mean"))
        .reset_index()
    )
