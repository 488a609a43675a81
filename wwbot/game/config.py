"""Configuration for Werewolf games."""

from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from wwbot.core.exceptions import ConfigurationError
from wwbot.core.utils import deep_merge


@dataclass
class GameConfig:
    """Configuration for a Werewolf game.

    The player count is only known when the lobby closes, so the checks that
    depend on it live in ``validate_player_count``.

    Attributes:
        min_players: Smallest lobby that can start
        max_players: Largest lobby that can start
        n_werewolves: Number of werewolves (default: ~25% of players)
        include_seer: Whether to include the Seer role
        include_doctor: Whether to include the Doctor role
        include_elder: Whether to include the Elder role
        max_rounds: Maximum number of night/day rounds before a draw
        vote_requires_majority: Day eliminations need more than half the votes
        seed: Random seed for role assignment and tie breaks
    """
    min_players: int = 5
    max_players: int = 20
    n_werewolves: Optional[int] = None
    include_seer: bool = True
    include_doctor: bool = True
    include_elder: bool = False
    max_rounds: int = 20
    vote_requires_majority: bool = False
    seed: Optional[int] = None

    def __post_init__(self):
        """Validate static settings."""
        if self.min_players < 3:
            raise ConfigurationError("Werewolf requires at least 3 players")
        if self.max_players < self.min_players:
            raise ConfigurationError(
                f"max_players ({self.max_players}) is lower than min_players ({self.min_players})"
            )
        if self.n_werewolves is not None and self.n_werewolves < 1:
            raise ConfigurationError("Need at least 1 werewolf")
        if self.max_rounds < 1:
            raise ConfigurationError("max_rounds must be positive")

    @property
    def n_special_roles(self) -> int:
        return int(self.include_seer) + int(self.include_doctor) + int(self.include_elder)

    def werewolves_for(self, n_players: int) -> int:
        """Number of werewolves for a lobby of n_players."""
        if self.n_werewolves is not None:
            return self.n_werewolves
        return max(1, n_players // 4)

    def validate_player_count(self, n_players: int) -> None:
        """Check that a lobby of n_players can start with this setup.

        Raises:
            ConfigurationError: If the lobby size or role setup is impossible
        """
        if n_players < self.min_players:
            raise ConfigurationError(
                f"Need at least {self.min_players} players, got {n_players}"
            )
        if n_players > self.max_players:
            raise ConfigurationError(
                f"At most {self.max_players} players allowed, got {n_players}"
            )

        n_werewolves = self.werewolves_for(n_players)
        # werewolves at parity would win before the first night
        if 2 * n_werewolves >= n_players:
            raise ConfigurationError(
                "Too many werewolves",
                details={"n_werewolves": n_werewolves, "n_players": n_players},
            )
        if self.n_special_roles + n_werewolves >= n_players:
            raise ConfigurationError(
                f"Not enough players for {n_werewolves} werewolves "
                f"and {self.n_special_roles} special roles",
                details={"n_players": n_players},
            )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameConfig":
        """Build a config, ignoring sections that are not game settings."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    @classmethod
    def from_yaml(cls, path: Union[str, Path], overrides: Optional[Dict[str, Any]] = None) -> "GameConfig":
        """Load a config from a YAML file.

        Args:
            path: YAML file; a top-level ``game`` section is used when present
            overrides: Values taking precedence over the file

        Raises:
            ConfigurationError: If the file cannot be read or parsed
        """
        path = Path(path)
        try:
            with open(path) as f:
                raw = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(
                f"Cannot load config file {path}",
                details={"error": str(e)},
            ) from e

        if not isinstance(raw, dict):
            raise ConfigurationError(f"Config file {path} must contain a mapping")

        game_section = raw.get("game", raw)
        merged = deep_merge(game_section, overrides or {})
        return cls.from_dict(merged)
