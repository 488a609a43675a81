"""Game rules and logic for Werewolf."""

import random
from math import floor
from typing import Dict, List, Optional, Tuple

from wwbot.core.types import Team
from wwbot.game.config import GameConfig
from wwbot.game.roles import Doctor, Elder, Role, Seer, Villager, Werewolf


def assign_roles(config: GameConfig, n_players: int, rng: Optional[random.Random] = None) -> List[Role]:
    """Deal roles to players.

    Args:
        config: Game configuration
        n_players: Number of players in the lobby
        rng: Random generator used for shuffling

    Returns:
        List of fresh role instances (one per player)

    Raises:
        ConfigurationError: If the setup cannot be dealt to n_players
    """
    config.validate_player_count(n_players)

    roles: List[Role] = [Werewolf() for _ in range(config.werewolves_for(n_players))]

    if config.include_seer:
        roles.append(Seer())
    if config.include_doctor:
        roles.append(Doctor())
    if config.include_elder:
        roles.append(Elder())

    roles.extend(Villager() for _ in range(n_players - len(roles)))

    (rng or random).shuffle(roles)

    return roles


def check_win_condition(
    alive_werewolves: int,
    alive_villagers: int
) -> Tuple[bool, Optional[Team], str]:
    """Check if a team has won.

    Returns:
        Tuple of (game_over, winning_team, reason)
    """
    if alive_werewolves == 0:
        return True, Team.VILLAGE, "All werewolves eliminated"

    if alive_werewolves >= alive_villagers:
        return True, Team.WEREWOLVES, "Werewolves equal or outnumber villagers"

    return False, None, ""


def get_vote_result(
    votes: Dict[str, Optional[str]],
    n_alive: int,
    require_majority: bool = False
) -> Tuple[Optional[str], int]:
    """Determine who gets eliminated by vote.

    Args:
        votes: Mapping voter_id -> voted_for_id (None = abstain)
        n_alive: Number of alive players
        require_majority: If True, requires >50% of alive players

    Returns:
        Tuple of (eliminated_player_id, vote_count)
        Returns (None, 0) on a tie, when abstention leads or without majority
    """
    if not votes:
        return None, 0

    vote_counts: Dict[Optional[str], int] = {}
    for voted_for in votes.values():
        vote_counts[voted_for] = vote_counts.get(voted_for, 0) + 1

    max_votes = max(vote_counts.values())
    leaders = [pid for pid, count in vote_counts.items() if count == max_votes]

    if len(leaders) > 1:
        return None, 0

    leader = leaders[0]
    if leader is None:
        return None, 0

    if require_majority and max_votes < floor(n_alive / 2) + 1:
        return None, 0

    return leader, max_votes


def get_pack_target(votes: Dict[str, str], rng: Optional[random.Random] = None) -> Optional[str]:
    """Resolve the werewolves' choices into one victim.

    The most chosen target wins; ties are broken at random.
    """
    if not votes:
        return None

    counts: Dict[str, int] = {}
    for target in votes.values():
        counts[target] = counts.get(target, 0) + 1

    max_votes = max(counts.values())
    leaders = [pid for pid, count in counts.items() if count == max_votes]
    if len(leaders) == 1:
        return leaders[0]
    return (rng or random).choice(leaders)


def validate_night_action(actor: Role, target_alive: bool, same_player: bool) -> Tuple[bool, str]:
    """Validate a night action.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not target_alive:
        return False, "Target is not alive"

    if same_player and isinstance(actor, (Werewolf, Seer)):
        return False, f"A {actor.name} cannot target themselves"

    return True, ""


def validate_vote(voter_id: str, target_id: str, alive_players: List[str]) -> Tuple[bool, str]:
    """Validate a day vote.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if voter_id not in alive_players:
        return False, f"Voter {voter_id} is not alive"

    if target_id not in alive_players:
        return False, f"Target {target_id} is not alive"

    if voter_id == target_id:
        return False, "Cannot vote for yourself"

    return True, ""
