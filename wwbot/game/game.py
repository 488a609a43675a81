"""Werewolf game played over a chat channel."""

import random
import time
from typing import Any, Dict, List, Optional, Union

from pyee import EventEmitter

from wwbot.chat.base import Channel, ChatMember, ChatUser
from wwbot.collections import BulletproofCollection, CollectionConfig, EVENT_ADD, EVENT_REMOVE
from wwbot.core.exceptions import ConfigurationError, InvalidActionError, InvalidStateError
from wwbot.core.types import ActionType, GamePhase, GameResult, Team
from wwbot.core.utils import generate_game_id
from wwbot.game.action import Action
from wwbot.game.config import GameConfig
from wwbot.game.player import KILL_EVENT, Player
from wwbot.game.roles import CAUSE_VOTE, CAUSE_WEREWOLVES, Role, create_role
from wwbot.game.rules import (
    assign_roles,
    check_win_condition,
    get_pack_target,
    get_vote_result,
    validate_night_action,
    validate_vote,
)
from wwbot.logging.game_logger import GameLogger

PHASE_EVENT = "phase"
END_EVENT = "end"


class Game(EventEmitter):
    """Werewolf game with night/day cycles.

    Users join a lobby, then ``play`` deals roles and alternates nights and
    days until a team wins or ``max_rounds`` is reached. Players are kept in
    ``players`` (keyed by id, join order) for the whole game; dead players
    stay there with ``alive`` False.

    Events:
        kill(game, player): a player died
        phase(game, phase): the game entered a new phase
        end(game, result): the game is over
    """

    def __init__(
        self,
        channel: Channel,
        config: Optional[GameConfig] = None,
        logger: Optional[GameLogger] = None,
        game_id: Optional[str] = None,
        role_assignment: Optional[Dict[str, str]] = None,
    ):
        """Initialize a game in the lobby phase.

        Args:
            channel: Public channel the game is announced in
            config: GameConfig instance
            logger: Optional GameLogger instance
            game_id: Optional game ID
            role_assignment: Optional fixed user id -> role name mapping
                used instead of random dealing
        """
        super().__init__()
        self.channel = channel
        self.config = config or GameConfig()
        self.role_assignment = role_assignment
        self.game_id = game_id or (logger.game_id if logger else generate_game_id("werewolf"))
        self.logger = logger or GameLogger(game_id=self.game_id, enabled=False)
        self.rng = random.Random(self.config.seed)

        self.lobby: BulletproofCollection[str, Union[ChatUser, ChatMember]] = BulletproofCollection(
            CollectionConfig(key_extractor=lambda user: user.id, enable_events=True)
        )
        self.lobby.on(EVENT_ADD, self._on_lobby_join)
        self.lobby.on(EVENT_REMOVE, self._on_lobby_leave)

        self.players: BulletproofCollection[str, Player] = BulletproofCollection(
            CollectionConfig(key_extractor=lambda player: player.id)
        )

        self.phase = GamePhase.LOBBY
        self.round_number = 0
        self.winner: Optional[Team] = None
        self.win_reason = ""
        self.eliminations: List[str] = []
        self.start_time: Optional[float] = None
        self.end_time: Optional[float] = None

        self.on(KILL_EVENT, self._on_kill)

    #### Views ####

    @property
    def alive_players(self) -> BulletproofCollection[str, Player]:
        return self.players.filter(lambda p, *_: p.alive)

    def alive_werewolves(self) -> List[Player]:
        return self.players.filter_to_array(
            lambda p, *_: p.alive and p.role.team == Team.WEREWOLVES
        )

    def alive_villagers(self) -> List[Player]:
        return self.players.filter_to_array(
            lambda p, *_: p.alive and p.role.team == Team.VILLAGE
        )

    #### Lobby ####

    def join(self, user: Union[ChatUser, ChatMember]) -> None:
        """Add a user to the lobby.

        Raises:
            InvalidStateError: If the game already started
            InvalidActionError: If the user already joined
            ChatError: If the user is not a member of the channel's guild
        """
        self._require_phase(GamePhase.LOBBY)
        if self.lobby.has_key(user.id):
            raise InvalidActionError(f"{user.id} already joined", details={"game_id": self.game_id})
        self.channel.guild.member(user)
        self.lobby.add(user)

    def leave(self, user: Union[ChatUser, ChatMember]) -> None:
        """Remove a user from the lobby."""
        self._require_phase(GamePhase.LOBBY)
        if self.lobby.remove_key(user.id) is None:
            raise InvalidActionError(f"{user.id} is not in the lobby", details={"game_id": self.game_id})

    def _on_lobby_join(self, user, user_id, lobby) -> None:
        self.logger.player_joined(user_id, lobby.size)

    def _on_lobby_leave(self, user, user_id, lobby) -> None:
        self.logger.player_left(user_id, lobby.size)

    #### Lifecycle ####

    async def start(self) -> None:
        """Close the lobby, deal roles and tell every player their role.

        A deal that already gives the werewolves parity ends the game at once.

        Raises:
            InvalidStateError: If the game already started
            ConfigurationError: If the lobby cannot be dealt the configured roles
        """
        self._require_phase(GamePhase.LOBBY)

        if self.role_assignment:
            roles = self._fixed_roles()
        else:
            roles = assign_roles(self.config, self.lobby.size, self.rng)
        for user, role in zip(self.lobby, roles):
            self.players.add(Player(user, role, self))

        self.start_time = time.time()
        self.logger.game_started(self.config.to_dict(), list(self.players.keys))
        self.logger.roles_dealt({p.id: p.role.name for p in self.players})

        pack = [p.display_name for p in self.alive_werewolves()]
        for player in self.players:
            lines = [f"You are a {player.role.name.upper()}.", player.role.description]
            if player.role.team == Team.WEREWOLVES and len(pack) > 1:
                others = [name for name in pack if name != player.display_name]
                lines.append(f"Your fellow werewolves: {', '.join(others)}.")
            await player.send(lines)

        await self.channel.send([
            f"The game begins with {self.players.size} players: "
            + ", ".join(self.players.map(lambda p, *_: p.display_name)) + ".",
            f"There are {len(pack)} werewolves among you.",
        ])
        if not await self._check_game_over():
            await self._set_phase(GamePhase.NIGHT)

    async def run_night(self) -> List[Player]:
        """Collect night actions from every alive player and resolve them.

        Returns:
            Players who died during the night
        """
        self._require_phase(GamePhase.NIGHT)
        self.round_number += 1
        self.logger.round_started(self.round_number)
        await self.channel.send(f"Night {self.round_number} falls. Everyone closes their eyes.")

        actions: List[Action] = []
        for player in list(self.alive_players):
            action = await player.on_turn()
            if action is None:
                continue

            valid, error = validate_night_action(
                player.role, action.target.alive, action.target is player
            )
            if not valid:
                self.logger.rejected("night_action", player.id, error)
                continue

            actions.append(action)
            self.logger.night_action(player.id, action.action_type.name, action.target.id)

        return await self._resolve_night(actions)

    async def _resolve_night(self, actions: List[Action]) -> List[Player]:
        """Resolve actions by priority: protect, investigate, kill."""
        protected = set()
        pack_votes: BulletproofCollection[str, str] = BulletproofCollection()

        for action in sorted(actions, key=lambda a: a.priority):
            if action.action_type == ActionType.PROTECT:
                protected.add(action.target.id)
            elif action.action_type == ActionType.INVESTIGATE:
                team = action.target.role.team
                await action.actor.send(
                    f"{action.target.display_name} is on the {team.value} team."
                )
                self.logger.investigation(action.actor.id, action.target.id, team.value)
            elif action.action_type == ActionType.KILL:
                pack_votes.add_custom(action.actor.id, action.target.id)

        deaths: List[Player] = []
        victim_id = get_pack_target(pack_votes.to_object(), self.rng)
        victim = self.players.key(victim_id) if victim_id is not None else None

        if victim is None:
            await self.channel.send("The night was quiet. No one was eliminated.")
        elif victim.id in protected:
            await self.channel.send("The werewolves struck, but someone was protected. No one was eliminated.")
            self.logger.kill_cancelled(victim.id, "protected")
        elif await victim.kill(CAUSE_WEREWOLVES):
            deaths.append(victim)
            self.logger.eliminated(victim.id, victim.role.name, CAUSE_WEREWOLVES)
            await self.channel.send(
                f"{victim.display_name} was eliminated during the night. They were a {victim.role.name}."
            )
        else:
            self.logger.kill_cancelled(victim.id, "role")
            await self.channel.send("The werewolves struck, but their victim survived.")

        if not await self._check_game_over():
            await self._set_phase(GamePhase.DAY)

        return deaths

    async def run_day(self) -> Optional[Player]:
        """Every alive player votes; the vote leader is eliminated.

        Returns:
            The eliminated player, or None
        """
        self._require_phase(GamePhase.DAY)
        alive = self.alive_players
        alive_ids = list(alive.keys)
        await self.channel.send(
            f"Day {self.round_number}. Alive: "
            + ", ".join(alive.map(lambda p, *_: p.display_name)) + ". Time to vote."
        )

        votes: BulletproofCollection[str, Optional[str]] = BulletproofCollection()
        for voter in list(alive):
            choices = {p.id: p.display_name for p in alive if p is not voter}
            target_id = await voter.ask("Who do you vote to eliminate?", choices)

            if target_id is not None:
                valid, error = validate_vote(voter.id, target_id, alive_ids)
                if not valid:
                    self.logger.rejected("vote", voter.id, error)
                    target_id = None

            votes.add_custom(voter.id, target_id)
            self.logger.vote(voter.id, target_id)

        eliminated_id, count = get_vote_result(
            votes.to_object(), alive.size, self.config.vote_requires_majority
        )
        self.logger.vote_result(votes.to_object(), eliminated_id, count)

        eliminated = None
        if eliminated_id is None:
            await self.channel.send("The village could not agree. No one was eliminated.")
        else:
            player = self.players.key(eliminated_id)
            if await player.kill(CAUSE_VOTE):
                eliminated = player
                self.logger.eliminated(player.id, player.role.name, CAUSE_VOTE)
                await self.channel.send(
                    f"The village eliminated {player.display_name} with {count} votes. "
                    f"They were a {player.role.name}."
                )
            else:
                self.logger.kill_cancelled(player.id, "role")
                await self.channel.send(f"{player.display_name} survived the village's judgement.")

        if not await self._check_game_over():
            await self._set_phase(GamePhase.NIGHT)

        return eliminated

    async def play(self) -> GameResult:
        """Play a complete game from the lobby to the end."""
        if self.phase == GamePhase.LOBBY:
            await self.start()

        while self.phase != GamePhase.ENDED:
            if self.phase == GamePhase.NIGHT:
                if self.round_number >= self.config.max_rounds:
                    await self._finish(None, "Maximum rounds reached")
                    break
                await self.run_night()
            elif self.phase == GamePhase.DAY:
                await self.run_day()

        return self._build_game_result()

    #### Internals ####

    def _fixed_roles(self) -> List[Role]:
        """Roles for the lobby from role_assignment, in join order."""
        missing = [user_id for user_id in self.lobby.keys if user_id not in self.role_assignment]
        if missing:
            raise ConfigurationError(
                "role_assignment does not cover every player",
                details={"missing": missing},
            )
        try:
            roles = [create_role(self.role_assignment[user_id]) for user_id in self.lobby.keys]
        except ValueError as e:
            raise ConfigurationError(str(e)) from e
        if not any(role.team == Team.WEREWOLVES for role in roles):
            raise ConfigurationError("role_assignment has no werewolf")
        return roles

    def _require_phase(self, phase: GamePhase) -> None:
        if self.phase != phase:
            raise InvalidStateError(
                f"Expected phase {phase.name}, game is in {self.phase.name}",
                details={"game_id": self.game_id},
            )

    async def _set_phase(self, phase: GamePhase) -> None:
        old_phase = self.phase
        self.phase = phase
        self.logger.phase_changed(old_phase.name, phase.name)
        self.emit(PHASE_EVENT, self, phase)

    async def _check_game_over(self) -> bool:
        game_over, winner, reason = check_win_condition(
            len(self.alive_werewolves()), len(self.alive_villagers())
        )
        if game_over:
            await self._finish(winner, reason)
        return game_over

    async def _finish(self, winner: Optional[Team], reason: str) -> None:
        self.winner = winner
        self.win_reason = reason
        self.end_time = time.time()
        await self._set_phase(GamePhase.ENDED)

        roles = ", ".join(self.players.map(lambda p, *_: f"{p.display_name} ({p.role.name})"))
        headline = f"The {winner.value} win! {reason}." if winner else f"The game ends in a draw. {reason}."
        await self.channel.send([headline, f"Roles: {roles}"])

        self.logger.game_ended(winner.value if winner else None, reason, self.eliminations)
        self.emit(END_EVENT, self, self._build_game_result())

    def _on_kill(self, game: "Game", player: Player) -> None:
        self.eliminations.append(player.id)

    def _build_game_result(self) -> GameResult:
        duration = self.end_time - self.start_time if self.end_time and self.start_time else 0.0

        player_stats: Dict[str, Dict[str, Any]] = {}
        for player_id, player in self.players.keys_and_values:
            player_stats[player_id] = {
                "name": player.display_name,
                "role": player.role.name,
                "team": player.role.team.value,
                "alive": player.alive,
                "won": self.winner is not None and player.role.team == self.winner,
            }

        return GameResult(
            game_id=self.game_id,
            winner=self.winner.value if self.winner else None,
            win_reason=self.win_reason or "Unknown",
            num_rounds=self.round_number,
            duration_seconds=duration,
            player_stats=player_stats,
            eliminations=list(self.eliminations),
            metadata=self.config.to_dict(),
        )

    def __str__(self) -> str:
        alive = self.alive_players.size
        return (
            f"{self.__class__.__name__}(game_id={self.game_id}, phase={self.phase.name}, "
            f"round={self.round_number}, alive={alive}/{self.players.size})"
        )
