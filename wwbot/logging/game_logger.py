"""Per-game event log."""

import json
from collections import Counter
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from wwbot.core.utils import generate_game_id
from wwbot.logging.formats import EventType, LogEntry


class GameLogger:
    """Records what happens in one game.

    Records are kept in memory and, when ``output_dir`` is given, appended to
    ``<output_dir>/<game_id>.jsonl`` as they happen. Every record is stamped
    with the round and phase the game was in; the game moves those forward
    through ``round_started`` and ``phase_changed``.

    Private records (roles, night actions, investigations) are dropped when
    ``log_private`` is False and are hidden from queries and exports unless
    asked for.
    """

    def __init__(
        self,
        game_id: Optional[str] = None,
        output_dir: Optional[Union[str, Path]] = None,
        log_private: bool = True,
        enabled: bool = True,
    ):
        self.game_id = game_id or generate_game_id("werewolf")
        self.log_private = log_private
        self.enabled = enabled

        self.round_number = 0
        self.phase = "LOBBY"
        self._entries: List[LogEntry] = []

        self.log_file: Optional[Path] = None
        if output_dir and enabled:
            output_dir = Path(output_dir)
            output_dir.mkdir(parents=True, exist_ok=True)
            self.log_file = output_dir / f"{self.game_id}.jsonl"

    def record(self, event_type: EventType, player_id: Optional[str] = None, **data) -> Optional[LogEntry]:
        """Store one record. Returns it, or None when it was not kept."""
        if not self.enabled or (event_type.private and not self.log_private):
            return None

        entry = LogEntry(
            event_type=event_type,
            game_id=self.game_id,
            round_number=self.round_number,
            phase=self.phase,
            player_id=player_id,
            data=data,
        )
        self._entries.append(entry)
        if self.log_file is not None:
            self._append_line(entry)
        return entry

    def _append_line(self, entry: LogEntry) -> None:
        try:
            with self.log_file.open("a") as f:
                f.write(entry.to_json() + "\n")
        except OSError as e:
            # Keep the game going in memory only
            print(f"Warning: cannot write {self.log_file}, file logging disabled: {e}")
            self.log_file = None

    #### Lobby ####

    def player_joined(self, player_id: str, lobby_size: int) -> None:
        self.record(EventType.PLAYER_JOINED, player_id, lobby_size=lobby_size)

    def player_left(self, player_id: str, lobby_size: int) -> None:
        self.record(EventType.PLAYER_LEFT, player_id, lobby_size=lobby_size)

    #### Lifecycle ####

    def game_started(self, config: Mapping[str, Any], players: List[str]) -> None:
        self.record(EventType.GAME_START, config=dict(config), players=list(players))

    def roles_dealt(self, roles: Mapping[str, str]) -> None:
        self.record(EventType.ROLES_DEALT, roles=dict(roles))

    def round_started(self, round_number: int) -> None:
        self.round_number = round_number
        self.record(EventType.ROUND_START)

    def phase_changed(self, old_phase: str, new_phase: str) -> None:
        self.phase = new_phase
        self.record(EventType.PHASE_CHANGE, old=old_phase, new=new_phase)

    def game_ended(self, winner: Optional[str], reason: str, eliminations: List[str]) -> None:
        self.record(
            EventType.GAME_END,
            winner=winner,
            reason=reason,
            rounds=self.round_number,
            eliminations=list(eliminations),
        )

    #### Night ####

    def night_action(self, actor_id: str, action_type: str, target_id: str) -> None:
        self.record(EventType.NIGHT_ACTION, actor_id, action=action_type, target=target_id)

    def investigation(self, seer_id: str, target_id: str, team: str) -> None:
        self.record(EventType.INVESTIGATION, seer_id, target=target_id, team=team)

    def kill_cancelled(self, player_id: str, reason: str) -> None:
        self.record(EventType.KILL_CANCELLED, player_id, reason=reason)

    #### Day ####

    def vote(self, voter_id: str, target_id: Optional[str]) -> None:
        self.record(EventType.VOTE, voter_id, target=target_id)

    def vote_result(self, votes: Mapping[str, Optional[str]], eliminated: Optional[str], count: int) -> None:
        self.record(EventType.VOTE_RESULT, votes=dict(votes), eliminated=eliminated, count=count)

    def eliminated(self, player_id: str, role: str, cause: str) -> None:
        self.record(EventType.PLAYER_ELIMINATED, player_id, role=role, cause=cause)

    def rejected(self, kind: str, player_id: Optional[str], reason: str) -> None:
        """An answer the game refused (bad target, invalid vote)."""
        self.record(EventType.REJECTED, player_id, kind=kind, reason=reason)

    #### Queries ####

    def entries(
        self,
        event_type: Optional[EventType] = None,
        player_id: Optional[str] = None,
        include_private: bool = False,
    ) -> List[LogEntry]:
        """Records in order, optionally narrowed to one event type or player."""
        return [
            e for e in self._entries
            if (event_type is None or e.event_type == event_type)
            and (player_id is None or e.player_id == player_id)
            and (include_private or not e.private)
        ]

    def summary(self) -> Dict[str, Any]:
        """Counts per event type and the elimination order."""
        counts = Counter(e.event_type.value for e in self._entries)
        return {
            "game_id": self.game_id,
            "rounds": self.round_number,
            "records": len(self._entries),
            "private_records": sum(1 for e in self._entries if e.private),
            "events": dict(counts),
            "eliminated": [e.player_id for e in self.entries(EventType.PLAYER_ELIMINATED)],
        }

    def export(self, path: Union[str, Path], include_private: bool = False) -> int:
        """Write the records as one JSON document. Returns the number written."""
        records = [e.to_dict() for e in self.entries(include_private=include_private)]
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w") as f:
            json.dump({"game_id": self.game_id, "records": records}, f, indent=2)
        return len(records)
