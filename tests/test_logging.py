"""Tests for GameLogger."""

import json

import pytest

from wwbot.logging import EventType, GameLogger


@pytest.fixture
def logger():
    return GameLogger(game_id="g1")


def test_records_are_stamped_with_round_and_phase(logger):
    logger.player_joined("a", lobby_size=1)
    logger.round_started(2)
    logger.phase_changed("LOBBY", "DAY")
    logger.vote("a", "b")

    first, *_, last = logger.entries()
    assert (first.round_number, first.phase) == (0, "LOBBY")
    assert (last.round_number, last.phase) == (2, "DAY")
    assert last.player_id == "a"
    assert last.data == {"target": "b"}
    assert logger.log_file is None


def test_privacy_follows_event_type():
    assert EventType.ROLES_DEALT.private
    assert EventType.NIGHT_ACTION.private
    assert EventType.INVESTIGATION.private
    assert not EventType.VOTE.private
    assert not EventType.PLAYER_ELIMINATED.private


def test_private_records_hidden_unless_asked(logger):
    logger.roles_dealt({"w": "werewolf", "v": "villager"})
    logger.night_action("w", "KILL", "v")
    logger.vote("v", "w")

    assert [e.event_type for e in logger.entries()] == [EventType.VOTE]
    assert len(logger.entries(include_private=True)) == 3
    assert logger.entries(EventType.NIGHT_ACTION, player_id="w", include_private=True)[0].data == {
        "action": "KILL", "target": "v",
    }


def test_private_records_dropped_when_not_logged():
    logger = GameLogger(game_id="g1", log_private=False)
    logger.investigation("s", "w", "werewolves")
    logger.kill_cancelled("v", "protected")
    assert [e.event_type for e in logger.entries(include_private=True)] == [EventType.KILL_CANCELLED]


def test_disabled_logger_keeps_nothing(tmp_path):
    logger = GameLogger(game_id="g1", output_dir=tmp_path, enabled=False)
    assert logger.record(EventType.REJECTED, "a", kind="vote", reason="dead") is None
    assert logger.entries(include_private=True) == []
    assert logger.log_file is None
    assert list(tmp_path.iterdir()) == []


def test_jsonl_file(tmp_path):
    logger = GameLogger(game_id="g1", output_dir=tmp_path / "logs")
    logger.game_started({"max_rounds": 3}, ["a", "b"])
    logger.eliminated("a", "villager", cause="vote")

    lines = (tmp_path / "logs" / "g1.jsonl").read_text().splitlines()
    assert len(lines) == 2
    record = json.loads(lines[1])
    assert record["event"] == "player_eliminated"
    assert record["player_id"] == "a"
    assert record["data"] == {"role": "villager", "cause": "vote"}
    assert record["phase"] == "LOBBY"


def test_unwritable_file_falls_back_to_memory(tmp_path, capsys):
    logger = GameLogger(game_id="g1", output_dir=tmp_path)
    logger.log_file = tmp_path / "missing-dir" / "g1.jsonl"

    logger.vote("a", "b")
    logger.vote("b", "a")

    assert "file logging disabled" in capsys.readouterr().out
    assert logger.log_file is None
    assert len(logger.entries()) == 2


def test_summary(logger):
    logger.round_started(1)
    logger.night_action("w", "KILL", "v1")
    logger.eliminated("v1", "villager", "werewolves")
    logger.vote("s", "w")
    logger.eliminated("w", "werewolf", "vote")

    summary = logger.summary()
    assert summary["rounds"] == 1
    assert summary["records"] == 5
    assert summary["private_records"] == 1
    assert summary["events"]["player_eliminated"] == 2
    assert summary["eliminated"] == ["v1", "w"]


def test_export(logger, tmp_path):
    logger.roles_dealt({"w": "werewolf"})
    logger.vote("s", "w")

    public = tmp_path / "exports" / "public.json"
    assert logger.export(public) == 1
    document = json.loads(public.read_text())
    assert document["game_id"] == "g1"
    assert [r["event"] for r in document["records"]] == ["vote"]

    assert logger.export(tmp_path / "full.json", include_private=True) == 2
