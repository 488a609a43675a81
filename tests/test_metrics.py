"""Tests for batch metrics and result frames."""

import pytest

from wwbot.core.types import GameResult, Team
from wwbot.evaluation import GameMetrics, results_to_frame, summarize


def _result(game_id, winner, rounds, alive):
    stats = {f"p{i}": {"alive": flag} for i, flag in enumerate(alive)}
    return GameResult(
        game_id=game_id,
        winner=winner,
        win_reason="",
        num_rounds=rounds,
        duration_seconds=0.1,
        player_stats=stats,
    )


@pytest.fixture
def results():
    return [
        _result("g1", "village", 2, [True, True, False]),
        _result("g2", "werewolves", 4, [True, False, False]),
        _result("g3", None, 6, [True, True, True]),
        _result("g4", "village", 4, [True, False, True]),
    ]


def test_metrics_update(results):
    metrics = GameMetrics()
    for result in results:
        metrics.update(result)

    assert metrics.games_played == 4
    assert metrics.draws == 1
    assert metrics.wins == {"village": 2, "werewolves": 1}
    assert metrics.win_rate(Team.VILLAGE) == 0.5
    assert metrics.average_game_length == 4.0
    assert metrics.to_dict()["win_rates"]["werewolves"] == 0.25


def test_empty_metrics():
    metrics = GameMetrics()
    assert metrics.win_rate(Team.WEREWOLVES) == 0.0
    assert metrics.average_game_length == 0.0


def test_results_to_frame(results):
    frame = results_to_frame(results)
    assert list(frame["winner"]) == ["village", "werewolves", "draw", "village"]
    assert list(frame["survivors"]) == [2, 1, 3, 2]
    assert set(frame["n_players"]) == {3}


def test_summarize(results):
    summary = summarize(results).set_index("winner")
    assert summary.loc["village", "games"] == 2
    assert summary.loc["village", "mean_rounds"] == 3.0
    assert summary.loc["draw", "mean_survivors"] == 3.0


def test_summarize_empty():
    assert summarize([]).empty
