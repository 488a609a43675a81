"""Evaluation helpers for simulated games."""

from wwbot.evaluation.metrics import GameMetrics, results_to_frame, summarize

__all__ = [
    "GameMetrics",
    "results_to_frame",
    "summarize",
]
