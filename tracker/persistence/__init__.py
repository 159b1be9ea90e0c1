"""Collaborator boundary (interfaces only)."""

from .interfaces import ChecklistStore, DecisionLog, HoldingsStore, PriceSource, ScoreCache

__all__ = [
    "ChecklistStore",
    "DecisionLog",
    "HoldingsStore",
    "PriceSource",
    "ScoreCache",
]
