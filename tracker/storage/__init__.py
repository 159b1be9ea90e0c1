"""Concrete collaborator implementations."""

from .memory_stores import (
    DEFAULT_HOLDINGS,
    InMemoryChecklistStore,
    InMemoryDecisionLog,
    InMemoryHoldingsStore,
    InMemoryScoreCache,
    StaticPriceSource,
)

__all__ = [
    "DEFAULT_HOLDINGS",
    "InMemoryChecklistStore",
    "InMemoryDecisionLog",
    "InMemoryHoldingsStore",
    "InMemoryScoreCache",
    "StaticPriceSource",
]
