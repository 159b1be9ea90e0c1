"""In-memory implementations of the collaborator interfaces.

Used for demo mode, tests and local tooling. Not thread-safe; use external
locking if shared between threads.
"""

from __future__ import annotations

import logging
import time
from datetime import datetime
from typing import Callable, Optional, Sequence

from tracker.config import STRATEGY, TrackerSettings
from tracker.persistence.interfaces import ChecklistStore, DecisionLog, HoldingsStore, PriceSource, ScoreCache
from tracker.types import Alignment, DecisionEntry, Holdings, Prices, ScoreBreakdown

logger = logging.getLogger(__name__)

DEFAULT_HOLDINGS = Holdings(assets={})


class InMemoryHoldingsStore(HoldingsStore):
    def __init__(self, holdings: Optional[Holdings] = None) -> None:
        self._holdings = holdings

    def get_holdings(self) -> Holdings:
        if self._holdings is None:
            return DEFAULT_HOLDINGS
        return self._holdings

    def set_holdings(self, *, holdings: Holdings) -> None:
        self._holdings = holdings


class StaticPriceSource(PriceSource):
    """Always returns the same quote set."""

    def __init__(self, prices: Prices) -> None:
        self.prices = prices

    def fetch_prices(self) -> Prices:
        return self.prices


class InMemoryDecisionLog(DecisionLog):
    """Append-only decision log kept ordered by timestamp."""

    def __init__(self, entries: Sequence[DecisionEntry] = ()) -> None:
        self._entries: list[DecisionEntry] = []
        for entry in entries:
            self.append(entry=entry)

    def __len__(self) -> int:
        return len(self._entries)

    def append(self, *, entry: DecisionEntry) -> None:
        # Insert after any entry with the same timestamp to keep arrival order
        index = len(self._entries)
        while index > 0 and self._entries[index - 1].timestamp > entry.timestamp:
            index -= 1
        self._entries.insert(index, entry)

    def list_decisions(
        self,
        *,
        asset: Optional[str] = None,
        alignment: Optional[Alignment] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> list[DecisionEntry]:
        entries = list(reversed(self._entries))
        if asset:
            entries = [e for e in entries if e.asset == asset]
        if alignment:
            entries = [e for e in entries if e.alignment == alignment]
        if start is not None:
            entries = [e for e in entries if e.timestamp >= start]
        if end is not None:
            entries = [e for e in entries if e.timestamp <= end]
        return entries

    def get(self, *, decision_id: str) -> Optional[DecisionEntry]:
        for entry in self._entries:
            if entry.id == decision_id:
                return entry
        return None

    def replace(self, *, entry: DecisionEntry) -> None:
        for i, existing in enumerate(self._entries):
            if existing.id == entry.id:
                self._entries[i] = entry
                return
        raise KeyError(entry.id)


class InMemoryScoreCache(ScoreCache):
    """Single-slot cache with a time-to-live."""

    def __init__(self, ttl_seconds: int = 60, clock: Callable[[], float] = time.monotonic) -> None:
        self._ttl = ttl_seconds
        self._clock = clock
        self._breakdown: Optional[ScoreBreakdown] = None
        self._expires_at = 0.0

    @classmethod
    def from_settings(
        cls, settings: TrackerSettings, clock: Callable[[], float] = time.monotonic
    ) -> InMemoryScoreCache:
        """Create a cache whose lifetime is `settings.score_cache_ttl_seconds`."""
        return cls(ttl_seconds=settings.score_cache_ttl_seconds, clock=clock)

    def get(self) -> Optional[ScoreBreakdown]:
        if self._breakdown is None:
            return None
        if self._clock() >= self._expires_at:
            self._breakdown = None
            return None
        return self._breakdown

    def set(self, *, breakdown: ScoreBreakdown) -> None:
        self._breakdown = breakdown
        self._expires_at = self._clock() + self._ttl

    def invalidate(self) -> None:
        if self._breakdown is not None:
            logger.info("Score cache invalidated")
        self._breakdown = None


class InMemoryChecklistStore(ChecklistStore):
    """Pre-action review checklist, one flag per `STRATEGY.checklist_items` entry."""

    def __init__(self, state: Sequence[bool] = ()) -> None:
        self._state = tuple(state)

    def get_checklist(self) -> tuple[bool, ...]:
        # Missing or wrong-length state reads as all unchecked
        if len(self._state) != len(STRATEGY.checklist_items):
            return (False,) * len(STRATEGY.checklist_items)
        return self._state

    def set_checklist(self, *, state: Sequence[bool]) -> None:
        self._state = tuple(state)

    def reset_checklist(self) -> None:
        self._state = (False,) * len(STRATEGY.checklist_items)
