from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from tracker.types import Alignment, DecisionEntry, Holdings, Prices, ScoreBreakdown


class HoldingsStore(Protocol):
    def get_holdings(self) -> Holdings:
        """Return stored holdings, or the all-zero default when none are stored."""

    def set_holdings(self, *, holdings: Holdings) -> None:
        """Replace stored holdings wholesale."""


class PriceSource(Protocol):
    def fetch_prices(self) -> Prices:
        """Fetch a quote set. Unavailable sources come back as None fields."""


class DecisionLog(Protocol):
    def append(self, *, entry: DecisionEntry) -> None:
        """Persist a new decision entry."""

    def list_decisions(
        self,
        *,
        asset: Optional[str] = None,
        alignment: Optional[Alignment] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> Sequence[DecisionEntry]:
        """Return matching entries newest-first. No filters returns the full log."""

    def get(self, *, decision_id: str) -> Optional[DecisionEntry]:
        """Fetch a single entry by id."""

    def replace(self, *, entry: DecisionEntry) -> None:
        """Replace the stored entry with the same id, keeping its position in time."""


class ScoreCache(Protocol):
    def get(self) -> Optional[ScoreBreakdown]:
        """Cached breakdown if still fresh, else None."""

    def set(self, *, breakdown: ScoreBreakdown) -> None:
        """Cache a freshly computed breakdown."""

    def invalidate(self) -> None:
        """Drop any cached breakdown."""


class ChecklistStore(Protocol):
    def get_checklist(self) -> tuple[bool, ...]:
        """Return the checklist flags; all False when nothing valid is stored."""

    def set_checklist(self, *, state: Sequence[bool]) -> None:
        """Replace the checklist flags."""

    def reset_checklist(self) -> None:
        """Uncheck every item."""
