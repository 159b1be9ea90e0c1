"""Decision service.

Coordinates the collaborators around the pure decision functions:
- log a decision (snapshot, score, append, invalidate the score cache)
- read the timeline with filters and pagination
- serve the adherence score through a short-lived cache
- edit notes, the only mutable field of an entry

Thread-safety: Not thread-safe. Use external locking if needed.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from tracker.decisions.recorder import record_decision
from tracker.decisions.score import calculate_score
from tracker.decisions.snapshot import build_market_snapshot
from tracker.errors import DecisionNotFoundError
from tracker.persistence.interfaces import DecisionLog, HoldingsStore, PriceSource, ScoreCache
from tracker.schemas import DecisionQuery, DecisionRequest, NotesUpdate
from tracker.types import DecisionEntry, DecisionPage, ScoreBreakdown

logger = logging.getLogger(__name__)


class DecisionService:
    def __init__(
        self,
        *,
        price_source: PriceSource,
        holdings_store: HoldingsStore,
        decision_log: DecisionLog,
        score_cache: ScoreCache,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        """Initialize decision service.

        Args:
            price_source: Live quote source
            holdings_store: Holdings storage (supplies NUPL)
            decision_log: Append-only decision storage
            score_cache: Cache for the adherence score
            clock: Optional time source for new entries (defaults to UTC now)
        """
        self._prices = price_source
        self._holdings = holdings_store
        self._log = decision_log
        self._cache = score_cache
        self._clock = clock

    def log_decision(self, request: DecisionRequest) -> DecisionEntry:
        """Snapshot the market, score the decision and append it to the log."""
        prices = self._prices.fetch_prices()
        holdings = self._holdings.get_holdings()
        snapshot = build_market_snapshot(prices, holdings.nupl)

        entry = record_decision(
            asset=request.asset,
            action=request.action,
            amount_before=request.amount_before,
            amount_after=request.amount_after,
            snapshot=snapshot,
            prices=prices,
            notes=request.notes,
            now=self._clock() if self._clock else None,
        )

        self._log.append(entry=entry)
        # The next score read must include this entry
        self._cache.invalidate()

        logger.info(
            "Logged %s %s decision %s: %s (%s)",
            entry.action,
            entry.asset,
            entry.id,
            entry.alignment,
            entry.alignment_reason,
        )
        return entry

    def list_decisions(self, query: Optional[DecisionQuery] = None) -> DecisionPage:
        """Matching entries newest-first, paginated, with the total match count."""
        query = query or DecisionQuery()
        matching = self._log.list_decisions(
            asset=query.asset,
            alignment=query.alignment,
            start=query.start,
            end=query.end,
        )
        page = tuple(matching[query.offset : query.offset + query.limit])
        return DecisionPage(entries=page, total=len(matching))

    def get_score(self) -> ScoreBreakdown:
        """Adherence score over the full log, served from cache when fresh."""
        cached = self._cache.get()
        if cached is not None:
            return cached

        breakdown = calculate_score(self._log.list_decisions())
        self._cache.set(breakdown=breakdown)
        return breakdown

    def update_notes(self, decision_id: str, update: NotesUpdate) -> DecisionEntry:
        """Replace the notes of an entry. Nothing else about it changes.

        Raises:
            DecisionNotFoundError: If no entry has this id
        """
        entry = self._log.get(decision_id=decision_id)
        if entry is None:
            raise DecisionNotFoundError(decision_id)

        updated = entry.with_notes(update.notes)
        self._log.replace(entry=updated)
        logger.info("Updated notes for decision %s", decision_id)
        return updated
