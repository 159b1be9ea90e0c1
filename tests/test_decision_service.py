"""Tests for the decision service."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from tracker.config import TrackerSettings
from tracker.decisions.service import DecisionService
from tracker.errors import DecisionNotFoundError, TrackerError
from tracker.schemas import DecisionQuery, DecisionRequest, NotesUpdate
from tracker.storage import InMemoryDecisionLog, InMemoryHoldingsStore, InMemoryScoreCache, StaticPriceSource
from tracker.types import Holdings, Prices

BASE_TIME = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """Manually advanced UTC clock."""

    def __init__(self) -> None:
        self.now = BASE_TIME

    def __call__(self):
        return self.now

    def advance(self, minutes: int) -> None:
        self.now = self.now + timedelta(minutes=minutes)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def decision_log() -> InMemoryDecisionLog:
    return InMemoryDecisionLog()


@pytest.fixture
def score_cache() -> InMemoryScoreCache:
    # Long TTL: only invalidation can refresh it within a test
    return InMemoryScoreCache(ttl_seconds=3600)


@pytest.fixture
def service(holdings: Holdings, prices: Prices, decision_log, score_cache, clock) -> DecisionService:
    return DecisionService(
        price_source=StaticPriceSource(prices),
        holdings_store=InMemoryHoldingsStore(holdings),
        decision_log=decision_log,
        score_cache=score_cache,
        clock=clock,
    )


def _request(action: str = "buy", asset: str = "BTC", notes: str | None = None) -> DecisionRequest:
    return DecisionRequest(
        asset=asset,
        action=action,
        amount_before=Decimal("1"),
        amount_after=Decimal("2"),
        notes=notes,
    )


class TestLogDecision:
    def test_snapshot_from_live_inputs(self, service: DecisionService) -> None:
        entry = service.log_decision(_request())
        assert entry.snapshot.btc_price == Decimal("100000")
        assert entry.snapshot.nupl == Decimal("0.55")
        assert entry.snapshot.position_stage == "accumulate"
        assert entry.timestamp == BASE_TIME

    def test_amounts_in_usd(self, service: DecisionService) -> None:
        entry = service.log_decision(_request())
        assert entry.amount_before == Decimal("100000")
        assert entry.amount_after == Decimal("200000")

    def test_neutral_at_fg_50(self, service: DecisionService) -> None:
        entry = service.log_decision(_request())
        assert entry.alignment == "neutral"
        assert entry.alignment_reason == "No applicable rule matched"

    def test_appends_to_log(self, service: DecisionService, decision_log: InMemoryDecisionLog) -> None:
        entry = service.log_decision(_request(notes="first"))
        assert len(decision_log) == 1
        assert decision_log.get(decision_id=entry.id) == entry

    def test_invalidates_score_cache(self, service: DecisionService, prices: Prices) -> None:
        """Test that a score read after logging includes the new entry."""
        assert service.get_score().total_decisions == 0
        service.log_decision(_request())
        assert service.get_score().total_decisions == 1


class TestGetScore:
    def test_served_from_cache(self, service: DecisionService, decision_log: InMemoryDecisionLog, make_entry) -> None:
        first = service.get_score()
        # Bypass the service so the cache is not invalidated
        decision_log.append(entry=make_entry("misaligned", reason="Bought during Exit stage"))
        assert service.get_score() is first

    def test_reflects_log(self, service: DecisionService, decision_log: InMemoryDecisionLog, make_entry) -> None:
        decision_log.append(entry=make_entry("misaligned", minutes=0, reason="Bought during Exit stage"))
        decision_log.append(entry=make_entry("aligned", minutes=5))
        breakdown = service.get_score()
        assert breakdown.overall == 67
        assert breakdown.total_decisions == 2

    def test_cache_lifetime_from_env(
        self, monkeypatch, holdings: Holdings, prices: Prices, decision_log: InMemoryDecisionLog, make_entry
    ) -> None:
        """Test that SCORE_CACHE_TTL_SECONDS controls when a stale score is recomputed."""
        monkeypatch.setenv("SCORE_CACHE_TTL_SECONDS", "5")
        ticks = [100.0]
        service = DecisionService(
            price_source=StaticPriceSource(prices),
            holdings_store=InMemoryHoldingsStore(holdings),
            decision_log=decision_log,
            score_cache=InMemoryScoreCache.from_settings(TrackerSettings.from_env(), clock=lambda: ticks[0]),
        )

        assert service.get_score().total_decisions == 0
        decision_log.append(entry=make_entry("aligned"))

        ticks[0] += 4
        assert service.get_score().total_decisions == 0
        ticks[0] += 1
        assert service.get_score().total_decisions == 1


class TestListDecisions:
    """Tests for timeline filtering and pagination."""

    @pytest.fixture
    def populated(self, service: DecisionService, clock: FakeClock) -> DecisionService:
        for asset in ["BTC", "MSTR", "BTC", "LINK", "BTC"]:
            service.log_decision(_request(asset=asset))
            clock.advance(10)
        return service

    def test_newest_first(self, populated: DecisionService) -> None:
        page = populated.list_decisions()
        timestamps = [e.timestamp for e in page.entries]
        assert timestamps == sorted(timestamps, reverse=True)
        assert page.total == 5

    def test_default_query(self, populated: DecisionService) -> None:
        assert len(populated.list_decisions(None).entries) == 5

    def test_asset_filter(self, populated: DecisionService) -> None:
        page = populated.list_decisions(DecisionQuery(asset="BTC"))
        assert page.total == 3
        assert all(e.asset == "BTC" for e in page.entries)

    def test_alignment_filter(self, populated: DecisionService) -> None:
        assert populated.list_decisions(DecisionQuery(alignment="aligned")).total == 0
        assert populated.list_decisions(DecisionQuery(alignment="neutral")).total == 5

    def test_date_range_inclusive(self, populated: DecisionService) -> None:
        query = DecisionQuery(start=BASE_TIME + timedelta(minutes=10), end=BASE_TIME + timedelta(minutes=30))
        page = populated.list_decisions(query)
        assert page.total == 3
        assert [e.asset for e in page.entries] == ["LINK", "BTC", "MSTR"]

    def test_pagination(self, populated: DecisionService) -> None:
        first = populated.list_decisions(DecisionQuery(limit=2, offset=0))
        second = populated.list_decisions(DecisionQuery(limit=2, offset=2))
        last = populated.list_decisions(DecisionQuery(limit=2, offset=4))

        assert len(first.entries) == 2
        assert len(second.entries) == 2
        assert len(last.entries) == 1
        assert first.total == second.total == last.total == 5
        ids = [e.id for page in (first, second, last) for e in page.entries]
        assert len(set(ids)) == 5

    def test_offset_past_end(self, populated: DecisionService) -> None:
        page = populated.list_decisions(DecisionQuery(offset=50))
        assert page.entries == ()
        assert page.total == 5


class TestUpdateNotes:
    def test_updates_only_notes(self, service: DecisionService, decision_log: InMemoryDecisionLog) -> None:
        entry = service.log_decision(_request(notes="before"))
        updated = service.update_notes(entry.id, NotesUpdate(notes="after"))

        assert updated.notes == "after"
        stored = decision_log.get(decision_id=entry.id)
        assert stored.notes == "after"
        assert stored.alignment == entry.alignment
        assert stored.snapshot == entry.snapshot
        assert stored.timestamp == entry.timestamp

    def test_unknown_id(self, service: DecisionService) -> None:
        with pytest.raises(DecisionNotFoundError) as exc_info:
            service.update_notes("missing", NotesUpdate(notes="text"))
        assert exc_info.value.decision_id == "missing"
        assert isinstance(exc_info.value, TrackerError)
