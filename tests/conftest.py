"""Shared test fixtures for pytest.

Provides holdings, prices, snapshots and decision entry factories used
across multiple test files.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Callable

import pytest

from tracker.types import AssetHolding, DecisionEntry, Holdings, MarketSnapshot, Prices

BASE_TIME = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def holdings() -> Holdings:
    """Holdings with simple round numbers.

    BTC 1 @ 50,000, MSTR 100 @ 200, NEAR 1000 @ 2, UNI 500 @ 5,
    LINK 200 @ 10, ONDO 5000 @ 0.5, dry powder 5,000.
    """
    return Holdings(
        assets={
            "btc": AssetHolding(qty=Decimal("1"), cost_basis=Decimal("50000")),
            "mstr": AssetHolding(qty=Decimal("100"), cost_basis=Decimal("200")),
            "near": AssetHolding(qty=Decimal("1000"), cost_basis=Decimal("2")),
            "uni": AssetHolding(qty=Decimal("500"), cost_basis=Decimal("5")),
            "link": AssetHolding(qty=Decimal("200"), cost_basis=Decimal("10")),
            "ondo": AssetHolding(qty=Decimal("5000"), cost_basis=Decimal("0.5")),
        },
        dry_powder=Decimal("5000"),
        nupl=Decimal("0.55"),
        updated_at=BASE_TIME,
    )


@pytest.fixture
def prices() -> Prices:
    """All sources available.

    Values: BTC 100,000; MSTR 400 -> 40,000; NEAR 3 -> 3,000; UNI 8 -> 4,000;
    LINK 15 -> 3,000; ONDO 1 -> 5,000; total with cash 160,000.
    """
    return Prices(
        assets={
            "btc": Decimal("100000"),
            "mstr": Decimal("400"),
            "near": Decimal("3"),
            "uni": Decimal("8"),
            "link": Decimal("15"),
            "ondo": Decimal("1"),
        },
        fear_greed=50,
        btc_dominance=Decimal("57.5"),
        fetched_at=BASE_TIME,
    )


@pytest.fixture
def make_snapshot() -> Callable[..., MarketSnapshot]:
    """Factory for snapshots with neutral defaults."""

    def _make(**overrides) -> MarketSnapshot:
        fields = {
            "btc_price": Decimal("90000"),
            "fear_greed": 50,
            "btc_dominance": Decimal("57"),
            "nupl": Decimal("0.5"),
            "btc_price_zone": "ACCUMULATE PHASE",
            "position_stage": "accumulate",
            "active_triggers": (),
        }
        fields.update(overrides)
        fields["active_triggers"] = tuple(fields["active_triggers"])
        return MarketSnapshot(**fields)

    return _make


@pytest.fixture
def make_entry(make_snapshot) -> Callable[..., DecisionEntry]:
    """Factory for decision entries; `minutes` offsets the timestamp from BASE_TIME."""
    counter = iter(range(1, 10_000))

    def _make(
        alignment: str = "aligned",
        *,
        minutes: int = 0,
        reason: str = "Bought in Extreme Fear",
        action: str = "buy",
        stage: str = "accumulate",
        fear_greed: int = 50,
    ) -> DecisionEntry:
        n = next(counter)
        return DecisionEntry(
            id=f"decision-{n}",
            timestamp=BASE_TIME + timedelta(minutes=minutes),
            asset="BTC",
            action=action,  # type: ignore[arg-type]
            amount_before=Decimal("1000"),
            amount_after=Decimal("2000"),
            snapshot=make_snapshot(position_stage=stage, fear_greed=fear_greed),
            alignment=alignment,  # type: ignore[arg-type]
            alignment_reason=reason,
        )

    return _make
