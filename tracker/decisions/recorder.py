"""Decision entry creation."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Callable, Optional
from uuid import uuid4

from tracker.decisions.alignment import score_alignment
from tracker.types import Action, DecisionEntry, MarketSnapshot, Prices


def to_usd(asset: str, amount: Decimal, prices: Prices) -> Decimal:
    """Convert a quantity of `asset` to USD at the current price.

    Amounts for assets without a known price (including cash) are returned
    unchanged.
    """
    price = prices.price(asset.lower())
    if price is None:
        return amount
    return amount * price


def record_decision(
    *,
    asset: str,
    action: Action,
    amount_before: Decimal,
    amount_after: Decimal,
    snapshot: MarketSnapshot,
    prices: Prices,
    notes: Optional[str] = None,
    now: Optional[datetime] = None,
    id_factory: Callable[[], str] = lambda: str(uuid4()),
) -> DecisionEntry:
    """Score a decision against the snapshot and build its log entry.

    Args:
        asset: Asset ticker (e.g. 'BTC')
        action: buy, sell or rebalance
        amount_before: Quantity held before the decision
        amount_after: Quantity held after the decision
        snapshot: Market conditions at decision time
        prices: Quotes used to convert quantities to USD
        notes: Optional free-text context
        now: Decision time (defaults to current UTC time)
        id_factory: Id generator

    Returns:
        New DecisionEntry carrying its alignment verdict
    """
    verdict = score_alignment(action, snapshot)
    return DecisionEntry(
        id=id_factory(),
        timestamp=now or datetime.now(timezone.utc),
        asset=asset,
        action=action,
        amount_before=to_usd(asset, amount_before, prices),
        amount_after=to_usd(asset, amount_after, prices),
        snapshot=snapshot,
        alignment=verdict.alignment,
        alignment_reason=verdict.reason,
        notes=notes or None,
    )
