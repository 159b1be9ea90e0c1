"""Position and allocation building.

Positions are built in two passes: `build_positions` values each asset and
leaves `alloc_pct` empty, then `fill_allocation_pcts` fills it once the
portfolio total is known.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from decimal import Decimal
from typing import Optional, Sequence

from tracker.config import STRATEGY
from tracker.types import ZERO, Allocation, Holdings, Position, Prices

logger = logging.getLogger(__name__)

HUNDRED = Decimal("100")


def calc_position_pnl(current_value: Decimal, total_cost: Decimal) -> tuple[Decimal, Decimal]:
    """Calculate P&L for a single position.

    Args:
        current_value: Market value (qty * price)
        total_cost: Total cost (qty * per-unit cost basis), not the per-unit price

    Returns:
        Tuple of (pnl, pnl_pct); pnl_pct is 0 when nothing was invested
    """
    pnl = current_value - total_cost
    pnl_pct = pnl / total_cost * HUNDRED if total_cost > 0 else ZERO
    return pnl, pnl_pct


def calc_allocation_pct(position_value: Decimal, total_value: Decimal) -> Decimal:
    if total_value == 0:
        return ZERO
    return position_value / total_value * HUNDRED


def calc_allocation_gap(current_pct: Decimal, target_pct: Decimal) -> Decimal:
    """Positive = overweight, negative = underweight."""
    return current_pct - target_pct


def _sort_key(position: Position) -> tuple[int, Decimal]:
    if position.value is None:
        return (1, ZERO)
    return (0, -position.value)


def build_positions(holdings: Holdings, prices: Prices) -> list[Position]:
    """Build positions from holdings and live prices.

    Dry powder is included as a cash position with no P&L. Positions are
    sorted by value descending; positions without a price go last in
    input order. `alloc_pct` is left as None.
    """
    positions: list[Position] = []

    for asset in STRATEGY.tracked_assets:
        holding = holdings.holding(asset.key)
        price = prices.price(asset.key)

        if price is None:
            logger.debug("Price unavailable for %s; position left unvalued", asset.ticker)
            positions.append(
                Position(
                    label=asset.label,
                    ticker=asset.ticker,
                    value=None,
                    pnl=None,
                    pnl_pct=None,
                    alloc_pct=None,
                    price_unavailable=True,
                )
            )
            continue

        value = holding.qty * price
        pnl, pnl_pct = calc_position_pnl(value, holding.invested)
        positions.append(
            Position(
                label=asset.label,
                ticker=asset.ticker,
                value=value,
                pnl=pnl,
                pnl_pct=pnl_pct,
                alloc_pct=None,
                price_unavailable=False,
            )
        )

    positions.append(
        Position(
            label=STRATEGY.cash_label,
            ticker=STRATEGY.cash_ticker,
            value=holdings.dry_powder,
            pnl=None,
            pnl_pct=None,
            alloc_pct=None,
            price_unavailable=False,
        )
    )

    # sorted() is stable, so equal values and the unvalued group keep input order
    return sorted(positions, key=_sort_key)


def fill_allocation_pcts(positions: Sequence[Position], total_value: Decimal) -> list[Position]:
    """Second pass: set `alloc_pct` on valued positions once the total is known."""
    if total_value <= 0:
        return list(positions)
    return [
        p if p.value is None else replace(p, alloc_pct=calc_allocation_pct(p.value, total_value))
        for p in positions
    ]


def _position_for(key: str, positions: Sequence[Position]) -> Optional[Position]:
    ticker = STRATEGY.cash_ticker if key == STRATEGY.cash_key else key.upper()
    for position in positions:
        if position.ticker == ticker:
            return position
    return None


def build_allocations(positions: Sequence[Position], total_value: Decimal) -> list[Allocation]:
    """Build allocation rows in the fixed display order, including cash.

    `current_pct` and `gap` are None when the position has no value or the
    portfolio total is 0.
    """
    allocations: list[Allocation] = []

    for key in STRATEGY.allocation_order:
        position = _position_for(key, positions)
        value = position.value if position is not None else None
        target_pct = STRATEGY.target_pct(key)
        label = STRATEGY.allocation_labels.get(key, key.upper())

        if value is None or total_value == 0:
            allocations.append(
                Allocation(key=key, label=label, value=value, current_pct=None, target_pct=target_pct, gap=None)
            )
            continue

        current_pct = calc_allocation_pct(value, total_value)
        allocations.append(
            Allocation(
                key=key,
                label=label,
                value=value,
                current_pct=current_pct,
                target_pct=target_pct,
                gap=calc_allocation_gap(current_pct, Decimal(target_pct)),
            )
        )

    return allocations
