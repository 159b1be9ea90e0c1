"""Portfolio-level aggregates.

Totals are exact sums over per-position values. A missing price is never
treated as 0: unvalued positions are left out of sums, and totals that
would be unreliable without them are returned as None.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional, Sequence

from tracker.config import STRATEGY
from tracker.types import ZERO, ExitLadderRung, Holdings, PnlSummary, Position, Prices, ProceedsSplit

logger = logging.getLogger(__name__)

HUNDRED = Decimal("100")


def calc_total_value(positions: Sequence[Position]) -> Decimal:
    """Sum of positions whose value is known."""
    return sum((p.value for p in positions if p.value is not None), ZERO)


def calc_total_pnl(holdings: Holdings, prices: Prices) -> PnlSummary:
    """Total portfolio P&L.

    Returns an empty summary if any dominant asset (BTC, MSTR) has no price;
    their absence makes any total unreliable. Otherwise sums P&L for assets
    whose price is known.
    """
    missing = [key for key in STRATEGY.dominant_assets if prices.price(key) is None]
    if missing:
        logger.debug("Total P&L suppressed; missing dominant prices: %s", ", ".join(missing))
        return PnlSummary(total_pnl=None, pnl_pct=None)

    total_pnl = ZERO
    total_invested = ZERO

    for asset in STRATEGY.tracked_assets:
        price = prices.price(asset.key)
        if price is None:
            continue
        holding = holdings.holding(asset.key)
        invested = holding.invested
        total_invested += invested
        total_pnl += holding.qty * price - invested

    pnl_pct = total_pnl / total_invested * HUNDRED if total_invested > 0 else None
    return PnlSummary(total_pnl=total_pnl, pnl_pct=pnl_pct)


def calc_progress_to_target(total_value: Decimal, target: Decimal) -> Decimal:
    """Progress toward the target in percent, capped at 100."""
    if target == 0:
        return ZERO
    return min(total_value / target * HUNDRED, HUNDRED)


def calc_gap_to_target(total_value: Decimal, target: Decimal) -> Decimal:
    return total_value - target


def calc_proceeds_split(btc_price: Decimal) -> ProceedsSplit:
    """Cash/BTC split for sale proceeds, keyed by BTC price zone.

    Each zone's lower bound is inclusive.
    """
    selected = STRATEGY.proceeds_zones[0]
    for zone in STRATEGY.proceeds_zones:
        if btc_price >= zone.lower_bound:
            selected = zone
    return ProceedsSplit(
        zone=selected.zone,  # type: ignore[arg-type]
        zone_label=selected.zone_label,
        cash_pct=selected.cash_pct,
        btc_pct=selected.btc_pct,
    )


def calc_exit_ladder(btc_price: Optional[Decimal]) -> list[ExitLadderRung]:
    """Progress of the BTC price through each exit tranche.

    Distances are only given for rungs not yet hit while the price is known.
    """
    rungs: list[ExitLadderRung] = []

    for tranche in STRATEGY.exit_tranches:
        hit = btc_price is not None and btc_price >= tranche.price
        distance_pct: Optional[Decimal] = None
        dollar_distance: Optional[Decimal] = None
        progress = ZERO

        if btc_price is not None:
            progress = min(btc_price / tranche.price, Decimal("1"))
            if not hit and btc_price > 0:
                dollar_distance = tranche.price - btc_price
                distance_pct = dollar_distance / btc_price * HUNDRED

        rungs.append(
            ExitLadderRung(
                label=tranche.label,
                price=tranche.price,
                sell_pct=tranche.sell_pct,
                hit=hit,
                distance_pct=distance_pct,
                dollar_distance=dollar_distance,
                progress=progress,
            )
        )

    return rungs
