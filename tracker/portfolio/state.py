"""Full portfolio state composition."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional

from tracker.config import STRATEGY
from tracker.portfolio.aggregates import (
    calc_exit_ladder,
    calc_gap_to_target,
    calc_progress_to_target,
    calc_proceeds_split,
    calc_total_pnl,
    calc_total_value,
)
from tracker.portfolio.positions import build_allocations, build_positions, fill_allocation_pcts
from tracker.triggers import calc_all_triggers
from tracker.types import ZERO, Holdings, Mode, PortfolioState, Prices

logger = logging.getLogger(__name__)


def build_portfolio_state(
    holdings: Holdings,
    prices: Prices,
    *,
    target: Optional[Decimal] = None,
    mode: Mode = "live",
) -> PortfolioState:
    """Compute the complete portfolio state from holdings and prices.

    Args:
        holdings: Current holdings (with cost basis)
        prices: Current quotes, any of which may be None
        target: Portfolio value target (defaults to the strategy target)
        mode: "demo" or "live", carried through for the caller

    Returns:
        PortfolioState without any cost basis figures
    """
    target = STRATEGY.portfolio_target if target is None else target

    # Pass 1: allocation unknown until the total is known
    positions = build_positions(holdings, prices)
    total_value = calc_total_value(positions)
    # Pass 2
    positions = fill_allocation_pcts(positions, total_value)

    allocations = build_allocations(positions, total_value)
    triggers = calc_all_triggers(prices, holdings.nupl)
    pnl = calc_total_pnl(holdings, prices)

    btc_price = prices.price("btc")
    # Without a BTC price fall back to the lowest (most conservative) zone
    proceeds_split = calc_proceeds_split(btc_price if btc_price is not None else ZERO)

    prices_partial = prices.is_partial
    if prices_partial:
        logger.debug("Portfolio state built from partial prices")

    return PortfolioState(
        mode=mode,
        total_value=total_value,
        total_pnl=pnl.total_pnl,
        pnl_pct=pnl.pnl_pct,
        target=target,
        gap_to_target=calc_gap_to_target(total_value, target),
        progress_pct=calc_progress_to_target(total_value, target),
        positions=tuple(positions),
        allocations=tuple(allocations),
        triggers=triggers,
        proceeds_split=proceeds_split,
        exit_ladder=tuple(calc_exit_ladder(btc_price)),
        prices=prices,
        updated_at=holdings.updated_at,
        prices_partial=prices_partial,
    )
