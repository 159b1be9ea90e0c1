"""Portfolio valuation.

Positions, allocations vs target, totals, proceeds split and exit ladder.
"""

from .aggregates import (
    calc_exit_ladder,
    calc_gap_to_target,
    calc_progress_to_target,
    calc_proceeds_split,
    calc_total_pnl,
    calc_total_value,
)
from .positions import (
    build_allocations,
    build_positions,
    calc_allocation_gap,
    calc_allocation_pct,
    calc_position_pnl,
    fill_allocation_pcts,
)
from .state import build_portfolio_state

__all__ = [
    # Positions
    "build_positions",
    "fill_allocation_pcts",
    "calc_position_pnl",
    # Allocations
    "build_allocations",
    "calc_allocation_pct",
    "calc_allocation_gap",
    # Aggregates
    "calc_total_value",
    "calc_total_pnl",
    "calc_progress_to_target",
    "calc_gap_to_target",
    "calc_proceeds_split",
    "calc_exit_ladder",
    # State
    "build_portfolio_state",
]
