"""Market snapshot construction.

A snapshot freezes the market conditions at the moment a decision is logged
so it can be scored now and re-examined later.
"""

from __future__ import annotations

from decimal import Decimal

from tracker.config import STRATEGY
from tracker.triggers import BTC_PRICE_ZONE_LABEL, active_trigger_ids, calc_all_triggers
from tracker.types import ZERO, MarketSnapshot, PositionStage, Prices

# Substituted when a source is unavailable at snapshot time
NEUTRAL_FEAR_GREED = 50


def derive_position_stage(btc_price: Decimal) -> PositionStage:
    """Strategy phase from BTC price.

    These are cycle-phase boundaries, independent of the proceeds split zones:

        accumulate  < $120K
        distribute  $120K - $175K
        reduce      $175K - $225K
        exit        >= $225K
    """
    stages = STRATEGY.stages
    if btc_price < stages.distribute:
        return "accumulate"
    if btc_price < stages.reduce:
        return "distribute"
    if btc_price < stages.exit:
        return "reduce"
    return "exit"


def build_market_snapshot(prices: Prices, nupl: Decimal) -> MarketSnapshot:
    triggers = calc_all_triggers(prices, nupl)
    btc_price = prices.price("btc")
    btc_price = btc_price if btc_price is not None else ZERO

    price_zone = next((t.status for t in triggers if t.label == BTC_PRICE_ZONE_LABEL), "UNKNOWN")

    return MarketSnapshot(
        btc_price=btc_price,
        fear_greed=prices.fear_greed if prices.fear_greed is not None else NEUTRAL_FEAR_GREED,
        btc_dominance=prices.btc_dominance if prices.btc_dominance is not None else ZERO,
        nupl=nupl,
        btc_price_zone=price_zone,
        position_stage=derive_position_stage(btc_price),
        active_triggers=active_trigger_ids(triggers),
    )
