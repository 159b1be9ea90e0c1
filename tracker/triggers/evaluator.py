"""Market trigger evaluation.

Maps raw market indicators to categorized alert states. Each evaluator is
independent and pure; `calc_all_triggers` returns the four states in a fixed
order that consumers rely on positionally.

Severity `warn` is reserved for a missing driving input.
"""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from tracker.config import STRATEGY
from tracker.types import Prices, TriggerState

FEAR_GREED_LABEL = "FEAR & GREED"
BTC_DOMINANCE_LABEL = "BTC DOMINANCE"
NUPL_LABEL = "NUPL"
BTC_PRICE_ZONE_LABEL = "BTC PRICE ZONE"

UNKNOWN_STATUS = "UNKNOWN"
UNKNOWN_VALUE = "N/A"

# Fired statuses with a stable id
STATUS_FG_EUPHORIA = "EUPHORIA - T3 ZONE"
STATUS_FG_EXTREME_GREED = "EXTREME GREED - T1/T2 ZONE"
STATUS_DOM_ALTSEASON = "T2 FIRED - ALTCOIN SEASON"
STATUS_NUPL_EUPHORIA = "EUPHORIA - T3 ACTIVE"
STATUS_EXIT_LADDER = "EXIT LADDER ACTIVE"

_TRIGGER_IDS: dict[str, str] = {
    STATUS_EXIT_LADDER: STRATEGY.exit_ladder_trigger_id,
    STATUS_FG_EUPHORIA: "fg-t3-euphoria",
    STATUS_FG_EXTREME_GREED: "fg-t1t2-greed",
    STATUS_DOM_ALTSEASON: "dom-altseason",
    STATUS_NUPL_EUPHORIA: "nupl-t3-euphoria",
}

_th = STRATEGY.triggers


def eval_fear_greed(fg: Optional[int]) -> TriggerState:
    """Evaluate the Fear & Greed index (0-100)."""
    label = FEAR_GREED_LABEL
    condition = (
        f"Near active >= {_th.fear_greed_near}, T1/T2 active >= {_th.fear_greed_fired}"
        f", T3 active >= {_th.fear_greed_euphoria}"
    )

    if fg is None:
        return TriggerState(label, UNKNOWN_VALUE, UNKNOWN_STATUS, "warn", condition)

    value = str(fg)

    if fg >= _th.fear_greed_euphoria:
        return TriggerState(label, value, STATUS_FG_EUPHORIA, "fired", condition)
    if fg >= _th.fear_greed_fired:
        return TriggerState(label, value, STATUS_FG_EXTREME_GREED, "fired", condition)
    if fg >= _th.fear_greed_near:
        return TriggerState(label, value, "GREED - MONITOR CLOSELY", "near", condition)
    return TriggerState(label, value, "FEAR - ACCUMULATE", "watch", condition)


def eval_btc_dominance(dom: Optional[Decimal]) -> TriggerState:
    """Evaluate BTC dominance (percent). Both ends of the near band are inclusive."""
    label = BTC_DOMINANCE_LABEL
    condition = (
        f"Near when {_th.dominance_fired_below}-{_th.dominance_near_max}%"
        f", T2 fired below {_th.dominance_fired_below}%"
    )

    if dom is None:
        return TriggerState(label, UNKNOWN_VALUE, UNKNOWN_STATUS, "warn", condition)

    value = f"{dom:.1f}%"

    if dom < _th.dominance_fired_below:
        return TriggerState(label, value, STATUS_DOM_ALTSEASON, "fired", condition)
    if dom <= _th.dominance_near_max:
        return TriggerState(label, value, "ALTCOIN SEASON APPROACHING", "near", condition)
    return TriggerState(label, value, "BTC DOMINANT - WATCH", "watch", condition)


def eval_nupl(nupl: Decimal) -> TriggerState:
    """Evaluate NUPL. It is entered manually so it is never missing."""
    label = NUPL_LABEL
    condition = f"Near at {_th.nupl_near}-0.74, T3 euphoria >= {_th.nupl_fired}"
    value = f"{nupl:.2f}"

    if nupl >= _th.nupl_fired:
        return TriggerState(label, value, STATUS_NUPL_EUPHORIA, "fired", condition)
    if nupl >= _th.nupl_near:
        return TriggerState(label, value, "APPROACHING EUPHORIA", "near", condition)
    return TriggerState(label, value, "BELIEF PHASE - WATCH", "watch", condition)


def _format_usd_short(price: Decimal) -> str:
    if price >= 1000:
        thousands = (Decimal(price) / 1000).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
        return f"${thousands}K"
    return f"${Decimal(price).quantize(Decimal('1'), rounding=ROUND_HALF_UP)}"


def eval_btc_price_zone(btc_price: Optional[Decimal]) -> TriggerState:
    """Evaluate which strategy zone the BTC price sits in."""
    label = BTC_PRICE_ZONE_LABEL
    condition = f"Exit ladder activates above {_format_usd_short(_th.price_zone_fired)}"

    if btc_price is None:
        return TriggerState(label, UNKNOWN_VALUE, UNKNOWN_STATUS, "warn", condition)

    value = _format_usd_short(btc_price)

    if btc_price >= _th.price_zone_fired:
        return TriggerState(label, value, STATUS_EXIT_LADDER, "fired", condition)
    if btc_price >= _th.price_zone_near:
        return TriggerState(label, value, "HOLD PHASE - APPROACHING EXIT", "near", condition)
    return TriggerState(label, value, "ACCUMULATE PHASE", "watch", condition)


def calc_all_triggers(prices: Prices, nupl: Decimal) -> tuple[TriggerState, ...]:
    """Return all four triggers: Fear & Greed, Dominance, NUPL, Price Zone."""
    return (
        eval_fear_greed(prices.fear_greed),
        eval_btc_dominance(prices.btc_dominance),
        eval_nupl(nupl),
        eval_btc_price_zone(prices.price("btc")),
    )


def trigger_id(state: TriggerState) -> str:
    """Stable id for a trigger state, derived from its status."""
    known = _TRIGGER_IDS.get(state.status)
    if known is not None:
        return known
    return re.sub(r"[^a-z0-9]+", "-", state.status.lower())


def active_trigger_ids(states: Iterable[TriggerState]) -> tuple[str, ...]:
    """Ids of fired triggers only; near/watch/warn are not actionable."""
    return tuple(trigger_id(s) for s in states if s.severity == "fired")
