"""Market trigger evaluation.

Fear & Greed, BTC dominance, NUPL and BTC price zone alert states.
"""

from .evaluator import (
    BTC_DOMINANCE_LABEL,
    BTC_PRICE_ZONE_LABEL,
    FEAR_GREED_LABEL,
    NUPL_LABEL,
    active_trigger_ids,
    calc_all_triggers,
    eval_btc_dominance,
    eval_btc_price_zone,
    eval_fear_greed,
    eval_nupl,
    trigger_id,
)

__all__ = [
    # Evaluators
    "eval_fear_greed",
    "eval_btc_dominance",
    "eval_nupl",
    "eval_btc_price_zone",
    "calc_all_triggers",
    # Ids
    "trigger_id",
    "active_trigger_ids",
    # Labels
    "FEAR_GREED_LABEL",
    "BTC_DOMINANCE_LABEL",
    "NUPL_LABEL",
    "BTC_PRICE_ZONE_LABEL",
]
