"""Strategy alignment oracle.

Scores a single trading action against the strategy rules. Rules are an
ordered tuple evaluated top to bottom and the first match wins; the order
is part of the contract (stage rules beat sentiment rules).

Pure: no side effects, same inputs always give the same verdict.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from tracker.config import STRATEGY
from tracker.types import Action, Alignment, AlignmentResult, MarketSnapshot


@dataclass(frozen=True)
class AlignmentRule:
    """One rule: a predicate and the verdict it yields when matched."""

    name: str
    predicate: Callable[[Action, MarketSnapshot], bool]
    alignment: Alignment
    reason: str

    def matches(self, action: Action, snapshot: MarketSnapshot) -> bool:
        return self.predicate(action, snapshot)

    @property
    def result(self) -> AlignmentResult:
        return AlignmentResult(alignment=self.alignment, reason=self.reason)


ALIGNMENT_RULES: tuple[AlignmentRule, ...] = (
    AlignmentRule(
        name="buy_in_exit",
        predicate=lambda action, snap: action == "buy" and snap.position_stage == "exit",
        alignment="misaligned",
        reason="Bought during Exit stage",
    ),
    AlignmentRule(
        name="buy_in_distribute",
        predicate=lambda action, snap: action == "buy" and snap.position_stage == "distribute",
        alignment="misaligned",
        reason="Bought during Distribute stage",
    ),
    AlignmentRule(
        name="sell_on_exit_ladder",
        predicate=lambda action, snap: action == "sell"
        and STRATEGY.exit_ladder_trigger_id in snap.active_triggers,
        alignment="aligned",
        reason="Sold on Exit Ladder trigger",
    ),
    AlignmentRule(
        name="buy_in_extreme_fear",
        predicate=lambda action, snap: action == "buy" and snap.fear_greed < STRATEGY.extreme_fear,
        alignment="aligned",
        reason="Bought in Extreme Fear",
    ),
    AlignmentRule(
        name="sell_in_extreme_greed",
        predicate=lambda action, snap: action == "sell" and snap.fear_greed > STRATEGY.extreme_greed,
        alignment="aligned",
        reason="Sold in Extreme Greed",
    ),
    AlignmentRule(
        name="rebalance",
        predicate=lambda action, snap: action == "rebalance",
        alignment="neutral",
        reason="Rebalances are always neutral",
    ),
)

NO_MATCH = AlignmentResult(alignment="neutral", reason="No applicable rule matched")


def score_alignment(action: Action, snapshot: MarketSnapshot) -> AlignmentResult:
    """Return the verdict of the first matching rule, or a neutral fallback."""
    for rule in ALIGNMENT_RULES:
        if rule.matches(action, snapshot):
            return rule.result
    return NO_MATCH
