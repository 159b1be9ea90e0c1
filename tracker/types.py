from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Literal, Mapping, Optional, Sequence

TriggerSeverity = Literal["watch", "near", "fired", "warn"]
Action = Literal["buy", "sell", "rebalance"]
Alignment = Literal["aligned", "misaligned", "neutral"]
PositionStage = Literal["accumulate", "distribute", "reduce", "exit"]
BtcPriceZone = Literal["below_150k", "150k_250k", "250k_350k", "above_350k"]
Mode = Literal["demo", "live"]

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
ZERO = Decimal("0")


def _jsonable(value: Any) -> Any:
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


def to_dict(record: Any) -> dict[str, Any]:
    """Convert a result dataclass into plain JSON-safe values."""
    return _jsonable(asdict(record))


@dataclass(frozen=True)
class AssetHolding:
    qty: Decimal
    cost_basis: Decimal  # per unit average cost, never sent to clients

    @property
    def invested(self) -> Decimal:
        return self.qty * self.cost_basis


ZERO_HOLDING = AssetHolding(qty=ZERO, cost_basis=ZERO)


@dataclass(frozen=True)
class Holdings:
    """Full holdings record, replaced wholesale on every user write."""

    assets: Mapping[str, AssetHolding]
    dry_powder: Decimal = ZERO
    nupl: Decimal = ZERO  # manual input
    updated_at: datetime = EPOCH

    def holding(self, key: str) -> AssetHolding:
        return self.assets.get(key, ZERO_HOLDING)


@dataclass(frozen=True)
class Prices:
    """Point-in-time quote set. None means the source was unavailable."""

    assets: Mapping[str, Optional[Decimal]]
    fear_greed: Optional[int] = None  # 0-100
    btc_dominance: Optional[Decimal] = None  # percent
    fetched_at: datetime = EPOCH

    def price(self, key: str) -> Optional[Decimal]:
        return self.assets.get(key)

    @property
    def is_partial(self) -> bool:
        if any(p is None for p in self.assets.values()):
            return True
        return self.fear_greed is None or self.btc_dominance is None


@dataclass(frozen=True)
class Position:
    label: str
    ticker: str
    value: Optional[Decimal]  # None when price unavailable
    pnl: Optional[Decimal]
    pnl_pct: Optional[Decimal]
    alloc_pct: Optional[Decimal]  # filled in once total value is known
    price_unavailable: bool


@dataclass(frozen=True)
class Allocation:
    key: str
    label: str
    value: Optional[Decimal]
    current_pct: Optional[Decimal]
    target_pct: int
    gap: Optional[Decimal]  # positive = overweight


@dataclass(frozen=True)
class TriggerState:
    label: str
    value: str
    status: str
    severity: TriggerSeverity
    condition: str


@dataclass(frozen=True)
class ProceedsSplit:
    zone: BtcPriceZone
    zone_label: str
    cash_pct: int
    btc_pct: int


@dataclass(frozen=True)
class ExitLadderRung:
    label: str
    price: Decimal
    sell_pct: int
    hit: bool
    distance_pct: Optional[Decimal]  # rise needed to reach the rung
    dollar_distance: Optional[Decimal]
    progress: Decimal  # 0..1


@dataclass(frozen=True)
class PnlSummary:
    total_pnl: Optional[Decimal]
    pnl_pct: Optional[Decimal]


@dataclass(frozen=True)
class PortfolioState:
    """Everything the dashboard needs. Contains no cost basis figures."""

    mode: Mode
    total_value: Decimal
    total_pnl: Optional[Decimal]
    pnl_pct: Optional[Decimal]
    target: Decimal
    gap_to_target: Decimal
    progress_pct: Decimal
    positions: tuple[Position, ...]
    allocations: tuple[Allocation, ...]
    triggers: tuple[TriggerState, ...]
    proceeds_split: ProceedsSplit
    exit_ladder: tuple[ExitLadderRung, ...]
    prices: Prices
    updated_at: datetime
    prices_partial: bool


@dataclass(frozen=True)
class MarketSnapshot:
    btc_price: Decimal
    fear_greed: int
    btc_dominance: Decimal
    nupl: Decimal
    btc_price_zone: str
    position_stage: PositionStage
    active_triggers: tuple[str, ...] = ()  # ids of fired triggers only


@dataclass(frozen=True)
class AlignmentResult:
    alignment: Alignment
    reason: str


@dataclass(frozen=True)
class DecisionEntry:
    id: str
    timestamp: datetime
    asset: str
    action: Action
    amount_before: Decimal  # USD
    amount_after: Decimal  # USD
    snapshot: MarketSnapshot
    alignment: Alignment
    alignment_reason: str
    notes: Optional[str] = None

    def with_notes(self, notes: str) -> DecisionEntry:
        return replace(self, notes=notes)


@dataclass(frozen=True)
class FearGreedZoneScores:
    fear: int
    greed: int
    neutral: int


@dataclass(frozen=True)
class ScoreBreakdown:
    overall: int  # 0-100
    by_stage: Mapping[str, int]
    by_fear_greed_zone: FearGreedZoneScores
    total_decisions: int
    aligned_count: int
    misaligned_count: int
    top_misalignment_reason: Optional[str]


@dataclass(frozen=True)
class DecisionPage:
    entries: Sequence[DecisionEntry] = field(default_factory=tuple)
    total: int = 0
