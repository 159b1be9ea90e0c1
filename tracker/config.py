"""Strategy constants and runtime settings.

`STRATEGY` is the single source of truth for every fixed number the
calculations use: target allocations, trigger thresholds, price zones,
exit-ladder tranches. Call sites and tests read it instead of repeating
magic numbers.

Runtime settings (demo/live mode, portfolio target override, score cache
TTL) come from the environment via `TrackerSettings.from_env()`.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from types import MappingProxyType
from typing import Mapping

from tracker.types import Mode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrackedAsset:
    """A priced asset that becomes a position."""

    key: str
    label: str
    ticker: str


@dataclass(frozen=True)
class ProceedsZone:
    """Cash/BTC split applied to sale proceeds above `lower_bound`."""

    zone: str
    zone_label: str
    lower_bound: Decimal  # inclusive
    cash_pct: int
    btc_pct: int


@dataclass(frozen=True)
class ExitTranche:
    """One rung of the exit ladder."""

    label: str
    price: Decimal
    sell_pct: int


@dataclass(frozen=True)
class TriggerThresholds:
    """Boundaries for the four market triggers (lower bound inclusive)."""

    fear_greed_near: int = 65
    fear_greed_fired: int = 80
    fear_greed_euphoria: int = 85
    dominance_near_max: Decimal = Decimal("55")  # near is [52, 55]
    dominance_fired_below: Decimal = Decimal("52")
    nupl_near: Decimal = Decimal("0.60")
    nupl_fired: Decimal = Decimal("0.75")
    price_zone_near: Decimal = Decimal("100000")
    price_zone_fired: Decimal = Decimal("200000")


@dataclass(frozen=True)
class StageBoundaries:
    """BTC price boundaries between position stages (lower bound inclusive)."""

    distribute: Decimal = Decimal("120000")
    reduce: Decimal = Decimal("175000")
    exit: Decimal = Decimal("225000")


def _frozen(mapping: dict[str, int]) -> Mapping[str, int]:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class StrategyConfig:
    """Fixed strategy configuration."""

    portfolio_target: Decimal = Decimal("1000000")

    tracked_assets: tuple[TrackedAsset, ...] = (
        TrackedAsset(key="btc", label="Bitcoin", ticker="BTC"),
        TrackedAsset(key="mstr", label="MicroStrategy", ticker="MSTR"),
        TrackedAsset(key="near", label="NEAR Protocol", ticker="NEAR"),
        TrackedAsset(key="uni", label="Uniswap", ticker="UNI"),
        TrackedAsset(key="link", label="Chainlink", ticker="LINK"),
        TrackedAsset(key="ondo", label="Ondo Finance", ticker="ONDO"),
    )

    # Total P&L is unreliable without these prices
    dominant_assets: tuple[str, ...] = ("btc", "mstr")

    cash_key: str = "dry"
    cash_label: str = "Dry Powder"
    cash_ticker: str = "USD"

    target_allocations: Mapping[str, int] = field(
        default_factory=lambda: _frozen(
            {"btc": 60, "mstr": 15, "ondo": 7, "link": 7, "uni": 7, "dry": 4, "near": 0}
        )
    )
    allocation_labels: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType(
            {
                "btc": "BTC",
                "mstr": "MSTR",
                "ondo": "ONDO",
                "link": "LINK",
                "uni": "UNI",
                "near": "NEAR",
                "dry": "CASH",
            }
        )
    )
    # Display order, not value order
    allocation_order: tuple[str, ...] = ("btc", "mstr", "ondo", "link", "uni", "near", "dry")

    triggers: TriggerThresholds = field(default_factory=TriggerThresholds)
    stages: StageBoundaries = field(default_factory=StageBoundaries)

    # Strict bounds: fear is < extreme_fear, greed is > extreme_greed
    extreme_fear: int = 25
    extreme_greed: int = 75
    exit_ladder_trigger_id: str = "exit-ladder"

    # Ascending by lower bound
    proceeds_zones: tuple[ProceedsZone, ...] = (
        ProceedsZone("below_150k", "BELOW $150K", Decimal("0"), 30, 70),
        ProceedsZone("150k_250k", "$150K-$250K", Decimal("150000"), 50, 50),
        ProceedsZone("250k_350k", "$250K-$350K", Decimal("250000"), 70, 30),
        ProceedsZone("above_350k", "ABOVE $350K", Decimal("350000"), 90, 10),
    )

    exit_tranches: tuple[ExitTranche, ...] = (
        ExitTranche("T1", Decimal("150000"), 10),
        ExitTranche("T2", Decimal("200000"), 20),
        ExitTranche("T3", Decimal("250000"), 30),
        ExitTranche("T4", Decimal("300000"), 25),
        ExitTranche("T5", Decimal("350000"), 15),
    )

    # Pre-action review: the four triggers first, then portfolio checks
    checklist_items: tuple[str, ...] = (
        "Check Fear & Greed index",
        "Check BTC dominance trend",
        "Review NUPL reading",
        "Check BTC price zone",
        "Review allocation vs targets",
        "Review exit ladder levels",
        "Check dry powder reserve",
        "Verify scenario projection",
    )

    def target_pct(self, key: str) -> int:
        return self.target_allocations.get(key, 0)


STRATEGY = StrategyConfig()


@dataclass(frozen=True)
class TrackerSettings:
    """Runtime settings.

    Attributes:
        mode: "demo" serves static demo data, "live" composes real inputs
        portfolio_target: Portfolio value target in USD
        score_cache_ttl_seconds: Lifetime of a cached adherence score
    """

    mode: Mode = "live"
    portfolio_target: Decimal = STRATEGY.portfolio_target
    score_cache_ttl_seconds: int = 60

    @classmethod
    def from_env(cls) -> TrackerSettings:
        """Read settings from MODE, PORTFOLIO_TARGET and SCORE_CACHE_TTL_SECONDS.

        Raises:
            ValueError: If a variable is set to an unusable value
        """
        mode = os.environ.get("MODE", "live").strip().lower() or "live"
        if mode not in ("demo", "live"):
            raise ValueError(f"MODE must be 'demo' or 'live', got {mode!r}")

        raw_target = os.environ.get("PORTFOLIO_TARGET", "").strip()
        target = STRATEGY.portfolio_target
        if raw_target:
            try:
                target = Decimal(raw_target)
            except InvalidOperation as exc:
                raise ValueError(f"PORTFOLIO_TARGET must be a number, got {raw_target!r}") from exc
            if not target.is_finite():
                raise ValueError(f"PORTFOLIO_TARGET must be a finite number, got {raw_target!r}")
            if target < 0:
                raise ValueError("PORTFOLIO_TARGET must be >= 0")

        raw_ttl = os.environ.get("SCORE_CACHE_TTL_SECONDS", "").strip()
        ttl = 60
        if raw_ttl:
            if not raw_ttl.isdigit():
                raise ValueError(f"SCORE_CACHE_TTL_SECONDS must be a non-negative integer, got {raw_ttl!r}")
            ttl = int(raw_ttl)

        settings = cls(mode=mode, portfolio_target=target, score_cache_ttl_seconds=ttl)  # type: ignore[arg-type]
        logger.debug("Loaded tracker settings: mode=%s target=%s ttl=%ss", settings.mode, target, ttl)
        return settings
