"""Boundary models.

Malformed input is rejected here, before it reaches the calculations,
which assume well-typed values. Cost basis is accepted on writes but never
included in any outgoing model.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, Field, RootModel, StrictBool

from tracker.config import STRATEGY
from tracker.types import AssetHolding, DecisionEntry, Holdings, MarketSnapshot


class DecisionRequest(BaseModel):
    """A decision as submitted by the user (quantities, not USD)."""

    asset: str = Field(..., min_length=1, description="Asset ticker (e.g., BTC)")
    action: Literal["buy", "sell", "rebalance"] = Field(..., description="Decision type")
    amount_before: Decimal = Field(..., ge=0, description="Quantity held before the decision")
    amount_after: Decimal = Field(..., ge=0, description="Quantity held after the decision")
    notes: Optional[str] = None


class DecisionQuery(BaseModel):
    """Timeline filters and pagination."""

    asset: Optional[str] = None
    alignment: Optional[Literal["aligned", "misaligned", "neutral"]] = None
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    limit: int = Field(20, ge=1, le=500)
    offset: int = Field(0, ge=0)


class NotesUpdate(BaseModel):
    notes: str


CHECKLIST_LENGTH = len(STRATEGY.checklist_items)


class ChecklistUpdate(RootModel[list[StrictBool]]):
    """Checklist write: a bare array with one boolean per review item."""

    root: list[StrictBool] = Field(..., min_length=CHECKLIST_LENGTH, max_length=CHECKLIST_LENGTH)


class AssetHoldingInput(BaseModel):
    qty: Decimal = Field(..., ge=0)
    cost_basis: Decimal = Field(..., ge=0, description="Per-unit average cost")


class HoldingsUpdate(BaseModel):
    """Full holdings write. Replaces the stored holdings wholesale."""

    assets: dict[str, AssetHoldingInput]
    dry_powder: Decimal = Field(Decimal("0"), ge=0)
    nupl: Decimal = Decimal("0")

    def to_holdings(self, now: Optional[datetime] = None) -> Holdings:
        return Holdings(
            assets={
                key.lower(): AssetHolding(qty=h.qty, cost_basis=h.cost_basis)
                for key, h in self.assets.items()
            },
            dry_powder=self.dry_powder,
            nupl=self.nupl,
            updated_at=now or datetime.now(timezone.utc),
        )


class ClientAssetHolding(BaseModel):
    qty: Decimal


class ClientHoldings(BaseModel):
    """Client-safe holdings: quantities only, no cost basis."""

    assets: dict[str, ClientAssetHolding]
    dry_powder: Decimal
    nupl: Decimal
    updated_at: datetime

    @classmethod
    def from_holdings(cls, holdings: Holdings) -> ClientHoldings:
        return cls(
            assets={key: ClientAssetHolding(qty=h.qty) for key, h in holdings.assets.items()},
            dry_powder=holdings.dry_powder,
            nupl=holdings.nupl,
            updated_at=holdings.updated_at,
        )


class MarketSnapshotRecord(BaseModel):
    btc_price: Decimal
    fear_greed: int = Field(..., ge=0, le=100)
    btc_dominance: Decimal
    nupl: Decimal
    btc_price_zone: str
    position_stage: Literal["accumulate", "distribute", "reduce", "exit"]
    active_triggers: list[str] = []


class DecisionRecord(BaseModel):
    """A stored decision entry as read back from the decision log."""

    id: str = Field(..., min_length=1)
    timestamp: datetime
    asset: str = Field(..., min_length=1)
    action: Literal["buy", "sell", "rebalance"]
    amount_before: Decimal
    amount_after: Decimal
    snapshot: MarketSnapshotRecord
    alignment: Literal["aligned", "misaligned", "neutral"]
    alignment_reason: str
    notes: Optional[str] = None

    def to_entry(self) -> DecisionEntry:
        snap = self.snapshot
        return DecisionEntry(
            id=self.id,
            timestamp=self.timestamp,
            asset=self.asset,
            action=self.action,
            amount_before=self.amount_before,
            amount_after=self.amount_after,
            snapshot=MarketSnapshot(
                btc_price=snap.btc_price,
                fear_greed=snap.fear_greed,
                btc_dominance=snap.btc_dominance,
                nupl=snap.nupl,
                btc_price_zone=snap.btc_price_zone,
                position_stage=snap.position_stage,
                active_triggers=tuple(snap.active_triggers),
            ),
            alignment=self.alignment,
            alignment_reason=self.alignment_reason,
            notes=self.notes,
        )
