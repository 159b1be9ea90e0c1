"""Static demo inputs.

Served when MODE=demo: no price fetches and no store reads. The numbers are
consistent with each other (prices x quantities = position values).

    BTC:  3.2  @ avg $45,000 -> $312,000
    MSTR: 200  @ avg $180    -> $77,000
    NEAR: 4000 @ avg $3.50   -> $21,800
    UNI:  800  @ avg $8.00   -> $10,240
    LINK: 600  @ avg $12.00  -> $10,740
    ONDO: 8000 @ avg $0.80   -> $9,440
    USD (dry powder):           $12,000
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from tracker.types import AssetHolding, Holdings, Prices

DEMO_HOLDINGS = Holdings(
    assets={
        "btc": AssetHolding(qty=Decimal("3.2"), cost_basis=Decimal("45000")),
        "mstr": AssetHolding(qty=Decimal("200"), cost_basis=Decimal("180")),
        "near": AssetHolding(qty=Decimal("4000"), cost_basis=Decimal("3.50")),
        "uni": AssetHolding(qty=Decimal("800"), cost_basis=Decimal("8.00")),
        "link": AssetHolding(qty=Decimal("600"), cost_basis=Decimal("12.00")),
        "ondo": AssetHolding(qty=Decimal("8000"), cost_basis=Decimal("0.80")),
    },
    dry_powder=Decimal("12000"),
    nupl=Decimal("0.52"),
    updated_at=datetime(2025, 1, 15, 9, 45, tzinfo=timezone.utc),
)

DEMO_PRICES = Prices(
    assets={
        "btc": Decimal("97500"),
        "mstr": Decimal("385"),
        "near": Decimal("5.45"),
        "uni": Decimal("12.80"),
        "link": Decimal("17.90"),
        "ondo": Decimal("1.18"),
    },
    fear_greed=72,
    btc_dominance=Decimal("56.2"),
    fetched_at=datetime(2025, 1, 15, 10, 30, tzinfo=timezone.utc),
)
