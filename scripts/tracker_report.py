#!/usr/bin/env python
"""Print the portfolio state and adherence score as JSON.

Usage:
    python scripts/tracker_report.py                       # demo portfolio
    python scripts/tracker_report.py --decisions log.json  # plus score of a decision log

The decision log is a JSON array of stored decision records.

Environment:
    MODE - demo | live (only demo inputs are available to this script)
    PORTFOLIO_TARGET - portfolio value target in USD
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

# Add project root to path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from pydantic import TypeAdapter, ValidationError  # noqa: E402

from tracker.config import TrackerSettings  # noqa: E402
from tracker.decisions.service import DecisionService  # noqa: E402
from tracker.demo_data import DEMO_HOLDINGS, DEMO_PRICES  # noqa: E402
from tracker.portfolio import build_portfolio_state  # noqa: E402
from tracker.schemas import DecisionRecord  # noqa: E402
from tracker.storage import (  # noqa: E402
    InMemoryDecisionLog,
    InMemoryHoldingsStore,
    InMemoryScoreCache,
    StaticPriceSource,
)
from tracker.types import to_dict  # noqa: E402

logger = logging.getLogger("tracker_report")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Portfolio state and adherence score report")
    parser.add_argument("--decisions", type=Path, default=None, help="JSON file with stored decision records")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        settings = TrackerSettings.from_env()
    except ValueError as exc:
        logger.error("Invalid settings: %s", exc)
        return 2

    state = build_portfolio_state(DEMO_HOLDINGS, DEMO_PRICES, target=settings.portfolio_target, mode="demo")
    report: dict = {"portfolio": to_dict(state)}

    if args.decisions is not None:
        try:
            raw = json.loads(args.decisions.read_text(encoding="utf-8"))
            records = TypeAdapter(list[DecisionRecord]).validate_python(raw)
        except (OSError, json.JSONDecodeError, ValidationError) as exc:
            logger.error("Could not read decision log %s: %s", args.decisions, exc)
            return 1
        service = DecisionService(
            price_source=StaticPriceSource(DEMO_PRICES),
            holdings_store=InMemoryHoldingsStore(DEMO_HOLDINGS),
            decision_log=InMemoryDecisionLog([r.to_entry() for r in records]),
            score_cache=InMemoryScoreCache.from_settings(settings),
        )
        breakdown = service.get_score()
        report["score"] = to_dict(breakdown)
        logger.info("Scored %s decisions: overall=%s", breakdown.total_decisions, breakdown.overall)

    print(json.dumps(report, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
