"""Portfolio service: holdings reads/writes, state composition and the review checklist."""

from __future__ import annotations

import logging
from typing import Optional

from tracker.config import TrackerSettings
from tracker.demo_data import DEMO_HOLDINGS, DEMO_PRICES
from tracker.errors import ChecklistUnavailableError
from tracker.persistence.interfaces import ChecklistStore, HoldingsStore, PriceSource
from tracker.portfolio.state import build_portfolio_state
from tracker.schemas import ChecklistUpdate, ClientHoldings, HoldingsUpdate
from tracker.types import PortfolioState

logger = logging.getLogger(__name__)


class PortfolioService:
    def __init__(
        self,
        *,
        price_source: PriceSource,
        holdings_store: HoldingsStore,
        checklist_store: Optional[ChecklistStore] = None,
        settings: Optional[TrackerSettings] = None,
    ) -> None:
        """Initialize portfolio service.

        Args:
            price_source: Live quote source
            holdings_store: Holdings storage
            checklist_store: Optional review checklist storage (live mode only)
            settings: Runtime settings (defaults to live mode, strategy target)
        """
        self._prices = price_source
        self._holdings = holdings_store
        self._checklist = checklist_store
        self._settings = settings or TrackerSettings()

    def get_state(self) -> PortfolioState:
        """Current portfolio state. Demo mode reads no collaborators."""
        target = self._settings.portfolio_target
        if self._settings.mode == "demo":
            return build_portfolio_state(DEMO_HOLDINGS, DEMO_PRICES, target=target, mode="demo")

        prices = self._prices.fetch_prices()
        holdings = self._holdings.get_holdings()
        return build_portfolio_state(holdings, prices, target=target, mode="live")

    def get_holdings(self) -> ClientHoldings:
        return ClientHoldings.from_holdings(self._holdings.get_holdings())

    def update_holdings(self, update: HoldingsUpdate) -> ClientHoldings:
        """Replace holdings wholesale. A holdings write starts a new review cycle."""
        holdings = update.to_holdings()
        self._holdings.set_holdings(holdings=holdings)
        logger.info("Holdings replaced (%s assets)", len(holdings.assets))

        if self._checklist is not None:
            self._checklist.reset_checklist()
            logger.debug("Review checklist reset after holdings write")
        return ClientHoldings.from_holdings(holdings)

    def _checklist_store(self) -> ChecklistStore:
        if self._settings.mode == "demo" or self._checklist is None:
            raise ChecklistUnavailableError("Review checklist is only stored in live mode")
        return self._checklist

    def get_checklist(self) -> tuple[bool, ...]:
        """Checklist flags in `STRATEGY.checklist_items` order.

        Raises:
            ChecklistUnavailableError: In demo mode or without a checklist store
        """
        return self._checklist_store().get_checklist()

    def set_checklist(self, update: ChecklistUpdate) -> tuple[bool, ...]:
        """Replace the checklist flags.

        Raises:
            ChecklistUnavailableError: In demo mode or without a checklist store
        """
        store = self._checklist_store()
        store.set_checklist(state=update.root)
        return store.get_checklist()
