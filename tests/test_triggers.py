"""Tests for market trigger evaluation."""

from __future__ import annotations

from decimal import Decimal

import pytest

from tracker.triggers import (
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
from tracker.types import Prices, TriggerState


# ========== Fear & Greed ==========


class TestFearGreed:
    """Tests for eval_fear_greed."""

    def test_none_is_warn(self) -> None:
        """Test that a missing index yields warn/UNKNOWN."""
        result = eval_fear_greed(None)
        assert result.severity == "warn"
        assert result.status == "UNKNOWN"
        assert result.label == FEAR_GREED_LABEL

    @pytest.mark.parametrize("fg", [0, 45, 64])
    def test_watch_below_65(self, fg: int) -> None:
        assert eval_fear_greed(fg).severity == "watch"

    @pytest.mark.parametrize("fg", [65, 72, 79])
    def test_near_from_65_to_79(self, fg: int) -> None:
        assert eval_fear_greed(fg).severity == "near"

    @pytest.mark.parametrize("fg", [80, 84])
    def test_fired_t1_t2_zone(self, fg: int) -> None:
        result = eval_fear_greed(fg)
        assert result.severity == "fired"
        assert "T1/T2" in result.status

    @pytest.mark.parametrize("fg", [85, 100])
    def test_fired_t3_euphoria(self, fg: int) -> None:
        result = eval_fear_greed(fg)
        assert result.severity == "fired"
        assert "T3" in result.status
        assert "EUPHORIA" in result.status

    def test_value_is_raw_number(self) -> None:
        assert eval_fear_greed(72).value == "72"


# ========== BTC Dominance ==========


class TestBtcDominance:
    """Tests for eval_btc_dominance."""

    def test_none_is_warn(self) -> None:
        assert eval_btc_dominance(None).severity == "warn"

    @pytest.mark.parametrize("dom", [Decimal("58.4"), Decimal("56"), Decimal("55.01")])
    def test_watch_above_55(self, dom: Decimal) -> None:
        assert eval_btc_dominance(dom).severity == "watch"

    @pytest.mark.parametrize("dom", [Decimal("52"), Decimal("53.5"), Decimal("55")])
    def test_near_band_is_inclusive_both_ends(self, dom: Decimal) -> None:
        assert eval_btc_dominance(dom).severity == "near"

    @pytest.mark.parametrize("dom", [Decimal("51.99"), Decimal("40")])
    def test_fired_below_52(self, dom: Decimal) -> None:
        assert eval_btc_dominance(dom).severity == "fired"

    def test_value_has_one_decimal_and_percent(self) -> None:
        assert eval_btc_dominance(Decimal("56.2")).value == "56.2%"

    def test_accepts_float(self) -> None:
        """Test that plain floats from a quote source also work."""
        assert eval_btc_dominance(53.25).severity == "near"


# ========== NUPL ==========


class TestNupl:
    """Tests for eval_nupl."""

    @pytest.mark.parametrize("nupl", [Decimal("0"), Decimal("0.35"), Decimal("0.59")])
    def test_watch_below_060(self, nupl: Decimal) -> None:
        assert eval_nupl(nupl).severity == "watch"

    @pytest.mark.parametrize("nupl", [Decimal("0.60"), Decimal("0.74")])
    def test_near_from_060(self, nupl: Decimal) -> None:
        assert eval_nupl(nupl).severity == "near"

    @pytest.mark.parametrize("nupl", [Decimal("0.75"), Decimal("0.9")])
    def test_fired_from_075(self, nupl: Decimal) -> None:
        assert eval_nupl(nupl).severity == "fired"

    def test_never_warn(self) -> None:
        assert eval_nupl(Decimal("-0.2")).severity == "watch"

    def test_value_has_two_decimals(self) -> None:
        assert eval_nupl(Decimal("0.6")).value == "0.60"


# ========== BTC Price Zone ==========


class TestBtcPriceZone:
    """Tests for eval_btc_price_zone."""

    def test_none_is_warn(self) -> None:
        assert eval_btc_price_zone(None).severity == "warn"

    @pytest.mark.parametrize("price", [Decimal("67420"), Decimal("99999")])
    def test_watch_below_100k(self, price: Decimal) -> None:
        result = eval_btc_price_zone(price)
        assert result.severity == "watch"
        assert "ACCUMULATE" in result.status

    @pytest.mark.parametrize("price", [Decimal("100000"), Decimal("150000"), Decimal("199999")])
    def test_near_from_100k(self, price: Decimal) -> None:
        assert eval_btc_price_zone(price).severity == "near"

    @pytest.mark.parametrize("price", [Decimal("200000"), Decimal("350000")])
    def test_fired_from_200k(self, price: Decimal) -> None:
        result = eval_btc_price_zone(price)
        assert result.severity == "fired"
        assert result.status == "EXIT LADDER ACTIVE"

    def test_value_in_thousands(self) -> None:
        """Test that thousands are rounded half-up."""
        assert eval_btc_price_zone(Decimal("97500")).value == "$98K"
        assert eval_btc_price_zone(Decimal("67420")).value == "$67K"

    def test_value_below_1000(self) -> None:
        assert eval_btc_price_zone(Decimal("950.4")).value == "$950"


# ========== All triggers ==========


class TestAllTriggers:
    """Tests for calc_all_triggers and trigger ids."""

    def test_fixed_order(self, prices: Prices) -> None:
        """Test that the four triggers come back in display order."""
        triggers = calc_all_triggers(prices, Decimal("0.5"))
        assert [t.label for t in triggers] == [
            FEAR_GREED_LABEL,
            BTC_DOMINANCE_LABEL,
            NUPL_LABEL,
            BTC_PRICE_ZONE_LABEL,
        ]

    def test_missing_sources_are_warn(self) -> None:
        """Test that missing quotes yield warn without raising."""
        triggers = calc_all_triggers(Prices(assets={"btc": None}), Decimal("0.8"))
        assert [t.severity for t in triggers] == ["warn", "warn", "fired", "warn"]

    def test_price_zone_uses_btc_price(self) -> None:
        triggers = calc_all_triggers(Prices(assets={"btc": Decimal("210000")}), Decimal("0"))
        assert triggers[3].severity == "fired"

    def test_trigger_id_known_statuses(self) -> None:
        assert trigger_id(eval_btc_price_zone(Decimal("250000"))) == "exit-ladder"
        assert trigger_id(eval_fear_greed(90)) == "fg-t3-euphoria"
        assert trigger_id(eval_fear_greed(81)) == "fg-t1t2-greed"
        assert trigger_id(eval_btc_dominance(Decimal("50"))) == "dom-altseason"
        assert trigger_id(eval_nupl(Decimal("0.8"))) == "nupl-t3-euphoria"

    def test_trigger_id_slug_fallback(self) -> None:
        state = TriggerState("X", "1", "Some New Status!", "fired", "")
        assert trigger_id(state) == "some-new-status-"

    def test_active_ids_only_fired(self) -> None:
        """Test that near/watch/warn triggers are excluded."""
        prices = Prices(
            assets={"btc": Decimal("205000")},
            fear_greed=70,
            btc_dominance=None,
        )
        triggers = calc_all_triggers(prices, Decimal("0.76"))
        assert active_trigger_ids(triggers) == ("nupl-t3-euphoria", "exit-ladder")
