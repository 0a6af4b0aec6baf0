"""Tests for the advisory rules."""

import pytest

from smartcomps.sdk.comp import (
    add_competitor,
    advise,
    aggregate,
    benchmark,
    calc_increase_stats,
    recommend,
)
from smartcomps.sdk.schemas import CompensationRecord, CompetitorSet

CURRENT = CompensationRecord(base_monthly=16672, months=13, performance_bonus=15360)


def run_advise(offer, competitors=None, **kwargs):
    competitors = competitors or CompetitorSet()
    current_pkg = aggregate(CURRENT)
    offer_pkg = aggregate(offer)
    bench = benchmark(competitors)
    suggestion = recommend(current_pkg, bench, offer)
    return advise(current_pkg, offer_pkg, offer, bench, suggestion, **kwargs)


def codes(tips):
    return [t.code for t in tips]


class TestIncreaseStats:

    def test_stats(self):
        stats = calc_increase_stats(
            aggregate(CURRENT),
            aggregate(CompensationRecord(base_monthly=20000, months=14, performance_bonus=60000)),
        )

        assert stats.cash_increase_pct == pytest.approx(340000 / 232096 - 1)
        assert stats.monthly_increase_pct == pytest.approx(20000 / 16672 - 1)
        assert stats.total_gap == 340000 - 232096

    def test_zero_current_yields_zero(self):
        stats = calc_increase_stats(aggregate(CompensationRecord()), aggregate(CURRENT))
        assert stats.total_increase_pct == 0


class TestAdvise:

    def test_generous_offer_is_balanced(self):
        tips = run_advise(CompensationRecord(base_monthly=20000, months=14, performance_bonus=60000))

        assert codes(tips) == ["balanced"]
        assert tips[0].severity == "good"

    def test_offer_with_equity_is_balanced(self):
        offer = CompensationRecord(base_monthly=22000, months=14, performance_bonus=66000, stock_value=100000)

        tips = run_advise(offer)

        assert aggregate(offer).total_package == 474000
        assert codes(tips) == ["balanced"]

    def test_modest_offer_yields_nothing(self):
        """12% raise: no warnings, but not enough for the balanced note."""
        tips = run_advise(CompensationRecord(base_monthly=20000, months=13))
        assert tips == []

    def test_low_cash_raise(self):
        tips = run_advise(CompensationRecord(base_monthly=20000, months=12))

        assert codes(tips) == ["low_cash_raise"]
        assert tips[0].severity == "warning"

    def test_cash_decrease(self):
        tips = run_advise(CompensationRecord(base_monthly=15000, months=12))

        assert codes(tips) == ["cash_decrease"]
        assert tips[0].severity == "danger"

    def test_trailing_competitor(self):
        competitors = add_competitor(
            CompetitorSet(), "Big", CompensationRecord(base_monthly=40000, months=12, performance_bonus=20000)
        )

        tips = run_advise(
            CompensationRecord(base_monthly=20000, months=14, performance_bonus=60000), competitors
        )

        assert codes(tips) == ["competitor_benchmark", "trails_competitor"]
        assert "Big" in tips[0].message
        assert "¥160,000" in tips[1].message

    def test_stock_concentration(self):
        tips = run_advise(CompensationRecord(base_monthly=20000, months=14, stock_value=300000))
        assert codes(tips) == ["stock_concentration"]

    def test_monthly_inversion_opt_in(self):
        offer = CompensationRecord(base_monthly=15000, months=12)

        assert "monthly_inversion" not in codes(run_advise(offer))
        assert codes(run_advise(offer, check_monthly_inversion=True)) == ["cash_decrease", "monthly_inversion"]

    def test_flow_mismatch(self):
        offer = CompensationRecord(base_monthly=20000, months=14, performance_bonus=60000)

        fired = run_advise(offer, estimated_pre_tax=25000, current_record=CURRENT)
        quiet = run_advise(offer, estimated_pre_tax=18000, current_record=CURRENT)

        assert codes(fired) == ["flow_mismatch"]
        assert fired[0].severity == "info"
        assert codes(quiet) == ["balanced"]

    def test_currency_symbol_in_messages(self):
        competitors = add_competitor(CompetitorSet(), "Big", CompensationRecord(base_monthly=50000, months=12))

        tips = run_advise(CompensationRecord(base_monthly=20000, months=12), competitors, currency_symbol="$")

        assert "$600,000" in tips[0].message
