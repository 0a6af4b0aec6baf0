"""Tests for package aggregation and equity-value derivation."""

import pytest

from smartcomps.sdk.comp.package import aggregate, derive_stock_value, sync_stock_value
from smartcomps.sdk.schemas import CompensationRecord


class TestAggregate:
    """Annual totals from a single record."""

    def test_current_package_totals(self):
        """16672 x 13 + 15360 bonus = 232096 cash."""
        record = CompensationRecord(base_monthly=16672, months=13, performance_bonus=15360)

        pkg = aggregate(record)

        assert pkg.base_total == 216736
        assert pkg.allowance_total == 0
        assert pkg.cash_total == 232096
        assert pkg.total_package == 232096
        assert pkg.monthly_cash == 16672

    def test_all_cash_components_and_stock(self):
        record = CompensationRecord(
            base_monthly=20000,
            months=14,
            fixed_allowance=1000,
            performance_bonus=60000,
            sign_on_bonus=30000,
            other=5000,
            stock_value=100000,
        )

        pkg = aggregate(record)

        assert pkg.base_total == 280000
        assert pkg.allowance_total == 12000
        assert pkg.cash_total == 280000 + 12000 + 60000 + 30000 + 5000
        assert pkg.total_package == pkg.cash_total + 100000
        assert pkg.monthly_cash == 21000

    def test_zero_base_monthly_cash_is_allowance(self):
        record = CompensationRecord(base_monthly=0, months=13, fixed_allowance=800)

        pkg = aggregate(record)

        assert pkg.base_total == 0
        assert pkg.monthly_cash == 800

    def test_non_numeric_inputs_coerced_to_zero(self):
        record = CompensationRecord.model_validate({
            "baseMonthly": "abc",
            "months": None,
            "performanceBonus": "",
            "fixedAllowance": "1,500",
        })

        pkg = aggregate(record)

        assert record.base_monthly == 0
        assert record.months == 0
        assert pkg.cash_total == 18000
        assert pkg.monthly_cash == 1500

    def test_nan_and_infinity_coerced_to_zero(self):
        record = CompensationRecord(base_monthly=float("nan"), stock_value=float("inf"))

        pkg = aggregate(record)

        assert pkg.total_package == 0


class TestDeriveStockValue:
    """stock_value = round(count * (grant - strike) / vesting_years)."""

    def test_derives_annual_value(self):
        record = CompensationRecord(stock_count=1000, grant_price=50, strike_price=10, vesting_years=4)
        assert derive_stock_value(record) == 10000

    def test_rounds_half_up(self):
        record = CompensationRecord(stock_count=3, grant_price=10, strike_price=0, vesting_years=4)
        assert derive_stock_value(record) == 8  # 7.5 -> 8

    def test_default_vesting_is_four_years(self):
        record = CompensationRecord(stock_count=400, grant_price=10)
        assert derive_stock_value(record) == 1000

    def test_zero_vesting_years_yields_zero(self):
        record = CompensationRecord(stock_count=1000, grant_price=50, vesting_years=0)
        assert derive_stock_value(record) == 0

    @pytest.mark.parametrize("count,grant", [(0, 50), (1000, 0)])
    def test_not_derivable_without_count_and_grant(self, count, grant):
        record = CompensationRecord(stock_count=count, grant_price=grant, stock_value=12345)
        assert derive_stock_value(record) is None

    def test_sync_keeps_entered_value_when_not_derivable(self):
        record = CompensationRecord(stock_value=12345)
        assert sync_stock_value(record).stock_value == 12345

    def test_sync_overwrites_entered_value_when_derivable(self):
        record = CompensationRecord(stock_value=12345, stock_count=1000, grant_price=50, strike_price=10)

        synced = sync_stock_value(record)

        assert synced.stock_value == 10000
        assert record.stock_value == 12345  # input record untouched
