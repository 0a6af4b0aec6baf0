"""Tests for the forward tax computation and the bisection inverse.

Profile used throughout: base 20000 with housing 7%, pension 8%,
medical 2%, unemployment 0.5% -> flat deduction of 3500/month.
"""

import pytest

from smartcomps.sdk.schemas import SocialSecurityProfile
from smartcomps.sdk.taxes import (
    calc_deductions,
    calc_monthly_tax,
    estimate_pre_tax,
    net_from_gross,
    solve_gross_from_net,
)


@pytest.fixture
def profile():
    return SocialSecurityProfile(
        base_personal=20000,
        housing_rate=0.07,
        pension_rate=0.08,
        medical_rate=0.02,
        unemployment_rate=0.005,
    )


class TestDeductions:

    def test_breakdown(self, profile):
        d = calc_deductions(profile)

        assert d.housing == pytest.approx(1400)
        assert d.pension == pytest.approx(1600)
        assert d.medical == pytest.approx(400)
        assert d.unemployment == pytest.approx(100)
        assert d.total == pytest.approx(3500)

    def test_explicit_base(self, profile):
        assert calc_deductions(profile, base=10000).total == pytest.approx(1750)


class TestMonthlyTax:

    @pytest.mark.parametrize("taxable,expected", [
        (0, 0),
        (3000, 90),
        (12000, 990),
        (25000, 3590),
        (100000, 29840),
    ])
    def test_bracket_table(self, taxable, expected):
        assert calc_monthly_tax(taxable) == pytest.approx(expected)

    def test_negative_taxable_is_zero(self):
        assert calc_monthly_tax(-500) == 0


class TestNetFromGross:

    def test_below_threshold_only_deductions(self, profile):
        # 8500 - 3500 deduction - 5000 threshold = 0 taxable
        assert net_from_gross(8500, profile) == pytest.approx(5000)

    def test_first_brackets(self, profile):
        # taxable 3100 -> 10% bracket: 310 - 210 = 100
        assert net_from_gross(11600, profile) == pytest.approx(8000)


class TestSolveGrossFromNet:

    @pytest.mark.parametrize("net", [8000, 15000, 30000, 60000, 100000])
    def test_converges_within_one_unit(self, profile, net):
        gross = solve_gross_from_net(net, profile)

        assert abs(net_from_gross(gross, profile) - net) <= 1

    @pytest.mark.parametrize("net,expected_gross", [
        (8000, 11600),
        (15000, 19377.78),
        (100000, 153663.64),
    ])
    def test_known_inverses(self, profile, net, expected_gross):
        assert solve_gross_from_net(net, profile) == pytest.approx(expected_gross, abs=2)

    def test_monotonic(self, profile):
        nets = [1000, 5000, 8000, 15000, 30000, 45000, 60000, 100000, 250000]

        grosses = [solve_gross_from_net(n, profile) for n in nets]

        assert grosses == sorted(grosses)

    @pytest.mark.parametrize("net", [0, -100, "", None, "abc"])
    def test_non_positive_net_returns_zero(self, profile, net):
        assert solve_gross_from_net(net, profile) == 0

    def test_gross_never_below_net(self, profile):
        assert solve_gross_from_net(12000, profile) >= 12000


class TestEstimatePreTax:
    """Flat estimator: avg / (1 - social_rate - tier_rate)."""

    @pytest.mark.parametrize("average,rate", [
        (15000, 0.05),
        (20000, 0.05),   # tier applies only above the breakpoint
        (25000, 0.10),
        (40000, 0.15),
        (60000, 0.20),
    ])
    def test_tiers(self, profile, average, rate):
        assert estimate_pre_tax(average, profile) == pytest.approx(average / (1 - 0.175 - rate))

    def test_zero_average(self, profile):
        assert estimate_pre_tax(0, profile) == 0

    def test_non_positive_denominator(self):
        greedy = SocialSecurityProfile(pension_rate=0.5, housing_rate=0.5)
        assert estimate_pre_tax(10000, greedy) == 0

    def test_differs_from_bisection(self, profile):
        """The two estimators are separate and may disagree."""
        flat = estimate_pre_tax(15000, profile)
        solved = solve_gross_from_net(15000, profile)

        assert flat != pytest.approx(solved, abs=1)
