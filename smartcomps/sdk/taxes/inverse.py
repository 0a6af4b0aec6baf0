"""Forward income tax computation and its numeric inverse.

Recovers an estimated monthly pre-tax salary from a declared monthly net
bank-flow amount. The forward function (gross -> net) is piecewise linear
and monotonic non-decreasing, so bisection over [net, 2 * net] converges.
The bracket table is data and may be replaced, which is why the inverse is
searched numerically rather than solved in closed form.

Two estimators are exposed and must stay separate:
- solve_gross_from_net: full bracket table, bisection (reconciliation)
- estimate_pre_tax: single flat rate from a threshold ladder (quick display)
They can disagree for the same income.
"""

import logging
from typing import Optional

from ..formatting import safe_parse
from ..schemas import DeductionBreakdown, SocialSecurityProfile
from .rules import get_default_tax_table
from .schemas import TaxTable

logger = logging.getLogger(__name__)

MAX_ITERATIONS = 20
# Converged once the net estimate is within this many currency units
TOLERANCE = 1.0


def calc_deductions(profile: SocialSecurityProfile, base: Optional[float] = None) -> DeductionBreakdown:
    """Monthly employee contributions on a contribution base.

    Args:
        profile: Contribution rates
        base: Contribution base (defaults to profile.base_personal)

    Returns:
        DeductionBreakdown with each fund and the total
    """
    if base is None:
        base = profile.base_personal
    base = safe_parse(base)

    housing = base * profile.housing_rate
    pension = base * profile.pension_rate
    medical = base * profile.medical_rate
    unemployment = base * profile.unemployment_rate
    return DeductionBreakdown(
        housing=housing,
        pension=pension,
        medical=medical,
        unemployment=unemployment,
        total=housing + pension + medical + unemployment,
    )


def calc_monthly_tax(taxable: float, table: Optional[TaxTable] = None) -> float:
    """Tax on monthly taxable income: taxable * rate - quick_deduction."""
    table = table or get_default_tax_table()
    taxable = max(0.0, safe_parse(taxable))
    return table.bracket_for(taxable).tax(taxable)


def net_from_gross(
    gross: float,
    profile: SocialSecurityProfile,
    table: Optional[TaxTable] = None,
) -> float:
    """Forward computation: gross - flat deduction - income tax.

    The deduction is fixed by the profile's contribution base, not by the
    gross being evaluated.
    """
    table = table or get_default_tax_table()
    gross = safe_parse(gross)
    deduction = calc_deductions(profile).total
    taxable = max(0.0, gross - deduction - table.threshold)
    return gross - deduction - calc_monthly_tax(taxable, table)


def solve_gross_from_net(
    net: float,
    profile: SocialSecurityProfile,
    table: Optional[TaxTable] = None,
) -> float:
    """Estimate monthly gross income that yields the given net, by bisection.

    Searches [net, 2 * net] for at most MAX_ITERATIONS halvings and stops
    early once the forward net is within TOLERANCE of the target.

    Args:
        net: Monthly net (after tax and deductions) income
        profile: Social security profile supplying the deduction
        table: Bracket table (defaults to the packaged table)

    Returns:
        The final midpoint as the gross estimate; 0 when net <= 0
    """
    net = safe_parse(net)
    if net <= 0:
        return 0.0

    table = table or get_default_tax_table()
    low, high = net, net * 2
    mid = (low + high) / 2

    for iteration in range(1, MAX_ITERATIONS + 1):
        mid = (low + high) / 2
        estimate = net_from_gross(mid, profile, table)
        if abs(estimate - net) < TOLERANCE:
            logger.debug(f"solve_gross_from_net: {net:.2f} -> {mid:.2f} after {iteration} iteration(s)")
            break
        if estimate < net:
            low = mid
        else:
            high = mid
    else:
        logger.debug(f"solve_gross_from_net: {net:.2f} -> {mid:.2f} (iteration cap reached)")

    return mid


def estimate_pre_tax(
    average_flow: float,
    profile: SocialSecurityProfile,
    table: Optional[TaxTable] = None,
) -> float:
    """Quick flat-rate gross estimate from an average monthly flow.

    gross = average / (1 - social_rate - flat_tax_rate), where the flat
    rate comes from the table's tier ladder (5% / 10% / 15% / 20%).
    """
    average_flow = safe_parse(average_flow)
    if average_flow <= 0:
        return 0.0

    table = table or get_default_tax_table()
    tax_rate = table.flat_rate_for(average_flow)
    denominator = 1 - profile.total_rate - tax_rate
    if denominator <= 0:
        return 0.0
    return average_flow / denominator
