"""Bank flow statistics and reconciliation against a declared pay structure.

SDK layer - pure logic. Converts twelve months of declared bank-statement
income to gross (bisection solver for net flows) and compares the implied
variable pay with the bonus structure the candidate declared.
"""

import logging
from typing import Optional

from .comp.package import aggregate
from .schemas import (
    BankFlowSeries,
    CompensationRecord,
    FlowReconciliation,
    FlowStats,
    SocialSecurityProfile,
)
from .taxes import solve_gross_from_net
from .taxes.schemas import TaxTable

logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE_PCT = 0.10


def flow_stats(series: BankFlowSeries) -> FlowStats:
    """Total of all months and the average over months with a positive amount."""
    amounts = series.amounts
    total = sum(amounts)
    active = [a for a in amounts if a > 0]
    return FlowStats(
        total=total,
        average=total / len(active) if active else 0.0,
        active_months=len(active),
    )


def reconcile_bank_flows(
    series: BankFlowSeries,
    record: CompensationRecord,
    profile: SocialSecurityProfile,
    table: Optional[TaxTable] = None,
    tolerance_pct: float = DEFAULT_TOLERANCE_PCT,
) -> FlowReconciliation:
    """Compare the variable pay implied by bank flows with the declared one.

    Each positive month is converted to gross (net flows through the
    bisection solver, gross flows as-is). Regular cash is
    monthly_cash * 12; whatever the flows show beyond it is the implied
    variable pay (13th+ months, bonus, sign-on, other). The declared
    variable pay is cash_total - monthly_cash * 12.

    Args:
        series: Twelve months of bank flows
        record: Declared current compensation record
        profile: Social security profile for the net -> gross conversion
        table: Bracket table (defaults to the packaged table)
        tolerance_pct: Allowed variance as a fraction of declared cash total

    Returns:
        FlowReconciliation with status "match", "gap", or "no_data" when no
        month has a positive amount
    """
    if series.flow_type == "net":
        monthly_gross = [solve_gross_from_net(a, profile, table) if a > 0 else 0.0 for a in series.amounts]
    else:
        monthly_gross = [a if a > 0 else 0.0 for a in series.amounts]

    pkg = aggregate(record)
    implied_annual_gross = sum(monthly_gross)
    regular_annual_cash = pkg.monthly_cash * 12
    implied_variable = implied_annual_gross - regular_annual_cash
    declared_variable = pkg.cash_total - regular_annual_cash
    variance = implied_variable - declared_variable

    if not any(monthly_gross):
        status = "no_data"
    elif abs(variance) <= tolerance_pct * pkg.cash_total:
        status = "match"
    else:
        status = "gap"

    logger.debug(
        f"reconcile_bank_flows: implied variable {implied_variable:.0f} vs "
        f"declared {declared_variable:.0f} -> {status}"
    )

    return FlowReconciliation(
        flow_type=series.flow_type,
        monthly_gross=monthly_gross,
        implied_annual_gross=implied_annual_gross,
        regular_annual_cash=regular_annual_cash,
        implied_variable=implied_variable,
        declared_variable=declared_variable,
        variance=variance,
        status=status,
    )
