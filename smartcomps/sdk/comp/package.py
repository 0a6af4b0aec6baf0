"""Package aggregation and equity-value derivation.

SDK layer - pure functions over CompensationRecord. No presentation.
"""

from typing import Optional

from ..formatting import round_currency, safe_ratio
from ..schemas import CompensationRecord, PackageAggregate

# Fields whose edit triggers a stock_value re-derivation
EQUITY_INPUT_FIELDS = ("stock_count", "strike_price", "grant_price", "vesting_years")


def aggregate(record: CompensationRecord) -> PackageAggregate:
    """Compute annual totals for one record.

    - base_total = base_monthly * months
    - allowance_total = fixed_allowance * 12
    - cash_total = base + allowance + performance bonus + sign-on + other
    - total_package = cash_total + stock_value
    - monthly_cash = base_monthly + fixed_allowance
    """
    base_total = record.base_monthly * record.months
    allowance_total = record.fixed_allowance * 12
    cash_total = (
        base_total
        + allowance_total
        + record.performance_bonus
        + record.sign_on_bonus
        + record.other
    )
    return PackageAggregate(
        base_total=base_total,
        allowance_total=allowance_total,
        cash_total=cash_total,
        total_package=cash_total + record.stock_value,
        monthly_cash=record.base_monthly + record.fixed_allowance,
    )


def derive_stock_value(record: CompensationRecord) -> Optional[int]:
    """Annualized equity value from grant inputs, or None if not derivable.

    round(stock_count * (grant_price - strike_price) / vesting_years) when
    both stock_count and grant_price are positive. A zero vesting period
    yields 0 rather than dividing by zero.
    """
    if record.stock_count > 0 and record.grant_price > 0:
        total_value = record.stock_count * (record.grant_price - record.strike_price)
        return round_currency(safe_ratio(total_value, record.vesting_years))
    return None


def sync_stock_value(record: CompensationRecord) -> CompensationRecord:
    """Return the record with stock_value re-derived from its equity inputs.

    Records without derivable inputs keep their directly entered value.
    """
    derived = derive_stock_value(record)
    if derived is None:
        return record
    return record.model_copy(update={"stock_value": float(derived)})
