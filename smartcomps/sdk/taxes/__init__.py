"""taxes - Income tax brackets and inverse (net -> gross) estimation.

Scope:
- Bracket table schema and loading (schemas.py, rules.py)
- Monthly deductions, forward tax and bisection inverse (inverse.py)
- Flat-rate quick estimator (inverse.py)

Constraints:
- Pure calculation - no session or record access
- Bracket data loaded from config/tax_brackets.yaml unless a table is passed

Usage:
    from smartcomps.sdk.taxes import solve_gross_from_net

    gross = solve_gross_from_net(15000, SocialSecurityProfile())
"""

from .schemas import TaxBracket, TaxTable, FlatRateTier, TaxTableError
from .rules import load_tax_table, get_default_tax_table, DEFAULT_TABLE_PATH
from .inverse import (
    calc_deductions,
    calc_monthly_tax,
    net_from_gross,
    solve_gross_from_net,
    estimate_pre_tax,
    MAX_ITERATIONS,
    TOLERANCE,
)

__all__ = [
    # Schemas
    "TaxBracket",
    "TaxTable",
    "FlatRateTier",
    "TaxTableError",
    # Rules
    "load_tax_table",
    "get_default_tax_table",
    "DEFAULT_TABLE_PATH",
    # Calculations
    "calc_deductions",
    "calc_monthly_tax",
    "net_from_gross",
    "solve_gross_from_net",
    "estimate_pre_tax",
    "MAX_ITERATIONS",
    "TOLERANCE",
]
