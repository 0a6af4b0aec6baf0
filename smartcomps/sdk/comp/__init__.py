"""comp - Compensation package math and offer advisory.

Scope:
- Package totals and equity-value derivation (package.py)
- Bonus amount/months reconciliation (bonus.py)
- Competitor set maintenance and benchmarking (competitors.py)
- Target package recommendation (recommend.py)
- Rule-based risk advisories (advisor.py)

Constraints:
- Pure functions over immutable records - every edit returns a new value
- Numeric inputs are already coerced by the schemas; zero divisors yield 0

Usage:
    from smartcomps.sdk.comp import aggregate, benchmark, recommend, advise

    current = aggregate(state.current)
    bench = benchmark(state.competitors)
    suggestion = recommend(current, bench, state.offer, state.params)
"""

from .package import aggregate, derive_stock_value, sync_stock_value, EQUITY_INPUT_FIELDS
from .bonus import set_bonus_amount, set_bonus_months, bonus_months_display
from .competitors import benchmark, add_competitor, update_competitor, remove_competitor
from .recommend import recommend, round_suggestion
from .advisor import advise, calc_increase_stats

__all__ = [
    # Package
    "aggregate",
    "derive_stock_value",
    "sync_stock_value",
    "EQUITY_INPUT_FIELDS",
    # Bonus
    "set_bonus_amount",
    "set_bonus_months",
    "bonus_months_display",
    # Competitors
    "benchmark",
    "add_competitor",
    "update_competitor",
    "remove_competitor",
    # Recommendation
    "recommend",
    "round_suggestion",
    # Advisories
    "advise",
    "calc_increase_stats",
]
