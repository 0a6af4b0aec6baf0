"""Rule-based risk advisories for an offer.

Rules are evaluated in a fixed order and are not exclusive; several may
fire. The only suppression is the final 'balanced' fallback, which fires
only when nothing else did.

    1. competitor_benchmark  info     suggestion is driven by a competitor
    2. trails_competitor     danger   offer total below strongest competitor
    3. low_cash_raise        warning  0 <= cash raise < 10%
    4. cash_decrease         danger   cash raise < 0
    5. stock_concentration   warning  equity > 40% of offer total
    6. monthly_inversion     danger   current monthly cash > offer (opt-in)
    7. flow_mismatch         info     flow-based pre-tax estimate > 115% of
                                      current base (opt-in)
    8. balanced              good     fallback, total raise > 15%
"""

import logging
from typing import List, Optional

from ..formatting import format_currency, safe_ratio
from ..schemas import (
    Advisory,
    CompensationRecord,
    CompetitorBenchmark,
    IncreaseStats,
    PackageAggregate,
    Suggestion,
)

logger = logging.getLogger(__name__)

LOW_CASH_RAISE_PCT = 0.10
STOCK_CONCENTRATION_PCT = 0.40
BALANCED_TOTAL_RAISE_PCT = 0.15
FLOW_MISMATCH_FACTOR = 1.15


def calc_increase_stats(current: PackageAggregate, offer: PackageAggregate) -> IncreaseStats:
    """Relative cash, total and monthly change from current to offer."""
    return IncreaseStats(
        cash_increase_pct=safe_ratio(offer.cash_total - current.cash_total, current.cash_total),
        total_increase_pct=safe_ratio(offer.total_package - current.total_package, current.total_package),
        monthly_increase_pct=safe_ratio(offer.monthly_cash - current.monthly_cash, current.monthly_cash),
        total_gap=offer.total_package - current.total_package,
    )


def advise(
    current_aggregate: PackageAggregate,
    offer_aggregate: PackageAggregate,
    offer_record: CompensationRecord,
    competitor_benchmark: CompetitorBenchmark,
    suggestion: Suggestion,
    check_monthly_inversion: bool = False,
    estimated_pre_tax: Optional[float] = None,
    current_record: Optional[CompensationRecord] = None,
    currency_symbol: str = "¥",
) -> List[Advisory]:
    """Evaluate the advisory rules in priority order.

    Args:
        current_aggregate: Current package totals
        offer_aggregate: Offer package totals
        offer_record: Offer record (for its stock value)
        competitor_benchmark: Strongest competitor package
        suggestion: Recommender output
        check_monthly_inversion: Enable the monthly cash inversion rule
        estimated_pre_tax: Flat pre-tax estimate from bank flows; enables
            the flow mismatch rule together with current_record
        current_record: Current record (for its base salary)
        currency_symbol: Symbol used in messages

    Returns:
        Ordered list of Advisory
    """
    def money(amount: float) -> str:
        return format_currency(amount, currency_symbol)

    stats = calc_increase_stats(current_aggregate, offer_aggregate)
    cash_pct = stats.cash_increase_pct
    tips: List[Advisory] = []

    if suggestion.is_based_on_competitor:
        name = competitor_benchmark.max_competitor_name or f"#{competitor_benchmark.max_competitor_id}"
        tips.append(Advisory(
            severity="info",
            code="competitor_benchmark",
            message=(
                f"Suggestion benchmarked against competitor {name} "
                f"({money(competitor_benchmark.max_package)} total package)."
            ),
        ))

    if offer_aggregate.total_package < competitor_benchmark.max_package:
        gap = competitor_benchmark.max_package - offer_aggregate.total_package
        tips.append(Advisory(
            severity="danger",
            code="trails_competitor",
            message=f"Offer trails the strongest competitor by {money(gap)}.",
        ))

    if 0 <= cash_pct < LOW_CASH_RAISE_PCT:
        tips.append(Advisory(
            severity="warning",
            code="low_cash_raise",
            message="Cash raise is below 10%; the candidate may be reluctant to accept.",
        ))

    if cash_pct < 0:
        tips.append(Advisory(
            severity="danger",
            code="cash_decrease",
            message="Cash compensation decreases; acceptance risk is very high.",
        ))

    if safe_ratio(offer_record.stock_value, offer_aggregate.total_package) > STOCK_CONCENTRATION_PCT:
        tips.append(Advisory(
            severity="warning",
            code="stock_concentration",
            message="Equity exceeds 40% of the package; value depends on long-term performance.",
        ))

    if check_monthly_inversion and current_aggregate.monthly_cash > offer_aggregate.monthly_cash:
        tips.append(Advisory(
            severity="danger",
            code="monthly_inversion",
            message=(
                f"Monthly cash drops from {money(current_aggregate.monthly_cash)} "
                f"to {money(offer_aggregate.monthly_cash)}."
            ),
        ))

    if (
        estimated_pre_tax
        and current_record is not None
        and estimated_pre_tax > current_record.base_monthly * FLOW_MISMATCH_FACTOR
    ):
        tips.append(Advisory(
            severity="info",
            code="flow_mismatch",
            message=(
                f"Pre-tax salary implied by bank flows ({money(estimated_pre_tax)}) "
                f"is well above the declared base; please verify."
            ),
        ))

    if not tips and stats.total_increase_pct > BALANCED_TOTAL_RAISE_PCT:
        tips.append(Advisory(
            severity="good",
            code="balanced",
            message="Package structure is balanced and risk is under control.",
        ))

    logger.debug(f"advise: fired {[t.code for t in tips]}")
    return tips
