"""Offer recommendation.

The target package must satisfy two floors at once: a minimum raise over
the candidate's current package and, when competitors exist, a minimum
premium over the strongest competing package. The larger of the two wins.
"""

import logging
from typing import Optional

from ..formatting import round_to_step
from ..schemas import (
    AdviseParams,
    CompensationRecord,
    CompetitorBenchmark,
    PackageAggregate,
    Suggestion,
)

logger = logging.getLogger(__name__)

DEFAULT_MONTHS = 12
# Applied suggestions are rounded to this many currency units
SUGGESTION_STEP = 100


def recommend(
    current_aggregate: PackageAggregate,
    competitor_benchmark: CompetitorBenchmark,
    offer_record: CompensationRecord,
    params: Optional[AdviseParams] = None,
    current_record: Optional[CompensationRecord] = None,
) -> Suggestion:
    """Compute a target package, split it, and back-solve the base salary.

    Args:
        current_aggregate: Aggregate of the candidate's current package
        competitor_benchmark: Result of benchmark() over the competitor set
        offer_record: Offer being drafted; its bonus, sign-on, allowance and
            other cash are held fixed while the base is solved
        params: Target raise, stock ratio and competitor premium
        current_record: Used only as a fallback source of the months count

    Returns:
        Suggestion with the target total, its stock and cash parts, the
        suggested monthly base (never negative) and whether the competitor
        target was the binding one
    """
    params = params or AdviseParams()

    target_from_current = current_aggregate.total_package * (1 + params.target_increase_pct)
    target_from_competitor = 0.0
    if competitor_benchmark.max_package > 0:
        target_from_competitor = competitor_benchmark.max_package * (1 + params.beat_competitor_premium_pct)

    final_target = max(target_from_current, target_from_competitor)
    is_based_on_competitor = target_from_competitor > target_from_current

    stock_part = final_target * params.stock_ratio
    cash_part = final_target - stock_part

    months = (
        offer_record.months
        or (current_record.months if current_record else 0)
        or DEFAULT_MONTHS
    )

    suggested_base = (
        cash_part
        - offer_record.performance_bonus
        - offer_record.sign_on_bonus
        - offer_record.fixed_allowance * 12
        - offer_record.other
    ) / months
    suggested_base = max(0.0, suggested_base)

    logger.debug(
        f"recommend: current target {target_from_current:.0f}, "
        f"competitor target {target_from_competitor:.0f}, base {suggested_base:.0f}/mo x {months:g}"
    )

    return Suggestion(
        total=final_target,
        stock=stock_part,
        base_monthly=suggested_base,
        cash_total=cash_part,
        is_based_on_competitor=is_based_on_competitor,
        target_from_current=target_from_current,
        target_from_competitor=target_from_competitor,
        months=months,
    )


def round_suggestion(value: float) -> int:
    """Round a suggested figure to the nearest 100 before writing it to an offer."""
    return round_to_step(value, SUGGESTION_STEP)
