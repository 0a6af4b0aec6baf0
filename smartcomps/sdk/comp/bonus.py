"""Bonus amount <-> bonus months reconciliation.

The amount is the figure a recruiter types; months is a convenience view.
Each entry point recomputes the other field once, in one direction:

- set_bonus_amount: amount wins, months = amount / base_monthly
- set_bonus_months: months wins, amount = round(base_monthly * months)

Editing base_monthly does not rescale an existing pair. Because the amount
is rounded to whole units, months -> amount -> months is lossy (3.33 months
on a 16,672 base reads back as 3.32999...). That is expected.
"""

from ..formatting import round_currency, safe_parse
from ..schemas import CompensationRecord


def set_bonus_amount(record: CompensationRecord, amount: float) -> CompensationRecord:
    """Set performance_bonus; derive bonus_months when base_monthly > 0.

    bonus_months keeps full precision; use bonus_months_display() to show it.
    With a zero base, bonus_months is left unchanged.
    """
    amount = safe_parse(amount)
    update = {"performance_bonus": amount}
    if record.base_monthly > 0:
        update["bonus_months"] = amount / record.base_monthly
    return record.model_copy(update=update)


def set_bonus_months(record: CompensationRecord, months: float) -> CompensationRecord:
    """Set bonus_months and performance_bonus = round(base_monthly * months)."""
    months = safe_parse(months)
    return record.model_copy(update={
        "bonus_months": months,
        "performance_bonus": float(round_currency(record.base_monthly * months)),
    })


def bonus_months_display(record: CompensationRecord) -> float:
    """bonus_months rounded to one decimal for display."""
    return round(record.bonus_months, 1)
