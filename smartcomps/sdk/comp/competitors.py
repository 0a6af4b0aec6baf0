"""Competitor set maintenance and benchmarking.

Competitors are compared against, never modified by recommendation logic.
"""

import logging
from typing import Any, Optional

from ..formatting import safe_parse
from ..schemas import (
    CompensationRecord,
    Competitor,
    CompetitorBenchmark,
    CompetitorSet,
)
from .package import EQUITY_INPUT_FIELDS, aggregate, sync_stock_value

logger = logging.getLogger(__name__)


def benchmark(competitors: CompetitorSet) -> CompetitorBenchmark:
    """Find the strongest competitor package.

    Args:
        competitors: Competitor set (insertion order is irrelevant here
            except for ties, where the first occurrence wins)

    Returns:
        CompetitorBenchmark with the maximum total package, its owner's id
        and name, and every competitor's aggregate keyed by id. An empty
        set yields max_package=0 and no owner.
    """
    per_competitor = {}
    max_package = 0.0
    max_entry: Optional[Competitor] = None

    for entry in competitors.entries:
        pkg = aggregate(entry.record)
        per_competitor[entry.id] = pkg
        if pkg.total_package > max_package:
            max_package = pkg.total_package
            max_entry = entry

    return CompetitorBenchmark(
        max_package=max_package,
        max_competitor_id=max_entry.id if max_entry else None,
        max_competitor_name=max_entry.name if max_entry else None,
        per_competitor_aggregates=per_competitor,
    )


def add_competitor(
    competitors: CompetitorSet,
    name: str = "",
    record: Optional[CompensationRecord] = None,
) -> CompetitorSet:
    """Append a competitor with the next identifier."""
    entry = Competitor(
        id=competitors.next_id,
        name=name or f"Competitor {competitors.next_id}",
        record=sync_stock_value(record or CompensationRecord()),
    )
    logger.debug(f"Added competitor {entry.id} ({entry.name})")
    return CompetitorSet(
        entries=[*competitors.entries, entry],
        next_id=competitors.next_id + 1,
    )


def update_competitor(
    competitors: CompetitorSet,
    competitor_id: int,
    field: str,
    value: Any,
) -> CompetitorSet:
    """Edit one field of a competitor ('name' or any record field).

    Raises:
        KeyError: If no competitor has the given id
        ValueError: If field is not a competitor or record field
    """
    if competitors.get(competitor_id) is None:
        raise KeyError(f"No competitor with id {competitor_id}")

    entries = []
    for entry in competitors.entries:
        if entry.id == competitor_id:
            if field == "name":
                entry = entry.model_copy(update={"name": str(value)})
            elif field in CompensationRecord.model_fields:
                record = entry.record.model_copy(update={field: safe_parse(value)})
                if field in EQUITY_INPUT_FIELDS:
                    record = sync_stock_value(record)
                entry = entry.model_copy(update={"record": record})
            else:
                raise ValueError(f"Unknown competitor field: {field}")
        entries.append(entry)

    return competitors.model_copy(update={"entries": entries})


def remove_competitor(competitors: CompetitorSet, competitor_id: int) -> CompetitorSet:
    """Drop a competitor. next_id is unchanged so ids are never reused."""
    entries = [e for e in competitors.entries if e.id != competitor_id]
    return competitors.model_copy(update={"entries": entries})
