"""Session state and edit transitions.

A session is one immutable SessionState value. Each user edit is a
transition function that returns a new state; derivations run inside the
transition that owns them, in one direction only:

- editing an equity input (stock_count, strike_price, grant_price,
  vesting_years) re-derives stock_value
- editing performance_bonus re-derives bonus_months, and vice versa
- editing stock_value or base_monthly derives nothing

evaluate() then recomputes the whole analysis in dependency order:
aggregates -> competitor benchmark -> suggestion -> advisories.
"""

import logging
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from . import comp
from .comp.package import EQUITY_INPUT_FIELDS, sync_stock_value
from .config import Settings
from .flows import flow_stats, reconcile_bank_flows
from .formatting import safe_parse, safe_ratio
from .schemas import (
    AdviseParams,
    Analysis,
    BankFlowSeries,
    CandidateInfo,
    CompensationRecord,
    CompetitorSet,
    FlowType,
    Party,
    SocialSecurityProfile,
)
from .taxes import calc_deductions, estimate_pre_tax, get_default_tax_table, solve_gross_from_net
from .taxes.schemas import TaxTable

logger = logging.getLogger(__name__)

PARTIES = ("current", "offer")


class SessionState(BaseModel):
    """Everything a recruiter has entered for one comparison."""

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    candidate: CandidateInfo = Field(default_factory=CandidateInfo)
    current: CompensationRecord = Field(default_factory=CompensationRecord)
    offer: CompensationRecord = Field(default_factory=CompensationRecord)
    competitors: CompetitorSet = Field(default_factory=CompetitorSet)
    social_security: SocialSecurityProfile = Field(default_factory=SocialSecurityProfile)
    bank_flows: BankFlowSeries = Field(default_factory=BankFlowSeries)
    params: AdviseParams = Field(default_factory=AdviseParams)

    @classmethod
    def default(cls) -> "SessionState":
        """Starting values for a new session."""
        current = comp.set_bonus_amount(
            CompensationRecord(base_monthly=16672, months=13), 15360
        )
        offer = comp.set_bonus_amount(
            CompensationRecord(base_monthly=20000, months=14), 60000
        )
        return cls(
            candidate=CandidateInfo(
                name="Zhang San",
                age="28",
                education_type="Full-time bachelor",
                work_years="5",
                position="Senior Frontend Engineer",
                level="P7",
                peer_reference="Li Si (P7)",
            ),
            current=current,
            offer=offer,
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SessionState":
        """Validate a scenario mapping and apply equity derivations once."""
        state = cls.model_validate(data)
        competitors = state.competitors.model_copy(update={
            "entries": [
                e.model_copy(update={"record": sync_stock_value(e.record)})
                for e in state.competitors.entries
            ]
        })
        return state.model_copy(update={
            "current": sync_stock_value(state.current),
            "offer": sync_stock_value(state.offer),
            "competitors": competitors,
        })

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")

    def record(self, party: Party) -> CompensationRecord:
        _check_party(party)
        return getattr(self, party)


def _check_party(party: str) -> None:
    if party not in PARTIES:
        raise ValueError(f"Unknown party '{party}'. Must be one of {PARTIES}")


# =============================================================================
# Transitions
# =============================================================================


def set_record_field(state: SessionState, party: Party, field: str, value: Any) -> SessionState:
    """Edit one field of the current or offer record.

    Raises:
        ValueError: If party or field is unknown
    """
    record = state.record(party)

    if field == "performance_bonus":
        record = comp.set_bonus_amount(record, value)
    elif field == "bonus_months":
        record = comp.set_bonus_months(record, value)
    elif field in CompensationRecord.model_fields:
        record = record.model_copy(update={field: safe_parse(value)})
        if field in EQUITY_INPUT_FIELDS:
            record = sync_stock_value(record)
    else:
        raise ValueError(f"Unknown compensation field: {field}")

    return state.model_copy(update={party: record})


def set_bonus_amount(state: SessionState, party: Party, amount: Any) -> SessionState:
    return set_record_field(state, party, "performance_bonus", amount)


def set_bonus_months(state: SessionState, party: Party, months: Any) -> SessionState:
    return set_record_field(state, party, "bonus_months", months)


def apply_suggestion(state: SessionState, field: str, value: float) -> SessionState:
    """Write a suggested figure into the offer, rounded to the nearest 100."""
    return set_record_field(state, "offer", field, comp.round_suggestion(value))


def add_competitor(
    state: SessionState,
    name: str = "",
    record: Optional[CompensationRecord] = None,
) -> SessionState:
    competitors = comp.add_competitor(state.competitors, name, record)
    return state.model_copy(update={"competitors": competitors})


def update_competitor_field(state: SessionState, competitor_id: int, field: str, value: Any) -> SessionState:
    competitors = comp.update_competitor(state.competitors, competitor_id, field, value)
    return state.model_copy(update={"competitors": competitors})


def remove_competitor(state: SessionState, competitor_id: int) -> SessionState:
    competitors = comp.remove_competitor(state.competitors, competitor_id)
    return state.model_copy(update={"competitors": competitors})


def set_params(state: SessionState, **updates: Any) -> SessionState:
    """Update recommender parameters (target_increase_pct, stock_ratio, ...)."""
    params = AdviseParams.model_validate({**state.params.model_dump(), **updates})
    return state.model_copy(update={"params": params})


def set_social_security_field(state: SessionState, field: str, value: Any) -> SessionState:
    profile = SocialSecurityProfile.model_validate({**state.social_security.model_dump(), field: value})
    return state.model_copy(update={"social_security": profile})


def set_candidate_field(state: SessionState, field: str, value: Any) -> SessionState:
    candidate = CandidateInfo.model_validate({**state.candidate.model_dump(), field: value})
    return state.model_copy(update={"candidate": candidate})


def set_bank_flow(state: SessionState, index: int, amount: Any) -> SessionState:
    """Set the amount for month index (0-11).

    Raises:
        IndexError: If index is outside the twelve months
    """
    entries = list(state.bank_flows.entries)
    if not 0 <= index < len(entries):
        raise IndexError(f"Bank flow month index out of range: {index}")
    entries[index] = entries[index].model_copy(update={"amount": safe_parse(amount)})
    flows = state.bank_flows.model_copy(update={"entries": entries})
    return state.model_copy(update={"bank_flows": flows})


def set_flow_type(state: SessionState, flow_type: FlowType) -> SessionState:
    flows = BankFlowSeries(flow_type=flow_type, entries=state.bank_flows.entries)
    return state.model_copy(update={"bank_flows": flows})


# =============================================================================
# Evaluation
# =============================================================================


def evaluate(
    state: SessionState,
    table: Optional[TaxTable] = None,
    settings: Optional[Settings] = None,
) -> Analysis:
    """Run the full computation pipeline over a session state.

    Args:
        state: Session state
        table: Bracket table (defaults to the packaged table)
        settings: Effective settings (defaults to built-in defaults; this
            function never reads settings.json itself)

    Returns:
        Analysis snapshot for rendering
    """
    table = table or get_default_tax_table()
    settings = settings or Settings()

    current_pkg = comp.aggregate(state.current)
    offer_pkg = comp.aggregate(state.offer)
    bench = comp.benchmark(state.competitors)
    suggestion = comp.recommend(current_pkg, bench, state.offer, state.params, state.current)
    stats = comp.calc_increase_stats(current_pkg, offer_pkg)

    flows = flow_stats(state.bank_flows)
    profile = state.social_security
    # Gross flows are already pre-tax; both estimates pass them through
    if state.bank_flows.flow_type == "net":
        estimated_flat = estimate_pre_tax(flows.average, profile, table)
        estimated_bisection = solve_gross_from_net(flows.average, profile, table)
    else:
        estimated_flat = flows.average
        estimated_bisection = flows.average

    reconciliation = reconcile_bank_flows(
        state.bank_flows, state.current, profile, table,
        tolerance_pct=settings.reconcile_tolerance_pct,
    )

    advisories = comp.advise(
        current_pkg,
        offer_pkg,
        state.offer,
        bench,
        suggestion,
        check_monthly_inversion=settings.check_monthly_inversion,
        estimated_pre_tax=estimated_flat,
        current_record=state.current,
        currency_symbol=settings.currency_symbol,
    )

    logger.debug(
        f"evaluate: current {current_pkg.total_package:.0f}, offer {offer_pkg.total_package:.0f}, "
        f"{len(state.competitors.entries)} competitor(s), {len(advisories)} advisory(ies)"
    )

    return Analysis(
        current=current_pkg,
        offer=offer_pkg,
        benchmark=bench,
        suggestion=suggestion,
        stats=stats,
        offer_stock_ratio=safe_ratio(state.offer.stock_value, offer_pkg.total_package),
        advisories=advisories,
        flow_stats=flows,
        estimated_pre_tax_flat=estimated_flat,
        estimated_gross_bisection=estimated_bisection,
        deductions=calc_deductions(profile),
        reconciliation=reconciliation,
    )
