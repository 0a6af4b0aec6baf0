"""Pydantic schemas for compensation records and engine results.

Input schemas (records, profiles, flows, params) coerce every numeric field
leniently: bad or missing numbers become 0 instead of raising, matching the
spreadsheet-like way recruiters type figures. Unknown keys are still
rejected so that typos in scenario files surface as clear errors.

Field names are snake_case; the camelCase spellings (baseMonthly,
performanceBonus, ...) are accepted as aliases when loading YAML or JSON.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from .formatting import safe_parse


Party = Literal["current", "offer"]
Severity = Literal["danger", "warning", "info", "good"]
FlowType = Literal["net", "gross"]

BANK_FLOW_MONTHS = 12
DEFAULT_FLOW_YEAR = 2023


def _input_config() -> ConfigDict:
    return ConfigDict(
        extra="forbid",
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


# =============================================================================
# Input Schemas
# =============================================================================


class CompensationRecord(BaseModel):
    """One party's pay structure (current employer, offer, or a competitor)."""

    model_config = _input_config()

    base_monthly: float = Field(default=0, description="Monthly base salary")
    months: float = Field(
        default=12, description="Months of base salary paid per year (13th/14th month conventions)"
    )
    fixed_allowance: float = Field(default=0, description="Monthly allowance, annualized x12")
    bonus_months: float = Field(default=0, description="Bonus as a multiple of base_monthly")
    performance_bonus: float = Field(default=0, description="Annual bonus amount")
    sign_on_bonus: float = Field(default=0, description="One-time sign-on cash")
    other: float = Field(default=0, description="Other one-time annual cash")
    stock_value: float = Field(default=0, description="Annualized equity value")
    stock_count: float = Field(default=0, description="Granted share/option count")
    strike_price: float = Field(default=0, description="Exercise price per share")
    grant_price: float = Field(default=0, description="Fair value per share at grant")
    vesting_years: float = Field(default=4, description="Vesting period in years")

    @field_validator("*", mode="before")
    @classmethod
    def coerce_numeric(cls, v: Any) -> float:
        return safe_parse(v)


class Competitor(BaseModel):
    """A named competing offer, entered for comparison only."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: int = Field(..., ge=1, description="Unique, monotonically assigned identifier")
    name: str = Field(default="", description="Company or offer label")
    record: CompensationRecord = Field(default_factory=CompensationRecord)


class CompetitorSet(BaseModel):
    """Ordered competitor entries plus the next identifier to hand out.

    Identifiers are never reused: removing a competitor does not lower
    next_id. Insertion order is preserved for display only.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    entries: List[Competitor] = Field(default_factory=list)
    next_id: int = Field(default=1, ge=1)

    @model_validator(mode="before")
    @classmethod
    def assign_ids(cls, data: Any) -> Any:
        """Fill in missing ids and keep next_id ahead of every assigned id.

        Scenario files may list competitors as a bare list and omit ids.
        """
        if isinstance(data, list):
            data = {"entries": data}
        if not isinstance(data, dict):
            return data

        entries = []
        used = set()
        for entry in data.get("entries") or []:
            entry_id = entry.get("id") if isinstance(entry, dict) else getattr(entry, "id", None)
            if entry_id is not None:
                if entry_id in used:
                    raise ValueError(f"Duplicate competitor id: {entry_id}")
                used.add(entry_id)
            entries.append(entry)

        next_id = max([data.get("next_id") or 1] + [i + 1 for i in used])
        filled = []
        for entry in entries:
            if isinstance(entry, dict) and entry.get("id") is None:
                entry = {**entry, "id": next_id}
                next_id += 1
            filled.append(entry)

        return {**data, "entries": filled, "next_id": next_id}

    def get(self, competitor_id: int) -> Optional[Competitor]:
        for entry in self.entries:
            if entry.id == competitor_id:
                return entry
        return None


class SocialSecurityProfile(BaseModel):
    """Employee social insurance and housing fund contribution settings."""

    model_config = _input_config()

    city: str = Field(default="Shanghai")
    base_company: float = Field(default=20000, description="Employer contribution base")
    base_personal: float = Field(default=20000, description="Employee contribution base")
    pension_rate: float = Field(default=0.08)
    medical_rate: float = Field(default=0.02)
    unemployment_rate: float = Field(default=0.005)
    housing_rate: float = Field(default=0.07)

    @field_validator(
        "base_company", "base_personal", "pension_rate", "medical_rate",
        "unemployment_rate", "housing_rate", mode="before",
    )
    @classmethod
    def coerce_numeric(cls, v: Any) -> float:
        return safe_parse(v)

    @property
    def total_rate(self) -> float:
        """Combined employee rate across all four funds."""
        return self.housing_rate + self.pension_rate + self.medical_rate + self.unemployment_rate


class BankFlowEntry(BaseModel):
    """One month of declared bank-statement income."""

    model_config = _input_config()

    month: str = Field(..., description="Month label, e.g. '2023-01'")
    amount: float = Field(default=0)

    @field_validator("amount", mode="before")
    @classmethod
    def coerce_numeric(cls, v: Any) -> float:
        return safe_parse(v)


def default_flow_entries(year: int = DEFAULT_FLOW_YEAR) -> List[BankFlowEntry]:
    return [BankFlowEntry(month=f"{year}-{m:02d}", amount=0) for m in range(1, BANK_FLOW_MONTHS + 1)]


class BankFlowSeries(BaseModel):
    """Twelve months of bank-flow income, either net (after tax) or gross."""

    model_config = _input_config()

    flow_type: FlowType = Field(default="net")
    entries: List[BankFlowEntry] = Field(default_factory=default_flow_entries)

    @field_validator("entries", mode="before")
    @classmethod
    def accept_plain_amounts(cls, v: Any) -> Any:
        """Allow a bare list of 12 amounts, labeled like default_flow_entries."""
        if isinstance(v, list) and v and not any(isinstance(item, (dict, BaseModel)) for item in v):
            return [
                {"month": f"{DEFAULT_FLOW_YEAR}-{i + 1:02d}", "amount": amount}
                for i, amount in enumerate(v)
            ]
        return v

    @field_validator("entries")
    @classmethod
    def exactly_twelve_months(cls, v: List[BankFlowEntry]) -> List[BankFlowEntry]:
        if len(v) != BANK_FLOW_MONTHS:
            raise ValueError(f"Bank flow series needs exactly {BANK_FLOW_MONTHS} months, got {len(v)}")
        return v

    @property
    def amounts(self) -> List[float]:
        return [e.amount for e in self.entries]


class AdviseParams(BaseModel):
    """Tunable parameters for the offer recommender."""

    model_config = _input_config()

    target_increase_pct: float = Field(default=0.30, description="Minimum raise over current package")
    stock_ratio: float = Field(default=0.15, description="Share of the target paid in equity")
    beat_competitor_premium_pct: float = Field(
        default=0.05, description="Premium over the strongest competitor package"
    )

    @field_validator("*", mode="before")
    @classmethod
    def coerce_numeric(cls, v: Any) -> float:
        return safe_parse(v)


class CandidateInfo(BaseModel):
    """Display-only candidate details carried into reports."""

    model_config = _input_config()

    name: str = ""
    age: str = ""
    education_type: str = ""
    school: str = ""
    work_years: str = ""
    position: str = ""
    level: str = ""
    peer_reference: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def stringify(cls, v: Any) -> str:
        return "" if v is None else str(v)


# =============================================================================
# Result Schemas
# =============================================================================


class PackageAggregate(BaseModel):
    """Derived annual totals for one compensation record."""

    model_config = ConfigDict(frozen=True)

    base_total: float
    allowance_total: float
    cash_total: float
    total_package: float
    monthly_cash: float


class CompetitorBenchmark(BaseModel):
    """Strongest competitor package and every competitor's aggregate."""

    model_config = ConfigDict(frozen=True)

    max_package: float = 0
    max_competitor_id: Optional[int] = None
    max_competitor_name: Optional[str] = None
    per_competitor_aggregates: Dict[int, PackageAggregate] = Field(default_factory=dict)


class Suggestion(BaseModel):
    """Recommended offer package."""

    model_config = ConfigDict(frozen=True)

    total: float = Field(..., description="Final target total package")
    stock: float = Field(..., description="Equity part of the target")
    base_monthly: float = Field(..., description="Back-solved monthly base salary")
    cash_total: float = Field(..., description="Cash part of the target")
    is_based_on_competitor: bool = False
    target_from_current: float = 0
    target_from_competitor: float = 0
    months: float = 12


class Advisory(BaseModel):
    """A single risk advisory."""

    model_config = ConfigDict(frozen=True)

    severity: Severity
    code: str = Field(..., description="Stable rule identifier")
    message: str


class IncreaseStats(BaseModel):
    """Relative change from current to offer (0 when the current figure is 0)."""

    model_config = ConfigDict(frozen=True)

    cash_increase_pct: float = 0
    total_increase_pct: float = 0
    monthly_increase_pct: float = 0
    total_gap: float = 0


class DeductionBreakdown(BaseModel):
    """Monthly employee social insurance and housing fund deductions."""

    model_config = ConfigDict(frozen=True)

    housing: float
    pension: float
    medical: float
    unemployment: float
    total: float


class FlowStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    total: float = 0
    average: float = 0
    active_months: int = 0


class FlowReconciliation(BaseModel):
    """Bank flows converted to gross and compared with the declared structure."""

    model_config = ConfigDict(frozen=True)

    flow_type: FlowType
    monthly_gross: List[float]
    implied_annual_gross: float
    regular_annual_cash: float
    implied_variable: float
    declared_variable: float
    variance: float
    status: Literal["match", "gap", "no_data"]


class Analysis(BaseModel):
    """Everything the presentation layer needs for one session snapshot."""

    model_config = ConfigDict(frozen=True)

    current: PackageAggregate
    offer: PackageAggregate
    benchmark: CompetitorBenchmark
    suggestion: Suggestion
    stats: IncreaseStats
    offer_stock_ratio: float
    advisories: List[Advisory]
    flow_stats: FlowStats
    estimated_pre_tax_flat: float
    estimated_gross_bisection: float
    deductions: DeductionBreakdown
    reconciliation: FlowReconciliation
