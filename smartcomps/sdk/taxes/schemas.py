"""Pydantic schemas for the income tax bracket table.

These schemas validate config/tax_brackets.yaml (or a user-supplied
replacement) and guarantee the forward tax function stays monotonic
non-decreasing, which the bisection solver depends on.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


# Allowed mismatch between adjacent brackets at a shared bound
CONTINUITY_TOLERANCE = 1.0


class TaxTableError(ValueError):
    """Raised when a bracket table cannot be loaded or is not monotonic."""
    pass


class TaxBracket(BaseModel):
    """Single monthly bracket (quick-deduction method)."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    up_to: Optional[float] = Field(default=None, gt=0, description="Upper bound of taxable income (None for top bracket)")
    rate: float = Field(..., ge=0, le=1, description="Marginal rate as decimal")
    quick_deduction: float = Field(default=0, ge=0, description="Subtracted from taxable * rate")

    def tax(self, taxable: float) -> float:
        return taxable * self.rate - self.quick_deduction


class FlatRateTier(BaseModel):
    """Tier of the flat-rate quick estimator."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    over: float = Field(..., ge=0, description="Applies when average flow exceeds this value")
    rate: float = Field(..., ge=0, lt=1)


class TaxTable(BaseModel):
    """Complete bracket table plus the flat estimator ladder."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    threshold: float = Field(default=5000, ge=0, description="Monthly exemption threshold")
    brackets: List[TaxBracket] = Field(..., min_length=1)
    flat_rate_tiers: List[FlatRateTier] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_monotonic(self) -> "TaxTable":
        """Reject tables whose tax could decrease as income increases."""
        brackets = self.brackets
        if brackets[-1].up_to is not None:
            raise TaxTableError("Top bracket must be open-ended (omit up_to)")

        for lower, upper in zip(brackets, brackets[1:]):
            if lower.up_to is None:
                raise TaxTableError("Only the top bracket may omit up_to")
            if upper.up_to is not None and upper.up_to <= lower.up_to:
                raise TaxTableError(
                    f"Bracket bounds must increase: {upper.up_to} after {lower.up_to}"
                )
            if upper.rate < lower.rate:
                raise TaxTableError(
                    f"Bracket rates must not decrease: {upper.rate} after {lower.rate}"
                )
            gap = abs(lower.tax(lower.up_to) - upper.tax(lower.up_to))
            if gap > CONTINUITY_TOLERANCE:
                raise TaxTableError(
                    f"Brackets do not meet at {lower.up_to:,.0f} "
                    f"(quick deduction {upper.quick_deduction} leaves a {gap:.2f} jump)"
                )

        if brackets[0].tax(0) < -CONTINUITY_TOLERANCE:
            raise TaxTableError("First bracket yields negative tax at zero income")

        return self

    def bracket_for(self, taxable: float) -> TaxBracket:
        """First bracket whose upper bound is >= taxable income."""
        for bracket in self.brackets:
            if bracket.up_to is None or taxable <= bracket.up_to:
                return bracket
        return self.brackets[-1]

    def flat_rate_for(self, average: float) -> float:
        """Flat rate for the quick estimator (highest tier exceeded wins)."""
        for tier in sorted(self.flat_rate_tiers, key=lambda t: t.over, reverse=True):
            if average > tier.over:
                return tier.rate
        return 0.0
