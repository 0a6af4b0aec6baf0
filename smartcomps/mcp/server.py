"""SmartComps MCP Server - FastMCP implementation for offer analysis tools."""

import logging
from typing import Any

from mcp.server.fastmcp import FastMCP
from pydantic import Field, ValidationError

from smartcomps.sdk import (
    SocialSecurityProfile,
    TaxTableError,
    estimate_pre_tax as sdk_estimate_pre_tax,
    evaluate,
    get_effective_settings,
    get_tax_table,
    net_from_gross,
    scenario_from_dict,
    solve_gross_from_net as sdk_solve_gross_from_net,
)

logger = logging.getLogger(__name__)

# Initialize FastMCP server
mcp = FastMCP("smart-comps")


def _profile(overrides: dict | None) -> SocialSecurityProfile:
    return SocialSecurityProfile.model_validate(overrides or {})


# --- Tools ---

@mcp.tool()
async def analyze_scenario(
    scenario: dict[str, Any] = Field(
        description=(
            "Scenario mapping with optional keys: candidate, current, offer, competitors, "
            "social_security, bank_flows, params. Records use fields like base_monthly, months, "
            "performance_bonus, stock_value (camelCase also accepted)."
        )
    ),
) -> dict[str, Any]:
    """Compare current pay with an offer. Returns package totals, a suggested offer, and risk advisories."""
    try:
        settings = get_effective_settings()
        state = scenario_from_dict(scenario, settings)
        result = evaluate(state, table=get_tax_table(settings), settings=settings)
        return result.model_dump(mode="json")
    except (ValidationError, TaxTableError) as e:
        logger.error(f"Error analyzing scenario: {e}")
        return {"error": str(e)}


@mcp.tool()
async def solve_gross_from_net(
    net: float = Field(description="Monthly net (after tax and deductions) income"),
    social_security: dict[str, Any] | None = Field(
        default=None,
        description="Optional profile: base_personal, pension_rate, medical_rate, unemployment_rate, housing_rate",
    ),
) -> dict[str, Any]:
    """Estimate monthly gross income from a net amount using the progressive bracket table."""
    try:
        profile = _profile(social_security)
        table = get_tax_table()
        gross = sdk_solve_gross_from_net(net, profile, table)
        return {
            "net": net,
            "gross": gross,
            "net_check": net_from_gross(gross, profile, table),
        }
    except (ValidationError, TaxTableError) as e:
        logger.error(f"Error solving gross from net: {e}")
        return {"error": str(e)}


@mcp.tool()
async def estimate_pre_tax(
    average_flow: float = Field(description="Average monthly bank flow"),
    social_security: dict[str, Any] | None = Field(default=None, description="Optional profile overrides"),
) -> dict[str, Any]:
    """Quick flat-rate pre-tax estimate from an average monthly flow (coarser than solve_gross_from_net)."""
    try:
        profile = _profile(social_security)
        return {
            "average_flow": average_flow,
            "estimated_pre_tax": sdk_estimate_pre_tax(average_flow, profile, get_tax_table()),
        }
    except (ValidationError, TaxTableError) as e:
        logger.error(f"Error estimating pre-tax: {e}")
        return {"error": str(e)}


def run_server():
    """Entry point for the MCP server."""
    mcp.run()


if __name__ == "__main__":
    run_server()
