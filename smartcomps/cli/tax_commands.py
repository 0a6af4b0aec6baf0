"""Income tax estimation CLI commands."""

import json

import click

from smartcomps.sdk import (
    SocialSecurityProfile,
    TaxTableError,
    calc_deductions,
    estimate_pre_tax,
    format_currency,
    get_effective_settings,
    get_tax_table,
    net_from_gross,
    solve_gross_from_net,
)


def profile_options(f):
    """Social security profile options shared by the tax commands."""
    defaults = SocialSecurityProfile()
    options = [
        click.option("--base-personal", type=float, default=defaults.base_personal, show_default=True,
                     help="Employee contribution base."),
        click.option("--pension-rate", type=float, default=defaults.pension_rate, show_default=True),
        click.option("--medical-rate", type=float, default=defaults.medical_rate, show_default=True),
        click.option("--unemployment-rate", type=float, default=defaults.unemployment_rate, show_default=True),
        click.option("--housing-rate", type=float, default=defaults.housing_rate, show_default=True),
    ]
    for option in reversed(options):
        f = option(f)
    return f


def _build_profile(base_personal, pension_rate, medical_rate, unemployment_rate, housing_rate):
    return SocialSecurityProfile(
        base_personal=base_personal,
        pension_rate=pension_rate,
        medical_rate=medical_rate,
        unemployment_rate=unemployment_rate,
        housing_rate=housing_rate,
    )


def _load_table():
    try:
        return get_tax_table()
    except TaxTableError as e:
        raise click.ClickException(str(e))


@click.group("tax")
def tax():
    """Monthly income tax estimates (net <-> gross)."""
    pass


@tax.command("gross")
@click.argument("net", type=float)
@profile_options
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
def tax_gross(net, base_personal, pension_rate, medical_rate, unemployment_rate, housing_rate, as_json):
    """Estimate monthly gross income from a monthly NET amount.

    Uses bisection over the full bracket table.

    \b
    Example:
      smart-comps tax gross 15000
    """
    profile = _build_profile(base_personal, pension_rate, medical_rate, unemployment_rate, housing_rate)
    table = _load_table()
    symbol = get_effective_settings().currency_symbol

    gross = solve_gross_from_net(net, profile, table)
    check = net_from_gross(gross, profile, table)
    deductions = calc_deductions(profile)

    if as_json:
        click.echo(json.dumps({
            "net": net,
            "gross": gross,
            "net_check": check,
            "deductions": deductions.model_dump(),
        }, indent=2))
        return

    click.echo(f"Net:             {format_currency(net, symbol):>12}")
    click.echo(f"Estimated gross: {format_currency(gross, symbol):>12}")
    click.echo(f"  Deductions:    {format_currency(deductions.total, symbol):>12}")
    click.echo(f"  Income tax:    {format_currency(gross - deductions.total - check, symbol):>12}")
    click.echo(f"  Net (check):   {format_currency(check, symbol):>12}")


@tax.command("net")
@click.argument("gross", type=float)
@profile_options
def tax_net(gross, base_personal, pension_rate, medical_rate, unemployment_rate, housing_rate):
    """Compute monthly net income from a monthly GROSS amount."""
    profile = _build_profile(base_personal, pension_rate, medical_rate, unemployment_rate, housing_rate)
    symbol = get_effective_settings().currency_symbol
    net = net_from_gross(gross, profile, _load_table())
    click.echo(f"Net: {format_currency(net, symbol)}")


@tax.command("flat")
@click.argument("average", type=float)
@profile_options
def tax_flat(average, base_personal, pension_rate, medical_rate, unemployment_rate, housing_rate):
    """Quick flat-rate pre-tax estimate from an AVERAGE monthly flow.

    Uses a single rate tier instead of the full bracket table, so it can
    differ from 'tax gross' for the same amount.
    """
    profile = _build_profile(base_personal, pension_rate, medical_rate, unemployment_rate, housing_rate)
    symbol = get_effective_settings().currency_symbol
    estimate = estimate_pre_tax(average, profile, _load_table())
    click.echo(f"Pre-tax (flat estimate): ≈ {format_currency(estimate, symbol)}")


@tax.command("brackets")
def tax_brackets():
    """Show the active bracket table."""
    table = _load_table()
    click.echo(f"Monthly threshold: {table.threshold:,.0f}\n")
    click.echo(f"  {'Taxable up to':>14}  {'Rate':>5}  {'Quick deduction':>15}")
    for bracket in table.brackets:
        up_to = f"{bracket.up_to:,.0f}" if bracket.up_to is not None else "and above"
        click.echo(f"  {up_to:>14}  {bracket.rate * 100:>4.0f}%  {bracket.quick_deduction:>15,.0f}")
