"""Settings CLI commands for SmartComps.

Manages settings.json - recommender defaults, display preferences, paths.
"""

import json

import click

from smartcomps.sdk import (
    SETTING_KEYS,
    get_effective_settings,
    get_settings_path,
    load_settings,
    set_setting,
    unset_setting,
)


@click.group()
def settings():
    """Manage settings (settings.json).

    \b
    Available settings:
    - target_increase_pct, stock_ratio, beat_competitor_premium_pct:
      recommender defaults when a scenario omits them
    - percent_precision, currency_symbol: display
    - reconcile_tolerance_pct: bank flow reconciliation tolerance
    - check_monthly_inversion: warn when monthly cash drops
    - tax_table: path to a replacement tax_brackets.yaml
    """
    pass


@settings.command("show")
def settings_show():
    """Show current settings and effective values."""
    settings_path = get_settings_path()
    current = load_settings()

    click.echo(f"Settings file: {settings_path}")
    click.echo(f"File exists: {settings_path.exists()}")
    click.echo()

    if not current:
        click.echo("No settings configured (using defaults).")
    else:
        click.echo("Current settings:")
        for key, value in current.items():
            click.echo(f"  {key}: {value}")

    click.echo()
    click.echo("Effective values:")
    for key, value in get_effective_settings().model_dump().items():
        click.echo(f"  {key}: {value}")


@settings.command("set")
@click.argument("key", type=click.Choice(SETTING_KEYS))
@click.argument("value")
def settings_set(key, value):
    """Set KEY to VALUE.

    VALUE is parsed as JSON when possible (numbers, true/false), otherwise
    stored as a string.

    \b
    Examples:
      smart-comps settings set target_increase_pct 0.25
      smart-comps settings set currency_symbol '$'
    """
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError:
        parsed = value

    try:
        path = set_setting(key, parsed)
    except ValueError as e:
        raise click.ClickException(str(e))

    click.echo(f"Set {key}: {parsed}")
    click.echo(f"Saved to: {path}")


@settings.command("unset")
@click.argument("key", type=click.Choice(SETTING_KEYS))
def settings_unset(key):
    """Remove KEY, reverting it to its default."""
    if unset_setting(key):
        click.echo(f"Cleared {key}.")
    else:
        click.echo(f"{key} was not set.")
