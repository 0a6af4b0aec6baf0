"""SmartComps CLI - Command-line interface for offer comparison and advice."""

import json
import logging
import os

import click
from rich.console import Console

from smartcomps import __version__
from smartcomps.sdk import (
    ScenarioError,
    ScenarioNotFoundError,
    TaxTableError,
    evaluate,
    get_effective_settings,
    get_tax_table,
    load_scenario,
    session,
)

from .scenario_commands import scenario as scenario_group
from .settings_commands import settings as settings_group
from .tax_commands import tax as tax_group


def _configure_logging() -> None:
    """Configure logging based on the LOG_LEVEL environment variable."""
    log_level = os.environ.get("LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.WARNING),
        format="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


@click.group()
@click.version_option(version=__version__, prog_name="smart-comps")
def cli():
    """SmartComps - compare a candidate's current pay with an offer.

    Computes package totals, a recommended offer that beats both the
    candidate's current package and the strongest competitor, inverse-tax
    estimates from bank flows, and a list of risk advisories.

    Settings are loaded from (in order):

    \b
    1. SMART_COMPS_CONFIG_PATH environment variable
    2. ~/.config/smart-comps/settings.json (XDG default)

    Run 'smart-comps scenario init scenario.yaml' to start a comparison.
    """
    _configure_logging()


cli.add_command(scenario_group)
cli.add_command(tax_group)
cli.add_command(settings_group)


@cli.command("analyze")
@click.argument("scenario_path", type=click.Path())
@click.option("--target-increase", type=float, help="Override target raise over current package (e.g. 0.3).")
@click.option("--stock-ratio", type=float, help="Override equity share of the target (e.g. 0.15).")
@click.option("--premium", type=float, help="Override premium over the strongest competitor (e.g. 0.05).")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
def analyze(scenario_path, target_increase, stock_ratio, premium, as_json):
    """Analyze a scenario: totals, suggestion, and advice.

    SCENARIO_PATH is a scenario YAML file (see 'scenario init').

    \b
    Examples:
      smart-comps analyze zhang.yaml
      smart-comps analyze zhang.yaml --target-increase 0.25 --stock-ratio 0.2
      smart-comps analyze zhang.yaml --json
    """
    try:
        settings = get_effective_settings()
        state = load_scenario(scenario_path)
        table = get_tax_table(settings)
    except (ScenarioNotFoundError, ScenarioError, TaxTableError) as e:
        raise click.ClickException(str(e))

    overrides = {}
    if target_increase is not None:
        overrides["target_increase_pct"] = target_increase
    if stock_ratio is not None:
        overrides["stock_ratio"] = stock_ratio
    if premium is not None:
        overrides["beat_competitor_premium_pct"] = premium
    if overrides:
        state = session.set_params(state, **overrides)

    result = evaluate(state, table=table, settings=settings)

    if as_json:
        click.echo(json.dumps(result.model_dump(mode="json"), indent=2, ensure_ascii=False))
        return

    from .renderers.analysis_renderer import render_analysis

    console = Console(width=120)
    if state.candidate.name:
        title = f"{state.candidate.name}"
        if state.candidate.position:
            title += f" - {state.candidate.position}"
        if state.candidate.level:
            title += f" ({state.candidate.level})"
        console.print(f"[bold]{title}[/bold]\n")
    render_analysis(
        console,
        state,
        result,
        precision=settings.percent_precision,
        symbol=settings.currency_symbol,
    )


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
