"""Scenario file CLI commands."""

from pathlib import Path

import click


@click.group("scenario")
def scenario():
    """Create and inspect scenario files.

    A scenario is a YAML file holding one comparison: candidate details,
    current and offer pay structures, competitors, social security
    profile, twelve months of bank flows, and recommender parameters.
    """
    pass


@scenario.command("init")
@click.argument("path", type=click.Path())
@click.option("--force", is_flag=True, help="Overwrite an existing file.")
def scenario_init(path, force):
    """Write a scenario file pre-filled with default values.

    \b
    Example:
      smart-comps scenario init zhang.yaml
    """
    from smartcomps.sdk import SessionState, save_scenario

    target = Path(path).expanduser()
    if target.exists() and not force:
        raise click.ClickException(f"File already exists: {target} (use --force to overwrite)")

    saved = save_scenario(SessionState.default(), target)
    click.echo(f"Created scenario: {saved}")
    click.echo(f"\nEdit it, then run: smart-comps analyze {saved}")


@scenario.command("show")
@click.argument("path", type=click.Path())
def scenario_show(path):
    """Print a scenario after validation and equity derivation."""
    import yaml
    from smartcomps.sdk import ScenarioError, ScenarioNotFoundError, load_scenario

    try:
        state = load_scenario(path)
    except (ScenarioNotFoundError, ScenarioError) as e:
        raise click.ClickException(str(e))

    click.echo(yaml.safe_dump(state.to_dict(), sort_keys=False, allow_unicode=True))
