"""Configuration management for SmartComps.

Two kinds of files:

1. settings.json - Machine-specific preferences
   - target_increase_pct, stock_ratio, beat_competitor_premium_pct:
     default recommender parameters (a scenario's own params win)
   - percent_precision, currency_symbol: display preferences
   - reconcile_tolerance_pct: bank flow reconciliation tolerance
   - tax_table: path to a replacement tax_brackets.yaml

2. Scenario YAML files - one comparison session (candidate, current,
   offer, competitors, social security, bank flows, params). Scenarios
   are inputs only; computed results are never written back.

Config directory resolution:
1. SMART_COMPS_CONFIG_PATH environment variable (if set)
2. ~/.config/smart-comps/ (XDG_CONFIG_HOME fallback)
"""

import json
import os
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from .taxes import TaxTable, get_default_tax_table, load_tax_table

if TYPE_CHECKING:
    from .session import SessionState


APP_NAME = "smart-comps"
SETTINGS_FILENAME = "settings.json"


class ScenarioNotFoundError(Exception):
    """Raised when a scenario file does not exist."""
    pass


class ScenarioError(ValueError):
    """Raised when a scenario file cannot be parsed or validated."""
    pass


class Settings(BaseModel):
    """Effective settings with defaults applied."""
    model_config = ConfigDict(extra="ignore")

    target_increase_pct: Optional[float] = Field(default=None, description="Default target raise")
    stock_ratio: Optional[float] = Field(default=None, description="Default equity share of target")
    beat_competitor_premium_pct: Optional[float] = Field(default=None, description="Default competitor premium")
    percent_precision: int = Field(default=1, ge=0, le=4)
    currency_symbol: str = Field(default="¥")
    reconcile_tolerance_pct: float = Field(default=0.10, ge=0)
    check_monthly_inversion: bool = Field(default=True)
    tax_table: Optional[str] = Field(default=None, description="Path to a replacement bracket table")


SETTING_KEYS = tuple(Settings.model_fields)


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Resolution order:
    1. SMART_COMPS_CONFIG_PATH environment variable
    2. ~/.config/smart-comps/ (XDG_CONFIG_HOME)

    Returns:
        Path to the configuration directory
    """
    env_path = os.environ.get("SMART_COMPS_CONFIG_PATH")
    if env_path:
        return Path(env_path)

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
    return Path(xdg_config_home) / APP_NAME


def get_settings_path() -> Path:
    """Get the path to settings.json (may not exist yet)."""
    return get_config_dir() / SETTINGS_FILENAME


def load_settings() -> dict:
    """Load settings from settings.json.

    Returns:
        Settings dictionary (empty dict if file doesn't exist)
    """
    settings_file = get_settings_path()

    if not settings_file.exists():
        return {}

    with open(settings_file, "r") as f:
        return json.load(f)


def save_settings(settings: dict) -> Path:
    """Save settings to settings.json.

    Args:
        settings: Settings dictionary to save

    Returns:
        Path to the saved settings file
    """
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)

    settings_file = config_dir / SETTINGS_FILENAME

    with open(settings_file, "w") as f:
        json.dump(settings, f, indent=2)

    return settings_file


def get_setting(key: str, default: Any = None) -> Any:
    """Get a single raw setting value."""
    return load_settings().get(key, default)


def set_setting(key: str, value: Any) -> Path:
    """Set a setting value in settings.json.

    Args:
        key: Setting key (must be one of SETTING_KEYS)
        value: Value to set

    Returns:
        Path to the saved settings file

    Raises:
        KeyError: If key is not a known setting
        ValueError: If value is invalid for the key
    """
    if key not in SETTING_KEYS:
        raise KeyError(f"Unknown setting '{key}'. Valid keys: {', '.join(SETTING_KEYS)}")

    settings = load_settings()
    settings[key] = value
    try:
        Settings.model_validate(settings)
    except ValidationError as e:
        raise ValueError(f"Invalid value for {key}: {value!r}\n{e}") from e
    return save_settings(settings)


def unset_setting(key: str) -> bool:
    """Remove a setting. Returns True if it was set."""
    settings = load_settings()
    if key not in settings:
        return False
    del settings[key]
    save_settings(settings)
    return True


def get_effective_settings() -> Settings:
    """Load settings.json and apply defaults."""
    return Settings.model_validate(load_settings())


def get_tax_table(settings: Optional[Settings] = None) -> TaxTable:
    """Bracket table from the 'tax_table' setting, or the packaged default."""
    settings = settings or get_effective_settings()
    if settings.tax_table:
        return load_tax_table(settings.tax_table)
    return get_default_tax_table()


def load_scenario(path: Union[str, Path]) -> "SessionState":
    """Load a scenario YAML file into a session state.

    Missing sections take their defaults; recommender params missing from
    the scenario fall back to settings.json, then built-in defaults.

    Raises:
        ScenarioNotFoundError: If the file doesn't exist
        ScenarioError: If the YAML is invalid or fails validation
    """
    scenario_path = Path(path).expanduser()
    if not scenario_path.exists():
        raise ScenarioNotFoundError(f"Scenario not found: {scenario_path}")

    with open(scenario_path, "r") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ScenarioError(f"Invalid YAML in {scenario_path}: {e}") from e

    if not isinstance(data, dict):
        raise ScenarioError(f"Scenario must be a mapping: {scenario_path}")

    try:
        return scenario_from_dict(data)
    except ValidationError as e:
        raise ScenarioError(f"Invalid scenario {scenario_path}:\n{e}") from e


def scenario_from_dict(data: dict, settings: Optional[Settings] = None) -> "SessionState":
    """Build a session state from a scenario mapping.

    Recommender params missing from the mapping (snake_case or camelCase)
    are filled from settings.json, then built-in defaults.

    Raises:
        ValidationError: If the mapping fails validation
    """
    from .session import SessionState

    settings = settings or get_effective_settings()
    params = dict(data.get("params") or {})
    for key in ("target_increase_pct", "stock_ratio", "beat_competitor_premium_pct"):
        configured = getattr(settings, key)
        if configured is not None and key not in params and to_camel(key) not in params:
            params[key] = configured

    return SessionState.from_dict({**data, "params": params})


def save_scenario(state: "SessionState", path: Union[str, Path]) -> Path:
    """Write a session state as scenario YAML (inputs only)."""
    scenario_path = Path(path).expanduser()
    scenario_path.parent.mkdir(parents=True, exist_ok=True)
    with open(scenario_path, "w") as f:
        yaml.safe_dump(state.to_dict(), f, sort_keys=False, allow_unicode=True)
    return scenario_path
