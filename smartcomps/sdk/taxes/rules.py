"""Bracket table loading.

The default table ships as config/tax_brackets.yaml. A replacement table can
be supplied by path (or through the 'tax_table' setting); it goes through
the same validation, so an edited table can never break the solver.
"""

import logging
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import ValidationError

from .schemas import TaxTable, TaxTableError

logger = logging.getLogger(__name__)

DEFAULT_TABLE_PATH = Path(__file__).parent.parent.parent / "config" / "tax_brackets.yaml"

_default_table: Optional[TaxTable] = None


def load_tax_table(path: Optional[Union[str, Path]] = None) -> TaxTable:
    """Load and validate a bracket table.

    Args:
        path: YAML file to load. Defaults to the packaged table.

    Returns:
        Validated TaxTable

    Raises:
        TaxTableError: If the file is missing, unreadable, or not monotonic
    """
    table_path = Path(path).expanduser() if path else DEFAULT_TABLE_PATH
    if not table_path.exists():
        raise TaxTableError(f"Tax table not found: {table_path}")

    with open(table_path, "r") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise TaxTableError(f"Invalid YAML in {table_path}: {e}") from e

    try:
        table = TaxTable.model_validate(data)
    except ValidationError as e:
        raise TaxTableError(f"Invalid tax table {table_path}:\n{e}") from e

    logger.debug(f"Loaded {len(table.brackets)} tax brackets from {table_path}")
    return table


def get_default_tax_table() -> TaxTable:
    """Packaged bracket table, loaded once per process."""
    global _default_table
    if _default_table is None:
        _default_table = load_tax_table()
    return _default_table
