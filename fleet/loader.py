"""Loading of sheet exports and the YAML configuration file."""

import csv
import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from jsonschema import ValidationError, validate

from .config import FleetConfig, HistoryColumns, ScheduleColumns
from .errors import ConfigError
from .items import DEFAULT_CATALOG, Catalog

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).parent / "config_schema.yaml"


def read_rows(filename: Union[str, Path]) -> List[List[str]]:
    """Read a CSV export of a sheet into rows of string cells."""
    with open(filename, "r", encoding="utf-8-sig", newline="") as fp:
        rows = [row for row in csv.reader(fp)]
    logger.debug("Read %d rows from %s", len(rows), filename)
    return rows


def load_schema() -> dict:
    """Load the JSON schema for configuration files."""
    with open(SCHEMA_PATH, encoding="utf-8") as f:
        return yaml.safe_load(f)


def _snake_case(key: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", key).lower()


def _columns(cls, data: Optional[Dict[str, Any]]):
    """Build a columns dataclass from camelCase config keys."""
    return cls(**{_snake_case(k): v for k, v in (data or {}).items()})


def parse_config(data: Optional[Dict[str, Any]]) -> FleetConfig:
    """Validate raw config data and turn it into a FleetConfig."""
    data = data or {}
    try:
        validate(instance=data, schema=load_schema())
    except ValidationError as e:
        where = ".".join(str(p) for p in e.path)
        raise ConfigError(f"{e.message}" + (f" (at {where})" if where else "")) from e

    catalog = Catalog.from_dict(data["items"]) if data.get("items") else DEFAULT_CATALOG
    return FleetConfig(
        schedule=_columns(ScheduleColumns, data.get("scheduleColumns")),
        history=_columns(HistoryColumns, data.get("historyColumns")),
        catalog=catalog,
    )


def load_config(filename: Optional[Union[str, Path]] = None) -> FleetConfig:
    """Load a configuration file; no file means the built-in defaults."""
    if filename is None:
        return FleetConfig()
    try:
        with open(filename, "rb") as fp:
            data = yaml.load(fp, Loader=yaml.SafeLoader)
    except OSError as e:
        raise ConfigError(f"cannot read {filename}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"YAML parse error in {filename}: {e}") from e
    if data is not None and not isinstance(data, dict):
        raise ConfigError(f"{filename}: top level must be a mapping")
    return parse_config(data)
