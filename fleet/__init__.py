"""
Fleet maintenance status engine.

This package turns maintenance sheet rows into per-vehicle item statuses:
- Status: Urgency levels (CRITICAL, WARNING, GOOD, UNKNOWN)
- Car / ServiceRecord: Normalized schedule and history rows
- Catalog: Tracked maintenance items and their description keywords
- Regulation / RegulationTable: Data-driven thresholds by plate/brand/model/year
- Classifier: Regulation lookup with the built-in legacy table as fallback
- Vehicle: Aggregate of a car, its records and item statuses
- run / process: The pipeline driver
"""

from .status import Status
from .errors import ConfigError, FleetError, InvalidDateError, RegulationError
from .car import Car
from .service_record import ServiceRecord
from .items import Catalog, MaintenanceItem, DEFAULT_CATALOG
from .regulation import PeriodType, Regulation
from .regulation_table import RegulationTable
from .item_status import ItemStatus
from .vehicle import Vehicle
from .calculations import (
    parse_number,
    parse_odometer,
    parse_year,
    parse_date,
    normalize_date,
    days_since,
    time_label,
    check_status,
)
from .legacy_rules import legacy_status
from .classifier import Classifier, regulation_status
from .normalizer import parse_schedule_rows, parse_history_rows
from .aggregator import aggregate, match_items, sort_history
from .config import FleetConfig, HistoryColumns, ScheduleColumns
from .driver import collation_key, process, run, status_map
from .filters import cities, filter_history, filter_vehicles, fleet_stats
from .loader import load_config, read_rows
from .snapshot import build_snapshot, load_snapshot, save_snapshot

__all__ = [
    "Status",
    "FleetError",
    "ConfigError",
    "RegulationError",
    "InvalidDateError",
    "Car",
    "ServiceRecord",
    "Catalog",
    "MaintenanceItem",
    "DEFAULT_CATALOG",
    "PeriodType",
    "Regulation",
    "RegulationTable",
    "ItemStatus",
    "Vehicle",
    "parse_number",
    "parse_odometer",
    "parse_year",
    "parse_date",
    "normalize_date",
    "days_since",
    "time_label",
    "check_status",
    "legacy_status",
    "Classifier",
    "regulation_status",
    "parse_schedule_rows",
    "parse_history_rows",
    "aggregate",
    "match_items",
    "sort_history",
    "FleetConfig",
    "HistoryColumns",
    "ScheduleColumns",
    "collation_key",
    "process",
    "run",
    "status_map",
    "cities",
    "filter_history",
    "filter_vehicles",
    "fleet_stats",
    "load_config",
    "read_rows",
    "build_snapshot",
    "load_snapshot",
    "save_snapshot",
]
