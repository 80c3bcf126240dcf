"""Fleet configuration: sheet column layout and the maintenance catalog."""

from dataclasses import dataclass, field

from .items import DEFAULT_CATALOG, Catalog


@dataclass
class ScheduleColumns:
    """Zero-based column positions of the maintenance schedule sheet."""

    city: int = 0
    plate: int = 1
    model: int = 2
    year: int = 3
    min_cells: int = 5


@dataclass
class HistoryColumns:
    """Zero-based column positions of the service history sheet."""

    date: int = 0
    plate: int = 1
    odometer: int = 2
    description: int = 3
    part_code: int = 4
    unit: int = 5
    quantity: int = 6
    price: int = 7
    total_with_vat: int = 8
    status: int = 9
    min_cells: int = 8


@dataclass
class FleetConfig:
    """Everything the pipeline needs besides the sheet rows themselves."""

    schedule: ScheduleColumns = field(default_factory=ScheduleColumns)
    history: HistoryColumns = field(default_factory=HistoryColumns)
    catalog: Catalog = DEFAULT_CATALOG
