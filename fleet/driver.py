"""Fleet driver: builds the per-vehicle item status map from normalized inputs."""

import logging
from collections import OrderedDict
from datetime import date
from typing import Dict, List, Optional, Sequence, Tuple

from .aggregator import aggregate, sort_history
from .car import Car
from .classifier import Classifier
from .config import FleetConfig
from .item_status import ItemStatus
from .items import Catalog
from .normalizer import parse_history_rows, parse_schedule_rows
from .regulation_table import RegulationTable
from .service_record import ServiceRecord
from .vehicle import Vehicle

logger = logging.getLogger(__name__)

UKRAINIAN_ALPHABET = "абвгґдеєжзиіїйклмнопрстуфхцчшщьюя"
_CYRILLIC_RANK = {ch: i for i, ch in enumerate(UKRAINIAN_ALPHABET)}
_CYRILLIC_BASE = 0x10000
_LETTER_BASE = 0x20000


def collation_key(text: str) -> Tuple[int, ...]:
    """
    Sort key following Ukrainian alphabetical order.

    Case is ignored. Digits and punctuation come first, then Cyrillic, then
    Latin and other letters. Ukrainian letters (ґ, є, і, ї) take their
    alphabet positions; other Cyrillic letters follow я.
    """
    key = []
    for ch in (text or "").casefold():
        rank = _CYRILLIC_RANK.get(ch)
        if rank is not None:
            key.append(_CYRILLIC_BASE + rank)
        elif "\u0400" <= ch <= "\u04ff":
            key.append(_CYRILLIC_BASE + len(UKRAINIAN_ALPHABET) + ord(ch))
        elif ch.isalpha():
            key.append(_LETTER_BASE + ord(ch))
        else:
            key.append(ord(ch))
    return tuple(key)


def vehicle_sort_key(vehicle: Vehicle) -> Tuple[Tuple[int, ...], Tuple[int, ...]]:
    return collation_key(vehicle.city), collation_key(vehicle.plate)


def run(
    cars: Dict[str, Car],
    records_by_plate: Dict[str, List[ServiceRecord]],
    catalog: Catalog,
    table: RegulationTable,
    reference_date: date,
) -> Dict[str, Vehicle]:
    """
    Aggregate and classify every vehicle.

    Returns vehicles keyed by plate, ordered by city then plate.
    """
    classifier = Classifier(table)
    vehicles = []
    for plate, car in cars.items():
        records = list(records_by_plate.get(plate, []))
        items = aggregate(car, records, catalog, reference_date, classifier.resolve)
        vehicles.append(Vehicle(car, records, items, sort_history(records)))

    vehicles.sort(key=vehicle_sort_key)
    logger.info(
        "Classified %d vehicles, %d records, as of %s",
        len(vehicles), sum(len(v.records) for v in vehicles), reference_date.isoformat(),
    )
    return OrderedDict((v.plate, v) for v in vehicles)


def status_map(vehicles: Dict[str, Vehicle]) -> Dict[str, Dict[str, Optional[ItemStatus]]]:
    """Plate -> item -> status view of a driver result."""
    return OrderedDict((plate, dict(v.items)) for plate, v in vehicles.items())


def process(
    schedule_rows: Sequence[Sequence],
    history_rows: Sequence[Sequence],
    regulation_rows: Optional[Sequence[Sequence]] = None,
    config: Optional[FleetConfig] = None,
    reference_date: Optional[date] = None,
) -> Dict[str, Vehicle]:
    """Full pipeline from raw sheet rows to classified vehicles."""
    config = config or FleetConfig()
    reference_date = reference_date or date.today()
    cars = parse_schedule_rows(schedule_rows, config.schedule)
    records = parse_history_rows(history_rows, cars, config.history)
    table = RegulationTable.build(regulation_rows or [], config.catalog)
    return run(cars, records, config.catalog, table, reference_date)
