"""History aggregation: last qualifying service per item for one vehicle."""

import logging
from datetime import date
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .calculations import days_since, time_label
from .errors import InvalidDateError
from .item_status import ItemStatus
from .items import Catalog
from .service_record import ServiceRecord
from .status import Status

logger = logging.getLogger(__name__)

# (item, distance_since, days_since, year, model_text, plate) -> (status, source)
Resolver = Callable[[str, float, Optional[int], int, str, str], Tuple[Status, str]]


def match_items(description: str, catalog: Catalog) -> List[str]:
    """Names of all catalog items whose keywords occur in a description."""
    return [item.name for item in catalog if item.matches(description)]


def last_services(
    records: Sequence[ServiceRecord], catalog: Catalog
) -> Dict[str, Optional[ServiceRecord]]:
    """
    Record with the strictly greatest odometer per item.

    Records are scanned in input order, so ties keep the first one seen.
    """
    last: Dict[str, Optional[ServiceRecord]] = {name: None for name in catalog.names}
    for record in records:
        for name in match_items(record.description, catalog):
            existing = last[name]
            if existing is None or record.odometer > existing.odometer:
                last[name] = record
    return last


def current_odometer(records: Sequence[ServiceRecord]) -> float:
    """Highest odometer reading among the records, 0 without records."""
    return max((r.odometer for r in records), default=0)


def aggregate(
    car,
    records: Sequence[ServiceRecord],
    catalog: Catalog,
    reference_date: date,
    resolve: Resolver,
) -> Dict[str, Optional[ItemStatus]]:
    """
    Compute the status of every catalog item for one vehicle.

    Items without a qualifying record map to None and are not classified.
    """
    odometer = current_odometer(records)
    result: Dict[str, Optional[ItemStatus]] = {}
    for name, record in last_services(records, catalog).items():
        if record is None:
            result[name] = None
            continue

        distance = odometer - record.odometer
        try:
            days: Optional[int] = days_since(reference_date, record.service_date, record.date)
        except InvalidDateError as e:
            logger.debug("%s / %s: %s", car.plate, name, e)
            days = None

        status, source = resolve(name, distance, days, car.year, car.model, car.plate)
        result[name] = ItemStatus(
            item=name,
            status=status,
            date=record.date,
            odometer=record.odometer,
            current_odometer=odometer,
            distance_since=distance,
            days_since=days,
            time_label=time_label(days),
            source=source,
        )
    return result


def sort_history(records: Sequence[ServiceRecord]) -> List[ServiceRecord]:
    """Records newest first; records with unparsable dates go last."""
    dated = [r for r in records if r.service_date is not None]
    undated = [r for r in records if r.service_date is None]
    return sorted(dated, key=lambda r: r.service_date, reverse=True) + undated
