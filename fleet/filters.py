"""Fleet queries: vehicle and history filtering, city list and summary counts."""

from typing import Dict, Iterable, List, Optional

from .driver import collation_key
from .items import Catalog
from .service_record import ServiceRecord
from .status import Status
from .vehicle import Vehicle


def _matches_search(vehicle: Vehicle, term: str) -> bool:
    fields = (vehicle.plate, vehicle.city, vehicle.car.model)
    return any(term in (f or "").lower() for f in fields)


def filter_vehicles(
    vehicles: Iterable[Vehicle],
    search: Optional[str] = None,
    city: Optional[str] = None,
    status: Optional[Status] = None,
    item: Optional[str] = None,
    item_status: Optional[Status] = None,
) -> List[Vehicle]:
    """
    Filter vehicles the way the dashboard list does.

    Args:
        search: Case-insensitive text found in plate, city or model
        city: Exact city; None keeps every city
        status: Keep vehicles with at least one item in this status
        item: Keep vehicles that have a status for this item
        item_status: With item, require that item to be in this status
    """
    term = (search or "").strip().lower()
    result = []
    for vehicle in vehicles:
        if term and not _matches_search(vehicle, term):
            continue
        if city is not None and vehicle.city != city:
            continue
        if status is not None and not vehicle.has_status(status):
            continue
        if item is not None:
            part = vehicle.get_item(item)
            if part is None:
                continue
            if item_status is not None and part.status != item_status:
                continue
        result.append(vehicle)
    return result


def cities(vehicles: Iterable[Vehicle]) -> List[str]:
    """Distinct non-empty cities in Ukrainian alphabetical order."""
    return sorted({v.city for v in vehicles if v.city}, key=collation_key)


def fleet_stats(vehicles: Iterable[Vehicle]) -> Dict[str, int]:
    """Vehicle count and how many vehicles have good/warning/critical items."""
    stats = {"total": 0, Status.GOOD.key: 0, Status.WARNING.key: 0, Status.CRITICAL.key: 0}
    for vehicle in vehicles:
        stats["total"] += 1
        present = set(vehicle.statuses())
        for status in (Status.GOOD, Status.WARNING, Status.CRITICAL):
            if status in present:
                stats[status.key] += 1
    return stats


def _record_contains(record: ServiceRecord, term: str) -> bool:
    fields = (
        record.description,
        record.date,
        f"{record.odometer:.0f}",
        record.part_code,
        record.unit,
        record.status,
    )
    return any(term in (f or "").lower() for f in fields)


def filter_history(
    records: Iterable[ServiceRecord],
    catalog: Optional[Catalog] = None,
    item: Optional[str] = None,
    search: Optional[str] = None,
) -> List[ServiceRecord]:
    """Records matching an item's keywords and/or a free-text search."""
    result = list(records)
    if item and catalog is not None:
        maintenance_item = catalog.get(item)
        if maintenance_item is not None:
            result = [r for r in result if maintenance_item.matches(r.description)]
    term = (search or "").strip().lower()
    if term:
        result = [r for r in result if _record_contains(r, term)]
    return result
