"""Serializable snapshot of a driver result."""

from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .item_status import ItemStatus
from .service_record import ServiceRecord
from .vehicle import Vehicle


def _item_to_dict(status: Optional[ItemStatus]) -> Optional[Dict[str, Any]]:
    if status is None:
        return None
    return {
        "date": status.date,
        "mileage": status.odometer,
        "currentMileage": status.current_odometer,
        "mileageDiff": status.distance_since,
        "daysDiff": status.days_since,
        "timeDiff": status.time_label,
        "status": status.status.key,
        "source": status.source,
    }


def _record_to_dict(record: ServiceRecord) -> Dict[str, Any]:
    return {
        "date": record.date,
        "city": record.city,
        "car": record.plate,
        "mileage": record.odometer,
        "originalMileage": record.raw_odometer,
        "description": record.description,
        "partCode": record.part_code,
        "unit": record.unit,
        "quantity": record.quantity,
        "price": record.price,
        "totalWithVAT": record.total_with_vat,
        "status": record.status,
    }


def vehicle_to_dict(vehicle: Vehicle) -> Dict[str, Any]:
    """Plain-data form of one vehicle (camelCase keys)."""
    return {
        "license": vehicle.plate,
        "city": vehicle.city,
        "model": vehicle.car.model,
        "year": vehicle.car.year,
        "currentMileage": vehicle.current_odometer,
        "parts": {name: _item_to_dict(s) for name, s in vehicle.items.items()},
        "history": [_record_to_dict(r) for r in vehicle.history],
    }


def build_snapshot(
    vehicles: Dict[str, Vehicle],
    last_updated: Optional[datetime] = None,
    reference_date: Optional[date] = None,
) -> Dict[str, Any]:
    """Snapshot of a driver result tagged with its update time."""
    last_updated = last_updated or datetime.now()
    reference_date = reference_date or last_updated.date()
    return {
        "lastUpdated": last_updated.isoformat(),
        "currentDate": reference_date.isoformat(),
        "vehicles": [vehicle_to_dict(v) for v in vehicles.values()],
    }


def save_snapshot(filename: Union[str, Path], snapshot: Dict[str, Any]) -> None:
    """Write a snapshot to a YAML file."""
    with open(filename, "w", encoding="utf-8") as fp:
        yaml.dump(
            snapshot,
            fp,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
            width=120,
        )


def load_snapshot(filename: Union[str, Path]) -> Dict[str, Any]:
    """Read a snapshot back; the payload is trusted as written."""
    with open(filename, "r", encoding="utf-8") as fp:
        return yaml.load(fp, Loader=yaml.SafeLoader)
