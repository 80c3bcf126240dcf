"""Vehicle class - the aggregate of a car, its service records and item statuses."""

from typing import Dict, List, Optional

from .aggregator import current_odometer
from .car import Car
from .item_status import ItemStatus
from .service_record import ServiceRecord
from .status import Status


class Vehicle:
    """Car with its maintenance history and computed item statuses."""

    def __init__(
        self,
        car: Car,
        records: Optional[List[ServiceRecord]] = None,
        items: Optional[Dict[str, Optional[ItemStatus]]] = None,
        history: Optional[List[ServiceRecord]] = None,
    ):
        self.car = car
        self.records = records or []
        self.items = items or {}
        self.history = history if history is not None else list(self.records)

    @property
    def plate(self) -> str:
        return self.car.plate

    @property
    def city(self) -> str:
        return self.car.city

    @property
    def current_odometer(self) -> float:
        """Highest odometer reading among the vehicle's records, 0 without records."""
        return current_odometer(self.records)

    def get_item(self, name: str) -> Optional[ItemStatus]:
        """Status of one item, None if it was never serviced."""
        return self.items.get(name)

    def statuses(self) -> List[Status]:
        """Statuses of all items that have a qualifying record."""
        return [s.status for s in self.items.values() if s is not None]

    def has_status(self, status: Status) -> bool:
        return status in self.statuses()

    @property
    def worst_status(self) -> Optional[Status]:
        """Most urgent status among the vehicle's items."""
        statuses = self.statuses()
        if not statuses:
            return None
        return min(statuses, key=lambda s: s.value)

    def __repr__(self) -> str:
        return f"Vehicle({self.plate!r}, records={len(self.records)})"
