"""ServiceRecord class for maintenance transactions."""
from datetime import date as date_type
from typing import Optional


class ServiceRecord:
    """One row of the maintenance history sheet."""

    def __init__(
            self,
            plate: str,
            date: str,
            odometer: float,
            description: str = "",
            service_date: Optional[date_type] = None,
            raw_odometer: str = "",
            part_code: str = "",
            unit: str = "",
            quantity: float = 0,
            price: float = 0,
            total_with_vat: float = 0,
            status: str = "",
            city: str = "",
    ):
        self.plate = plate
        self.date = date
        self.service_date = service_date
        self.odometer = odometer
        self.raw_odometer = raw_odometer
        self.description = description
        self.part_code = part_code
        self.unit = unit
        self.quantity = quantity
        self.price = price
        self.total_with_vat = total_with_vat
        self.status = status
        self.city = city

    def __repr__(self) -> str:
        return f"ServiceRecord({self.plate!r}, {self.date!r}, {self.odometer!r}, {self.description!r})"
