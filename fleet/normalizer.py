"""Normalization of raw schedule and history sheet rows into typed records."""

import logging
from collections import OrderedDict
from typing import Dict, List, Optional, Sequence

from .calculations import normalize_date, parse_date, parse_number, parse_odometer, parse_year
from .car import Car
from .config import HistoryColumns, ScheduleColumns
from .service_record import ServiceRecord

logger = logging.getLogger(__name__)


def _text(row: Sequence, index: int) -> str:
    """Stripped cell text, empty for cells past the end of the row."""
    if index >= len(row) or row[index] is None:
        return ""
    return str(row[index]).strip()


def _number(row: Sequence, index: int) -> float:
    if index >= len(row):
        return 0
    return parse_number(row[index])


def parse_schedule_rows(
    rows: Sequence[Sequence], columns: Optional[ScheduleColumns] = None
) -> Dict[str, Car]:
    """
    Parse the maintenance schedule sheet into cars keyed by plate.

    The first row is the header. Short rows and rows without a plate are
    skipped; a repeated plate replaces the earlier row.
    """
    columns = columns or ScheduleColumns()
    cars: Dict[str, Car] = OrderedDict()
    for row_number, row in enumerate(rows[1:], start=2):
        if len(row) < columns.min_cells:
            logger.debug("Skipping schedule row %d: only %d cells", row_number, len(row))
            continue
        plate = _text(row, columns.plate)
        if not plate:
            continue
        cars[plate] = Car(
            plate=plate,
            city=_text(row, columns.city),
            model=_text(row, columns.model),
            year=parse_year(_text(row, columns.year)) or 0,
        )
    return cars


def parse_history_row(
    row: Sequence, columns: HistoryColumns, cars: Dict[str, Car]
) -> Optional[ServiceRecord]:
    """
    Parse one history row, or return None if the row must be skipped.

    A row is skipped when it is too short, names a car missing from the
    schedule, or has no usable (non-zero) odometer reading.
    """
    if len(row) < columns.min_cells:
        return None
    plate = _text(row, columns.plate)
    car = cars.get(plate)
    if car is None:
        return None

    raw_odometer = _text(row, columns.odometer)
    odometer = parse_odometer(raw_odometer)
    if not odometer:
        return None

    raw_date = _text(row, columns.date)
    return ServiceRecord(
        plate=plate,
        date=normalize_date(raw_date),
        service_date=parse_date(raw_date),
        odometer=odometer,
        raw_odometer=raw_odometer,
        description=_text(row, columns.description),
        part_code=_text(row, columns.part_code),
        unit=_text(row, columns.unit),
        quantity=_number(row, columns.quantity),
        price=_number(row, columns.price),
        total_with_vat=_number(row, columns.total_with_vat),
        status=_text(row, columns.status),
        city=car.city,
    )


def parse_history_rows(
    rows: Sequence[Sequence],
    cars: Dict[str, Car],
    columns: Optional[HistoryColumns] = None,
) -> Dict[str, List[ServiceRecord]]:
    """
    Parse the history sheet into records partitioned by plate.

    Every car of the schedule gets an entry, possibly empty. Records keep
    their sheet order within a plate.
    """
    columns = columns or HistoryColumns()
    records: Dict[str, List[ServiceRecord]] = OrderedDict((plate, []) for plate in cars)
    skipped = 0
    for row in rows[1:]:
        record = parse_history_row(row, columns, cars)
        if record is None:
            skipped += 1
            continue
        records[record.plate].append(record)
    logger.debug("History rows: %d kept, %d skipped", sum(len(r) for r in records.values()), skipped)
    return records
