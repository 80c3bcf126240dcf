"""Regulation table built from the regulations sheet."""

import logging
import math
from itertools import combinations
from typing import Dict, List, Optional, Sequence, Tuple

from .calculations import parse_number, parse_year
from .errors import RegulationError
from .items import Catalog
from .regulation import CHAIN, NO_UPPER_YEAR, WILDCARD, PeriodType, Regulation

logger = logging.getLogger(__name__)

# Sheet header titles, matched exactly (column order is free)
COL_PLATE = "Номер авто"
COL_BRAND = "Марка"
COL_MODEL = "Модель"
COL_YEAR_FROM = "Рік від"
COL_YEAR_TO = "Рік до"
COL_ITEM = "Запчастина"
COL_PERIOD = "Тип періоду"
COL_NORMAL = "Норма"
COL_WARNING = "Попередження"
COL_CRITICAL = "Критично"
COL_UNIT = "Одиниця"
COL_PRIORITY = "Пріоритет"

MIN_CELLS = 5
BLANK_PRIORITY = math.inf


def _cell(row: Sequence, columns: Dict[str, int], title: str) -> str:
    index = columns.get(title)
    if index is None or index >= len(row) or row[index] is None:
        return ""
    return str(row[index]).strip()


def _year(text: str, default: int, field: str, row_number: int) -> int:
    if not text:
        return default
    year = parse_year(text)
    if year is None:
        raise RegulationError(row_number, f"invalid {field} {text!r}")
    return year


def parse_regulation_row(
    row: Sequence, columns: Dict[str, int], row_number: int, catalog: Optional[Catalog] = None
) -> Optional[Regulation]:
    """
    Turn one sheet row into a Regulation.

    Returns None for rows that are simply blank; raises RegulationError for
    rows that look like a rule but cannot be used.
    """
    item = _cell(row, columns, COL_ITEM)
    if not item:
        return None
    if catalog is not None:
        item = catalog.resolve_name(item)

    try:
        period = PeriodType.parse(_cell(row, columns, COL_PERIOD) or PeriodType.DISTANCE.value)
    except ValueError as e:
        raise RegulationError(row_number, str(e)) from e

    normal_text = _cell(row, columns, COL_NORMAL)
    chain = normal_text.lower() == CHAIN
    priority_text = _cell(row, columns, COL_PRIORITY)

    return Regulation(
        item=item,
        period=period,
        normal=None if chain else parse_number(normal_text),
        warning=parse_number(_cell(row, columns, COL_WARNING)),
        critical=parse_number(_cell(row, columns, COL_CRITICAL)),
        plate=_cell(row, columns, COL_PLATE) or WILDCARD,
        brand=_cell(row, columns, COL_BRAND) or WILDCARD,
        model=_cell(row, columns, COL_MODEL) or WILDCARD,
        year_from=_year(_cell(row, columns, COL_YEAR_FROM), 0, "year from", row_number),
        year_to=_year(_cell(row, columns, COL_YEAR_TO), NO_UPPER_YEAR, "year to", row_number),
        unit=_cell(row, columns, COL_UNIT),
        priority=parse_number(priority_text) if priority_text else BLANK_PRIORITY,
        chain=chain,
        row_number=row_number,
    )


def _patterns_overlap(a: str, b: str) -> bool:
    return a == WILDCARD or b == WILDCARD or a.lower() == b.lower()


def regulations_overlap(a: Regulation, b: Regulation) -> bool:
    """True if both regulations could match the same vehicle item."""
    if a.item != b.item:
        return False
    if not _patterns_overlap(a.plate, b.plate):
        return False
    if not (_patterns_overlap(a.brand, b.brand) and _patterns_overlap(a.model, b.model)):
        return False
    return max(a.year_from, b.year_from) <= min(a.year_to, b.year_to)


class RegulationTable:
    """Regulations in evaluation order (ascending priority, stable)."""

    def __init__(self, regulations: Optional[List[Regulation]] = None):
        self.regulations = sorted(regulations or [], key=lambda r: r.priority)

    def __len__(self) -> int:
        return len(self.regulations)

    def __iter__(self):
        return iter(self.regulations)

    @classmethod
    def build(cls, rows: Sequence[Sequence], catalog: Optional[Catalog] = None) -> "RegulationTable":
        """
        Build a table from raw sheet rows (first row is the header).

        Bad rows are logged and skipped; the rest of the table stays usable.
        """
        if not rows:
            return cls()

        header = rows[0]
        columns = {str(title).strip(): index for index, title in enumerate(header)}
        missing = [t for t in (COL_ITEM, COL_WARNING, COL_CRITICAL) if t not in columns]
        if missing:
            logger.warning("Regulations header lacks columns: %s", ", ".join(missing))

        regulations = []
        for row_number, row in enumerate(rows[1:], start=2):
            if len(row) < MIN_CELLS:
                logger.debug("Skipping regulation row %d: only %d cells", row_number, len(row))
                continue
            try:
                regulation = parse_regulation_row(row, columns, row_number, catalog)
            except RegulationError as e:
                logger.warning("Skipping %s", e)
                continue
            if regulation is not None:
                regulations.append(regulation)

        table = cls(regulations)
        for a, b in table.find_overlaps():
            logger.warning(
                "Regulations at rows %d and %d overlap for %r; row %d wins by priority",
                a.row_number, b.row_number, a.item, a.row_number,
            )
        logger.info("Loaded %d regulations", len(table))
        return table

    def find(self, plate: str, model_text: str, year: int, item: str) -> Optional[Regulation]:
        """First regulation, in priority order, that matches the vehicle item."""
        for regulation in self.regulations:
            if regulation.matches(plate, model_text, year, item):
                return regulation
        return None

    def find_overlaps(self) -> List[Tuple[Regulation, Regulation]]:
        """
        Pairs of regulations that could both match one vehicle item.

        The first regulation of each pair is the one lookups will return.
        """
        return [(a, b) for a, b in combinations(self.regulations, 2) if regulations_overlap(a, b)]

    def for_item(self, item: str) -> List[Regulation]:
        """All regulations targeting an item, in evaluation order."""
        return [r for r in self.regulations if r.item == item]
