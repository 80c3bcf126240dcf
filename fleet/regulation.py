"""Regulation class for data-driven maintenance thresholds."""
import re
from enum import Enum
from typing import Optional, Pattern

from .errors import RegulationError

WILDCARD = "*"
CHAIN = "chain"
NO_UPPER_YEAR = 9999


class PeriodType(Enum):
    """Unit the thresholds of a regulation are measured in."""

    DISTANCE = "distance"
    MONTHS = "months"
    YEARS = "years"

    @classmethod
    def parse(cls, text: str) -> "PeriodType":
        """Accept English keys and the Ukrainian words used in the sheet."""
        key = (text or "").strip().lower()
        try:
            return _PERIOD_ALIASES[key]
        except KeyError:
            raise ValueError(f"unknown period type {text!r}") from None

    def value_of(self, distance_since: float, days_since: Optional[int]) -> Optional[float]:
        """Comparison value for this period, None if days are needed but unknown."""
        if self is PeriodType.DISTANCE:
            return distance_since
        if days_since is None:
            return None
        if self is PeriodType.MONTHS:
            return days_since / 30
        return days_since / 365


_PERIOD_ALIASES = {
    "distance": PeriodType.DISTANCE,
    "пробіг": PeriodType.DISTANCE,
    "км": PeriodType.DISTANCE,
    "months": PeriodType.MONTHS,
    "місяці": PeriodType.MONTHS,
    "міс": PeriodType.MONTHS,
    "years": PeriodType.YEARS,
    "роки": PeriodType.YEARS,
    "р": PeriodType.YEARS,
}


def _compile(pattern: str, field: str, row_number: int) -> Optional[Pattern]:
    if pattern == WILDCARD:
        return None
    try:
        return re.compile(pattern, re.IGNORECASE)
    except re.error as e:
        raise RegulationError(row_number, f"invalid {field} pattern {pattern!r}: {e}") from e


class Regulation:
    """A maintenance regulation matched against plate, brand, model and year."""

    def __init__(
            self,
            item: str,
            period: PeriodType = PeriodType.DISTANCE,
            normal: Optional[float] = None,
            warning: Optional[float] = None,
            critical: Optional[float] = None,
            plate: str = WILDCARD,
            brand: str = WILDCARD,
            model: str = WILDCARD,
            year_from: int = 0,
            year_to: int = NO_UPPER_YEAR,
            unit: str = "",
            priority: float = 0,
            chain: bool = False,
            row_number: int = 0,
    ):
        self.item = item
        self.period = period
        self.chain = chain
        self.normal = normal
        self.warning = None if chain else warning
        self.critical = None if chain else critical
        self.plate = plate or WILDCARD
        self.brand = brand or WILDCARD
        self.model = model or WILDCARD
        self.year_from = year_from
        self.year_to = year_to
        self.unit = unit
        self.priority = priority
        self.row_number = row_number
        self._brand_re = _compile(self.brand, "brand", row_number)
        self._model_re = _compile(self.model, "model", row_number)

    def matches(self, plate: str, model_text: str, year: int, item: str) -> bool:
        """
        Check whether this regulation applies to a vehicle item.

        Cheap exact comparisons run before the regex searches.
        """
        if self.item != item:
            return False
        if self.plate != WILDCARD and self.plate != plate:
            return False
        text = model_text or ""
        if self._brand_re is not None and not self._brand_re.search(text):
            return False
        if self._model_re is not None and not self._model_re.search(text):
            return False
        return self.year_from <= (year or 0) <= self.year_to

    def __repr__(self) -> str:
        return (
            f"Regulation({self.item!r}, plate={self.plate!r}, brand={self.brand!r}, "
            f"model={self.model!r}, years={self.year_from}-{self.year_to}, priority={self.priority})"
        )
