"""Status classification: regulations first, built-in table as fallback."""

from typing import Optional, Tuple

from .calculations import check_status
from .item_status import SOURCE_LEGACY, SOURCE_REGULATION
from .legacy_rules import legacy_status
from .regulation import Regulation
from .regulation_table import RegulationTable
from .status import Status


def regulation_status(
    regulation: Regulation, distance_since: float, days_since: Optional[int]
) -> Status:
    """
    Classify against a regulation's thresholds.

    - Chain regulations never degrade
    - Months and years are derived from days (30 and 365 days)
    - UNKNOWN when a time-based regulation meets an unparsable date
    """
    if regulation.chain:
        return Status.GOOD
    value = regulation.period.value_of(distance_since, days_since)
    if value is None:
        return Status.UNKNOWN
    return check_status(value, regulation.warning or 0, regulation.critical or 0)


class Classifier:
    """Resolves the governing rule for a vehicle item and classifies it."""

    def __init__(self, table: Optional[RegulationTable] = None):
        self.table = table or RegulationTable()

    def resolve(
        self,
        item: str,
        distance_since: float,
        days_since: Optional[int],
        year: int,
        model_text: str,
        plate: str,
    ) -> Tuple[Status, str]:
        """Status plus the source of the rule that produced it."""
        regulation = self.table.find(plate, model_text, year, item)
        if regulation is not None:
            return regulation_status(regulation, distance_since, days_since), SOURCE_REGULATION
        return legacy_status(item, distance_since, days_since, year, model_text), SOURCE_LEGACY

    def classify(
        self,
        item: str,
        distance_since: float,
        days_since: Optional[int],
        year: int,
        model_text: str,
        plate: str,
    ) -> Status:
        status, _ = self.resolve(item, distance_since, days_since, year, model_text, plate)
        return status
