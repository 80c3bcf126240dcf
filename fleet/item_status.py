"""ItemStatus dataclass for the computed state of one maintenance item."""

from dataclasses import dataclass
from typing import Optional

from .status import Status

SOURCE_REGULATION = "regulation"
SOURCE_LEGACY = "legacy"


@dataclass
class ItemStatus:
    """Last qualifying service of an item and its classification."""

    item: str
    status: Status
    date: str
    odometer: float
    current_odometer: float
    distance_since: float
    days_since: Optional[int] = None
    time_label: str = "-"
    source: str = SOURCE_LEGACY

    @property
    def is_due(self) -> bool:
        return self.status in (Status.CRITICAL, Status.WARNING)
