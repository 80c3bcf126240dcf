"""Status enum for maintenance urgency levels."""

from enum import Enum


class Status(Enum):
    """Maintenance status categories. Lower value = more urgent."""

    CRITICAL = 1
    WARNING = 2
    GOOD = 3
    UNKNOWN = 4  # Time-based rule but the service date is unparsable

    @property
    def key(self) -> str:
        """Lowercase name used in snapshots and filters ('good', 'warning', ...)."""
        return self.name.lower()

    @classmethod
    def from_key(cls, key: str) -> "Status":
        """Look up a status by its lowercase key."""
        return cls[key.strip().upper()]
