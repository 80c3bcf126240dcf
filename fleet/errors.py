"""Exception types raised by the fleet package."""


class FleetError(Exception):
    """Base class for fleet maintenance errors."""


class ConfigError(FleetError):
    """Configuration file is missing, unreadable or fails schema validation."""


class RegulationError(FleetError, ValueError):
    """A regulation row cannot be turned into a usable rule."""

    def __init__(self, row_number: int, message: str):
        super().__init__(f"regulation row {row_number}: {message}")
        self.row_number = row_number


class InvalidDateError(FleetError, ValueError):
    """Day arithmetic was requested on a date that could not be parsed."""

    def __init__(self, raw: str):
        super().__init__(f"unparsable date: {raw!r}")
        self.raw = raw
