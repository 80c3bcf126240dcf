"""Built-in fallback thresholds used when no regulation matches an item."""

from dataclasses import dataclass
from typing import Dict, Optional

from .calculations import check_status
from .regulation import PeriodType
from .status import Status


@dataclass(frozen=True)
class LegacyRule:
    """Fixed threshold pair for one item."""

    period: PeriodType
    warning: float
    critical: float
    strict_critical: bool = False
    strict_warning: bool = False

    def evaluate(self, distance_since: float, days_since: Optional[int]) -> Status:
        value = self.period.value_of(distance_since, days_since)
        if value is None:
            return Status.UNKNOWN
        return check_status(
            value, self.warning, self.critical, self.strict_critical, self.strict_warning
        )


_TIMING = LegacyRule(PeriodType.DISTANCE, 58000, 60500)
_HEAVY_UNITS = LegacyRule(PeriodType.DISTANCE, 80000, 120000)
_SUSPENSION_JOINTS = LegacyRule(PeriodType.DISTANCE, 50000, 60000, strict_critical=True)
_DISCS = LegacyRule(PeriodType.DISTANCE, 70000, 100000, strict_critical=True)
_PERIODIC_SERVICE = LegacyRule(PeriodType.MONTHS, 2, 4, strict_critical=True)

OIL_CHANGE_MODERN = LegacyRule(PeriodType.DISTANCE, 14000, 15500)
OIL_CHANGE_OLD = LegacyRule(PeriodType.DISTANCE, 9000, 10500)
MODERN_YEAR = 2010

LEGACY_RULES: Dict[str, LegacyRule] = {
    "timing belt": _TIMING,
    "drive belt": _TIMING,
    "water pump": _HEAVY_UNITS,
    "clutch": _HEAVY_UNITS,
    "starter": _HEAVY_UNITS,
    "alternator": _HEAVY_UNITS,
    "chassis diagnostics": LegacyRule(PeriodType.MONTHS, 2, 3, strict_critical=True),
    "wheel alignment": _PERIODIC_SERVICE,
    "caliper service": _PERIODIC_SERVICE,
    "computer diagnostics": _PERIODIC_SERVICE,
    "dpf burn": _PERIODIC_SERVICE,
    "brake pads": LegacyRule(PeriodType.DISTANCE, 60000, 80000, strict_critical=True),
    "brake discs": _DISCS,
    "shock absorbers": _DISCS,
    "strut mounts": _SUSPENSION_JOINTS,
    "ball joint": _SUSPENSION_JOINTS,
    "tie rod": _SUSPENSION_JOINTS,
    "tie rod end": _SUSPENSION_JOINTS,
    "battery": LegacyRule(PeriodType.YEARS, 3, 4, strict_critical=True),
}

DEFAULT_RULE = LegacyRule(PeriodType.DISTANCE, 30000, 50000)

# Mercedes Sprinter: timing chain, and a longer-lived water pump
SPRINTER_WATER_PUMP_WARNING = 120000


def is_mercedes_sprinter(model_text: str) -> bool:
    text = (model_text or "").lower()
    return "mercedes" in text and "sprinter" in text


def rule_for(item: str, year: int) -> LegacyRule:
    """Threshold rule for an item, with the generic default for unlisted items."""
    if item == "oil change":
        return OIL_CHANGE_MODERN if year and year >= MODERN_YEAR else OIL_CHANGE_OLD
    return LEGACY_RULES.get(item, DEFAULT_RULE)


def legacy_status(
    item: str,
    distance_since: float,
    days_since: Optional[int],
    year: int,
    model_text: str,
) -> Status:
    """Classify an item with the built-in rule table."""
    if is_mercedes_sprinter(model_text):
        if item == "timing belt":
            return Status.GOOD
        if item == "water pump":
            if distance_since >= SPRINTER_WATER_PUMP_WARNING:
                return Status.WARNING
            return Status.GOOD
    return rule_for(item, year).evaluate(distance_since, days_since)
