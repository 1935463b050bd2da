"""
Typed views over the attribute bags retained from an Apple Health export.

Only the attributes the summary needs are kept. Numeric and date fields stay
as the raw strings from the XML; the accessors below parse them on demand and
return ``None`` when a value is missing or unparseable, so every aggregate can
simply skip it.
"""
import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Optional

from wrapped_engine.config import TYPE_PREFIXES


# ---------------------------------------------------------------------------
# Parsing helpers
# ---------------------------------------------------------------------------

def safe_float(val: Optional[str]) -> Optional[float]:
    """Parse a numeric attribute; ``None`` for missing, empty, or non-finite values."""
    if val is None:
        return None
    try:
        num = float(val)
    except (ValueError, TypeError):
        return None
    if not math.isfinite(num):
        return None
    return num


def parse_health_date(date_str: Optional[str]) -> Optional[datetime]:
    """
    Parse an Apple Health date string like ``2025-04-09 07:12:00 -0500``.

    ISO 8601 strings (``2025-04-09T07:12:00Z``) are accepted as well. The
    result keeps the device's wall-clock time and offset; naive inputs are
    taken as UTC so that all results compare with each other.
    """
    if not date_str:
        return None
    date_str = date_str.strip()
    try:
        dt = datetime.strptime(date_str, "%Y-%m-%d %H:%M:%S %z")
    except ValueError:
        try:
            dt = datetime.fromisoformat(date_str.replace("Z", "+00:00"))
        except ValueError:
            return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def strip_type_prefix(identifier: str) -> str:
    """``HKQuantityTypeIdentifierStepCount`` → ``StepCount`` (display only)."""
    for prefix in TYPE_PREFIXES:
        identifier = identifier.replace(prefix, "")
    return identifier


def in_year(date_str: Optional[str], year: str) -> bool:
    """The sole retention predicate: the date string starts with the year."""
    if not date_str:
        return False
    return date_str[:4] == year


# ---------------------------------------------------------------------------
# Retained records
# ---------------------------------------------------------------------------

class _Dated:
    """Date-derived keys shared by records and workouts."""

    start_date: str

    @property
    def date_key(self) -> str:
        return self.start_date[:10]

    @property
    def month_key(self) -> str:
        return self.start_date[5:7]

    @property
    def started_at(self) -> Optional[datetime]:
        return parse_health_date(self.start_date)


@dataclass(frozen=True)
class MeasurementRecord(_Dated):
    """A retained ``<Record>`` element."""
    type: str
    start_date: str
    value: Optional[str] = None
    unit: str = ""
    end_date: Optional[str] = None
    source_name: Optional[str] = None

    @classmethod
    def from_attributes(cls, attrs: Dict[str, str]) -> "MeasurementRecord":
        return cls(
            type=attrs.get("type", ""),
            start_date=attrs.get("startDate", ""),
            value=attrs.get("value"),
            unit=attrs.get("unit", ""),
            end_date=attrs.get("endDate"),
            source_name=attrs.get("sourceName"),
        )

    @property
    def numeric_value(self) -> Optional[float]:
        return safe_float(self.value)


@dataclass(frozen=True)
class Workout(_Dated):
    """A retained ``<Workout>`` element. Duration is in minutes unless noted."""
    workout_type: str
    start_date: str
    duration: Optional[str] = None
    duration_unit: str = "min"
    total_distance: Optional[str] = None
    total_distance_unit: str = ""
    total_energy_burned: Optional[str] = None
    total_energy_burned_unit: str = ""
    end_date: Optional[str] = None

    @classmethod
    def from_attributes(cls, attrs: Dict[str, str]) -> "Workout":
        return cls(
            workout_type=attrs.get("workoutActivityType", ""),
            start_date=attrs.get("startDate", ""),
            duration=attrs.get("duration"),
            duration_unit=attrs.get("durationUnit", "min"),
            total_distance=attrs.get("totalDistance"),
            total_distance_unit=attrs.get("totalDistanceUnit", ""),
            total_energy_burned=attrs.get("totalEnergyBurned"),
            total_energy_burned_unit=attrs.get("totalEnergyBurnedUnit", ""),
            end_date=attrs.get("endDate"),
        )

    @property
    def duration_value(self) -> Optional[float]:
        return safe_float(self.duration)

    @property
    def distance_value(self) -> Optional[float]:
        return safe_float(self.total_distance)

    @property
    def energy_value(self) -> Optional[float]:
        return safe_float(self.total_energy_burned)


@dataclass(frozen=True)
class ActivitySummary:
    """A retained ``<ActivitySummary>``; other attributes pass through untouched."""
    date_components: str
    attributes: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_attributes(cls, attrs: Dict[str, str]) -> "ActivitySummary":
        return cls(date_components=attrs.get("dateComponents", ""), attributes=dict(attrs))
