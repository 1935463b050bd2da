"""
Per-type statistics over the retained target-year records.

A type with no usable values yields ``None`` rather than zeros, so "no data"
stays distinguishable from a genuine total of zero.
"""
from dataclasses import asdict, dataclass
from typing import Dict, List, Optional

import numpy as np

from wrapped_engine.config import STAT_TYPES
from wrapped_engine.etl.records import MeasurementRecord, Workout


@dataclass
class TypeStats:
    """count / total / average / max / min for one record type."""
    count: int
    total: float
    average: float
    max: float
    min: float
    unit: str

    def to_dict(self) -> Dict:
        return asdict(self)


def compute_stats(records: List[MeasurementRecord], type_identifier: str) -> Optional[TypeStats]:
    """
    Summarise every record of *type_identifier* that carries a value.

    Matching uses the full prefixed identifier. Values that do not parse as
    numbers are left out; the unit is taken from the first matching record.
    """
    matching = [r for r in records if r.type == type_identifier and r.value]
    values = []
    unit = None
    for record in matching:
        val = record.numeric_value
        if val is None:
            continue
        if unit is None:
            unit = record.unit
        values.append(val)

    if not values:
        return None

    arr = np.asarray(values, dtype=float)
    lo, hi = float(arr.min()), float(arr.max())
    total = float(sum(values))
    # Rounding in total / count can land one ulp outside [min, max]
    average = float(np.clip(total / len(values), lo, hi))
    return TypeStats(
        count=len(values),
        total=total,
        average=average,
        max=hi,
        min=lo,
        unit=unit or "",
    )


def compute_workout_stats(workouts: List[Workout]) -> Optional[Dict]:
    """Totals across all retained workouts; ``None`` when there are none."""
    if not workouts:
        return None

    durations = [d for d in (w.duration_value for w in workouts) if d is not None]
    distances = [d for d in (w.distance_value for w in workouts) if d is not None]
    calories = [c for c in (w.energy_value for w in workouts) if c is not None]

    return {
        "count": len(workouts),
        "totalDuration": float(sum(durations)),
        "avgDuration": float(np.mean(durations)) if durations else 0.0,
        "totalDistance": float(sum(distances)),
        "totalCalories": float(sum(calories)),
    }


def compute_all_stats(
    records: List[MeasurementRecord],
    workouts: List[Workout],
    stat_types: Optional[Dict[str, str]] = None,
) -> Dict[str, Optional[Dict]]:
    """The ``stats`` block: one entry per named metric plus ``workoutStats``."""
    stat_types = STAT_TYPES if stat_types is None else stat_types
    stats = {}
    for name, type_identifier in stat_types.items():
        result = compute_stats(records, type_identifier)
        stats[name] = result.to_dict() if result else None
    stats["workoutStats"] = compute_workout_stats(workouts)
    return stats
