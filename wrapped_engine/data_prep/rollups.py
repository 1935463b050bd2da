"""
Per-month and per-day rollups of the target-year records and workouts.

Both rollups come out of a single fold over the retained collections:
  - months: pre-seeded "01".."12"; dates with any other month are dropped
  - days:   created lazily per ``YYYY-MM-DD`` seen; no gaps are filled in

Leaderboards (top-N days by steps, distance, active energy) and a pandas view
of the day rollups are derived from the finished index.
"""
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

import numpy as np
import pandas as pd

from wrapped_engine.config import (
    ACTIVE_ENERGY_TYPE,
    DISTANCE_TYPE,
    HEART_RATE_TYPE,
    MONTH_NAMES,
    STEP_TYPE,
    TOP_N,
)
from wrapped_engine.etl.records import MeasurementRecord, Workout, strip_type_prefix

MONTH_KEYS = [f"{m:02d}" for m in range(1, 13)]

LEADERBOARD_METRICS = {
    "steps": "steps",
    "distance": "distance",
    "activeEnergy": "active_energy",
}


@dataclass
class DayRollup:
    date: str
    steps: float = 0.0
    distance: float = 0.0
    active_energy: float = 0.0
    workout_count: int = 0
    heart_rate_max: float = 0.0
    heart_rate_samples: List[float] = field(default_factory=list)

    @property
    def heart_rate_avg(self) -> float:
        # No samples reports 0, not None
        if not self.heart_rate_samples:
            return 0.0
        return float(np.mean(self.heart_rate_samples))

    def to_dict(self) -> Dict:
        return {
            "date": self.date,
            "steps": self.steps,
            "distance": self.distance,
            "activeEnergy": self.active_energy,
            "workouts": self.workout_count,
            "heartRateAvg": self.heart_rate_avg,
            "heartRateMax": self.heart_rate_max,
        }


@dataclass
class MonthRollup:
    month: str
    steps: float = 0.0
    distance: float = 0.0
    active_energy: float = 0.0
    workout_count: int = 0
    workout_types: Counter = field(default_factory=Counter)

    @property
    def name(self) -> str:
        return MONTH_NAMES[int(self.month) - 1]

    def to_dict(self) -> Dict:
        return {
            "month": self.month,
            "name": self.name,
            "steps": self.steps,
            "distance": self.distance,
            "activeEnergy": self.active_energy,
            "workouts": self.workout_count,
            "workoutTypes": {
                strip_type_prefix(wtype): count for wtype, count in self.workout_types.items()
            },
        }


def _apply_measurement(rollup, record_type: str, value: float) -> None:
    if record_type == STEP_TYPE:
        rollup.steps += value
    elif record_type == DISTANCE_TYPE:
        rollup.distance += value
    elif record_type == ACTIVE_ENERGY_TYPE:
        rollup.active_energy += value


def build_rollups(
    records: List[MeasurementRecord],
    workouts: List[Workout],
) -> Tuple[Dict[str, MonthRollup], Dict[str, DayRollup]]:
    """
    Fold records and workouts into month and day rollups in one pass each.

    A record without a parseable value still opens its day, but adds nothing
    to any total.
    """
    months = {key: MonthRollup(month=key) for key in MONTH_KEYS}
    days: Dict[str, DayRollup] = {}

    def day_for(date_key: str) -> DayRollup:
        if date_key not in days:
            days[date_key] = DayRollup(date=date_key)
        return days[date_key]

    for record in records:
        # Every observed date gets a day entry, even without a usable value
        day = day_for(record.date_key)
        value = record.numeric_value
        if value is None:
            continue
        month = months.get(record.month_key)
        if month is not None:
            _apply_measurement(month, record.type, value)

        _apply_measurement(day, record.type, value)
        if record.type == HEART_RATE_TYPE:
            day.heart_rate_samples.append(value)
            day.heart_rate_max = max(day.heart_rate_max, value)

    for workout in workouts:
        month = months.get(workout.month_key)
        if month is not None:
            month.workout_count += 1
            month.workout_types[workout.workout_type] += 1
        day_for(workout.date_key).workout_count += 1

    return months, days


def top_days(
    days: Dict[str, DayRollup],
    metric: str,
    n: int = TOP_N,
) -> List[DayRollup]:
    """
    The *n* days with the highest *metric* (a :class:`DayRollup` attribute).

    ``sorted`` is stable, so ties keep day-index order.
    """
    ranked = sorted(days.values(), key=lambda d: getattr(d, metric), reverse=True)
    return ranked[:n]


def build_leaderboards(days: Dict[str, DayRollup], n: int = TOP_N) -> Dict[str, List[Dict]]:
    return {
        name: [d.to_dict() for d in top_days(days, attr, n)]
        for name, attr in LEADERBOARD_METRICS.items()
    }


def days_frame(days: Dict[str, DayRollup]) -> pd.DataFrame:
    """
    Day rollups as a DataFrame sorted by calendar date.

    ``date`` is parsed with ``errors="coerce"``; keys that are not real dates
    become NaT and are dropped.
    """
    columns = ["date", "steps", "distance", "active_energy", "workout_count", "heart_rate_max"]
    if not days:
        df = pd.DataFrame(columns=columns)
        df["date"] = pd.to_datetime(df["date"])
        return df

    df = pd.DataFrame([
        {
            "date": d.date,
            "steps": d.steps,
            "distance": d.distance,
            "active_energy": d.active_energy,
            "workout_count": d.workout_count,
            "heart_rate_max": d.heart_rate_max,
        }
        for d in days.values()
    ])
    df["date"] = pd.to_datetime(df["date"], format="%Y-%m-%d", errors="coerce")
    df = df.dropna(subset=["date"])
    df = df.sort_values("date", kind="stable").reset_index(drop=True)
    return df


def monthly_breakdown(months: Dict[str, MonthRollup]) -> List[Dict]:
    return [months[key].to_dict() for key in MONTH_KEYS]
