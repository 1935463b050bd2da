"""
When do workouts happen? Hour-of-day and weekday histograms, the peak of
each, and a chronotype read off the peak hour.

Hours are the device's local wall-clock hours as written in the export.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Sequence

import numpy as np

from wrapped_engine.config import MORNING_HOURS, NIGHT_HOURS, WEEKDAYS
from wrapped_engine.etl.records import Workout

# datetime.weekday(): Monday == 0
_PY_WEEKDAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


@dataclass
class TimePatterns:
    hourly: List[int] = field(default_factory=lambda: [0] * 24)
    weekday: Dict[str, int] = field(default_factory=dict)
    peak_hour: int = 0
    peak_weekday: str = ""
    morning_person: bool = False
    night_owl: bool = False

    @property
    def time_personality(self) -> str:
        if self.morning_person:
            return "EARLY BIRD"
        if self.night_owl:
            return "NIGHT OWL"
        return "FLEXIBLE"

    def to_dict(self) -> Dict:
        return {
            "hourlyWorkouts": list(self.hourly),
            "weekdayWorkouts": dict(self.weekday),
            "peakHour": self.peak_hour,
            "peakWeekday": self.peak_weekday,
            "morningPerson": self.morning_person,
            "nightOwl": self.night_owl,
            "timePersonality": self.time_personality,
        }


def peak_index(counts: Sequence[int]) -> int:
    """Index of the maximum; the first index wins ties (``np.argmax``)."""
    return int(np.argmax(np.asarray(counts)))


def is_morning_hour(hour: int, window=MORNING_HOURS) -> bool:
    start, end = window
    return start <= hour < end


def is_night_hour(hour: int, window=NIGHT_HOURS) -> bool:
    start, end = window
    if start < end:
        return start <= hour < end
    # Wraps past midnight: [start, 24) or [0, end)
    return hour >= start or hour < end


def analyze_time_patterns(
    workouts: List[Workout],
    weekdays: Sequence[str] = WEEKDAYS,
) -> TimePatterns:
    """
    Bucket workouts by start hour and weekday.

    Workouts whose start date does not parse are left out. With an all-equal
    histogram (including no workouts at all) the peak is the first bucket.
    """
    hourly = np.zeros(24, dtype=int)
    weekday_counts = {day: 0 for day in weekdays}

    for workout in workouts:
        started = workout.started_at
        if started is None:
            continue
        hourly[started.hour] += 1
        name = _PY_WEEKDAY_NAMES[started.weekday()]
        if name in weekday_counts:
            weekday_counts[name] += 1

    peak_hour = peak_index(hourly)
    day_names = list(weekday_counts)
    peak_weekday = day_names[peak_index([weekday_counts[d] for d in day_names])]

    return TimePatterns(
        hourly=hourly.tolist(),
        weekday=weekday_counts,
        peak_hour=peak_hour,
        peak_weekday=peak_weekday,
        morning_person=is_morning_hour(peak_hour),
        night_owl=is_night_hour(peak_hour),
    )
