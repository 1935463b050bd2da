"""
Personal records: the single best values of the year, each with its date.

Every record is independent; missing data gives ``None`` for that record and
never raises. Ties go to the first occurrence in collection order.
"""
from typing import Dict, List, Optional

from wrapped_engine.config import DISTANCE_TYPE, STEP_TYPE
from wrapped_engine.data_prep.rollups import DayRollup
from wrapped_engine.etl.records import MeasurementRecord, Workout, strip_type_prefix


def _max_record(records: List[MeasurementRecord], type_identifier: str) -> Optional[Dict]:
    best = None
    best_value = None
    for record in records:
        if record.type != type_identifier:
            continue
        value = record.numeric_value
        if value is None:
            continue
        if best_value is None or value > best_value:
            best, best_value = record, value
    if best is None:
        return None
    return {"value": best_value, "unit": best.unit, "date": best.date_key}


def _max_day(days: Dict[str, DayRollup], attr: str) -> Optional[Dict]:
    if not days:
        return None
    best = max(days.values(), key=lambda d: getattr(d, attr))
    return {"value": getattr(best, attr), "date": best.date}


def _workout_summary(workout: Workout) -> Dict:
    return {
        "type": strip_type_prefix(workout.workout_type),
        "date": workout.date_key,
        "startDate": workout.start_date,
        "duration": workout.duration_value or 0.0,
        "distance": workout.distance_value,
        "energy": workout.energy_value,
    }


def longest_workout(workouts: List[Workout]) -> Optional[Dict]:
    """Workout with the greatest duration; a missing duration counts as 0."""
    if not workouts:
        return None
    best = max(workouts, key=lambda w: w.duration_value or 0.0)
    return _workout_summary(best)


def first_and_last_workout(workouts: List[Workout]):
    """Chronologically first and last workouts; unparseable start dates are skipped."""
    dated = [(w.started_at, i, w) for i, w in enumerate(workouts)]
    dated = [entry for entry in dated if entry[0] is not None]
    if not dated:
        return None, None
    dated.sort(key=lambda entry: (entry[0], entry[1]))
    return _workout_summary(dated[0][2]), _workout_summary(dated[-1][2])


def extract_personal_records(
    records: List[MeasurementRecord],
    workouts: List[Workout],
    days: Dict[str, DayRollup],
) -> Dict:
    first, last = first_and_last_workout(workouts)
    return {
        "biggestStepRecord": _max_record(records, STEP_TYPE),
        "longestDistanceRecord": _max_record(records, DISTANCE_TYPE),
        "mostStepsDay": _max_day(days, "steps"),
        "mostDistanceDay": _max_day(days, "distance"),
        "mostCaloriesDay": _max_day(days, "active_energy"),
        "longestWorkout": longest_workout(workouts),
        "firstWorkout": first,
        "lastWorkout": last,
    }
