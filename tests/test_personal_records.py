"""Tests for personal records."""

from conftest import DISTANCE, ENERGY, RUNNING, STEPS, SWIMMING, record, workout
from wrapped_engine.data_prep.rollups import build_rollups
from wrapped_engine.inference.personal_records import (
    extract_personal_records,
    first_and_last_workout,
    longest_workout,
)


def test_empty_inputs_give_none():
    result = extract_personal_records([], [], {})
    assert all(value is None for value in result.values())


def test_day_and_record_maxima():
    records = [
        record(STEPS, "2025-08-14 10:00:00 +0000", "20000"),
        record(STEPS, "2025-08-14 18:00:00 +0000", "16070"),
        record(STEPS, "2025-04-24 10:00:00 +0000", "31002"),
        record(ENERGY, "2025-04-24 10:00:00 +0000", "800", unit="Cal"),
        record(DISTANCE, "2025-05-01 10:00:00 +0000", "12.5", unit="km"),
        record(DISTANCE, "2025-05-02 10:00:00 +0000", "bad", unit="km"),
    ]
    _, days = build_rollups(records, [])
    result = extract_personal_records(records, [], days)
    assert result["mostStepsDay"] == {"value": 36070, "date": "2025-08-14"}
    assert result["biggestStepRecord"] == {"value": 31002, "unit": "count", "date": "2025-04-24"}
    assert result["mostCaloriesDay"] == {"value": 800, "date": "2025-04-24"}
    assert result["longestDistanceRecord"] == {"value": 12.5, "unit": "km", "date": "2025-05-01"}


def test_longest_workout_defaults_missing_duration_to_zero():
    workouts = [
        workout(RUNNING, "2025-11-23 07:00:00 +0000", duration=None),
        workout(SWIMMING, "2025-11-24 07:00:00 +0000", duration="141.2", energy="1024"),
        workout(RUNNING, "2025-11-25 07:00:00 +0000", duration="x"),
    ]
    best = longest_workout(workouts)
    assert best["type"] == "Swimming"
    assert best["duration"] == 141.2
    assert best["energy"] == 1024


def test_longest_workout_all_missing_durations():
    best = longest_workout([workout(RUNNING, "2025-01-01 07:00:00 +0000", duration=None)])
    assert best["duration"] == 0.0


def test_first_and_last_are_chronological():
    workouts = [
        workout(SWIMMING, "2025-06-01 07:00:00 +0000"),
        workout(RUNNING, "2025-01-27 07:00:00 +0000"),
        workout(RUNNING, "2025-11-30 22:00:00 -0500"),
        workout(SWIMMING, "2025-11-30 23:00:00 +0000"),
        workout(RUNNING, "garbage"),
    ]
    first, last = first_and_last_workout(workouts)
    assert first["date"] == "2025-01-27"
    # 22:00 -0500 is 03:00 UTC on Dec 1, after 23:00 UTC on Nov 30
    assert last["type"] == "Running"
    assert last["startDate"] == "2025-11-30 22:00:00 -0500"


def test_first_and_last_without_dates():
    assert first_and_last_workout([workout(RUNNING, "")]) == (None, None)
