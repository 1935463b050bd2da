"""Tests for per-type statistics."""

import pytest

from conftest import HEART_RATE, RUNNING, STEPS, record, workout
from wrapped_engine.data_prep.type_stats import compute_all_stats, compute_stats, compute_workout_stats
from wrapped_engine.etl.records import MeasurementRecord


def test_basic_stats():
    records = [record(STEPS, "2025-01-01", v) for v in ("100", "200", "600")]
    stats = compute_stats(records, STEPS)
    assert stats.count == 3
    assert stats.total == 900
    assert stats.average == 300
    assert stats.max == 600
    assert stats.min == 100
    assert stats.unit == "count"


def test_no_matching_type_is_none():
    records = [record(STEPS, "2025-01-01", "100")]
    assert compute_stats(records, HEART_RATE) is None
    assert compute_stats([], STEPS) is None


def test_zero_total_is_not_none():
    records = [record(STEPS, "2025-01-01", "0")]
    stats = compute_stats(records, STEPS)
    assert stats is not None
    assert stats.total == 0


def test_unparseable_value_excluded():
    records = [record(STEPS, "2025-01-01", str(v)) for v in range(1, 10)]
    records.insert(4, record(STEPS, "2025-01-01", "not-a-number"))
    stats = compute_stats(records, STEPS)
    assert stats.count == 9
    assert stats.total == sum(range(1, 10))


def test_empty_and_missing_values_excluded():
    records = [
        record(STEPS, "2025-01-01", ""),
        MeasurementRecord(type=STEPS, start_date="2025-01-01"),
        record(STEPS, "2025-01-01", "nan"),
        record(STEPS, "2025-01-01", "7"),
    ]
    stats = compute_stats(records, STEPS)
    assert stats.count == 1
    assert stats.total == 7


def test_matching_uses_full_identifier():
    records = [record("StepCount", "2025-01-01", "5")]
    assert compute_stats(records, STEPS) is None


def test_unit_from_first_matching_record():
    records = [
        record(HEART_RATE, "2025-01-01", "60", unit="count/min"),
        record(HEART_RATE, "2025-01-01", "70", unit="bpm"),
    ]
    assert compute_stats(records, HEART_RATE).unit == "count/min"


def test_average_within_bounds():
    records = [record(STEPS, "2025-01-01", "0.1") for _ in range(3)]
    stats = compute_stats(records, STEPS)
    assert stats.min <= stats.average <= stats.max
    assert stats.total == pytest.approx(0.3)


class TestWorkoutStats:
    def test_none_without_workouts(self):
        assert compute_workout_stats([]) is None

    def test_totals_skip_missing(self):
        workouts = [
            workout(RUNNING, "2025-01-01", duration="30", distance="5", energy="300"),
            workout(RUNNING, "2025-01-02", duration="50", distance=None, energy="abc"),
            workout(RUNNING, "2025-01-03", duration=None),
        ]
        stats = compute_workout_stats(workouts)
        assert stats["count"] == 3
        assert stats["totalDuration"] == 80
        assert stats["avgDuration"] == 40
        assert stats["totalDistance"] == 5
        assert stats["totalCalories"] == 300


def test_all_stats_block():
    records = [record(STEPS, "2025-01-01", "10")]
    stats = compute_all_stats(records, [])
    assert stats["steps"]["total"] == 10
    assert stats["heartRate"] is None
    assert stats["workoutStats"] is None
    assert "flightsClimbed" in stats


def test_explicit_empty_stat_types():
    records = [record(STEPS, "2025-01-01", "10")]
    assert compute_all_stats(records, [], stat_types={}) == {"workoutStats": None}
