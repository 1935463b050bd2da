"""Shared fixtures: small Apple Health exports written to tmp_path."""

from xml.sax.saxutils import quoteattr

import pytest

from wrapped_engine.etl.records import MeasurementRecord, Workout

STEPS = "HKQuantityTypeIdentifierStepCount"
DISTANCE = "HKQuantityTypeIdentifierDistanceWalkingRunning"
ENERGY = "HKQuantityTypeIdentifierActiveEnergyBurned"
HEART_RATE = "HKQuantityTypeIdentifierHeartRate"
RUNNING = "HKWorkoutActivityTypeRunning"
SWIMMING = "HKWorkoutActivityTypeSwimming"
SLEEP = "HKCategoryTypeIdentifierSleepAnalysis"


def record(rtype, start, value, unit="count"):
    return MeasurementRecord(type=rtype, start_date=start, value=value, unit=unit)


def workout(wtype, start, duration="30", distance=None, energy=None):
    return Workout(
        workout_type=wtype,
        start_date=start,
        duration=duration,
        total_distance=distance,
        total_energy_burned=energy,
    )


def element(tag, **attrs):
    rendered = " ".join(f"{k}={quoteattr(str(v))}" for k, v in attrs.items())
    return f"<{tag} {rendered}/>"


def export_xml(*elements, export_date="2025-12-01 10:00:00 -0500"):
    body = "\n ".join(elements)
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        "<!DOCTYPE HealthData [\n<!ELEMENT HealthData (ExportDate,Record*)>\n]>\n"
        '<HealthData locale="en_US">\n'
        f' <ExportDate value="{export_date}"/>\n'
        f" {body}\n"
        "</HealthData>\n"
    )


@pytest.fixture
def write_export(tmp_path):
    def _write(*elements, name="export.xml", **kwargs):
        path = tmp_path / name
        path.write_text(export_xml(*elements, **kwargs), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def sample_export(write_export):
    return write_export(
        element("Record", type=STEPS, startDate="2025-01-05 08:00:00 -0500", value="4000", unit="count"),
        element("Record", type=STEPS, startDate="2025-01-05 12:00:00 -0500", value="2500", unit="count"),
        element("Record", type=STEPS, startDate="2025-01-06 09:00:00 -0500", value="1200", unit="count"),
        element("Record", type=STEPS, startDate="2024-12-31 23:00:00 -0500", value="9999", unit="count"),
        element("Record", type=DISTANCE, startDate="2025-01-05 08:00:00 -0500", value="3.2", unit="km"),
        element("Record", type=ENERGY, startDate="2025-01-06 09:00:00 -0500", value="450", unit="Cal"),
        element("Record", type=HEART_RATE, startDate="2025-01-05 08:10:00 -0500", value="120", unit="count/min"),
        element("Record", type=HEART_RATE, startDate="2025-01-05 08:20:00 -0500", value="150", unit="count/min"),
        element("Workout", workoutActivityType=RUNNING, startDate="2025-01-06 18:30:00 -0500",
                duration="42.5", durationUnit="min", totalDistance="6.1", totalEnergyBurned="410"),
        element("Workout", workoutActivityType=RUNNING, startDate="2024-06-01 07:00:00 -0500", duration="20"),
        element("ActivitySummary", dateComponents="2025-01-05", activeEnergyBurned="500"),
        element("ActivitySummary", dateComponents="2024-01-05", activeEnergyBurned="300"),
    )
