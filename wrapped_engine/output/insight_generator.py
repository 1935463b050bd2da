"""
Insight generator.
Combines the stats, rollups, streaks and time patterns into the short list of
narrative facts the wrapped cards are built around.
"""
from collections import Counter
from typing import Dict, List, Optional, Sequence, Tuple

from wrapped_engine.config import (
    ACTIVITY_LEVELS,
    DAILY_STEP_GOAL,
    DAYS_IN_YEAR,
    DEFAULT_PERSONALITY,
    DISTANCE_COMPARISONS,
    MINUTES_PER_YEAR,
    PERSONALITY_LABELS,
    TOP_N,
)
from wrapped_engine.data_prep.rollups import MONTH_KEYS, MonthRollup
from wrapped_engine.etl.records import Workout, strip_type_prefix
from wrapped_engine.inference.time_patterns import TimePatterns


def pick_from_ladder(value: float, ladder: Sequence[Tuple[float, str]]) -> str:
    """Label of the highest threshold not above *value*; the first rung if below all."""
    label = ladder[0][1]
    for threshold, rung_label in ladder:
        if value >= threshold:
            label = rung_label
        else:
            break
    return label


def rank_workout_types(workouts: List[Workout], n: int = TOP_N) -> List[Tuple[str, int]]:
    """Workout types by count, descending; ties keep first-seen order."""
    counts = Counter(w.workout_type for w in workouts)
    return sorted(counts.items(), key=lambda item: item[1], reverse=True)[:n]


def select_personality(
    workouts: List[Workout],
    labels: Optional[Dict[str, Tuple[str, str]]] = None,
    default: Tuple[str, str] = DEFAULT_PERSONALITY,
) -> Dict:
    labels = PERSONALITY_LABELS if labels is None else labels
    ranking = rank_workout_types(workouts, n=1)
    if not ranking:
        label, tagline = default
        return {"label": label, "tagline": tagline, "topWorkoutType": None, "sessions": 0}

    top_type, sessions = ranking[0]
    label, tagline = labels.get(top_type, default)
    return {
        "label": label,
        "tagline": tagline,
        "topWorkoutType": strip_type_prefix(top_type),
        "sessions": sessions,
    }


def select_best_month(months: Dict[str, MonthRollup]) -> Dict:
    """Month with the most workouts; the earliest month wins ties."""
    best = None
    for key in MONTH_KEYS:
        month = months[key]
        if best is None or month.workout_count > best.workout_count:
            best = month
    return {
        "month": best.month,
        "name": best.name,
        "workouts": best.workout_count,
        "steps": best.steps,
        "distance": best.distance,
    }


def generate_wrapped_insights(
    workouts: List[Workout],
    months: Dict[str, MonthRollup],
    stats: Dict[str, Optional[Dict]],
    time_patterns: TimePatterns,
    days_in_year: int = DAYS_IN_YEAR,
    distance_ladder: Sequence[Tuple[float, str]] = DISTANCE_COMPARISONS,
    activity_ladder: Sequence[Tuple[float, str]] = ACTIVITY_LEVELS,
    step_goal: int = DAILY_STEP_GOAL,
    personality_labels: Optional[Dict[str, Tuple[str, str]]] = None,
) -> Dict:
    """
    The ``wrappedInsights`` block.

    Thresholds come from the config ladders; nothing here is fitted to data.
    """
    total_steps = sum(m.steps for m in months.values())
    total_distance = sum(m.distance for m in months.values())
    average_daily_steps = total_steps / days_in_year

    heart_rate = stats.get("heartRate")
    estimated_heartbeats = (
        round(heart_rate["average"] * MINUTES_PER_YEAR) if heart_rate else None
    )

    personality = select_personality(workouts, labels=personality_labels)
    return {
        "personality": personality["label"],
        "personalityTagline": personality["tagline"],
        "topWorkoutType": personality["topWorkoutType"],
        "workoutTypeRanking": [
            {"type": strip_type_prefix(wtype), "count": count}
            for wtype, count in rank_workout_types(workouts)
        ],
        "bestMonth": select_best_month(months),
        "timePersonality": time_patterns.time_personality,
        "totalSteps": total_steps,
        "totalDistance": total_distance,
        "distanceComparison": pick_from_ladder(total_distance, distance_ladder),
        "estimatedHeartbeats": estimated_heartbeats,
        "averageDailySteps": average_daily_steps,
        "stepGoalPercent": round(average_daily_steps / step_goal * 100, 1),
        "activityLevel": pick_from_ladder(average_daily_steps, activity_ladder),
    }
