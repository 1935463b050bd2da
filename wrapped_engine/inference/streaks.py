"""
Activity streak detection over the day rollups.

A day is active when it has a workout or more than the step threshold. Only
the gap between two consecutive *active* days matters: a run continues while
each active day falls exactly one calendar day after the previous active day.
"""
from dataclasses import dataclass
from typing import Dict, Optional

import pandas as pd

from wrapped_engine.config import ACTIVE_DAY_STEP_THRESHOLD
from wrapped_engine.data_prep.rollups import DayRollup, days_frame


@dataclass
class Streak:
    longest_length: int = 0
    longest_start: Optional[str] = None
    longest_end: Optional[str] = None
    current_length: int = 0
    active_days: int = 0

    def to_dict(self) -> Dict:
        return {
            "longestStreak": self.longest_length,
            "longestStreakStart": self.longest_start,
            "longestStreakEnd": self.longest_end,
            "currentStreak": self.current_length,
            "activeDays": self.active_days,
        }


def active_mask(df: pd.DataFrame, step_threshold: float = ACTIVE_DAY_STEP_THRESHOLD) -> pd.Series:
    return (df["workout_count"] > 0) | (df["steps"] > step_threshold)


def detect_streaks(
    days: Dict[str, DayRollup],
    step_threshold: float = ACTIVE_DAY_STEP_THRESHOLD,
) -> Streak:
    """
    Longest and most recent run of consecutive active days.

    The earliest run wins when two runs tie for longest. With no active days
    every field is zero or ``None``.
    """
    df = days_frame(days)
    active = df.loc[active_mask(df, step_threshold), "date"].reset_index(drop=True)
    if active.empty:
        return Streak()

    # A new run starts wherever the step from the previous active day is not one day
    run_id = active.diff().dt.days.ne(1).cumsum()
    runs = active.groupby(run_id).agg(["min", "max", "size"])

    longest = runs.loc[runs["size"].idxmax()]
    return Streak(
        longest_length=int(longest["size"]),
        longest_start=longest["min"].strftime("%Y-%m-%d"),
        longest_end=longest["max"].strftime("%Y-%m-%d"),
        current_length=int(runs["size"].iloc[-1]),
        active_days=len(active),
    )
