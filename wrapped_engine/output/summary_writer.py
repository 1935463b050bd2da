"""
Summary writer.
Assembles every derived block into the single summary document consumed by
the wrapped slideshow, and saves it as JSON.
"""
import json
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional

import numpy as np

from wrapped_engine.config import SUMMARY_JSON


def build_summary(
    acc,
    stats: Dict,
    monthly: list,
    leaderboards: Dict,
    streaks: Dict,
    personal_records: Dict,
    time_patterns: Dict,
    insights: Dict,
) -> Dict:
    """Top-level document: global totals plus the ``year<YYYY>`` block."""
    return {
        "exportDate": acc.export_date,
        "totalRecords": acc.total_records,
        "totalWorkouts": acc.total_workouts,
        "totalActivitySummaries": acc.total_activity_summaries,
        f"year{acc.year}": {
            "records": len(acc.records),
            "workouts": len(acc.workouts),
            "activitySummaries": len(acc.activity_summaries),
            "recordTypes": acc.record_type_counts(),
            "workoutTypes": acc.workout_type_counts(),
            "stats": stats,
            "monthlyBreakdown": monthly,
            "topDays": leaderboards,
            "streaks": streaks,
            "personalRecords": personal_records,
            "timePatterns": time_patterns,
            "wrappedInsights": insights,
        },
    }


class NumpyEncoder(json.JSONEncoder):
    def default(self, obj):
        if isinstance(obj, (np.integer,)):
            return int(obj)
        if isinstance(obj, (np.floating,)):
            return float(obj)
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        if isinstance(obj, (np.bool_,)):
            return bool(obj)
        return super().default(obj)


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


def save_summary_json(summary: Dict, output_path: Optional[Path] = None, verbose: bool = True) -> Path:
    """
    Write *summary* as indented JSON.

    The document goes to a temporary file beside *output_path* first and is
    renamed into place, so a failed write leaves no partial summary behind.
    """
    output_path = Path(output_path or SUMMARY_JSON)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=output_path.name, suffix=".tmp", dir=output_path.parent)
    try:
        with os.fdopen(fd, "w") as f:
            json.dump(summary, f, indent=2, cls=NumpyEncoder, allow_nan=False)
        # mkstemp creates 0600; match what open(path, "w") would give
        os.chmod(tmp_name, 0o666 & ~_current_umask())
        os.replace(tmp_name, output_path)
    except BaseException:
        os.unlink(tmp_name)
        raise

    if verbose:
        print(f"Saved summary to {output_path}")
    return output_path
