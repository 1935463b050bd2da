"""
Health Wrapped Engine — Main Pipeline
Turns an Apple Health export.xml into the year-in-review summary:
Stream parse → Stats & Rollups → Streaks / Records / Time patterns → Insights → JSON
"""
import sys
from pathlib import Path
from typing import Dict, List, Optional

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from wrapped_engine.config import (
    ACTIVE_DAY_STEP_THRESHOLD,
    EXPORT_XML,
    PROGRESS_EVERY,
    SUMMARY_JSON,
    TARGET_YEAR,
    TOP_N,
)
from wrapped_engine.etl.apple_health_parser import (
    ExportAccumulator,
    InputMissingError,
    MalformedInputError,
    parse_export,
)
from wrapped_engine.data_prep.type_stats import compute_all_stats
from wrapped_engine.data_prep.rollups import build_leaderboards, build_rollups, monthly_breakdown
from wrapped_engine.inference.streaks import detect_streaks
from wrapped_engine.inference.personal_records import extract_personal_records
from wrapped_engine.inference.time_patterns import analyze_time_patterns
from wrapped_engine.output.insight_generator import generate_wrapped_insights
from wrapped_engine.output.summary_writer import build_summary, save_summary_json


def summarize(
    acc: ExportAccumulator,
    step_threshold: float = ACTIVE_DAY_STEP_THRESHOLD,
    top_n: int = TOP_N,
) -> Dict:
    """Run every post-processing stage over a finished accumulator."""
    stats = compute_all_stats(acc.records, acc.workouts)
    months, days = build_rollups(acc.records, acc.workouts)
    streak = detect_streaks(days, step_threshold=step_threshold)
    records = extract_personal_records(acc.records, acc.workouts, days)
    patterns = analyze_time_patterns(acc.workouts)
    insights = generate_wrapped_insights(acc.workouts, months, stats, patterns)

    return build_summary(
        acc,
        stats=stats,
        monthly=monthly_breakdown(months),
        leaderboards=build_leaderboards(days, n=top_n),
        streaks=streak.to_dict(),
        personal_records=records,
        time_patterns=patterns.to_dict(),
        insights=insights,
    )


def _print_type_breakdown(acc: ExportAccumulator) -> None:
    record_types = sorted(acc.record_type_counts().items(), key=lambda kv: kv[1], reverse=True)
    print(f"\n  Top record types in {acc.year}:")
    for rtype, count in record_types[:15]:
        print(f"    {rtype}: {count:,}")

    workout_types = sorted(acc.workout_type_counts().items(), key=lambda kv: kv[1], reverse=True)
    if workout_types:
        print(f"\n  Workout types in {acc.year}:")
        for wtype, count in workout_types:
            print(f"    {wtype}: {count}")


def run_pipeline(
    export_path: Optional[Path] = None,
    output_path: Optional[Path] = None,
    year: str = TARGET_YEAR,
    progress_every: int = PROGRESS_EVERY,
    verbose: bool = True,
) -> Dict:
    """
    Execute the full pipeline and write the summary.

    Nothing is written unless the streaming pass completes.

    Raises
    ------
    InputMissingError
        If the export file does not exist.
    MalformedInputError
        If the export is not well-formed XML.
    """
    export_path = Path(export_path or EXPORT_XML)
    output_path = Path(output_path or SUMMARY_JSON)

    if verbose:
        print("=" * 60)
        print(f"HEALTH WRAPPED ENGINE — {year}")
        print("=" * 60)
        print("\n▶ Phase 1: Streaming export.xml...")

    acc = parse_export(export_path, year=year, progress_every=progress_every, verbose=verbose)

    if verbose:
        print(f"  → Total records in export: {acc.total_records:,}")
        print(f"  → Total workouts in export: {acc.total_workouts:,}")
        print(f"  → Total activity summaries in export: {acc.total_activity_summaries:,}")
        print(f"  → {year}: {len(acc.records):,} records, {len(acc.workouts):,} workouts, "
              f"{len(acc.activity_summaries):,} activity summaries")
        _print_type_breakdown(acc)
        print("\n▶ Phase 2: Computing stats, rollups, streaks and insights...")

    summary = summarize(acc)

    if verbose:
        block = summary[f"year{year}"]
        print(f"  → Longest streak: {block['streaks']['longestStreak']} days")
        print(f"  → Personality: {block['wrappedInsights']['personality']}")
        print(f"  → Activity level: {block['wrappedInsights']['activityLevel']}")
        print("\n▶ Phase 3: Saving summary...")

    save_summary_json(summary, output_path, verbose=verbose)

    if verbose:
        print("\n" + "=" * 60)
        print("PIPELINE COMPLETE")
        print("=" * 60)
        print(f"  Output: {output_path}")
        print()

    return summary


def main(argv: Optional[List[str]] = None) -> int:
    import argparse

    parser = argparse.ArgumentParser(description="Health Wrapped Engine")
    parser.add_argument("--input", type=Path, default=EXPORT_XML, help="Path to export.xml (default: ./export.xml)")
    parser.add_argument("--output", type=Path, default=SUMMARY_JSON, help="Summary JSON path (default: ./summary.json)")
    parser.add_argument("--year", default=TARGET_YEAR, help=f"Target year (default: {TARGET_YEAR})")
    parser.add_argument("--quiet", action="store_true", help="Suppress progress output")
    args = parser.parse_args(argv)

    try:
        run_pipeline(args.input, args.output, year=args.year, verbose=not args.quiet)
    except InputMissingError as e:
        print(f"\nError: {e}", file=sys.stderr)
        print("   Place your Apple Health export.xml in this directory or pass --input.\n", file=sys.stderr)
        return 1
    except MalformedInputError as e:
        print(f"\nError parsing XML: {e}\n", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
