"""
Streaming XML parser for Apple Health export.xml files.

Handles multi-GB files using xml.etree.ElementTree.iterparse with aggressive
clearing of finished elements, so memory stays bounded by the retained
target-year subset rather than the size of the export.

The reader turns the document into a sequence of element-opened events
(:class:`RawElement`). :class:`ExportAccumulator` consumes them one at a time,
counts every Record / Workout / ActivitySummary in the export, and keeps only
the ones dated in the target year.

Usage as module:
    from wrapped_engine.etl.apple_health_parser import parse_export
    acc = parse_export(Path("export.xml"), year="2025")

Usage as script:
    python apple_health_parser.py path/to/export.xml
"""

import os
import sys
import xml.etree.ElementTree as ET
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, Dict, Iterator, List, Optional, Union

from wrapped_engine.config import PROGRESS_EVERY, TARGET_YEAR
from wrapped_engine.etl.records import (
    ActivitySummary,
    MeasurementRecord,
    Workout,
    in_year,
    strip_type_prefix,
)


class InputMissingError(FileNotFoundError):
    """The export file does not exist; raised before any parsing starts."""


class MalformedInputError(ValueError):
    """The export is not well-formed XML. The run is aborted."""


# ---------------------------------------------------------------------------
# Streaming element reader
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RawElement:
    """An element-opened event: local tag name plus its attributes."""
    name: str
    attributes: Dict[str, str]


def _local_name(tag: str) -> str:
    # "{namespace}Record" → "Record"
    if tag.startswith("{"):
        return tag.rsplit("}", 1)[1]
    return tag


def iter_elements(source: Union[str, Path, BinaryIO]) -> Iterator[RawElement]:
    """
    Yield a :class:`RawElement` for every opening tag in *source*.

    *source* is a path or a binary file object. Attributes are complete at the
    ``start`` event, so nothing waits for closing tags. On every ``end`` event
    the element is cleared, and once a direct child of the root closes the
    root drops it too, so only the current branch is ever held in memory.

    Raises
    ------
    MalformedInputError
        If the document is not well-formed.
    """
    if isinstance(source, Path):
        source = str(source)

    context = ET.iterparse(source, events=("start", "end"))
    root = None
    depth = 0
    try:
        for event, elem in context:
            if event == "start":
                if root is None:
                    root = elem
                depth += 1
                yield RawElement(_local_name(elem.tag), dict(elem.attrib))
                continue

            depth -= 1
            elem.clear()
            if depth == 1 and root is not None:
                root.clear()
    except ET.ParseError as e:
        raise MalformedInputError(f"Malformed export XML: {e}") from e


# ---------------------------------------------------------------------------
# Year filter & accumulator
# ---------------------------------------------------------------------------

@dataclass
class ExportAccumulator:
    """
    Global totals for the whole export plus the retained target-year records.

    The retained lists are appended to only while the stream is consumed and
    are treated as read-only by every later stage.
    """
    year: str = TARGET_YEAR
    export_date: Optional[str] = None
    total_elements: int = 0
    total_records: int = 0
    total_workouts: int = 0
    total_activity_summaries: int = 0
    records: List[MeasurementRecord] = field(default_factory=list)
    workouts: List[Workout] = field(default_factory=list)
    activity_summaries: List[ActivitySummary] = field(default_factory=list)

    def consume(self, element: RawElement) -> None:
        """Dispatch one element on its tag name; unknown tags are ignored."""
        self.total_elements += 1
        name = element.name
        attrs = element.attributes

        if name == "ExportDate":
            if self.export_date is None:
                self.export_date = attrs.get("value")
        elif name == "Record":
            self.total_records += 1
            if in_year(attrs.get("startDate"), self.year):
                self.records.append(MeasurementRecord.from_attributes(attrs))
        elif name == "Workout":
            self.total_workouts += 1
            if in_year(attrs.get("startDate"), self.year):
                self.workouts.append(Workout.from_attributes(attrs))
        elif name == "ActivitySummary":
            self.total_activity_summaries += 1
            if in_year(attrs.get("dateComponents"), self.year):
                self.activity_summaries.append(ActivitySummary.from_attributes(attrs))

    def record_type_counts(self) -> Dict[str, int]:
        """Retained records per display type, in first-seen order."""
        return dict(Counter(strip_type_prefix(r.type) for r in self.records))

    def workout_type_counts(self) -> Dict[str, int]:
        """Retained workouts per display type, in first-seen order."""
        return dict(Counter(strip_type_prefix(w.workout_type) for w in self.workouts))


def stream_parse(
    source: Union[str, Path, BinaryIO],
    year: str = TARGET_YEAR,
    progress_every: int = PROGRESS_EVERY,
    verbose: bool = True,
) -> ExportAccumulator:
    """
    Feed every element of *source* through an :class:`ExportAccumulator`.

    Each event is fully handled before the next one is read.

    Parameters
    ----------
    source : str, Path or binary file object
        The ``export.xml`` document.
    year : str
        Target year; records whose date starts with it are retained.
    progress_every : int
        Print a progress line every *N* XML elements.
    verbose : bool
        Set to False to silence progress output.
    """
    acc = ExportAccumulator(year=year)
    for element in iter_elements(source):
        acc.consume(element)
        if verbose and progress_every and acc.total_elements % progress_every == 0:
            print(f"   Processed {acc.total_elements / 1_000_000:.1f}M elements... "
                  f"({year} records: {len(acc.records):,})", end="\r", flush=True)

    if verbose:
        print(f"\n  Total XML elements: {acc.total_elements:,}")
        print(f"  {year} records kept:  {len(acc.records):,}")
        print(f"  {year} workouts kept: {len(acc.workouts):,}")
    return acc


def parse_export(
    export_path: Union[str, Path],
    year: str = TARGET_YEAR,
    progress_every: int = PROGRESS_EVERY,
    verbose: bool = True,
) -> ExportAccumulator:
    """
    Parse an Apple Health ``export.xml`` from disk.

    Raises
    ------
    InputMissingError
        If *export_path* does not exist.
    MalformedInputError
        If the document is not well-formed.
    """
    export_path = Path(export_path)
    if not export_path.exists():
        raise InputMissingError(f"Apple Health export not found: {export_path}")

    if verbose:
        size_gb = os.path.getsize(export_path) / (1024 ** 3)
        print(f"Starting parse of: {export_path}")
        print(f"File size: {size_gb:.2f} GB")
        print(f"Only keeping {year} data to save memory")
    return stream_parse(export_path, year=year, progress_every=progress_every, verbose=verbose)


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

def main():
    if len(sys.argv) < 2:
        print("Usage: python apple_health_parser.py <path_to_export.xml> [year]")
        sys.exit(1)
    xml_path = sys.argv[1]
    year = sys.argv[2] if len(sys.argv) > 2 else TARGET_YEAR

    try:
        acc = parse_export(xml_path, year=year)
    except (InputMissingError, MalformedInputError) as e:
        print(f"ERROR: {e}")
        sys.exit(1)

    print(f"\nTotal records in export: {acc.total_records:,}")
    print(f"Total workouts in export: {acc.total_workouts:,}")
    print(f"Total activity summaries in export: {acc.total_activity_summaries:,}")
    return acc


if __name__ == "__main__":
    main()
