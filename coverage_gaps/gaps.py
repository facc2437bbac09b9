from __future__ import annotations

import dataclasses
import pathlib
from collections.abc import Iterable

from coverage_gaps import coverage as coverage_module
from coverage_gaps import groups, log, paths

FULL_COVERAGE = 100


@dataclasses.dataclass(frozen=True, kw_only=True)
class FileGapEntry:
    path: str
    ranges: list[groups.LineRange]


def is_uncovered(segment: coverage_module.Segment) -> bool:
    return (
        segment.execution_count == 0
        and segment.has_count
        and not segment.is_gap_region
    )


def uncovered_lines(segments: Iterable[coverage_module.Segment]) -> set[int]:
    """
    Lines where a counted, non-gap region that was never executed starts.

    Only the line of the segment itself is reported: a region spanning
    several lines before the next segment contributes its first line only.
    """
    return {segment.line for segment in segments if is_uncovered(segment)}


def get_file_gaps(
    file: coverage_module.FileRecord, project_root: pathlib.Path
) -> FileGapEntry | None:
    if file.region_percent is None or file.region_percent >= FULL_COVERAGE:
        return None
    if not file.segments:
        return None

    lines = uncovered_lines(file.segments)
    if not lines:
        return None

    return FileGapEntry(
        path=paths.relative_path(root=project_root, path=file.filename),
        ranges=groups.compress(lines),
    )


def collect_gaps(
    datasets: Iterable[coverage_module.Dataset], project_root: pathlib.Path
) -> list[FileGapEntry]:
    entries = []
    for dataset in datasets:
        for file in dataset.files:
            entry = get_file_gaps(file=file, project_root=project_root)
            if entry is None:
                continue
            log.debug(f"{entry.path}: {len(entry.ranges)} uncovered range(s)")
            entries.append(entry)
    return entries


def get_report_gaps(
    report: coverage_module.CoverageReport, project_root: pathlib.Path
) -> list[FileGapEntry]:
    # An export without any dataset has nothing to evaluate; this is reported
    # as OK without looking further.
    if not report.datasets:
        log.info("Coverage report contains no data")
        return []
    return collect_gaps(datasets=report.datasets, project_root=project_root)
