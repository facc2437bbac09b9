from __future__ import annotations

import dataclasses
import json
import pathlib
import shlex
import tempfile
from collections.abc import Sequence
from typing import Any

from coverage_gaps import log, subprocess

SEGMENT_FIELDS = (
    "line",
    "column",
    "execution_count",
    "has_count",
    "is_region_entry",
    "is_gap_region",
)


class ReportDecodeError(Exception):
    pass


@dataclasses.dataclass(frozen=True, kw_only=True)
class Segment:
    line: int
    column: int
    execution_count: int
    has_count: bool
    is_region_entry: bool
    is_gap_region: bool


@dataclasses.dataclass(frozen=True, kw_only=True)
class FileRecord:
    filename: str
    region_percent: float | None = None
    segments: Sequence[Segment] | None = None


@dataclasses.dataclass(frozen=True)
class Dataset:
    files: Sequence[FileRecord]


@dataclasses.dataclass(frozen=True)
class CoverageReport:
    # None when the export has no "data" key at all
    datasets: Sequence[Dataset] | None


def _expect(value: Any, kind: type | tuple[type, ...], where: str) -> Any:
    kinds = kind if isinstance(kind, tuple) else (kind,)
    # bool is a subclass of int, but `true` is never a valid line number
    if not isinstance(value, kinds) or (
        isinstance(value, bool) and bool not in kinds
    ):
        names = " or ".join(k.__name__ for k in kinds)
        raise ReportDecodeError(f"{where}: expected {names}, got {value!r}")
    return value


def _make_segment(raw: Any, where: str) -> Segment:
    _expect(raw, list, where)
    if len(raw) < len(SEGMENT_FIELDS):
        raise ReportDecodeError(
            f"{where}: expected {len(SEGMENT_FIELDS)} values, got {len(raw)}"
        )
    line, column, count, has_count, is_entry, is_gap = raw[: len(SEGMENT_FIELDS)]
    segment = Segment(
        line=_expect(line, int, f"{where}.line"),
        column=_expect(column, int, f"{where}.column"),
        execution_count=_expect(count, int, f"{where}.execution_count"),
        has_count=_expect(has_count, bool, f"{where}.has_count"),
        is_region_entry=_expect(is_entry, bool, f"{where}.is_region_entry"),
        is_gap_region=_expect(is_gap, bool, f"{where}.is_gap_region"),
    )
    if segment.line < 1 or segment.column < 1 or segment.execution_count < 0:
        raise ReportDecodeError(f"{where}: out of range values {raw!r}")
    return segment


def _make_file_record(raw: Any, where: str) -> FileRecord:
    _expect(raw, dict, where)
    try:
        filename = raw["filename"]
    except KeyError:
        raise ReportDecodeError(f"{where}: missing filename") from None
    _expect(filename, str, f"{where}.filename")

    region_percent = None
    summary = _expect(raw.get("summary", {}), dict, f"{where}.summary")
    if (regions := summary.get("regions")) is not None:
        _expect(regions, dict, f"{where}.summary.regions")
        if (percent := regions.get("percent")) is not None:
            region_percent = _expect(
                percent, (int, float), f"{where}.summary.regions.percent"
            )

    segments = None
    if (raw_segments := raw.get("segments")) is not None:
        _expect(raw_segments, list, f"{where}.segments")
        segments = [
            _make_segment(segment, f"{where}.segments[{i}]")
            for i, segment in enumerate(raw_segments)
        ]

    return FileRecord(
        filename=filename, region_percent=region_percent, segments=segments
    )


def extract_report(data: Any) -> CoverageReport:
    """
    Build a CoverageReport out of a decoded `llvm-cov export` JSON document:

    {
        "type": "llvm.coverage.json.export",
        "version": "2.0.1",
        "data": [
            {
                "files": [
                    {
                        "filename": "/home/me/project/src/lib.rs",
                        "segments": [
                            [3, 1, 1, true, true, false],
                            [5, 2, 0, true, true, false],
                            [7, 6, 0, false, false, false],
                        ],
                        "summary": {
                            "regions": {"count": 2, "covered": 1, "percent": 50.0},
                            ...
                        },
                    }
                ],
                "functions": [...],
                "totals": {...},
            }
        ],
    }

    Only the keys above are read. Anything that does not have the expected
    shape raises ReportDecodeError.
    """
    _expect(data, dict, "report")
    if (raw_datasets := data.get("data")) is None:
        return CoverageReport(datasets=None)

    _expect(raw_datasets, list, "data")
    datasets = []
    for i, raw_dataset in enumerate(raw_datasets):
        where = f"data[{i}]"
        _expect(raw_dataset, dict, where)
        raw_files = _expect(raw_dataset.get("files", []), list, f"{where}.files")
        datasets.append(
            Dataset(
                files=[
                    _make_file_record(raw_file, f"{where}.files[{j}]")
                    for j, raw_file in enumerate(raw_files)
                ]
            )
        )
    return CoverageReport(datasets=datasets)


def parse_report(contents: str) -> CoverageReport:
    try:
        data = json.loads(contents)
    except json.JSONDecodeError as exc:
        raise ReportDecodeError(f"Coverage report is not valid JSON: {exc}") from exc
    return extract_report(data)


def read_report_file(path: pathlib.Path) -> CoverageReport:
    log.debug(f"Reading coverage report from {path}")
    return parse_report(path.read_text(encoding="utf-8"))


def run_coverage_command(
    command: Sequence[str], project_root: pathlib.Path, timeout: float | None = None
) -> CoverageReport:
    """
    Run the coverage collector and decode what it writes. The command is
    expected to accept `--output-path` (as `cargo llvm-cov --json` does).
    The temporary directory holding the raw export is removed afterwards.
    """
    with tempfile.TemporaryDirectory(prefix="coverage-gaps-") as tmp_dir:
        output_path = pathlib.Path(tmp_dir) / "coverage.json"
        log.info(f"Running {shlex.join(command)}")
        subprocess.run(
            *command,
            "--output-path",
            str(output_path),
            path=project_root,
            timeout=timeout,
        )
        return read_report_file(output_path)


def find_project_root(cwd: pathlib.Path) -> pathlib.Path:
    try:
        manifest = subprocess.run(
            "cargo",
            "locate-project",
            "--workspace",
            "--message-format",
            "plain",
            path=cwd,
        )
    except subprocess.SubProcessError:
        log.warning(f"Could not locate the cargo workspace, using {cwd}")
        return cwd
    return pathlib.Path(manifest.strip()).parent


def get_coverage_report(
    coverage_json: pathlib.Path | None,
    command: Sequence[str],
    project_root: pathlib.Path,
    timeout: float | None = None,
) -> CoverageReport:
    if coverage_json is not None:
        return read_report_file(coverage_json)

    subprocess.check_tools(command[0])
    if command[0] == "cargo" and len(command) > 1:
        subprocess.check_cargo_subcommand(command[1], path=project_root)
    return run_coverage_command(
        command=command, project_root=project_root, timeout=timeout
    )
