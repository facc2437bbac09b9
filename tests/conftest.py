from __future__ import annotations

import os
import pathlib

import pytest

from coverage_gaps import settings


@pytest.fixture
def base_config():
    def _(**kwargs):
        defaults = {
            "PROJECT_ROOT": pathlib.Path("/project"),
        }
        return settings.Config(**(defaults | kwargs))

    return _


@pytest.fixture
def get_logs(caplog):
    caplog.set_level("DEBUG")

    def _(level=None, match=None):
        return [
            log.message
            for log in caplog.records
            if (level is None or level == log.levelname)
            and (match is None or match in log.message)
        ]

    return _


@pytest.fixture
def in_tmp_path(tmp_path):
    curdir = os.getcwd()
    os.chdir(tmp_path)
    yield tmp_path
    os.chdir(curdir)


@pytest.fixture
def make_file_json():
    def _(filename, segments=(), percent=50.0):
        file = {
            "filename": filename,
            "segments": [list(segment) for segment in segments],
        }
        if percent is not None:
            file["summary"] = {
                "regions": {"count": 2, "covered": 1, "percent": percent}
            }
        return file

    return _


@pytest.fixture
def make_report_json():
    def _(*datasets):
        return {
            "type": "llvm.coverage.json.export",
            "version": "2.0.1",
            "data": [{"files": list(files)} for files in datasets],
        }

    return _


@pytest.fixture
def coverage_json(make_report_json, make_file_json):
    return make_report_json(
        [
            make_file_json(
                "/project/src/lib.rs",
                segments=[
                    [1, 1, 4, True, True, False],
                    [2, 5, 0, True, True, False],
                    [3, 9, 0, True, True, False],
                    [4, 2, 4, True, False, False],
                    [6, 1, 0, True, True, True],
                    [9, 1, 0, True, True, False],
                    [10, 2, 0, False, False, False],
                ],
            ),
            make_file_json(
                "/project/src/main.rs",
                segments=[[1, 1, 0, True, True, False]],
                percent=100.0,
            ),
        ]
    )
