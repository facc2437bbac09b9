from __future__ import annotations

import pathlib

import pytest

from coverage_gaps import settings


def test_config__from_environ__defaults():
    assert settings.Config.from_environ({}) == settings.Config(
        COVERAGE_JSON=None,
        COVERAGE_COMMAND=("cargo", "llvm-cov", "--json"),
        COVERAGE_TIMEOUT=None,
        PROJECT_ROOT=None,
        ANNOTATE_MISSING_LINES=False,
        ANNOTATION_TYPE="warning",
        GITHUB_ACTIONS=False,
        VERBOSE=False,
    )


def test_config__from_environ__ok():
    assert settings.Config.from_environ(
        {
            "COVERAGE_JSON": "target/coverage.json",
            "COVERAGE_COMMAND": "cargo llvm-cov --json --workspace --features 'a b'",
            "COVERAGE_TIMEOUT": "600",
            "PROJECT_ROOT": "/project",
            "ANNOTATE_MISSING_LINES": "true",
            "ANNOTATION_TYPE": "error",
            "GITHUB_ACTIONS": "true",
            "VERBOSE": "1",
            "UNRELATED": "ignored",
        }
    ) == settings.Config(
        COVERAGE_JSON=pathlib.Path("target/coverage.json"),
        COVERAGE_COMMAND=(
            "cargo",
            "llvm-cov",
            "--json",
            "--workspace",
            "--features",
            "a b",
        ),
        COVERAGE_TIMEOUT=600.0,
        PROJECT_ROOT=pathlib.Path("/project"),
        ANNOTATE_MISSING_LINES=True,
        ANNOTATION_TYPE="error",
        GITHUB_ACTIONS=True,
        VERBOSE=True,
    )


def test_config__from_environ__empty_values():
    config = settings.Config.from_environ(
        {"COVERAGE_JSON": "", "COVERAGE_TIMEOUT": "", "PROJECT_ROOT": ""}
    )

    assert config.COVERAGE_JSON is None
    assert config.COVERAGE_TIMEOUT is None
    assert config.PROJECT_ROOT is None


@pytest.mark.parametrize(
    "key, value",
    [
        ("COVERAGE_COMMAND", ""),
        ("COVERAGE_COMMAND", "cargo 'unclosed"),
        ("COVERAGE_TIMEOUT", "soon"),
        ("COVERAGE_TIMEOUT", "-1"),
    ],
)
def test_config__from_environ__invalid(key, value):
    with pytest.raises(ValueError, match=f"^{key}: "):
        settings.Config.from_environ({key: value})


def test_config__invalid_annotation_type():
    with pytest.raises(settings.InvalidAnnotationType):
        settings.Config.from_environ({"ANNOTATION_TYPE": "foo"})


@pytest.mark.parametrize(
    "value, expected",
    [
        ("1", True),
        ("true", True),
        ("True", True),
        ("yes", True),
        ("0", False),
        ("false", False),
        ("", False),
    ],
)
def test_str_to_bool(value, expected):
    assert settings.str_to_bool(value) is expected


def test_config__project_root_keeps_symlinks(tmp_path):
    real = tmp_path / "real"
    real.mkdir()
    link = tmp_path / "link"
    link.symlink_to(real)

    config = settings.Config.from_environ({"PROJECT_ROOT": str(link)})

    assert config.PROJECT_ROOT == link


def test_config__project_root_relative(in_tmp_path):
    config = settings.Config.from_environ({"PROJECT_ROOT": "sub"})

    assert config.PROJECT_ROOT == pathlib.Path.cwd() / "sub"
