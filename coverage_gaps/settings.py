from __future__ import annotations

import dataclasses
import inspect
import pathlib
import shlex
from collections.abc import MutableMapping
from typing import Any

DEFAULT_COVERAGE_COMMAND = ("cargo", "llvm-cov", "--json")


class InvalidAnnotationType(Exception):
    pass


def str_to_bool(value: str) -> bool:
    return value.lower() in ("1", "true", "yes")


@dataclasses.dataclass(kw_only=True)
class Config:
    """This object defines the environment variables"""

    # An existing `llvm-cov export` JSON file. When unset, COVERAGE_COMMAND
    # is run to produce one.
    COVERAGE_JSON: pathlib.Path | None = None
    COVERAGE_COMMAND: tuple[str, ...] = DEFAULT_COVERAGE_COMMAND
    COVERAGE_TIMEOUT: float | None = None
    # Paths in the report are displayed relative to this directory. Defaults
    # to the cargo workspace root.
    PROJECT_ROOT: pathlib.Path | None = None
    ANNOTATE_MISSING_LINES: bool = False
    ANNOTATION_TYPE: str = "warning"
    GITHUB_ACTIONS: bool = False
    VERBOSE: bool = False

    # Clean methods
    @classmethod
    def clean_coverage_json(cls, value: str) -> pathlib.Path | None:
        return pathlib.Path(value) if value else None

    @classmethod
    def clean_coverage_command(cls, value: str) -> tuple[str, ...]:
        command = tuple(shlex.split(value))
        if not command:
            raise ValueError("Command cannot be empty")
        return command

    @classmethod
    def clean_coverage_timeout(cls, value: str) -> float | None:
        if not value:
            return None
        timeout = float(value)
        if timeout <= 0:
            raise ValueError("Timeout must be positive")
        return timeout

    @classmethod
    def clean_project_root(cls, value: str) -> pathlib.Path | None:
        return pathlib.Path(value).absolute() if value else None

    @classmethod
    def clean_annotate_missing_lines(cls, value: str) -> bool:
        return str_to_bool(value)

    @classmethod
    def clean_annotation_type(cls, value: str) -> str:
        if value not in {"notice", "warning", "error"}:
            raise InvalidAnnotationType(
                f"The annotation type {value} is not valid. Please choose from notice, warning or error"
            )
        return value

    @classmethod
    def clean_github_actions(cls, value: str) -> bool:
        return str_to_bool(value)

    @classmethod
    def clean_verbose(cls, value: str) -> bool:
        return str_to_bool(value)

    # We need to type environ as a MutableMapping because that's what
    # os.environ is, and just saying `dict[str, str]` is not enough to make
    # mypy happy
    @classmethod
    def from_environ(cls, environ: MutableMapping[str, str]) -> Config:
        possible_variables = [e for e in inspect.signature(cls).parameters]
        config: dict[str, Any] = {
            k: v for k, v in environ.items() if k in possible_variables
        }
        for key, value in list(config.items()):
            if func := getattr(cls, f"clean_{key.lower()}", None):
                try:
                    config[key] = func(value)
                except ValueError as exc:
                    raise ValueError(f"{key}: {exc!s}") from exc

        return cls(**config)
