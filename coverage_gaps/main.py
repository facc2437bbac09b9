from __future__ import annotations

import logging
import os
import pathlib
import sys

from coverage_gaps import (
    github,
    log,
    log_utils,
    settings,
    template,
)
from coverage_gaps import coverage as coverage_module
from coverage_gaps import gaps


def main():
    try:
        logging.basicConfig(level="INFO", format=log_utils.LOCAL_FORMAT)

        config = settings.Config.from_environ(environ=os.environ)
        if config.VERBOSE:
            logging.getLogger().setLevel("DEBUG")
        if config.GITHUB_ACTIONS:
            logging.getLogger().handlers[0].formatter = log_utils.GitHubFormatter()

        log.info("Looking for uncovered regions")
        exit_code = action(config=config, cwd=pathlib.Path.cwd())

        sys.exit(exit_code)

    except Exception:
        log.exception("Critical error. Uncovered regions could not be computed.")
        sys.exit(1)


def action(config: settings.Config, cwd: pathlib.Path) -> int:
    project_root = config.PROJECT_ROOT or coverage_module.find_project_root(cwd=cwd)
    log.debug(f"Project root: {project_root}")

    report = coverage_module.get_coverage_report(
        coverage_json=config.COVERAGE_JSON,
        command=config.COVERAGE_COMMAND,
        project_root=project_root,
        timeout=config.COVERAGE_TIMEOUT,
    )
    entries = gaps.get_report_gaps(report=report, project_root=project_root)

    print(template.render_entries(entries))

    if not entries:
        return 0

    if config.ANNOTATE_MISSING_LINES:
        github.create_missing_coverage_annotations(
            annotation_type=config.ANNOTATION_TYPE, entries=entries
        )
    log.info(f"Found uncovered regions in {len(entries)} file(s)")
    return 1
