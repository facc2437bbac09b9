from __future__ import annotations

import logging
from typing import override

from coverage_gaps import github

LOCAL_FORMAT = "%(levelname)s %(name)s: %(message)s"

LEVEL_MAPPING = {
    logging.CRITICAL: "error",
    logging.ERROR: "error",
    logging.WARNING: "warning",
    logging.INFO: "notice",
    logging.DEBUG: "debug",
}


class GitHubFormatter(logging.Formatter):
    """
    Format log records as workflow commands, so that GitHub Actions
    displays warnings and errors as annotations of the job.
    """

    @override
    def format(self, record: logging.LogRecord):
        message = super().format(record)
        command = LEVEL_MAPPING.get(record.levelno, "notice")

        return github.get_workflow_command(command=command, command_value=message)