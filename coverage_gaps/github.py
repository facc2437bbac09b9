from __future__ import annotations

import sys

from coverage_gaps import gaps


def escape_property(s: str) -> str:
    return (
        s.replace("%", "%25")
        .replace("\r", "%0D")
        .replace("\n", "%0A")
        .replace(":", "%3A")
        .replace(",", "%2C")
    )


def escape_data(s: str) -> str:
    return s.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def get_workflow_command(command: str, command_value: str, **kwargs: str) -> str:
    """
    Returns a string that can be printed to send a workflow command
    https://docs.github.com/en/actions/using-workflows/workflow-commands-for-github-actions
    """
    values_listed = [f"{key}={escape_property(value)}" for key, value in kwargs.items()]

    context = f" {','.join(values_listed)}" if values_listed else ""
    return f"::{command}{context}::{escape_data(command_value)}"


def send_workflow_command(command: str, command_value: str, **kwargs: str) -> None:
    print(
        get_workflow_command(command=command, command_value=command_value, **kwargs),
        file=sys.stderr,
    )


def create_missing_coverage_annotations(
    annotation_type: str, entries: list[gaps.FileGapEntry]
):
    """
    Create one annotation per uncovered line range.

    annotation_type: The type of annotation to create: "notice", "warning" or "error".
    """
    send_workflow_command(
        command="group", command_value="Annotations of lines with missing coverage"
    )
    for entry in entries:
        for line_range in entry.ranges:
            if line_range.start == line_range.end:
                message = f"Missing coverage on line {line_range.start}"
            else:
                message = (
                    f"Missing coverage on lines {line_range.start}-{line_range.end}"
                )

            send_workflow_command(
                command=annotation_type,
                command_value=message,
                file=entry.path,
                line=str(line_range.start),
                endLine=str(line_range.end),
                title="Missing coverage",
            )
    send_workflow_command(command="endgroup", command_value="")
