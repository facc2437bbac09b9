from __future__ import annotations

from collections.abc import Callable, Sequence
from importlib import resources

import jinja2
from jinja2.sandbox import SandboxedEnvironment

from coverage_gaps import gaps, groups

REPORT_TEMPLATE = "report.txt.j2"


def uptodate():
    return True


class TemplateError(Exception):
    pass


class PackageLoader(jinja2.BaseLoader):
    def get_source(
        self, environment: jinja2.Environment, template: str
    ) -> tuple[str, str | None, Callable[..., bool]]:
        try:
            source = read_template_file(template)
        except FileNotFoundError:
            raise jinja2.TemplateNotFound(template) from None
        return source, f"coverage_gaps/template_files/{template}", uptodate


def read_template_file(template: str) -> str:
    return (
        resources.files("coverage_gaps") / "template_files" / template
    ).read_text()


def get_environment() -> jinja2.Environment:
    env = SandboxedEnvironment(
        loader=PackageLoader(),
        trim_blocks=True,
        lstrip_blocks=True,
        autoescape=False,
    )
    env.filters["format_ranges"] = groups.format_ranges
    return env


def render_entries(entries: Sequence[gaps.FileGapEntry]) -> str:
    env = get_environment()
    try:
        text = env.get_template(REPORT_TEMPLATE).render(entries=entries)
    except jinja2.exceptions.TemplateError as exc:
        raise TemplateError from exc
    return text.rstrip("\n")
