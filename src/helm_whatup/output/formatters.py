"""Plain / short / JSON / YAML / table output dispatch."""

from __future__ import annotations

import json
from typing import Any, Callable

import yaml
from rich.console import Console

from helm_whatup.errors import OutputFormatError
from helm_whatup.models import OutputFormat
from helm_whatup.models.repo import ReconciliationReport

console = Console()

NO_RELEASES_MESSAGE = "No releases found. All up to date!"
NO_REPOSITORIES_MESSAGE = "No repositories found. Did you run `helm repo update`?"
ALL_UP_TO_DATE_MESSAGE = "No charts need updates. All up to date!"


def _echo(out: Console, text: str = "") -> None:
    out.print(text, markup=False, emoji=False, highlight=False, soft_wrap=True)


def _records_to_dicts(report: ReconciliationReport) -> list[dict[str, Any]]:
    return [r.to_dict() for r in report.records]


def _output_plain(report: ReconciliationReport, out: Console) -> None:
    if report.warnings:
        _echo(out)
        for warning in report.warnings:
            _echo(out, f"WARNING: {warning.message}")

    if not report.has_outdated:
        _echo(out, ALL_UP_TO_DATE_MESSAGE)
        return

    _echo(out)
    for r in report.records:
        if r.is_outdated:
            _echo(out, f"There is an update available for release {r.release_name} ({r.chart_name})!")
            _echo(out, f"Installed version: {r.installed_version}")
            _echo(out, f"Available version: {r.latest_version}")
            _echo(out)
        else:
            _echo(out, f"Release {r.release_name} ({r.chart_name}) is up to date.")
    _echo(out, "Done.")


def _output_short(report: ReconciliationReport, out: Console) -> None:
    for r in report.outdated:
        _echo(out, f"{r.release_name} ({r.chart_name}): {r.installed_version} --> {r.latest_version}")


def _output_json(report: ReconciliationReport, out: Console) -> None:
    try:
        text = json.dumps(_records_to_dicts(report), indent=4)
    except (TypeError, ValueError) as e:
        raise OutputFormatError(f"failed to marshal JSON: {e}") from e
    _echo(out, text)


def _output_yaml(report: ReconciliationReport, out: Console) -> None:
    try:
        text = yaml.safe_dump(_records_to_dicts(report), default_flow_style=False, sort_keys=False)
    except yaml.YAMLError as e:
        raise OutputFormatError(f"failed to marshal YAML: {e}") from e
    _echo(out, text)


def _output_table(report: ReconciliationReport, out: Console) -> None:
    from helm_whatup.output.tables import outdated_table

    if not report.has_outdated:
        out.print(f"[green]{ALL_UP_TO_DATE_MESSAGE}[/green]")
        return
    out.print(outdated_table(report.records))


_RENDERERS: dict[OutputFormat, Callable[[ReconciliationReport, Console], None]] = {
    OutputFormat.PLAIN: _output_plain,
    OutputFormat.SHORT: _output_short,
    OutputFormat.JSON: _output_json,
    OutputFormat.YAML: _output_yaml,
    OutputFormat.TABLE: _output_table,
}


def output_report(report: ReconciliationReport, fmt: str, out: Console | None = None) -> None:
    """Render a report.

    Raises OutputFormatError for an unknown format or a serialisation failure.
    """
    output_format = OutputFormat.from_str(fmt)
    if output_format is None:
        raise OutputFormatError(f"invalid formatter: {fmt}")
    _RENDERERS[output_format](report, out or console)


def output_notice(message: str, fmt: str, out: Console | None = None) -> None:
    """Print a short-circuit notice; only plain output shows it."""
    if OutputFormat.from_str(fmt) == OutputFormat.PLAIN:
        _echo(out or console, message)
