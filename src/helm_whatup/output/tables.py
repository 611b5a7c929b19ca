"""Rich table builders."""

from __future__ import annotations

from typing import Iterable

from rich.table import Table
from rich.text import Text

from helm_whatup.models import UNKNOWN_REPO
from helm_whatup.models.repo import ResultRecord


def outdated_table(records: Iterable[ResultRecord]) -> Table:
    """Table of releases whose installed version differs from the latest."""
    table = Table(title="Outdated Releases", expand=True, show_lines=False)
    table.add_column("NAME", style="bold white", no_wrap=True)
    table.add_column("NAMESPACE", style="blue", no_wrap=True)
    table.add_column("INSTALLED VERSION", style="dim")
    table.add_column("LATEST VERSION", style="bold yellow")
    table.add_column("CHART", style="magenta", no_wrap=True)
    table.add_column("REPOSITORY", style="cyan", max_width=50)

    for r in records:
        if not r.is_outdated:
            continue
        # Literal text: no markup or emoji codes
        table.add_row(
            Text(r.release_name),
            Text(r.namespace),
            Text(r.installed_version),
            Text(r.latest_version),
            Text(r.chart_name),
            Text(r.repo_name, style="dim" if r.repo_name == UNKNOWN_REPO else ""),
        )
    return table
