"""Reporters for check/fix results: rich tables for terminals, JSON for tooling."""

import json
import sys
from typing import TYPE_CHECKING, TextIO

from rich.console import Console
from rich.table import Table
from rich.text import Text

from prefer_arrow.interface.reporters import ViolationReporter

if TYPE_CHECKING:
    from prefer_arrow.domain.entities import CheckSummary, FixSummary


class TerminalViolationReporter(ViolationReporter):
    """Rich table per run. Locations are path:line:column."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def report_check(self, summary: "CheckSummary") -> None:
        if not summary.has_violations:
            self.console.print(
                f"[green]No arrow-convertible functions found in {len(summary.results)} file(s).[/]"
            )
            return
        table = Table(title="[PREFER-ARROW] Arrow Function Audit")
        table.add_column("Location", style="bold blue", no_wrap=True)
        table.add_column("Message ID", style="magenta")
        table.add_column("Message")
        table.add_column("Fix", style="dim")
        for result in summary.results:
            for v in result.violations:
                table.add_row(
                    Text(v.location),
                    v.code,
                    Text(v.message),
                    Text(self._first_line(v.fix.replacement_text)),
                )
        self.console.print(table)
        self.console.print(
            f"[bold red]{summary.violation_count} violation(s)[/] in "
            f"{sum(1 for r in summary.results if r.has_violations())} file(s). "
            "Run 'prefer-arrow fix' to apply the rewrites."
        )

    def report_fix(self, summary: "FixSummary") -> None:
        table = Table(title="[PREFER-ARROW] Fix Summary")
        table.add_column("File", style="bold blue")
        table.add_column("Applied", justify="right")
        table.add_column("Passes", justify="right")
        table.add_column("Remaining", justify="right")
        for outcome in summary.outcomes:
            if not outcome.changed and not outcome.remaining:
                continue
            table.add_row(
                Text(outcome.file_path),
                str(outcome.applied),
                str(outcome.passes),
                str(len(outcome.remaining)),
            )
        if table.row_count:
            self.console.print(table)
        self.console.print(
            f"Files changed: {summary.files_changed}  "
            f"Fixes applied: {summary.fixes_applied}  "
            f"Remaining: {summary.remaining}"
        )

    @staticmethod
    def _first_line(text: str) -> str:
        first = text.splitlines()[0] if text else ""
        return first if first == text else first + " ..."


class JsonViolationReporter(ViolationReporter):
    """One JSON document per run on stdout."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream

    def _write(self, payload: dict[str, object]) -> None:
        out = self.stream or sys.stdout
        out.write(json.dumps(payload, indent=2) + "\n")

    def report_check(self, summary: "CheckSummary") -> None:
        self._write(
            {
                "files": [r.to_dict() for r in summary.results if r.has_violations()],
                "violation_count": summary.violation_count,
                "failed_files": list(summary.failed_files),
            }
        )

    def report_fix(self, summary: "FixSummary") -> None:
        self._write(
            {
                "files": [
                    {
                        "file": o.file_path,
                        "applied": o.applied,
                        "passes": o.passes,
                        "remaining": len(o.remaining),
                    }
                    for o in summary.outcomes
                    if o.changed or o.remaining
                ],
                "files_changed": summary.files_changed,
                "fixes_applied": summary.fixes_applied,
                "remaining": summary.remaining,
                "failed_files": list(summary.failed_files),
            }
        )
