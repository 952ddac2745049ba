"""Use Case: Apply prefer-arrow fixes to source files until nothing is left to fix."""

import shutil
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from prefer_arrow.domain.constants import MAX_FIX_PASSES
from prefer_arrow.domain.entities import FixOutcome, FixSummary
from prefer_arrow.domain.protocols import (
    FileSystemProtocol,
    FixerGatewayProtocol,
    TelemetryPort,
)

if TYPE_CHECKING:
    from prefer_arrow.domain.rules import Violation
    from prefer_arrow.use_cases.check_files import CheckFilesUseCase
    from prefer_arrow.use_cases.lint_source import LintSourceUseCase


class ApplyFixesUseCase:
    """
    Drive each file to a fixed point.

    Every pass lints the current text, applies the non-overlapping fixes (outer rewrites
    win over the nested ones they contain) and re-lints, up to MAX_FIX_PASSES passes.
    """

    def __init__(
        self,
        fixer_gateway: FixerGatewayProtocol,
        filesystem: FileSystemProtocol,
        lint_source: "LintSourceUseCase",
        check_files: "CheckFilesUseCase",
        telemetry: TelemetryPort,
        create_backups: bool = True,
        dry_run: bool = False,
        max_passes: int = MAX_FIX_PASSES,
    ) -> None:
        self.fixer_gateway = fixer_gateway
        self.filesystem = filesystem
        self.lint_source = lint_source
        self.check_files = check_files
        self.telemetry = telemetry
        self.create_backups = create_backups
        self.dry_run = dry_run
        self.max_passes = max_passes

    def fix_source(
        self, source: str, file_path: str = "", max_passes: Optional[int] = None
    ) -> FixOutcome:
        """Fix one source text in memory. Pure apart from parsing."""
        limit = self.max_passes if max_passes is None else max_passes
        text = source
        applied = 0
        passes = 0
        remaining: list["Violation"] = self.lint_source.execute(text, file_path).violations
        while remaining and passes < limit:
            text, count = self.fixer_gateway.apply_fixes(text, [v.fix for v in remaining])
            passes += 1
            applied += count
            if count == 0:
                break
            remaining = self.lint_source.execute(text, file_path).violations
        return FixOutcome(
            file_path=file_path,
            original_text=source,
            fixed_text=text,
            applied=applied,
            passes=passes,
            remaining=remaining,
        )

    def execute(self, paths: list[str]) -> FixSummary:
        """Fix every source file under paths. Writes files unless dry_run is set."""
        mode = "dry run" if self.dry_run else "writing changes"
        files = self.check_files.collect_files(paths)
        self.telemetry.step(f"Fixing {len(files)} file(s) ({mode})")
        outcomes: list[FixOutcome] = []
        failed: list[str] = []
        for file_path in files:
            outcome = self._execute_one_file(file_path)
            if outcome is None:
                failed.append(file_path)
                continue
            outcomes.append(outcome)
        summary = FixSummary(outcomes=outcomes, failed_files=failed)
        self.telemetry.step(
            f"Fix run complete. Files changed: {summary.files_changed}, "
            f"fixes applied: {summary.fixes_applied}, remaining: {summary.remaining}"
        )
        return summary

    def _execute_one_file(self, file_path: str) -> Optional[FixOutcome]:
        try:
            source = self.filesystem.read_text(file_path)
        except (OSError, UnicodeDecodeError) as e:
            self.telemetry.error(f"file={file_path} status=skipped reason={e}")
            return None

        outcome = self.fix_source(source, file_path)
        if not outcome.changed:
            self.telemetry.debug(f"file={file_path} status=unchanged")
            return outcome

        self.telemetry.step(
            f"file={self._rel_path(file_path)} fixes={outcome.applied} passes={outcome.passes}"
        )
        if outcome.remaining:
            self.telemetry.warning(
                f"file={self._rel_path(file_path)} remaining={len(outcome.remaining)} "
                f"after {outcome.passes} pass(es)"
            )
        if self.dry_run:
            return outcome
        if self.create_backups:
            self._create_backup(file_path)
        self.filesystem.write_text(file_path, outcome.fixed_text)
        return outcome

    def _rel_path(self, file_path_str: str) -> str:
        """Return path relative to cwd for logging; fallback to absolute."""
        try:
            return str(Path(file_path_str).relative_to(Path.cwd()))
        except ValueError:
            return file_path_str

    def _create_backup(self, file_path_str: str) -> str:
        """Create a .bak backup of the file. Returns backup path string."""
        file_path = Path(file_path_str)
        backup_path = file_path.with_suffix(file_path.suffix + ".bak")
        shutil.copy2(file_path, backup_path)
        return str(backup_path)
