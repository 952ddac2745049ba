"""Use Case: Check files - lint every source file under the given paths."""

from typing import TYPE_CHECKING

from prefer_arrow.domain.entities import CheckSummary, LintResult
from prefer_arrow.domain.protocols import FileSystemProtocol, TelemetryPort

if TYPE_CHECKING:
    from prefer_arrow.domain.config import ConfigurationLoader
    from prefer_arrow.use_cases.lint_source import LintSourceUseCase


class CheckFilesUseCase:
    """Orchestrate file discovery and linting; report unreadable files and keep going."""

    def __init__(
        self,
        filesystem: FileSystemProtocol,
        lint_source: "LintSourceUseCase",
        telemetry: TelemetryPort,
        config_loader: "ConfigurationLoader",
    ) -> None:
        self.filesystem = filesystem
        self.lint_source = lint_source
        self.telemetry = telemetry
        self.config_loader = config_loader

    def collect_files(self, paths: list[str]) -> list[str]:
        """Expand paths into source files, honoring configured extensions and exclusions."""
        files: list[str] = []
        for path in paths:
            if not self.filesystem.exists(path):
                self.telemetry.error(f"Path not found: {path}")
                continue
            files.extend(
                self.filesystem.glob_source_files(
                    path,
                    self.config_loader.extensions,
                    self.config_loader.exclude_paths,
                )
            )
        return sorted(set(files))

    def execute(self, paths: list[str]) -> CheckSummary:
        files = self.collect_files(paths)
        self.telemetry.step(f"Checking {len(files)} file(s) for arrow-convertible functions")
        results: list[LintResult] = []
        failed: list[str] = []
        for file_path in files:
            try:
                source = self.filesystem.read_text(file_path)
            except (OSError, UnicodeDecodeError) as e:
                self.telemetry.error(f"file={file_path} status=skipped reason={e}")
                failed.append(file_path)
                continue
            result = self.lint_source.execute(source, file_path)
            self.telemetry.debug(f"file={file_path} violations={len(result.violations)}")
            results.append(result)
        return CheckSummary(results=results, failed_files=failed)
