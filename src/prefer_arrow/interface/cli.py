"""CLI entry points for prefer-arrow - Thin Controller using Typer."""

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from prefer_arrow.domain.config import ConfigurationError, ConfigurationLoader, Options
from prefer_arrow.domain.constants import PREFER_ARROW_BANNER
from prefer_arrow.domain.protocols import (
    FileSystemProtocol,
    FixerGatewayProtocol,
    GuidanceServiceProtocol,
    SyntaxParserProtocol,
    TelemetryPort,
)
from prefer_arrow.domain.rule_msgs import MessageSelector
from prefer_arrow.domain.rules.prefer_arrow import PreferArrowFunctionsRule
from prefer_arrow.infrastructure.reporters import JsonViolationReporter, TerminalViolationReporter
from prefer_arrow.interface.reporters import ViolationReporter
from prefer_arrow.use_cases.apply_fixes import ApplyFixesUseCase
from prefer_arrow.use_cases.check_files import CheckFilesUseCase
from prefer_arrow.use_cases.lint_source import LintSourceUseCase

EXIT_CLEAN = 0
EXIT_VIOLATIONS = 1
EXIT_CONFIG_ERROR = 2

# B008: avoid function call in default; use module-level singletons for Typer parameters
_PATHS_ARGUMENT = typer.Argument(None, help="Files or directories to lint (default: src/ if present, else .)")
_SINGLE_RETURN_ONLY = typer.Option(
    None,
    "--single-return-only/--no-single-return-only",
    help="Only flag functions whose body is a single return statement.",
)
_DISALLOW_PROTOTYPE = typer.Option(
    None,
    "--disallow-prototype/--no-disallow-prototype",
    help="Flag functions assigned to X.prototype instead of skipping them.",
)
_RETURN_STYLE = typer.Option(
    None, "--return-style", help="Arrow body style: unchanged, explicit or implicit."
)
_CLASS_PROPERTIES_ALLOWED = typer.Option(
    None,
    "--class-properties-allowed/--no-class-properties-allowed",
    help="Allow rewriting class methods into class-field arrows.",
)
_VERBOSE = typer.Option(False, "--verbose", "-v", help="Enable debug logging.")


@dataclass(frozen=True)
class CLIDependencies:
    """Explicit dependencies for the CLI. All dependencies injected at composition root."""

    config_loader: ConfigurationLoader
    telemetry: TelemetryPort
    parser: SyntaxParserProtocol
    filesystem: FileSystemProtocol
    fixer_gateway: FixerGatewayProtocol
    guidance_service: GuidanceServiceProtocol


class CLIAppFactory:
    """Creates the Typer app. No top-level functions."""

    @staticmethod
    def resolve_target_paths(paths: Optional[list[Path]]) -> list[str]:
        """Resolve target paths: explicit paths, else src/ if it exists, else '.'."""
        if paths:
            return [str(p) for p in paths]
        src_dir = Path.cwd() / "src"
        if src_dir.exists() and src_dir.is_dir():
            return ["src"]
        return ["."]

    @staticmethod
    def configure_logging(verbose: bool) -> None:
        level = logging.DEBUG if verbose else logging.WARNING
        logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
        logging.getLogger().setLevel(level)

    @staticmethod
    def resolve_options(
        deps: CLIDependencies,
        single_return_only: Optional[bool],
        disallow_prototype: Optional[bool],
        return_style: Optional[str],
        class_properties_allowed: Optional[bool],
    ) -> Options:
        """Apply CLI flags over [tool.prefer-arrow]. Exits with code 2 on invalid values."""
        try:
            return deps.config_loader.options.with_overrides(
                single_return_only=single_return_only,
                disallow_prototype=disallow_prototype,
                return_style=return_style,
                class_properties_allowed=class_properties_allowed,
            )
        except ConfigurationError as e:
            deps.telemetry.error(f"Configuration error: {e}")
            sys.exit(EXIT_CONFIG_ERROR)

    @staticmethod
    def build_rule(deps: CLIDependencies, options: Options) -> PreferArrowFunctionsRule:
        messages = MessageSelector(deps.guidance_service.get_messages())
        return PreferArrowFunctionsRule(options=options, messages=messages)

    @staticmethod
    def build_reporter(output_format: str) -> ViolationReporter:
        if output_format == "json":
            return JsonViolationReporter()
        return TerminalViolationReporter()

    @staticmethod
    def create_app(deps: CLIDependencies) -> typer.Typer:
        """Create the Typer app with explicitly injected dependencies. No Service Locator."""
        app = typer.Typer(
            name="prefer-arrow",
            help=f"{PREFER_ARROW_BANNER}\nprefer-arrow: rewrite plain functions as arrow functions",
            add_completion=False,
        )

        def _use_cases(options: Options) -> tuple[LintSourceUseCase, CheckFilesUseCase]:
            lint_source = LintSourceUseCase(deps.parser, CLIAppFactory.build_rule(deps, options))
            check_files = CheckFilesUseCase(
                filesystem=deps.filesystem,
                lint_source=lint_source,
                telemetry=deps.telemetry,
                config_loader=deps.config_loader,
            )
            return lint_source, check_files

        @app.command()
        def check(
            paths: Optional[list[Path]] = _PATHS_ARGUMENT,
            single_return_only: Optional[bool] = _SINGLE_RETURN_ONLY,
            disallow_prototype: Optional[bool] = _DISALLOW_PROTOTYPE,
            return_style: Optional[str] = _RETURN_STYLE,
            class_properties_allowed: Optional[bool] = _CLASS_PROPERTIES_ALLOWED,
            output_format: str = typer.Option("text", "--format", help="Output format: text or json."),
            verbose: bool = _VERBOSE,
        ) -> None:
            """Report functions that can be rewritten as arrow functions."""
            CLIAppFactory.configure_logging(verbose)
            if output_format not in ("text", "json"):
                deps.telemetry.error(f"Unknown --format '{output_format}'; use text or json.")
                sys.exit(EXIT_CONFIG_ERROR)
            if output_format == "text":
                deps.telemetry.handshake()
            options = CLIAppFactory.resolve_options(
                deps, single_return_only, disallow_prototype, return_style, class_properties_allowed
            )
            _, check_files = _use_cases(options)
            summary = check_files.execute(CLIAppFactory.resolve_target_paths(paths))
            CLIAppFactory.build_reporter(output_format).report_check(summary)
            sys.exit(EXIT_VIOLATIONS if summary.has_violations else EXIT_CLEAN)

        @app.command()
        def fix(
            paths: Optional[list[Path]] = _PATHS_ARGUMENT,
            single_return_only: Optional[bool] = _SINGLE_RETURN_ONLY,
            disallow_prototype: Optional[bool] = _DISALLOW_PROTOTYPE,
            return_style: Optional[str] = _RETURN_STYLE,
            class_properties_allowed: Optional[bool] = _CLASS_PROPERTIES_ALLOWED,
            no_backup: bool = typer.Option(
                False, "--no-backup", help="Skip creating .bak backup files"),
            dry_run: bool = typer.Option(
                False, "--dry-run", help="Compute fixes without writing files"),
            output_format: str = typer.Option("text", "--format", help="Output format: text or json."),
            verbose: bool = _VERBOSE,
        ) -> None:
            """Apply arrow-function rewrites until no fixable violation remains."""
            CLIAppFactory.configure_logging(verbose)
            if output_format not in ("text", "json"):
                deps.telemetry.error(f"Unknown --format '{output_format}'; use text or json.")
                sys.exit(EXIT_CONFIG_ERROR)
            if output_format == "text":
                deps.telemetry.handshake()
            options = CLIAppFactory.resolve_options(
                deps, single_return_only, disallow_prototype, return_style, class_properties_allowed
            )
            lint_source, check_files = _use_cases(options)
            use_case = ApplyFixesUseCase(
                fixer_gateway=deps.fixer_gateway,
                filesystem=deps.filesystem,
                lint_source=lint_source,
                check_files=check_files,
                telemetry=deps.telemetry,
                create_backups=not no_backup,
                dry_run=dry_run,
            )
            summary = use_case.execute(CLIAppFactory.resolve_target_paths(paths))
            CLIAppFactory.build_reporter(output_format).report_fix(summary)
            pending = summary.remaining > 0 or (dry_run and summary.files_changed > 0)
            sys.exit(EXIT_VIOLATIONS if pending else EXIT_CLEAN)

        @app.command()
        def rules(
            message_id: Optional[str] = typer.Argument(
                None, help="Show how to fix one message (e.g. UseExplicit)."),
        ) -> None:
            """List the messages this tool reports, or explain one of them."""
            console = Console()
            if message_id:
                if deps.guidance_service.get_entry(message_id) is None:
                    deps.telemetry.error(f"Unknown message '{message_id}'.")
                    sys.exit(EXIT_CONFIG_ERROR)
                console.print(f"[bold]{escape(deps.guidance_service.get_display_name(message_id))}[/]")
                console.print(escape(deps.guidance_service.get_manual_instructions(message_id)))
                return
            table = Table(title="[PREFER-ARROW] Messages")
            table.add_column("Message ID", style="magenta", no_wrap=True)
            table.add_column("Name", style="bold")
            table.add_column("Description")
            for rule_id, display_name, description in deps.guidance_service.iter_rules():
                table.add_row(rule_id, display_name, description)
            console.print(table)

        return app
