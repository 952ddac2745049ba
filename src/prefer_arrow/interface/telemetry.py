"""ProjectTelemetry: rich console output on stderr mirrored to the standard logger."""

import logging

from rich.console import Console
from rich.markup import escape

from prefer_arrow.domain.constants import PREFER_ARROW_BANNER
from prefer_arrow.domain.protocols import TelemetryPort


class ProjectTelemetry(TelemetryPort):
    """
    Telemetry adapter used by the use cases.

    Every message goes to the logger; step/warning/error are also printed to the console.
    """

    def __init__(self, project_name: str, color: str, welcome_msg: str) -> None:
        self.project_name = project_name
        self.color = color
        self.welcome_msg = welcome_msg
        self.console = Console(stderr=True)
        self.logger = logging.getLogger(project_name.lower())

    def handshake(self) -> None:
        """Print the banner and welcome line once per command."""
        self.console.print(PREFER_ARROW_BANNER, highlight=False, markup=False)
        self.console.print(f"[bold {self.color}]{self.project_name}[/] {escape(self.welcome_msg)}")
        self.logger.info("%s: %s", self.project_name, self.welcome_msg)

    def step(self, message: str) -> None:
        self.console.print(f"[{self.color}]>[/] {escape(message)}", highlight=False)
        self.logger.info(message)

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]WARNING[/] {escape(message)}", highlight=False)
        self.logger.warning(message)

    def error(self, message: str) -> None:
        self.console.print(f"[bold red]ERROR[/] {escape(message)}", highlight=False)
        self.logger.error(message)

    def debug(self, message: str) -> None:
        self.logger.debug(message)
