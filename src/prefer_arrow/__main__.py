"""Package entry point - composition root. Wire dependencies and run the CLI app."""

import sys

from rich.console import Console
from rich.markup import escape

from prefer_arrow.domain.config import ConfigurationError
from prefer_arrow.infrastructure.di.container import PreferArrowContainer
from prefer_arrow.interface.cli import EXIT_CONFIG_ERROR, CLIAppFactory, CLIDependencies


def main() -> None:
    """Entry point: wire dependencies at composition root, create app, run."""
    try:
        container = PreferArrowContainer.get_instance()
    except ConfigurationError as e:
        Console(stderr=True).print(f"[bold red]ERROR[/] Configuration error: {escape(str(e))}", highlight=False)
        sys.exit(EXIT_CONFIG_ERROR)

    deps = CLIDependencies(
        config_loader=container.get_config_loader(),
        telemetry=container.get_telemetry_port(),
        parser=container.get_parser(),
        filesystem=container.get_filesystem_gateway(),
        fixer_gateway=container.get_fixer_gateway(),
        guidance_service=container.get_guidance_service(),
    )

    app = CLIAppFactory.create_app(deps)
    app()


if __name__ == "__main__":
    main()
