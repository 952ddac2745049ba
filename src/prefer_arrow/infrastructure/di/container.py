from typing import TYPE_CHECKING, Any, Optional, cast

from prefer_arrow.domain.config import ConfigurationLoader
from prefer_arrow.infrastructure.config_file_loader import ConfigFileLoader
from prefer_arrow.infrastructure.gateways.filesystem_gateway import FileSystemGateway
from prefer_arrow.infrastructure.gateways.text_fixer_gateway import TextFixerGateway
from prefer_arrow.infrastructure.gateways.tree_sitter_gateway import TreeSitterGateway
from prefer_arrow.infrastructure.services.guidance_service import GuidanceService
from prefer_arrow.interface.telemetry import ProjectTelemetry

if TYPE_CHECKING:
    from prefer_arrow.domain.protocols import (
        FileSystemProtocol,
        FixerGatewayProtocol,
        GuidanceServiceProtocol,
        SyntaxParserProtocol,
        TelemetryPort,
    )


class PreferArrowContainer:
    """Dependency Injection Container for prefer-arrow."""

    _instance: Optional["PreferArrowContainer"] = None

    def __init__(self, config_dict: Optional[dict[str, object]] = None) -> None:
        self._singletons: dict[str, Any] = {}
        self._register_defaults(config_dict)

    def _register_defaults(self, config_dict: Optional[dict[str, object]]) -> None:
        """Register default implementations for protocols."""
        if config_dict is None:
            config_dict = ConfigFileLoader.load_config_from_fs()
        self.register_singleton("ConfigurationLoader", ConfigurationLoader(config_dict))
        self.register_singleton(
            "TelemetryPort",
            ProjectTelemetry("PREFER-ARROW", "cyan", "Arrow conversion online"),
        )
        self.register_singleton("TreeSitterGateway", TreeSitterGateway())
        self.register_singleton("FileSystemGateway", FileSystemGateway())
        self.register_singleton("TextFixerGateway", TextFixerGateway())
        self.register_singleton("GuidanceService", GuidanceService())

    # JUSTIFICATION: DI Container must handle any type of service
    def register_singleton(self, key: str, instance: Any) -> None:
        """Register a singleton instance."""
        self._singletons[key] = instance

    # JUSTIFICATION: DI Container must return any type of service
    def get(self, key: str) -> Any:
        """Retrieve a dependency by key. Prefer explicit get_* methods for type safety."""
        if key in self._singletons:
            return self._singletons[key]
        raise ValueError(f"Dependency '{key}' not registered.")

    def get_config_loader(self) -> ConfigurationLoader:
        """Return the configuration loader (created at composition root)."""
        return cast(ConfigurationLoader, self.get("ConfigurationLoader"))

    def get_telemetry_port(self) -> "TelemetryPort":
        """Return the telemetry/UI port."""
        return cast("TelemetryPort", self.get("TelemetryPort"))

    def get_parser(self) -> "SyntaxParserProtocol":
        """Return the tree-sitter parser gateway."""
        return cast("SyntaxParserProtocol", self.get("TreeSitterGateway"))

    def get_filesystem_gateway(self) -> "FileSystemProtocol":
        """Return the filesystem gateway."""
        return cast("FileSystemProtocol", self.get("FileSystemGateway"))

    def get_fixer_gateway(self) -> "FixerGatewayProtocol":
        """Return the text fixer gateway."""
        return cast("FixerGatewayProtocol", self.get("TextFixerGateway"))

    def get_guidance_service(self) -> "GuidanceServiceProtocol":
        """Return the guidance service (rule registry)."""
        return cast("GuidanceServiceProtocol", self.get("GuidanceService"))

    @classmethod
    def get_instance(cls) -> "PreferArrowContainer":
        """Get or create global container instance."""
        if cls._instance is None:
            cls._instance = PreferArrowContainer()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the singleton instance (primarily for testing)."""
        cls._instance = None
