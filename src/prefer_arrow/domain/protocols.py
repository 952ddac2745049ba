from typing import TYPE_CHECKING, Optional, Protocol

from prefer_arrow.domain.registry_types import RuleRegistryEntry

if TYPE_CHECKING:
    from tree_sitter import Tree

    from prefer_arrow.domain.entities import RewriteResult


class SyntaxParserProtocol(Protocol):
    """Protocol for turning source bytes into a syntax tree."""

    def parse(self, source: bytes, file_path: str = "") -> "Tree":
        """Parse source with the grammar that matches file_path's suffix."""
        ...


class FixerGatewayProtocol(Protocol):
    """Protocol for applying rewrites to source text. Implementers accept only RewriteResult."""

    def apply_fixes(self, source: str, fixes: list["RewriteResult"]) -> tuple[str, int]:
        """Apply non-overlapping rewrites. Returns (new source, number applied)."""
        ...


class TelemetryPort(Protocol):
    """Protocol for telemetry/UI updates."""

    def step(self, message: str) -> None: ...
    def error(self, message: str) -> None: ...
    def warning(self, message: str) -> None: ...
    def debug(self, message: str) -> None: ...
    def handshake(self) -> None: ...


class FileSystemProtocol(Protocol):
    """Protocol for filesystem operations - abstracts Path usage."""

    def glob_source_files(
        self,
        path: str,
        extensions: tuple[str, ...],
        exclude: Optional[list[str]] = None,
    ) -> list[str]:
        """Get all JS/TS source files in path (recursive if directory)."""
        ...

    def exists(self, path: str) -> bool:
        """Return True if path exists (file or directory)."""
        ...

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        """Read text content from a file."""
        ...

    def write_text(self, path: str, content: str, encoding: str = "utf-8") -> None:
        """Write text content to a file."""
        ...


class GuidanceServiceProtocol(Protocol):
    """Protocol for the rule registry. Implemented by GuidanceService in infrastructure."""

    def get_entry(self, message_id: str) -> Optional[RuleRegistryEntry]:
        """Return the full registry entry for a message identifier, or None."""
        ...

    def get_manual_instructions(self, message_id: str) -> str:
        """Return manual fix instructions for the message."""
        ...

    def get_messages(self) -> dict[str, str]:
        """Return { message_id: message text } for every message the rule reports."""
        ...

    def get_display_name(self, message_id: str) -> str:
        """Return display name for a message."""
        ...

    def iter_rules(self) -> list[tuple[str, str, str]]:
        """Return (message_id, display_name, short_description) for each message."""
        ...
