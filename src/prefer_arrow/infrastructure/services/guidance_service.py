"""GuidanceService: loads the rule registry and provides messages and manual instructions."""

from pathlib import Path
from typing import cast

import yaml

from prefer_arrow.domain.constants import REGISTRY_PREFIX
from prefer_arrow.domain.protocols import GuidanceServiceProtocol
from prefer_arrow.domain.registry_types import RuleRegistryEntry
from prefer_arrow.domain.rule_msgs import RuleMsgBuilder


class GuidanceService(GuidanceServiceProtocol):
    """Loads rule_registry.yaml and resolves entries by message identifier or symbol."""

    def __init__(self, registry_path: str | None = None) -> None:
        if registry_path is not None:
            self._path = Path(registry_path)
        else:
            # Default: packaged resource next to this package
            _base = Path(__file__).resolve().parent.parent.parent
            self._path = _base / "resources" / "rule_registry.yaml"
        self._registry: dict[str, RuleRegistryEntry] = {}
        self._load()

    def _load(self) -> None:
        if self._path.exists():
            with open(self._path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
                self._registry = (
                    cast(dict[str, RuleRegistryEntry], data) if isinstance(data, dict) else {}
                )
        else:
            self._registry = {}

    def get_entry(self, message_id: str) -> RuleRegistryEntry | None:
        return RuleMsgBuilder.get_entry(self._registry, message_id)

    def get_messages(self) -> dict[str, str]:
        """Return { message_id: message text } with built-in fallbacks."""
        return RuleMsgBuilder.build_messages(self._registry)

    def get_manual_instructions(self, message_id: str) -> str:
        entry = self.get_entry(message_id)
        if entry and "manual_instructions" in entry:
            return str(entry["manual_instructions"])
        default_entry = self._registry.get(f"{REGISTRY_PREFIX}_default")
        if default_entry and "manual_instructions" in default_entry:
            return str(default_entry["manual_instructions"])
        return "Rewrite the function as an arrow function at the reported location."

    def get_display_name(self, message_id: str) -> str:
        entry = self.get_entry(message_id)
        if not entry:
            return message_id
        return str(entry.get("display_name") or entry.get("short_description") or message_id)

    def iter_rules(self) -> list[tuple[str, str, str]]:
        """Return (message_id, display_name, short_description) for each registered message."""
        out: list[tuple[str, str, str]] = []
        for rule_id, entry in self._registry.items():
            if not rule_id.startswith(REGISTRY_PREFIX) or rule_id.endswith("._default"):
                continue
            message_id = rule_id[len(REGISTRY_PREFIX):]
            out.append(
                (
                    message_id,
                    str(entry.get("display_name") or message_id),
                    str(entry.get("short_description") or ""),
                )
            )
        return sorted(out, key=lambda x: x[0])
