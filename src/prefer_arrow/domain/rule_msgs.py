"""Pure message resolution from a registry dict. No I/O or infrastructure imports."""

from collections.abc import Mapping
from typing import cast

from prefer_arrow.domain.constants import DEFAULT_MESSAGE_TEMPLATES, REGISTRY_PREFIX
from prefer_arrow.domain.registry_types import RuleRegistryEntry


class RuleMsgBuilder:
    """
    Resolves message identifiers (UseArrowWhenFunction, ...) against the rule registry.

    Registry keys are e.g. 'prefer-arrow.UseExplicit'. Missing entries fall back to the
    built-in templates so the rule always has a message to report.
    """

    @staticmethod
    def get_entry(
        registry: Mapping[str, RuleRegistryEntry], message_id: str
    ) -> RuleRegistryEntry | None:
        """Return registry entry by message identifier or symbol."""
        entry = registry.get(f"{REGISTRY_PREFIX}{message_id}")
        if isinstance(entry, dict):
            return cast(RuleRegistryEntry, dict(entry))
        for rid, e in registry.items():
            if not rid.startswith(REGISTRY_PREFIX) or rid == f"{REGISTRY_PREFIX}_default":
                continue
            if isinstance(e, dict) and e.get("symbol") == message_id:
                return cast(RuleRegistryEntry, dict(e))
        return None

    @staticmethod
    def build_messages(registry: Mapping[str, RuleRegistryEntry]) -> dict[str, str]:
        """Return { message_id: human text } for all four identifiers."""
        result: dict[str, str] = {}
        for message_id, fallback in DEFAULT_MESSAGE_TEMPLATES.items():
            entry = RuleMsgBuilder.get_entry(registry, message_id)
            template = entry.get("message_template") if entry else None
            result[message_id] = str(template) if template else fallback
        return result


class MessageSelector:
    """Maps a message identifier to the text reported with the violation."""

    def __init__(self, messages: Mapping[str, str] | None = None) -> None:
        self._messages = dict(DEFAULT_MESSAGE_TEMPLATES)
        if messages:
            self._messages.update(messages)

    def text_for(self, message_id: str) -> str:
        return self._messages.get(message_id, message_id)

    @property
    def messages(self) -> dict[str, str]:
        return dict(self._messages)
