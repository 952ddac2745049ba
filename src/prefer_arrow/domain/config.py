"""Rule options and configuration loader. Immutable value objects created by Infrastructure."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import ClassVar

from prefer_arrow.domain.constants import (
    DEFAULT_CLASS_PROPERTIES_ALLOWED,
    DEFAULT_DISALLOW_PROTOTYPE,
    DEFAULT_EXTENSIONS,
    DEFAULT_RETURN_STYLE,
    DEFAULT_SINGLE_RETURN_ONLY,
)

logger = logging.getLogger(__name__)


class ConfigurationError(ValueError):
    """Raised when [tool.prefer-arrow] or CLI overrides carry an invalid value."""


class ReturnStyle(Enum):
    """How arrow bodies should be shaped."""

    UNCHANGED = "unchanged"
    EXPLICIT = "explicit"
    IMPLICIT = "implicit"

    @classmethod
    def parse(cls, raw: object) -> "ReturnStyle":
        """Resolve a raw config value ('explicit', ReturnStyle.EXPLICIT, ...)."""
        if isinstance(raw, ReturnStyle):
            return raw
        if isinstance(raw, str):
            for style in cls:
                if style.value == raw:
                    return style
        allowed = ", ".join(s.value for s in cls)
        raise ConfigurationError(f"returnStyle must be one of {allowed}; got {raw!r}")


@dataclass(frozen=True)
class Options:
    """Resolved option snapshot. Built once per run; never re-read per node."""

    single_return_only: bool = DEFAULT_SINGLE_RETURN_ONLY
    disallow_prototype: bool = DEFAULT_DISALLOW_PROTOTYPE
    return_style: ReturnStyle = ReturnStyle(DEFAULT_RETURN_STYLE)
    class_properties_allowed: bool = DEFAULT_CLASS_PROPERTIES_ALLOWED

    # Option name as written in config (original camelCase) -> field name.
    ALIASES: ClassVar[dict[str, str]] = {
        "singleReturnOnly": "single_return_only",
        "disallowPrototype": "disallow_prototype",
        "returnStyle": "return_style",
        "classPropertiesAllowed": "class_properties_allowed",
    }

    @classmethod
    def field_for(cls, key: str) -> str | None:
        """Return the Options field for a config key in either case style."""
        if key in cls.ALIASES:
            return cls.ALIASES[key]
        if key in cls.ALIASES.values():
            return key
        return None

    @classmethod
    def from_mapping(cls, raw: dict[str, object]) -> "Options":
        """Fill unset fields from defaults and validate the set ones."""
        values: dict[str, object] = {}
        for key, value in raw.items():
            field_name = cls.field_for(key)
            if field_name is None:
                continue
            values[field_name] = value
        return cls().with_overrides(**values)

    def with_overrides(self, **overrides: object) -> "Options":
        """Return a copy with non-None overrides applied (CLI flags over file values)."""
        changes: dict[str, object] = {}
        for name, value in overrides.items():
            if value is None:
                continue
            if name == "return_style":
                changes[name] = ReturnStyle.parse(value)
            elif name in ("single_return_only", "disallow_prototype", "class_properties_allowed"):
                if not isinstance(value, bool):
                    raise ConfigurationError(f"{name} must be a boolean; got {value!r}")
                changes[name] = value
            else:
                raise ConfigurationError(f"Unknown option: {name}")
        return replace(self, **changes) if changes else self


class ConfigurationLoader:
    """
    Immutable configuration for the rule and the file walker.

    Created by Infrastructure from the [tool.prefer-arrow] table. Domain does not
    read the filesystem; Infrastructure calls ConfigFileLoader.load_config_from_fs()
    and constructs ConfigurationLoader(config_dict) at composition root.
    """

    _KNOWN_EXTRA_KEYS = frozenset({"exclude", "extensions"})

    def __init__(
        self,
        config_dict: dict[str, object] | None = None,
    ) -> None:
        self._config = dict(config_dict or {})
        if self._config:
            self.validate_config(self._config)
        self._options = Options.from_mapping(self._config)

    def validate_config(self, config: dict[str, object]) -> None:
        """Warn about keys the rule does not understand. Invalid values raise on resolve."""
        for key in config:
            if Options.field_for(key) is None and key not in self._KNOWN_EXTRA_KEYS:
                logger.warning("Configuration Warning: unknown [tool.prefer-arrow] key '%s' ignored.", key)

    @property
    def options(self) -> Options:
        """Return the resolved rule options."""
        return self._options

    @property
    def exclude_paths(self) -> list[str]:
        """Path fragments to skip when collecting source files."""
        raw = self._config.get("exclude", [])
        if isinstance(raw, list):
            return [str(x) for x in raw if isinstance(x, str)]
        return []

    @property
    def extensions(self) -> tuple[str, ...]:
        """File suffixes to lint."""
        raw = self._config.get("extensions")
        if isinstance(raw, list) and raw:
            return tuple(s if s.startswith(".") else f".{s}" for s in raw if isinstance(s, str))
        return DEFAULT_EXTENSIONS
