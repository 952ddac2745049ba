"""Load [tool.prefer-arrow] from pyproject.toml. Infrastructure I/O only."""

import logging
import sys
from pathlib import Path
from typing import Optional

from prefer_arrow.domain.config import ConfigurationError

if sys.version_info >= (3, 11):
    import tomllib as toml_lib
else:
    import tomli as toml_lib

logger = logging.getLogger(__name__)

TOOL_SECTION_NAMES: tuple[str, ...] = ("prefer-arrow", "prefer_arrow")


class ConfigFileLoader:
    """
    Loads config from the nearest pyproject.toml, walking up from start (default: cwd).
    """

    @staticmethod
    def find_pyproject(start: Optional[Path] = None) -> Optional[Path]:
        current_path = (start or Path.cwd()).resolve()
        for directory in (current_path, *current_path.parents):
            config_file = directory / "pyproject.toml"
            if config_file.is_file():
                return config_file
        return None

    @staticmethod
    def load_config_from_fs(start: Optional[Path] = None) -> dict[str, object]:
        """Return the [tool.prefer-arrow] table, or {} when there is none."""
        config_file = ConfigFileLoader.find_pyproject(start)
        if config_file is None:
            return {}
        try:
            with config_file.open("rb") as f:
                data = toml_lib.load(f)
        except OSError as e:
            logger.warning("Could not read %s: %s", config_file, e)
            return {}
        except toml_lib.TOMLDecodeError as e:
            raise ConfigurationError(f"Invalid TOML in {config_file}: {e}") from e
        tool_section = data.get("tool", {}) or {}
        for name in TOOL_SECTION_NAMES:
            section = tool_section.get(name)
            if isinstance(section, dict):
                logger.debug("Loaded [tool.%s] from %s", name, config_file)
                return dict(section)
        return {}
