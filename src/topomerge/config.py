"""Configuration for topomerge.

TopomergeConfig holds the identifier conventions used when building and
parsing edge keys and node IDs:
- Edge delimiter (joins source and destination node IDs)
- Scope delimiter (separates a node's scope from the rest of its ID)

Configuration can come from the constructor, environment variables, or a
``topomerge.yaml`` file.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
import logging
import os

import yaml

from topomerge.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_EDGE_DELIMITER = "|"
DEFAULT_SCOPE_DELIMITER = ";"

# Config file names to search for (in order of precedence)
DEFAULT_CONFIG_FILES = [
    "topomerge.yaml",
    "topomerge.yml",
]


@dataclass
class IDConfig:
    """Delimiters for edge keys and node IDs."""

    edge_delimiter: str = DEFAULT_EDGE_DELIMITER
    scope_delimiter: str = DEFAULT_SCOPE_DELIMITER


@dataclass
class TopomergeConfig:
    """Main configuration for topomerge.

    Create from environment variables:
        config = TopomergeConfig.from_env()

    Or from a YAML file:
        config = TopomergeConfig.from_yaml("topomerge.yaml")

    Or specify directly:
        config = TopomergeConfig(ids=IDConfig(edge_delimiter="->"))
    """

    ids: IDConfig = field(default_factory=IDConfig)
    source_path: Path | None = None

    def validate(self) -> None:
        """Check the configuration for unusable values.

        Raises:
            ConfigurationError: If a delimiter is empty or both are equal
        """
        if not isinstance(self.ids.edge_delimiter, str) or not self.ids.edge_delimiter:
            raise ConfigurationError("edge_delimiter must be a non-empty string")
        if not isinstance(self.ids.scope_delimiter, str) or not self.ids.scope_delimiter:
            raise ConfigurationError("scope_delimiter must be a non-empty string")
        if self.ids.edge_delimiter == self.ids.scope_delimiter:
            raise ConfigurationError(
                f"edge_delimiter and scope_delimiter must differ "
                f"(both are {self.ids.edge_delimiter!r})"
            )

    @classmethod
    def from_env(cls) -> "TopomergeConfig":
        """Load configuration from environment variables.

        Environment variables:
        - TOPOMERGE_EDGE_DELIMITER: Separator between source and destination IDs
        - TOPOMERGE_SCOPE_DELIMITER: Separator between scope and node ID remainder
        """
        config = cls(
            ids=IDConfig(
                edge_delimiter=os.getenv("TOPOMERGE_EDGE_DELIMITER", DEFAULT_EDGE_DELIMITER),
                scope_delimiter=os.getenv("TOPOMERGE_SCOPE_DELIMITER", DEFAULT_SCOPE_DELIMITER),
            ),
        )
        config.validate()
        return config

    @classmethod
    def from_yaml(cls, path: str | Path) -> "TopomergeConfig":
        """Load configuration from a YAML file.

        Expected layout:
            ids:
              edge_delimiter: "|"
              scope_delimiter: ";"

        Raises:
            ConfigurationError: If the file cannot be read or parsed
        """
        path = Path(path)
        try:
            with open(path) as f:
                raw = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to load config file {path}", cause=e) from e

        return _parse_config(raw, path)

    @classmethod
    def default(cls) -> "TopomergeConfig":
        """Create a default configuration (same as no-arg constructor)."""
        return cls()


def load_config(config_path: str | Path | None = None) -> TopomergeConfig:
    """Load configuration from a file, searching for one if no path is given.

    Args:
        config_path: Explicit path to a config file. If None, searches for
            topomerge.yaml / topomerge.yml in the current directory and up
            to five parents.

    Returns:
        Parsed configuration, or defaults if no file was found.
    """
    if config_path is not None:
        return TopomergeConfig.from_yaml(config_path)

    found = _find_config_file()
    if found is None:
        logger.debug("No config file found, using defaults")
        return TopomergeConfig()
    return TopomergeConfig.from_yaml(found)


def _find_config_file() -> Path | None:
    """Search for a config file in current and parent directories."""
    current = Path.cwd()

    for _ in range(5):
        for filename in DEFAULT_CONFIG_FILES:
            config_path = current / filename
            if config_path.exists():
                logger.debug(f"Found config file: {config_path}")
                return config_path

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def _parse_config(raw: Any, source_path: Path | None = None) -> TopomergeConfig:
    """Parse a raw YAML document into a validated TopomergeConfig."""
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Config file {source_path} must contain a mapping")

    for key in raw:
        if key != "ids":
            logger.warning(f"Ignoring unknown config section '{key}' in {source_path}")

    ids_raw = raw.get("ids") or {}
    if not isinstance(ids_raw, dict):
        raise ConfigurationError(f"'ids' section in {source_path} must be a mapping")

    config = TopomergeConfig(
        ids=IDConfig(
            edge_delimiter=ids_raw.get("edge_delimiter", DEFAULT_EDGE_DELIMITER),
            scope_delimiter=ids_raw.get("scope_delimiter", DEFAULT_SCOPE_DELIMITER),
        ),
        source_path=source_path,
    )
    config.validate()
    return config
