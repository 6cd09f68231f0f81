# Copyright 2026 MarkerScan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Configuration of the built-in markers, loaded from a YAML file."""

from enum import Enum
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = ".markerscan.yaml"


class ConfigError(Exception):
    """Raised when a marker configuration file cannot be read or is invalid."""


class MarkerType(str, Enum):
    """The built-in marker kinds that can be enabled."""

    FIELD = "field"
    COLLECTION_FIELD = "collection-field"
    RESOURCE = "resource"


class MarkerConfig(BaseModel):
    """Which built-in markers are recognized and how their Go variables are named.

    Attributes:
        marker_types: The marker kinds to register.
        field_prefix: Go prefix of the variables field markers are rewritten to.
        collection_prefix: Go prefix of the variables collection field markers are rewritten to.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    marker_types: list[MarkerType] = Field(alias="marker-types", default_factory=lambda: list(MarkerType))
    field_prefix: str = Field(alias="field-prefix", default="parent", min_length=1)
    collection_prefix: str = Field(alias="collection-prefix", default="collection", min_length=1)

    def enabled(self, marker_type: MarkerType) -> bool:
        return marker_type in self.marker_types


def load_config(path: Path) -> MarkerConfig:
    """Load and validate a marker configuration file.

    An empty file yields the default configuration.

    Args:
        path: Path to the YAML configuration file, or a directory holding a
            `.markerscan.yaml` file.

    Returns:
        A validated MarkerConfig instance.

    Raises:
        ConfigError: If the file cannot be read, contains invalid YAML,
            or does not conform to the expected schema.
    """
    if path.is_dir():
        path = path / CONFIG_FILE_NAME

    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(f"Marker config file not found: {path}") from None
    except OSError as exc:
        raise ConfigError(f"Cannot read marker config file '{path}': {exc}") from exc

    return parse_config(raw, source_label=str(path))


def parse_config(text: str, source_label: str = "<string>") -> MarkerConfig:
    """Parse marker configuration YAML text.

    Raises:
        ConfigError: If the YAML is invalid or does not conform to the expected schema.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"{source_label}: marker config must be a YAML mapping")

    try:
        return MarkerConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid marker config '{source_label}': {exc}") from exc
