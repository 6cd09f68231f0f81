# Copyright 2026 MarkerScan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Marker configuration."""

from markerscan.config.config import (
    CONFIG_FILE_NAME,
    ConfigError,
    MarkerConfig,
    MarkerType,
    load_config,
    parse_config,
)

__all__ = [
    "CONFIG_FILE_NAME",
    "ConfigError",
    "MarkerConfig",
    "MarkerType",
    "load_config",
    "parse_config",
]
