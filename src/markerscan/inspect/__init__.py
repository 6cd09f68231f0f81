# Copyright 2026 MarkerScan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Marker discovery over text and YAML documents."""

from markerscan.inspect.inspector import InspectionError, Inspector, TransformError, YAMLResult, YAMLTransformer

__all__ = [
    "InspectionError",
    "Inspector",
    "TransformError",
    "YAMLResult",
    "YAMLTransformer",
]
