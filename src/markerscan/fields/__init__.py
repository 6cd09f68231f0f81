# Copyright 2026 MarkerScan Contributors
# SPDX-License-Identifier: Apache-2.0

"""The built-in field, collection field and resource markers."""

from markerscan.fields.errors import FieldMarkerError, FieldTypeError, ResourceMarkerError
from markerscan.fields.field_marker import (
    COLLECTION_FIELD_MARKER_PREFIX,
    COLLECTION_FIELD_PREFIX,
    FIELD_MARKER_PREFIX,
    FIELD_PREFIX,
    SUPPORTED_PARENTS,
    CollectionFieldMarker,
    FieldMarker,
    source_code_variable,
    title_case,
)
from markerscan.fields.field_types import SUPPORTED_DATA_TYPES, FieldType, zero_value
from markerscan.fields.markers import (
    build_registry,
    collect_markers,
    define_collection_field_marker,
    define_field_marker,
    define_resource_marker,
    inspect_for_yaml,
    process_resource_markers,
)
from markerscan.fields.resource_marker import RESOURCE_MARKER_PREFIX, MarkerCollection, ResourceMarker
from markerscan.fields.transform import RESERVED_FIELD_NAMES, build_transformer, is_reserved, transform_yaml

__all__ = [
    # Markers
    "CollectionFieldMarker",
    "FieldMarker",
    "FieldType",
    "MarkerCollection",
    "ResourceMarker",
    # Constants
    "COLLECTION_FIELD_MARKER_PREFIX",
    "COLLECTION_FIELD_PREFIX",
    "FIELD_MARKER_PREFIX",
    "FIELD_PREFIX",
    "RESERVED_FIELD_NAMES",
    "RESOURCE_MARKER_PREFIX",
    "SUPPORTED_DATA_TYPES",
    "SUPPORTED_PARENTS",
    # Operations
    "build_registry",
    "build_transformer",
    "collect_markers",
    "define_collection_field_marker",
    "define_field_marker",
    "define_resource_marker",
    "inspect_for_yaml",
    "is_reserved",
    "process_resource_markers",
    "source_code_variable",
    "title_case",
    "transform_yaml",
    "zero_value",
    # Errors
    "FieldMarkerError",
    "FieldTypeError",
    "ResourceMarkerError",
]
