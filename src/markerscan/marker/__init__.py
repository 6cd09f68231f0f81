# Copyright 2026 MarkerScan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Marker schemas, typed argument binding and the schema registry."""

from markerscan.marker.argument import Argument, MarkerArgUnmarshaler, argument_from_field, lower_camel_case
from markerscan.marker.definition import Definition, define
from markerscan.marker.errors import (
    ArgumentNotFoundError,
    DefinitionError,
    MarkerError,
    MissingArgumentsError,
    UnmarshalError,
    WrongTypeError,
)
from markerscan.marker.registry import Registry, UnknownMarkerError

__all__ = [
    # Schemas
    "Argument",
    "Definition",
    "MarkerArgUnmarshaler",
    "Registry",
    "argument_from_field",
    "define",
    "lower_camel_case",
    # Errors
    "ArgumentNotFoundError",
    "DefinitionError",
    "MarkerError",
    "MissingArgumentsError",
    "UnknownMarkerError",
    "UnmarshalError",
    "WrongTypeError",
]
