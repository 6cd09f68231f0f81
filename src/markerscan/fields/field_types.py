# Copyright 2026 MarkerScan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data types a field marker may declare."""

from __future__ import annotations

from enum import Enum

from markerscan.fields.errors import FieldTypeError

# ###############
# Public Interface
# ###############

SUPPORTED_DATA_TYPES = ("bool", "string", "int", "int32", "int64", "float32", "float64")


class FieldType(Enum):
    """Type of the API field a field marker controls."""

    STRING = "string"
    INT = "int"
    BOOL = "bool"
    STRUCT = "struct"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def unmarshal_marker_arg(cls, value: str) -> FieldType:
        """Parse the ``type`` argument of a field marker.

        ``struct`` is reserved for fields created internally and cannot be requested.

        Raises:
            FieldTypeError: If ``value`` is empty or not one of string, int, bool.
        """
        try:
            return _PARSABLE[value]
        except KeyError:
            raise FieldTypeError(f"unable to parse field, {value} into FieldType") from None


def zero_value(data_type: str) -> str:
    """Return the Go source text of the zero value of a supported data type.

    Raises:
        FieldTypeError: If ``data_type`` is not supported.
    """
    if data_type == "bool":
        return "false"
    if data_type == "string":
        return '""'
    if data_type in SUPPORTED_DATA_TYPES:
        return "0"
    raise FieldTypeError(f"unsupported data type in workload marker; supported data types: {list(SUPPORTED_DATA_TYPES)}")


# ################
# Implementation
# ################

_PARSABLE = {
    "string": FieldType.STRING,
    "int": FieldType.INT,
    "bool": FieldType.BOOL,
}
