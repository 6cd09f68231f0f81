# Copyright 2026 MarkerScan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Errors raised by the built-in field and resource markers."""

from markerscan.inspect import TransformError

# ###############
# Public Interface
# ###############


class FieldTypeError(ValueError):
    """Raised when a marker's ``type`` argument names no known field type."""


class FieldMarkerError(TransformError):
    """Raised when a field marker cannot be applied to its YAML node."""


class ResourceMarkerError(TransformError):
    """Raised when a resource marker is incomplete or cannot be paired with a field marker."""
