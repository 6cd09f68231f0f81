# Copyright 2026 MarkerScan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Resource markers: include or exclude a resource based on a field's value.

A resource marker is paired with a field or collection field marker found
earlier and renders a guard for the generated resource function, e.g.::

    # +operator-builder:resource:field=provider,value="aws",include
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, PrivateAttr

from markerscan.fields.errors import ResourceMarkerError
from markerscan.fields.field_marker import (
    COLLECTION_FIELD_PREFIX,
    FIELD_PREFIX,
    CollectionFieldMarker,
    FieldMarker,
    source_code_variable,
)

# ###############
# Public Interface
# ###############

RESOURCE_MARKER_PREFIX = "+operator-builder:resource"

INCLUDE_CODE = "if %s != %s {\n\t\treturn []client.Object{}, nil\n\t}"
EXCLUDE_CODE = "if %s == %s {\n\t\treturn []client.Object{}, nil\n\t}"


@dataclass
class MarkerCollection:
    """Field markers discovered across a workload, for resource markers to pair with.

    Attributes:
        field_markers: The discovered field markers.
        collection_field_markers: The discovered collection field markers.
        field_prefix: Go prefix for variables of field markers.
        collection_prefix: Go prefix for variables of collection field markers.
    """

    field_markers: list[FieldMarker] = field(default_factory=list)
    collection_field_markers: list[CollectionFieldMarker] = field(default_factory=list)
    field_prefix: str = FIELD_PREFIX
    collection_prefix: str = COLLECTION_FIELD_PREFIX

    def add(self, marker: FieldMarker) -> None:
        """File ``marker`` under its kind."""
        if isinstance(marker, CollectionFieldMarker):
            self.collection_field_markers.append(marker)
        else:
            self.field_markers.append(marker)

    def __bool__(self) -> bool:
        return bool(self.field_markers or self.collection_field_markers)


class ResourceMarker(BaseModel):
    """``+operator-builder:resource``: guard a resource on the value of a field."""

    field: str | None = None
    collection_field: str | None = None
    value: Any
    include: bool | None = None

    _include_code: str = PrivateAttr(default="")
    _field_marker: FieldMarker | None = PrivateAttr(default=None)

    def __str__(self) -> str:
        include = "true" if self.include else "false"
        return (
            f"ResourceMarker{{Field: {self.field or ''} CollectionField: {self.collection_field or ''} "
            f"Value: {self.value} Include: {include}}}"
        )

    @property
    def name(self) -> str:
        """The field the marker refers to, preferring ``field`` over ``collectionField``."""
        return self.field or self.collection_field or ""

    @property
    def include_code(self) -> str:
        """The rendered Go guard; empty until :meth:`process` succeeds."""
        return self._include_code

    @property
    def field_marker(self) -> FieldMarker | None:
        return self._field_marker

    def process(self, collection: MarkerCollection) -> None:
        """Pair the marker with its field marker and render the guard.

        Raises:
            ResourceMarkerError: If the marker is incomplete, no field marker
                matches, or the value's type does not match the field's type.
        """
        try:
            self._validate()
        except ResourceMarkerError as exc:
            raise ResourceMarkerError(f"{exc}; resource marker is invalid") from exc

        field_marker = self._find_field_marker(collection)
        if field_marker is None:
            raise ResourceMarkerError(
                f"unable to associate resource marker with 'field' or 'collectionField' marker; {self}"
            )
        self._field_marker = field_marker

        try:
            self._set_source_code(collection)
        except ResourceMarkerError as exc:
            raise ResourceMarkerError(f"{exc}; error setting source code value for resource marker: {self}") from exc

    # ------------------------------------------------------------------
    # Validation and rendering
    # ------------------------------------------------------------------

    def _validate(self) -> None:
        if self.include is None:
            raise ResourceMarkerError(f"resource marker missing 'include' value for marker {self}")
        if not self.name or self.value is None:
            raise ResourceMarkerError(f"resource marker missing 'collectionField', 'field' or 'value' for marker {self}")

    def _is_associated(self, marker: FieldMarker) -> bool:
        if marker.is_collection_field_marker:
            name = self.collection_field or ""
        elif marker.is_for_collection:
            name = self.collection_field or self.field or ""
        else:
            name = self.field or ""
        return name == (marker.name or "")

    def _find_field_marker(self, collection: MarkerCollection) -> FieldMarker | None:
        for marker in collection.field_markers:
            if self._is_associated(marker):
                return marker
        for marker in collection.collection_field_markers:
            if self._is_associated(marker):
                return marker
        return None

    def _set_source_code(self, collection: MarkerCollection) -> None:
        assert self._field_marker is not None
        prefix = collection.field_prefix if self.field else collection.collection_prefix
        variable = source_code_variable(prefix, self.name)

        value_type = _value_type(self.value)
        field_type = str(self._field_marker.type)
        if value_type != field_type:
            raise ResourceMarkerError(
                f"resource marker and field marker have mismatched types; expected: {value_type}, "
                f"got: {field_type} for marker {self}"
            )

        if isinstance(self.value, bool):
            literal = "true" if self.value else "false"
        elif isinstance(self.value, str):
            literal = json.dumps(self.value)
        else:
            literal = str(self.value)

        template = INCLUDE_CODE if self.include else EXCLUDE_CODE
        self._include_code = template % (variable, literal)


# ################
# Implementation
# ################


def _value_type(value: Any) -> str:
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, int):
        return "int"
    if isinstance(value, str):
        return "string"
    raise ResourceMarkerError("resource marker 'value' is of unknown type")
