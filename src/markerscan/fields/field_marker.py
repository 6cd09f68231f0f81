# Copyright 2026 MarkerScan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Field and collection field markers.

A field marker turns the YAML value it annotates into a field of the generated
API, e.g.::

    replicas: 3  # +operator-builder:field:name=replicas,type=int,default=3
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, PrivateAttr
from pydantic import Field as _Field

from markerscan.fields.errors import FieldMarkerError
from markerscan.fields.field_types import FieldType

# ###############
# Public Interface
# ###############

FIELD_MARKER_PREFIX = "+operator-builder:field"
COLLECTION_FIELD_MARKER_PREFIX = "+operator-builder:collection:field"

FIELD_PREFIX = "parent"
COLLECTION_FIELD_PREFIX = "collection"

# Parent fields a marker may point at instead of a spec field.
SUPPORTED_PARENTS = {"metadata.name": "Name"}


class FieldMarker(BaseModel):
    """``+operator-builder:field``: a value controlled by a field of the workload's spec."""

    marker_prefix: ClassVar[str] = FIELD_MARKER_PREFIX
    control_label: ClassVar[str] = "controlled by field"

    name: str | None = None
    type: FieldType
    description: str | None = None
    default: Any = _Field(default=None, json_schema_extra={"marker": ",optional"})
    replace: str | None = None
    parent: str | None = None
    arbitrary: bool | None = None

    _for_collection: bool = PrivateAttr(default=False)
    _source_code_var: str = PrivateAttr(default="")
    _original_value: Any = PrivateAttr(default=None)

    def __str__(self) -> str:
        return (
            f"{type(self).__name__}{{Name: {self.name or ''} Type: {self.type} "
            f'Description: "{self.description or ""}" Default: {self.default} Arbitrary: {self.is_arbitrary}}}'
        )

    @property
    def is_field_marker(self) -> bool:
        return True

    @property
    def is_collection_field_marker(self) -> bool:
        return False

    @property
    def is_for_collection(self) -> bool:
        """Whether this field marker annotates a resource of a collection."""
        return self._for_collection

    @property
    def is_arbitrary(self) -> bool:
        return bool(self.arbitrary)

    @property
    def source_code_variable(self) -> str:
        """The Go expression the annotated value was replaced with."""
        return self._source_code_var

    @property
    def original_value(self) -> Any:
        """The annotated value before rewriting, or the replace pattern when one was given."""
        return self._original_value

    @property
    def control_text(self) -> str:
        return f"{self.control_label}: {self.name or ''}"

    def set_for_collection(self, for_collection: bool) -> None:
        self._for_collection = for_collection

    def set_source_code_variable(self, variable: str) -> None:
        self._source_code_var = variable

    def set_original_value(self, value: str) -> None:
        self._original_value = self.replace if self.replace else value


class CollectionFieldMarker(FieldMarker):
    """``+operator-builder:collection:field``: a value controlled by a field of the collection's spec."""

    marker_prefix: ClassVar[str] = COLLECTION_FIELD_MARKER_PREFIX
    control_label: ClassVar[str] = "controlled by collection field"

    def __str__(self) -> str:
        return (
            f"CollectionFieldMarker{{Name: {self.name or ''} Type: {self.type} "
            f'Description: "{self.description or ""}" Default: {self.default}}}'
        )

    @property
    def is_field_marker(self) -> bool:
        return False

    @property
    def is_collection_field_marker(self) -> bool:
        return True


def source_code_variable(prefix: str, name: str, parent: str = "") -> str:
    """Return the Go expression for a marked field.

    ``<prefix>.Spec.<Name>`` for a spec field, or ``<prefix>.<Field>`` for a
    supported parent field such as ``metadata.name``.

    Raises:
        FieldMarkerError: If ``parent`` is not a supported parent field.
    """
    if parent:
        try:
            return f"{prefix}.{SUPPORTED_PARENTS[parent]}"
        except KeyError:
            raise FieldMarkerError(
                f"unsupported parent field {parent!r}; supported parent fields: {sorted(SUPPORTED_PARENTS)}"
            ) from None
    return f"{prefix}.Spec.{title_case(name)}"


def title_case(text: str) -> str:
    """Upper-case the first letter of every word; ``my.field`` becomes ``My.Field``."""
    chars = []
    at_word_start = True
    for char in text:
        chars.append(char.upper() if at_word_start else char)
        at_word_start = not (char.isalnum() or char == "_")
    return "".join(chars)
