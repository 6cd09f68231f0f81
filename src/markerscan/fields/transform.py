# Copyright 2026 MarkerScan Contributors
# SPDX-License-Identifier: Apache-2.0

"""YAML transform that rewrites values annotated with field markers.

For every field or collection field marker found in a YAML document, the
annotated value is replaced with the Go expression of the controlling field and
the marker comment is replaced with a ``controlled by ...`` note::

    replicas: 3  # +operator-builder:field:name=replicas,type=int

becomes::

    replicas: !!var parent.Spec.Replicas  # controlled by field: replicas
"""

from __future__ import annotations

import logging
import re

from markerscan.fields.errors import FieldMarkerError
from markerscan.fields.field_marker import (
    COLLECTION_FIELD_PREFIX,
    FIELD_PREFIX,
    CollectionFieldMarker,
    FieldMarker,
    source_code_variable,
    title_case,
)
from markerscan.fields.field_types import FieldType
from markerscan.inspect import YAMLResult, YAMLTransformer
from markerscan.yamldoc import STR_TAG, VAR_TAG, Node, NodeKind

logger = logging.getLogger("markerscan.fields")

# ###############
# Public Interface
# ###############

RESERVED_FIELD_NAMES = ("collection", "collection.name", "collection.namespace")


def is_reserved(name: str) -> bool:
    """Return True if ``name`` is kept for fields the generator creates itself."""
    return any(title_case(name) == title_case(reserved) for reserved in RESERVED_FIELD_NAMES)


def build_transformer(field_prefix: str = FIELD_PREFIX, collection_prefix: str = COLLECTION_FIELD_PREFIX) -> YAMLTransformer:
    """Return a YAML transform using the given Go prefixes for field variables."""

    def transform_yaml(results: list[YAMLResult]) -> None:
        for result in results:
            marker = result.object
            if not isinstance(marker, FieldMarker):
                continue
            prefix = collection_prefix if isinstance(marker, CollectionFieldMarker) else field_prefix
            _apply(marker, result, prefix)

    return transform_yaml


def transform_yaml(results: list[YAMLResult]) -> None:
    """Rewrite the nodes of every field marker result, using the default prefixes.

    Raises:
        FieldMarkerError: If a marker names a reserved field, has neither a name
            nor a parent, or its value cannot be rewritten.
    """
    build_transformer()(results)


# ################
# Implementation
# ################


def _apply(marker: FieldMarker, result: YAMLResult, prefix: str) -> None:
    if not marker.name and not marker.parent:
        raise FieldMarkerError(f"field marker requires a 'name' or a 'parent': {result.marker_text}")
    if marker.name and is_reserved(marker.name):
        raise FieldMarkerError(f"{marker.name} field marker cannot be used and is reserved for internal purposes")

    marker.set_source_code_variable(source_code_variable(prefix, marker.name or "", marker.parent or ""))

    key, value = _key_value(result)
    _set_comments(marker, result, key, value)
    try:
        _set_value(marker, value)
    except FieldMarkerError as exc:
        raise FieldMarkerError(f"{exc}; error setting value for marker {result.marker_text}") from exc

    if value.kind == NodeKind.DOCUMENT:
        logger.debug("rewrote document comment of field %s", marker.source_code_variable)
    else:
        logger.debug("rewrote %r as %s", marker.original_value, value.value)


def _key_value(result: YAMLResult) -> tuple[Node, Node]:
    if len(result.nodes) > 1:
        return result.nodes[0], result.nodes[1]
    return result.nodes[0], result.nodes[0]


def _set_comments(marker: FieldMarker, result: YAMLResult, key: Node, value: Node) -> None:
    if marker.description:
        marker.description = marker.description.removeprefix("\n")
        key.head_comment = key.head_comment + "\n# " + marker.description

    replace_text = result.marker_text.removesuffix("\n").replace("\n", "\n#")

    key.foot_comment = ""
    key.head_comment = key.head_comment.replace(replace_text, marker.control_text)
    key.line_comment = key.line_comment.replace(replace_text, marker.control_text)
    value.line_comment = value.line_comment.replace(replace_text, marker.control_text)


def _set_value(marker: FieldMarker, value: Node) -> None:
    if value.kind == NodeKind.DOCUMENT:
        # only the comments of a document carry the marker; its content stays
        marker.set_original_value(value.value)
        return
    if value.kind != NodeKind.SCALAR:
        value.kind = NodeKind.SCALAR
        value.content = []
        value.flow_style = False

    marker.set_original_value(value.value)

    if marker.replace:
        try:
            pattern = re.compile(marker.replace)
        except re.error as exc:
            raise FieldMarkerError(f"unable to convert {marker.replace} to regex, {exc}") from exc
        expression = _field_expression(marker)
        value.tag = STR_TAG
        value.value = pattern.sub(lambda _: expression, value.value)
    else:
        value.tag = VAR_TAG
        value.value = marker.source_code_variable
        value.style = None


def _field_expression(marker: FieldMarker) -> str:
    variable = marker.source_code_variable
    if marker.type == FieldType.STRING:
        expression = variable
    elif marker.type == FieldType.INT:
        expression = f"strconv.Itoa({variable})"
    elif marker.type == FieldType.BOOL:
        expression = f"strconv.FormatBool({variable})"
    else:
        raise FieldMarkerError(f"unable to replace text for field of type {marker.type}")
    return f"!!start {expression} !!end"
