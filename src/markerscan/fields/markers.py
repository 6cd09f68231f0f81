# Copyright 2026 MarkerScan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Registration of the built-in markers and YAML inspection with them."""

from __future__ import annotations

import logging

from markerscan.config import MarkerConfig, MarkerType
from markerscan.fields.field_marker import (
    COLLECTION_FIELD_MARKER_PREFIX,
    FIELD_MARKER_PREFIX,
    CollectionFieldMarker,
    FieldMarker,
)
from markerscan.fields.resource_marker import RESOURCE_MARKER_PREFIX, MarkerCollection, ResourceMarker
from markerscan.fields.transform import build_transformer
from markerscan.inspect import InspectionError, Inspector, YAMLResult
from markerscan.marker import Registry, define
from markerscan.parser import Result
from markerscan.yamldoc import Node

logger = logging.getLogger("markerscan.fields")

# ###############
# Public Interface
# ###############


def define_field_marker(registry: Registry) -> None:
    registry.add(define(FIELD_MARKER_PREFIX, FieldMarker))


def define_collection_field_marker(registry: Registry) -> None:
    registry.add(define(COLLECTION_FIELD_MARKER_PREFIX, CollectionFieldMarker))


def define_resource_marker(registry: Registry) -> None:
    registry.add(define(RESOURCE_MARKER_PREFIX, ResourceMarker))


def build_registry(config: MarkerConfig | None = None) -> Registry:
    """Return a registry holding the built-in markers enabled by ``config``.

    All three built-in markers are registered when no configuration is given.
    """
    config = config or MarkerConfig()
    registry = Registry()
    for marker_type in MarkerType:
        if config.enabled(marker_type):
            _DEFINERS[marker_type](registry)
    return registry


def inspect_for_yaml(content: str, config: MarkerConfig | None = None) -> tuple[list[Node], list[YAMLResult]]:
    """Find the built-in markers in ``content`` and rewrite the values they annotate.

    Returns:
        The rewritten documents and the markers found in them.

    Raises:
        InspectionError: If the YAML is invalid, a marker is invalid, or a value
            cannot be rewritten.
    """
    config = config or MarkerConfig()
    inspector = Inspector(build_registry(config))
    transform = build_transformer(config.field_prefix, config.collection_prefix)

    try:
        return inspector.inspect_yaml(content, transform)
    except InspectionError as exc:
        raise InspectionError(f"{exc}; error inspecting YAML for markers") from exc


def collect_markers(
    results: list[Result],
    collection: MarkerCollection | None = None,
    for_collection: bool = False,
) -> MarkerCollection:
    """Gather the field and collection field markers among ``results``.

    Args:
        results: Results from an inspection.
        collection: An existing collection to extend; a new one is created otherwise.
        for_collection: Flag the gathered field markers as annotating resources
            of a collection.

    Returns:
        The collection holding the gathered markers.
    """
    if collection is None:
        collection = MarkerCollection()
    for result in results:
        marker = result.object
        if isinstance(marker, FieldMarker):
            if for_collection and not isinstance(marker, CollectionFieldMarker):
                marker.set_for_collection(True)
            collection.add(marker)
    return collection


def process_resource_markers(results: list[Result], collection: MarkerCollection) -> list[ResourceMarker]:
    """Pair every resource marker among ``results`` with its field marker.

    Returns:
        The processed resource markers, with their include code rendered.

    Raises:
        ResourceMarkerError: If a resource marker is invalid or cannot be paired.
    """
    resource_markers: list[ResourceMarker] = []
    for result in results:
        marker = result.object
        if not isinstance(marker, ResourceMarker):
            continue
        marker.process(collection)
        logger.debug("resource marker %s paired with %s", marker, marker.field_marker)
        resource_markers.append(marker)
    return resource_markers


# ################
# Implementation
# ################

_DEFINERS = {
    MarkerType.FIELD: define_field_marker,
    MarkerType.COLLECTION_FIELD: define_collection_field_marker,
    MarkerType.RESOURCE: define_resource_marker,
}
