# Copyright 2026 MarkerScan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Discover markers in free text and in the comments of YAML documents."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from markerscan.marker import Registry
from markerscan.parser import Parser, Result
from markerscan.yamldoc import Node, NodeKind, YAMLDocumentError, load_documents

logger = logging.getLogger("markerscan.inspect")

# ###############
# Public Interface
# ###############


class InspectionError(Exception):
    """Raised when a YAML input cannot be inspected or one of its markers is invalid."""


class TransformError(Exception):
    """Base class for errors raised by YAML transforms."""


@dataclass
class YAMLResult(Result):
    """A parsed marker together with the YAML nodes whose comments held it.

    Attributes:
        nodes: The key and value node for a mapping entry, otherwise the single node.
    """

    nodes: list[Node] = field(default_factory=list)


YAMLTransformer = Callable[[list[YAMLResult]], None]


class Inspector:
    """Runs a fresh parser over each piece of text handed to it.

    Attributes:
        registry: The marker schemas to recognize.
    """

    def __init__(self, registry: Registry) -> None:
        self.registry = registry

    def parse(self, text: str) -> list[Result]:
        """Return every registered marker in ``text``."""
        return Parser(text, self.registry).parse()

    def inspect_text(self, text: str) -> list[Result]:
        """Return every registered marker in source text, such as Go or YAML comments.

        Raises:
            InspectionError: If a marker could not be lexed, parsed, or inflated.
        """
        results = self.parse(text)
        _raise_on_error(results)
        return results

    def inspect_yaml(self, content: str, *transforms: YAMLTransformer) -> tuple[list[Node], list[YAMLResult]]:
        """Find the markers in the comments of every document in ``content``.

        Each transform is then called, in order, with the full result list and
        may rewrite the documents in place.

        Returns:
            The loaded documents and the results found in them.

        Raises:
            InspectionError: If the content is not valid YAML, a marker is invalid,
                or a transform fails.
        """
        try:
            documents = load_documents(content)
        except YAMLDocumentError as exc:
            raise InspectionError(f"error unmarshaling yaml, {exc}") from exc

        results: list[YAMLResult] = []
        for document in documents:
            results.extend(self._inspect_nodes([document]))

        _raise_on_error(results)

        for transform in transforms:
            try:
                transform(results)
            except TransformError as exc:
                logger.warning("YAML transform %s failed: %s", getattr(transform, "__name__", transform), exc)
                raise InspectionError(str(exc)) from exc

        return documents, results

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def _inspect_nodes(self, nodes: list[Node]) -> list[YAMLResult]:
        results: list[YAMLResult] = []
        for node in nodes:
            results.extend(self._inspect_comments(node))
            if node.kind == NodeKind.MAPPING:
                results.extend(self._inspect_mapping(node))
            elif node.content:
                results.extend(self._inspect_nodes(node.content))
        return results

    def _inspect_mapping(self, mapping: Node) -> list[YAMLResult]:
        results: list[YAMLResult] = []
        for key, value in mapping.pairs():
            results.extend(self._inspect_comments(key, value))
            if value.kind == NodeKind.MAPPING:
                results.extend(self._inspect_mapping(value))
            else:
                results.extend(self._inspect_nodes(value.content))
        return results

    def _inspect_comments(self, *nodes: Node) -> list[YAMLResult]:
        markers: list[Result] = []
        for node in nodes:
            markers.extend(self.parse(node.comments))
        return [YAMLResult(object=m.object, marker_text=m.marker_text, nodes=list(nodes)) for m in markers]


# ################
# Implementation
# ################


def _raise_on_error(results: list[Result]) -> None:
    for result in results:
        if result.is_error:
            logger.warning("invalid marker %r: %s", result.marker_text, result.object)
            raise InspectionError(str(result.object)) from result.object
