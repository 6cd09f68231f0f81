# Copyright 2026 MarkerScan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Comment-carrying YAML node tree."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum

# ###############
# Public Interface
# ###############

YAML_TAG_PREFIX = "tag:yaml.org,2002:"

STR_TAG = "!!str"
INT_TAG = "!!int"
BOOL_TAG = "!!bool"
FLOAT_TAG = "!!float"
NULL_TAG = "!!null"
MAP_TAG = "!!map"
SEQ_TAG = "!!seq"
VAR_TAG = "!!var"


class YAMLDocumentError(Exception):
    """Raised when YAML text cannot be loaded or a node tree cannot be emitted."""


class NodeKind(Enum):
    """Kinds of node in a YAML document tree."""

    DOCUMENT = "document"
    MAPPING = "mapping"
    SEQUENCE = "sequence"
    SCALAR = "scalar"


@dataclass(eq=False)
class Node:
    """A YAML node with the comments attached to it.

    Comments keep their leading ``#``; a comment spanning several lines holds
    them joined by newlines.

    Attributes:
        kind: What kind of node this is.
        tag: Short tag form, e.g. ``!!str`` or ``!!var``.
        value: Scalar text; empty for collections.
        style: Scalar style as written: None (plain), ``'``, ``"``, ``|`` or ``>``.
        flow_style: Whether a collection was written in flow style.
        content: Children. A mapping holds its keys and values interleaved as
            ``[key, value, key, value, ...]``; a document holds its root node.
        head_comment: Comment lines directly above the node.
        line_comment: Comment trailing the node on its line.
        foot_comment: Comment lines following the node, closed by a blank line.
        line: 1-based line of the node in the loaded text (0 for built nodes).
        column: 1-based column of the node in the loaded text (0 for built nodes).
    """

    kind: NodeKind
    tag: str = ""
    value: str = ""
    style: str | None = None
    flow_style: bool = False
    content: list[Node] = field(default_factory=list)
    head_comment: str = ""
    line_comment: str = ""
    foot_comment: str = ""
    line: int = 0
    column: int = 0

    @property
    def comments(self) -> str:
        """Return the head, line and foot comments joined by newlines."""
        return "\n".join((self.head_comment, self.line_comment, self.foot_comment))

    def pairs(self) -> Iterator[tuple[Node, Node]]:
        """Iterate over the (key, value) pairs of a mapping node."""
        if self.kind != NodeKind.MAPPING:
            raise YAMLDocumentError(f"expected a mapping node, got {self.kind.value}")
        for index in range(0, len(self.content) - 1, 2):
            yield self.content[index], self.content[index + 1]

    def get(self, key: str) -> Node | None:
        """Return the value node stored under a scalar ``key`` of a mapping node."""
        for key_node, value_node in self.pairs():
            if key_node.kind == NodeKind.SCALAR and key_node.value == key:
                return value_node
        return None


def short_tag(tag: str | None) -> str:
    """Turn ``tag:yaml.org,2002:str`` into ``!!str``; other tags are returned unchanged."""
    if not tag:
        return ""
    if tag.startswith(YAML_TAG_PREFIX):
        return "!!" + tag[len(YAML_TAG_PREFIX) :]
    return tag


def long_tag(tag: str) -> str:
    """Turn ``!!str`` into ``tag:yaml.org,2002:str``; other tags are returned unchanged."""
    if tag.startswith("!!"):
        return YAML_TAG_PREFIX + tag[2:]
    return tag
