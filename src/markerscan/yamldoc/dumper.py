# Copyright 2026 MarkerScan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Emit a comment-carrying node tree as block-style YAML.

The tree is rebuilt as ruamel.yaml round-trip data (``CommentedMap``,
``CommentedSeq`` and ``TaggedScalar``) with its comments placed in the
``.ca`` comment slots, then written by a round-trip ``YAML`` instance.
"""

from __future__ import annotations

import io
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap, CommentedSeq, TaggedScalar
from ruamel.yaml.error import CommentMark
from ruamel.yaml.nodes import ScalarNode
from ruamel.yaml.tokens import CommentToken

from markerscan.yamldoc.node import (
    BOOL_TAG,
    FLOAT_TAG,
    INT_TAG,
    NULL_TAG,
    STR_TAG,
    Node,
    NodeKind,
    YAMLDocumentError,
    long_tag,
)

# ###############
# Public Interface
# ###############

DOCUMENT_SEPARATOR = "---\n"


def dump_documents(documents: list[Node]) -> str:
    """Emit ``documents`` as YAML text, separated by ``---`` lines.

    Scalars keep their quoting style where it is still valid; a scalar whose
    tag differs from the tag its text resolves to is written with an explicit
    tag, e.g. ``!!var parent.Spec.Name``.

    Raises:
        YAMLDocumentError: If a mapping uses a collection as a key.
    """
    writer = _DocumentWriter()
    return DOCUMENT_SEPARATOR.join(writer.write(document) for document in documents)


def dump_document(document: Node) -> str:
    """Emit a single document (or a bare root node) as YAML text."""
    return _DocumentWriter().write(document)


# ################
# Implementation
# ################

_BLOCK_STYLES = ("|", ">")
# Tags the resolver assigns to plain scalars; anything else is always written explicitly.
_RESOLVED_TAGS = (STR_TAG, INT_TAG, BOOL_TAG, FLOAT_TAG, NULL_TAG, "!!timestamp", "!!merge")

_MAPPING_INDENT = 2
_SEQUENCE_OFFSET = 2
_SEQUENCE_INDENT = 4


class _DocumentWriter:
    def __init__(self) -> None:
        self._yaml = YAML(typ="rt")
        self._yaml.indent(mapping=_MAPPING_INDENT, sequence=_SEQUENCE_INDENT, offset=_SEQUENCE_OFFSET)
        self._yaml.width = 4096

    def write(self, document: Node) -> str:
        if document.kind == NodeKind.DOCUMENT:
            root = document.content[0] if document.content else None
            head, foot = document.head_comment, document.foot_comment
        else:
            root, head, foot = document, "", ""

        stream = io.StringIO()
        if root is not None and not self._is_block_collection(root):
            head = "\n".join((head, root.head_comment))
            foot = "\n".join((root.foot_comment, foot))

        head_lines = _comment_lines(head)
        stream.writelines(f"{line}\n" for line in head_lines)
        if head_lines and root is not None:
            stream.write("\n")
        if root is not None:
            self._yaml.dump(self._root(root), stream)
        foot_lines = _comment_lines(foot)
        if foot_lines:
            stream.write("\n")
            stream.writelines(f"{line}\n" for line in foot_lines)
        return stream.getvalue()

    def _root(self, root: Node) -> Any:
        if root.kind == NodeKind.MAPPING:
            return self._mapping(root, 0)
        if root.kind == NodeKind.SEQUENCE:
            return self._sequence(root, _SEQUENCE_OFFSET)
        return self._scalar(root)

    # ------------------------------------------------------------------
    # Collections
    # ------------------------------------------------------------------

    def _mapping(self, node: Node, column: int) -> CommentedMap:
        """Build a mapping whose keys start at ``column``."""
        mapping = CommentedMap()
        if node.flow_style:
            mapping.fa.set_flow_style()
        for key, value in node.pairs():
            if key.kind != NodeKind.SCALAR:
                raise YAMLDocumentError(f"cannot emit a {key.kind.value} as a mapping key (line {key.line})")
            data_key = self._scalar(key)
            mapping[data_key] = self._value(value, column)
            if node.flow_style:
                continue

            head = _pre_tokens(key.head_comment, column)
            foot = _pre_tokens("\n".join((key.foot_comment, value.foot_comment)), column)
            if foot:
                foot.append(_token("\n", 0))
            if self._is_block_collection(value):
                eol = _eol_token(key.line_comment, value.line_comment)
                if foot:
                    _end_comments(mapping[data_key]).extend(foot)
                mapping.ca.items[data_key] = [None, head, eol, None]
            elif value.kind == NodeKind.SCALAR and value.style in _BLOCK_STYLES:
                trailing = _trailing_text(key.line_comment, value.line_comment)
                after = _after_token(foot)
                mapping.ca.items[data_key] = [None, head, after, [f"  {trailing}"] if trailing else None]
            else:
                eol = _eol_token(key.line_comment, value.line_comment, foot=foot)
                mapping.ca.items[data_key] = [None, head, eol, None]
        return mapping

    def _sequence(self, node: Node, column: int) -> CommentedSeq:
        """Build a sequence whose dashes sit at ``column``."""
        sequence = CommentedSeq()
        if node.flow_style:
            sequence.fa.set_flow_style()
        for index, item in enumerate(node.content):
            sequence.append(self._item(item, column + _SEQUENCE_OFFSET))
            if node.flow_style:
                continue

            head = _pre_tokens(item.head_comment, column)
            foot = _pre_tokens(item.foot_comment, column)
            if foot:
                foot.append(_token("\n", 0))
            if self._is_block_collection(item):
                if item.kind == NodeKind.MAPPING:
                    # The first key shares the line of the dash, so its head goes above the dash.
                    head.extend(_pre_tokens(item.content[0].head_comment, column))
                    _drop_first_head(sequence[index])
                if head:
                    _start_comments(sequence[index]).extend(head)
                if foot:
                    _end_comments(sequence[index]).extend(foot)
            else:
                eol = _eol_token(item.line_comment, foot=foot)
                if eol or head:
                    sequence.ca.items[index] = [eol, head or None]
        return sequence

    def _value(self, node: Node, column: int) -> Any:
        """Build the value of a mapping entry whose key starts at ``column``."""
        if node.kind == NodeKind.MAPPING:
            return self._mapping(node, column + _MAPPING_INDENT)
        if node.kind == NodeKind.SEQUENCE:
            return self._sequence(node, column + _SEQUENCE_OFFSET)
        return self._scalar(node)

    def _item(self, node: Node, column: int) -> Any:
        """Build a sequence item whose content starts at ``column``."""
        if node.kind == NodeKind.MAPPING:
            return self._mapping(node, column)
        if node.kind == NodeKind.SEQUENCE:
            return self._sequence(node, column)
        return self._scalar(node)

    # ------------------------------------------------------------------
    # Scalars
    # ------------------------------------------------------------------

    def _scalar(self, node: Node) -> TaggedScalar:
        if node.kind != NodeKind.SCALAR:
            raise YAMLDocumentError(f"cannot emit a {node.kind.value} node as a scalar")
        tag: Any = node.tag
        if tag in ("", "!"):
            tag = self._yaml.resolver.resolve(ScalarNode, node.value, (True, False))
        elif tag in _RESOLVED_TAGS:
            tag = long_tag(tag)
        return TaggedScalar(node.value, style=node.style, tag=tag)

    @staticmethod
    def _is_block_collection(node: Node) -> bool:
        return node.kind in (NodeKind.MAPPING, NodeKind.SEQUENCE) and not node.flow_style and bool(node.content)


# ------------------------------------------------------------------
# Comment tokens
# ------------------------------------------------------------------


def _comment_lines(text: str) -> list[str]:
    """Split comment text into ``#`` lines, dropping empty ones."""
    return [_commented(line.strip()) for line in text.split("\n") if line.strip()]


def _commented(line: str) -> str:
    return line if line.startswith("#") else f"# {line}"


def _token(value: str, column: int) -> CommentToken:
    return CommentToken(value, CommentMark(column), None)


def _pre_tokens(text: str, column: int) -> list[CommentToken]:
    """Tokens for comment lines written on their own lines at ``column``."""
    return [_token(f"{line}\n", column) for line in _comment_lines(text)]


def _trailing_text(*comments: str) -> str:
    return " ".join(line for comment in comments for line in _comment_lines(comment))


def _eol_token(*comments: str, foot: list[CommentToken] | None = None) -> CommentToken | None:
    """One token holding the comment trailing a line and the comment lines below it.

    The emitter writes a trailing comment one space after the content, so the
    text starts with a space to leave two.
    """
    trailing = _trailing_text(*comments)
    below = "".join(" " * token.column + token.value for token in foot or [])
    if not trailing and not below:
        return None
    value = f" {trailing}" if trailing else ""
    return _token(f"{value}\n{below}", 0)


def _after_token(foot: list[CommentToken]) -> CommentToken | None:
    if not foot:
        return None
    return _token("".join(" " * token.column + token.value for token in foot), 0)


def _start_comments(data: CommentedMap | CommentedSeq) -> list[CommentToken]:
    """Comment lines written above a block collection."""
    if data.ca.comment is None:
        data.ca.comment = [None, []]
    if data.ca.comment[1] is None:
        data.ca.comment[1] = []
    return data.ca.comment[1]


def _end_comments(data: CommentedMap | CommentedSeq) -> list[CommentToken]:
    """Comment lines written below a block collection's last entry."""
    # The representer only carries end comments along when a start slot exists.
    if data.ca.comment is None:
        data.ca.comment = [None, None]
    return data.ca.end


def _drop_first_head(mapping: CommentedMap) -> None:
    entry = mapping.ca.items.get(next(iter(mapping), None))
    if entry:
        entry[1] = None
