# Copyright 2026 MarkerScan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Load YAML text into a comment-carrying node tree.

ruamel.yaml's round-trip scanner reports every comment it passes; the
composed nodes supply structure, tags, styles and positions.  Comments are
attached to the composed nodes by position:

1. Line comments: a comment trailing a node on its line.  For ``key: value  # c``
   it belongs to the value; for ``key:  # c`` followed by a nested block it
   belongs to the key.
2. Foot comments: comment lines directly after an entry that are not followed
   by another node, i.e. closed by a blank line or the end of the document.
   Inner entries are served first.
3. Head comments: the unclaimed comment lines directly above an entry.  For the
   first entry of a document only the contiguous run counts; anything above a
   blank line is the document's head comment.

Comments left over become the document's head or foot comment.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError
from ruamel.yaml.nodes import MappingNode, ScalarNode
from ruamel.yaml.nodes import Node as ComposedNode
from ruamel.yaml.scanner import RoundTripScanner

from markerscan.yamldoc.node import Node, NodeKind, YAMLDocumentError, short_tag

# ###############
# Public Interface
# ###############


def load_documents(text: str) -> list[Node]:
    """Load every document in ``text``.

    Returns:
        One DOCUMENT node per YAML document, each holding its root node.

    Raises:
        YAMLDocumentError: If the text is not valid YAML.
    """
    composed, comments = _compose(text)

    documents = []
    for index, (start_line, root) in enumerate(composed):
        first = 0 if index == 0 else start_line
        end = composed[index + 1][0] if index + 1 < len(composed) else None
        documents.append(_DocumentBuilder(comments, first, end).build(root))

    return documents


def load_document(text: str) -> Node:
    """Load text holding exactly one YAML document.

    Raises:
        YAMLDocumentError: If the text is not valid YAML or does not hold exactly one document.
    """
    documents = load_documents(text)
    if len(documents) != 1:
        raise YAMLDocumentError(f"expected exactly one YAML document, found {len(documents)}")
    return documents[0]


# ################
# Implementation
# ################

_BLOCK_STYLES = ("|", ">")


@dataclass
class _Comment:
    column: int
    text: str
    inline: bool = False


class _CommentScanner(RoundTripScanner):
    """Round-trip scanner that records each comment by its 0-based line."""

    def __init__(self, loader: Any = None) -> None:
        self.comments: dict[int, _Comment] = {}
        super().__init__(loader=loader)

    def scan_to_next_token(self) -> Any:
        comment = super().scan_to_next_token()
        if comment is not None:
            value, start_mark, _ = comment
            if value.startswith("#"):
                self.comments[start_mark.line] = _Comment(start_mark.column, value.split("\n", 1)[0].rstrip())
        return comment

    def scan_block_scalar_ignored_line(self, start_mark: Any) -> Any:
        mark = self.reader.get_mark()
        comment = super().scan_block_scalar_ignored_line(start_mark)
        if comment is not None:
            text = comment.lstrip(" ")
            self.comments[mark.line] = _Comment(mark.column + len(comment) - len(text), text.rstrip())
        return comment


def _compose(text: str) -> tuple[list[tuple[int, ComposedNode]], dict[int, _Comment]]:
    """Compose each document, paired with the 0-based line its document starts on."""
    yaml = YAML(typ="rt")
    yaml.Scanner = _CommentScanner
    constructor, parser = yaml.get_constructor_parser(text)
    composer = constructor.composer
    documents = []
    try:
        while composer.check_node():
            start = parser.peek_event().start_mark
            documents.append((start.line, composer.get_node()))
    except YAMLError as exc:
        raise YAMLDocumentError(f"unable to load YAML: {exc}") from exc
    finally:
        parser.dispose()
    return documents, yaml.scanner.comments


def _tag(composed: ComposedNode) -> str:
    ctag = composed.ctag
    if ctag.handle:
        return ctag.handle + (ctag.suffix or "")
    return short_tag(ctag.suffix)


@dataclass
class _Span:
    start_line: int
    start_col: int
    last_line: int


class _DocumentBuilder:
    """Converts one composed document and attaches the comments that fall inside it."""

    def __init__(self, comments: dict[int, _Comment], first: int, end: int | None) -> None:
        self._comments = {
            line: comment for line, comment in comments.items() if line >= first and (end is None or line < end)
        }
        self._first = first
        self._end = end
        self._claimed: set[int] = set()
        self._spans: dict[int, _Span] = {}
        self._converted: dict[int, Node] = {}
        # Lowest column holding content on a line: where a node starts or a one-line node ends.
        self._content: dict[int, int] = {}
        self._root_line = 0

    def build(self, composed: ComposedNode) -> Node:
        root = self._convert(composed)
        self._root_line = self._span(root).start_line
        for line, comment in self._comments.items():
            comment.inline = line in self._content and self._content[line] < comment.column

        if not self._is_block_collection(root):
            self._attach_trailing(root)
            root.head_comment = self._head_run(self._root_line)
        self._attach_line_comments(root)
        self._attach_foot_comments(root)
        self._attach_head_comments(root)

        document = Node(NodeKind.DOCUMENT, content=[root], line=root.line, column=1)
        head, foot = [], []
        for line in sorted(self._comments):
            if self._is_full_line(line) and line not in self._claimed:
                (head if line < self._root_line else foot).append(self._comments[line].text)
        document.head_comment = "\n".join(head)
        document.foot_comment = "\n".join(foot)
        return document

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def _convert(self, composed: ComposedNode) -> Node:
        known = self._converted.get(id(composed))
        if known is not None:
            return known

        start, end = composed.start_mark, composed.end_mark
        if isinstance(composed, ScalarNode):
            node = Node(
                NodeKind.SCALAR,
                tag=_tag(composed),
                value=composed.value,
                style=composed.style or None,
                line=start.line + 1,
                column=start.column + 1,
            )
            self._converted[id(composed)] = node
            self._mark_content(start.line, start.column)
            last = self._last_line(start.line, end.line, end.column)
            if node.style not in _BLOCK_STYLES:
                self._mark_end(end.line, end.column)
            self._spans[id(node)] = _Span(start.line, start.column, last)
            return node

        kind = NodeKind.MAPPING if isinstance(composed, MappingNode) else NodeKind.SEQUENCE
        node = Node(
            kind,
            tag=_tag(composed),
            flow_style=bool(composed.flow_style),
            line=start.line + 1,
            column=start.column + 1,
        )
        self._converted[id(composed)] = node
        self._mark_content(start.line, start.column)
        if kind == NodeKind.MAPPING:
            for key, value in composed.value:
                node.content.extend((self._convert(key), self._convert(value)))
        else:
            node.content = [self._convert(item) for item in composed.value]

        if node.flow_style or not node.content:
            last = self._last_line(start.line, end.line, end.column)
            self._mark_end(end.line, end.column)
        else:
            last = self._span(node.content[-1]).last_line
        self._spans[id(node)] = _Span(start.line, start.column, last)
        return node

    def _mark_content(self, line: int, column: int) -> None:
        self._content[line] = min(self._content.get(line, column), column)

    def _mark_end(self, line: int, column: int) -> None:
        if column > 0:
            self._mark_content(line, column - 1)

    @staticmethod
    def _last_line(start_line: int, end_line: int, end_col: int) -> int:
        """Return the last line holding part of a node, given its end mark."""
        if end_line > start_line and end_col == 0:
            return end_line - 1
        return end_line

    def _span(self, node: Node) -> _Span:
        return self._spans[id(node)]

    def _is_full_line(self, line: int) -> bool:
        comment = self._comments.get(line)
        return comment is not None and not comment.inline

    def _is_occupied(self, line: int) -> bool:
        """Whether a line holds a comment or the start of a node."""
        return line in self._comments or line in self._content

    def _in_document(self, line: int) -> bool:
        return self._end is None or line < self._end

    @staticmethod
    def _is_block_collection(node: Node) -> bool:
        return node.kind in (NodeKind.MAPPING, NodeKind.SEQUENCE) and not node.flow_style and bool(node.content)

    # ------------------------------------------------------------------
    # Line comments
    # ------------------------------------------------------------------

    def _attach_line_comments(self, node: Node) -> None:
        if node.kind == NodeKind.MAPPING and not node.flow_style:
            for key, value in node.pairs():
                if self._is_block_collection(value):
                    key.line_comment = self._trailing_comment(self._span(key).last_line)
                else:
                    self._attach_trailing(value)
                self._attach_line_comments(value)
        elif node.kind == NodeKind.SEQUENCE and not node.flow_style:
            for item in node.content:
                if not self._is_block_collection(item):
                    self._attach_trailing(item)
                self._attach_line_comments(item)

    def _attach_trailing(self, node: Node) -> None:
        span = self._span(node)
        if node.kind == NodeKind.SCALAR and node.style in _BLOCK_STYLES:
            node.line_comment = self._trailing_comment(span.start_line)
        else:
            node.line_comment = self._trailing_comment(span.last_line)

    def _trailing_comment(self, line: int) -> str:
        comment = self._comments.get(line)
        if comment is None or not comment.inline or line in self._claimed:
            return ""
        self._claimed.add(line)
        return comment.text

    # ------------------------------------------------------------------
    # Foot and head comments
    # ------------------------------------------------------------------

    def _attach_foot_comments(self, node: Node) -> None:
        if node.flow_style:
            return
        if node.kind == NodeKind.MAPPING:
            for key, value in node.pairs():
                self._attach_foot_comments(value)
                key.foot_comment = self._foot_run(self._span(value).last_line, self._span(key).start_col)
        elif node.kind == NodeKind.SEQUENCE:
            column = self._span(node).start_col
            for item in node.content:
                self._attach_foot_comments(item)
                item.foot_comment = self._foot_run(self._span(item).last_line, column)

    def _foot_run(self, last_line: int, min_column: int) -> str:
        run = []
        line = last_line + 1
        while (
            self._in_document(line)
            and self._is_full_line(line)
            and line not in self._claimed
            and self._comments[line].column >= min_column
        ):
            run.append(line)
            line += 1

        if not run:
            return ""
        if self._in_document(line) and self._is_occupied(line):
            return ""
        return self._claim(run)

    def _attach_head_comments(self, node: Node) -> None:
        if node.flow_style:
            return
        if node.kind == NodeKind.MAPPING:
            for key, value in node.pairs():
                key.head_comment = self._head_run(self._span(key).start_line)
                self._attach_head_comments(value)
        elif node.kind == NodeKind.SEQUENCE:
            for item in node.content:
                item.head_comment = self._head_run(self._span(item).start_line)
                self._attach_head_comments(item)

    def _head_run(self, first_line: int) -> str:
        contiguous = first_line == self._root_line
        run = []
        line = first_line - 1
        while line >= self._first and line not in self._claimed:
            if self._is_full_line(line):
                run.append(line)
            elif self._is_occupied(line) or contiguous:
                break
            line -= 1
        run.reverse()
        return self._claim(run)

    def _claim(self, run: list[int]) -> str:
        self._claimed.update(run)
        return "\n".join(self._comments[line].text for line in run)

