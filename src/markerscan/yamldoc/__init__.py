# Copyright 2026 MarkerScan Contributors
# SPDX-License-Identifier: Apache-2.0

"""YAML node tree that keeps head, line and foot comments."""

from markerscan.yamldoc.dumper import dump_document, dump_documents
from markerscan.yamldoc.loader import load_document, load_documents
from markerscan.yamldoc.node import (
    BOOL_TAG,
    FLOAT_TAG,
    INT_TAG,
    MAP_TAG,
    NULL_TAG,
    SEQ_TAG,
    STR_TAG,
    VAR_TAG,
    Node,
    NodeKind,
    YAMLDocumentError,
    long_tag,
    short_tag,
)

__all__ = [
    # Tree
    "Node",
    "NodeKind",
    "YAMLDocumentError",
    # Tags
    "BOOL_TAG",
    "FLOAT_TAG",
    "INT_TAG",
    "MAP_TAG",
    "NULL_TAG",
    "SEQ_TAG",
    "STR_TAG",
    "VAR_TAG",
    "long_tag",
    "short_tag",
    # Loading and emitting
    "dump_document",
    "dump_documents",
    "load_document",
    "load_documents",
]
