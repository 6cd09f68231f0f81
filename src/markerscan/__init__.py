# Copyright 2026 MarkerScan Contributors
# SPDX-License-Identifier: Apache-2.0

"""MarkerScan: find typed ``+scope:arg=value`` markers in comments and YAML documents."""

from markerscan.inspect import InspectionError, Inspector, YAMLResult
from markerscan.lexer import Lexeme, LexemeType, Lexer, tokenize
from markerscan.marker import Definition, Registry, define
from markerscan.parser import MarkerParseError, Parser, Result, parse_markers
from markerscan.yamldoc import Node, NodeKind, dump_documents, load_documents

__all__ = [
    "Definition",
    "InspectionError",
    "Inspector",
    "Lexeme",
    "LexemeType",
    "Lexer",
    "MarkerParseError",
    "Node",
    "NodeKind",
    "Parser",
    "Registry",
    "Result",
    "YAMLResult",
    "define",
    "dump_documents",
    "load_documents",
    "parse_markers",
    "tokenize",
]
