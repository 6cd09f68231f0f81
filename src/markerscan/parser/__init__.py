# Copyright 2026 MarkerScan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Parser binding marker lexemes to registered schemas."""

from markerscan.parser.parser import (
    UNKNOWN_MARKER,
    MarkerParseError,
    Parser,
    ParseStateFn,
    Result,
    parse_markers,
)

__all__ = [
    "MarkerParseError",
    "ParseStateFn",
    "Parser",
    "Result",
    "UNKNOWN_MARKER",
    "parse_markers",
]
