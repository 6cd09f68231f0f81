# Copyright 2026 MarkerScan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Registry of marker schemas keyed by scope prefix."""

from __future__ import annotations

from markerscan.marker.definition import Definition
from markerscan.marker.errors import MarkerError

# ###############
# Public Interface
# ###############


class UnknownMarkerError(MarkerError):
    """Raised when fetching a schema for a scope prefix that was never registered."""


class Registry:
    """Maps scope prefixes such as ``+operator-builder:field`` to marker schemas.

    All schemas must be added before parsing starts. Fetching a schema returns a
    copy, so parses never observe each other's bound arguments.
    """

    def __init__(self) -> None:
        self._definitions: dict[str, Definition] = {}

    def add(self, definition: Definition) -> None:
        """Register ``definition`` under its name, replacing any earlier schema."""
        self._definitions[definition.name] = definition

    def lookup(self, name: str) -> bool:
        """Return True if a schema is registered for ``name``."""
        return name in self._definitions

    def get_definition(self, name: str) -> Definition:
        """Return a fresh copy of the schema registered for ``name``.

        Raises:
            UnknownMarkerError: If no schema is registered for ``name``.
        """
        try:
            template = self._definitions[name]
        except KeyError:
            raise UnknownMarkerError(f"no marker registered for {name!r}") from None
        return template.copy()

    def __len__(self) -> int:
        return len(self._definitions)

    def __contains__(self, name: object) -> bool:
        return name in self._definitions
