# Copyright 2026 MarkerScan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the marker schema registry."""

import pytest
from pydantic import BaseModel

from markerscan.marker import Registry, UnknownMarkerError, define

# ###############
# Test Helpers
# ###############


class Galaxy(BaseModel):
    planet: str


class Star(BaseModel):
    name: str
    mass: float | None = None


def _registry() -> Registry:
    registry = Registry()
    registry.add(define("+galaxy", Galaxy))
    registry.add(define("+galaxy:star", Star))
    return registry


# ###############
# Registration
# ###############


class TestRegistration:
    def test_empty_registry(self) -> None:
        registry = Registry()
        assert len(registry) == 0
        assert not registry.lookup("+galaxy")

    def test_added_definitions_can_be_looked_up(self) -> None:
        registry = _registry()
        assert len(registry) == 2
        assert registry.lookup("+galaxy")
        assert registry.lookup("+galaxy:star")
        assert "+galaxy" in registry

    def test_lookup_is_exact(self) -> None:
        registry = _registry()
        assert not registry.lookup("+gal")
        assert not registry.lookup("+galaxy:star:dust")

    def test_adding_same_name_replaces_definition(self) -> None:
        registry = _registry()
        registry.add(define("+galaxy", Star))
        assert len(registry) == 2
        assert registry.get_definition("+galaxy").output is Star


# ###############
# Fetching Definitions
# ###############


class TestGetDefinition:
    def test_unknown_marker_raises(self) -> None:
        with pytest.raises(UnknownMarkerError, match="\\+nebula"):
            _registry().get_definition("+nebula")

    def test_returned_definition_is_a_copy(self) -> None:
        registry = _registry()
        first = registry.get_definition("+galaxy:star")
        first.set_argument("name", "sun")

        second = registry.get_definition("+galaxy:star")
        assert first is not second
        assert not second.fields["name"].is_set

    def test_copies_inflate_independently(self) -> None:
        registry = _registry()
        first = registry.get_definition("+galaxy")
        second = registry.get_definition("+galaxy")
        first.set_argument("planet", "earth")
        second.set_argument("planet", "mars")

        assert first.inflate_object().planet == "earth"
        assert second.inflate_object().planet == "mars"
