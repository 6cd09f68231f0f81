# Copyright 2026 MarkerScan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the marker parser."""

import logging

import pytest
from pydantic import BaseModel, Field

from markerscan.marker import Registry, define
from markerscan.parser import UNKNOWN_MARKER, MarkerParseError, Parser, Result, parse_markers

# ###############
# Test Helpers
# ###############


class Galaxy(BaseModel):
    planet: str
    moon: int | None = None
    habitable: bool | None = None


class Planet(BaseModel):
    name: str
    solar_system: str = Field(json_schema_extra={"marker": "solar-system"})


@pytest.fixture
def registry() -> Registry:
    registry = Registry()
    registry.add(define("+galaxy", Galaxy))
    registry.add(define("+planet", Planet))
    return registry


def _parse(source: str, registry: Registry) -> list[Result]:
    return parse_markers(source, registry)


def _single(source: str, registry: Registry) -> Result:
    results = _parse(source, registry)
    assert len(results) == 1
    return results[0]


# ###############
# Successful Markers
# ###############


class TestMarkers:
    def test_single_argument_marker(self, registry: Registry) -> None:
        result = _single("+galaxy:planet=earth", registry)
        assert not result.is_error
        assert isinstance(result.object, Galaxy)
        assert result.object.planet == "earth"
        assert result.marker_text == "+galaxy:planet=earth"

    def test_two_required_arguments(self, registry: Registry) -> None:
        result = _single("+planet:name=earth,solar-system=milky-way", registry)
        assert isinstance(result.object, Planet)
        assert result.object.name == "earth"
        assert result.object.solar_system == "milky-way"
        assert result.marker_text == "+planet:name=earth,solar-system=milky-way"

    def test_typed_arguments(self, registry: Registry) -> None:
        result = _single("+galaxy:planet=earth,moon=1,habitable=true", registry)
        assert result.object.moon == 1
        assert result.object.habitable is True

    def test_bare_argument_is_true(self, registry: Registry) -> None:
        result = _single("+galaxy:planet=earth,habitable", registry)
        assert result.object.habitable is True
        assert result.marker_text == "+galaxy:planet=earth,habitable"

    def test_false_literal(self, registry: Registry) -> None:
        result = _single("+galaxy:planet=earth,habitable=false", registry)
        assert result.object.habitable is False

    def test_quoted_value_keeps_quotes_in_marker_text(self, registry: Registry) -> None:
        result = _single('+galaxy:planet="earth"', registry)
        assert result.object.planet == "earth"
        assert result.marker_text == '+galaxy:planet="earth"'

    @pytest.mark.parametrize("lead", ["// ", "# ", "  #   "])
    def test_marker_in_comment(self, registry: Registry, lead: str) -> None:
        result = _single(f"{lead}+galaxy:planet=earth", registry)
        assert result.marker_text == "+galaxy:planet=earth"

    def test_marker_after_prose(self, registry: Registry) -> None:
        result = _single("// see +galaxy:planet=earth for details", registry)
        assert result.object.planet == "earth"

    def test_results_follow_input_order(self, registry: Registry) -> None:
        results = _parse("# +galaxy:planet=earth\n# +galaxy:planet=mars\n# +galaxy:planet=venus", registry)
        assert [result.object.planet for result in results] == ["earth", "mars", "venus"]

    def test_backtick_value_spanning_comment_lines(self, registry: Registry) -> None:
        result = _single("# +galaxy:planet=`blue\n# marble`", registry)
        assert result.object.planet == "blue\n marble"
        assert result.marker_text == "+galaxy:planet=`blue\n marble`"

    def test_each_parse_inflates_new_objects(self, registry: Registry) -> None:
        first = _single("+galaxy:planet=earth", registry)
        second = _single("+galaxy:planet=earth", registry)
        assert first.object is not second.object
        assert first.object == second.object


# ###############
# Ignored Input
# ###############


class TestIgnored:
    @pytest.mark.parametrize("source", ["", "plain prose", "// 2+2=4", "# ++ and more", "+foo"])
    def test_no_results(self, registry: Registry, source: str) -> None:
        assert _parse(source, registry) == []

    def test_unknown_marker_is_silently_ignored(self, registry: Registry) -> None:
        assert _parse("+unknown:scope:arg=1", registry) == []

    def test_markers_after_unknown_marker_are_parsed(self, registry: Registry) -> None:
        results = _parse("+unknown:scope:arg=1 +galaxy:planet=earth", registry)
        assert len(results) == 1
        assert results[0].marker_text == "+galaxy:planet=earth"

    def test_longer_unregistered_scope_is_ignored(self, registry: Registry) -> None:
        assert _parse("+galaxy:star:dust=1", registry) == []

    def test_unknown_argument_drops_marker(self, registry: Registry) -> None:
        results = _parse("+galaxy:planet=earth,star=sun +galaxy:planet=mars", registry)
        assert [result.object.planet for result in results] == ["mars"]

    def test_lexer_warnings_are_logged(self, registry: Registry, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="markerscan.parser"):
            assert _parse("+foo", registry) == []
        assert "marker without scope found" in caplog.text


# ###############
# Errors
# ###############


class TestErrors:
    def test_wrong_type_is_an_error_result(self, registry: Registry) -> None:
        result = _single("+galaxy:planet=3", registry)
        assert result.is_error
        error = result.object
        assert isinstance(error, MarkerParseError)
        assert error.marker_name == "+galaxy"
        assert (error.line, error.column) == (1, 16)
        assert str(error) == (
            "incorrect type, wanted 'str' but received 'int' on arg planet, on marker +galaxy at {line:1 column:16}"
        )

    def test_parsing_continues_after_error(self, registry: Registry) -> None:
        results = _parse("+galaxy:planet=3 +galaxy:planet=earth", registry)
        assert [result.is_error for result in results] == [True, False]
        assert results[1].object.planet == "earth"

    def test_missing_arguments(self, registry: Registry) -> None:
        result = _single("+galaxy:moon=1", registry)
        assert result.is_error
        assert result.object.cause == "unable to inflate object, missing arguments: ['planet']"
        assert result.object.marker_name == "+galaxy"

    def test_missing_arguments_names_every_unset_argument(self, registry: Registry) -> None:
        result = _single("+planet:name=earth", registry)
        assert result.is_error
        assert result.object.cause == "unable to inflate object, missing arguments: ['solar-system']"

    def test_invalid_float_literal(self, registry: Registry) -> None:
        result = _single("+galaxy:moon=1.2.3", registry)
        assert result.is_error
        assert result.object.cause.startswith('invalid float literal "1.2.3"')
        assert result.object.marker_name == "+galaxy"
        assert result.marker_text == "+galaxy:moon="

    def test_lex_error_in_unknown_marker(self, registry: Registry) -> None:
        result = _single('+nebula:name="unterminated', registry)
        assert result.is_error
        assert result.object.marker_name == UNKNOWN_MARKER
        assert "unmatched string delimiter" in result.object.cause


# ###############
# Streaming
# ###############


class TestStreaming:
    def test_next_item_returns_none_when_done(self, registry: Registry) -> None:
        parser = Parser("+galaxy:planet=earth", registry)
        assert parser.next_item() is not None
        assert parser.next_item() is None
        assert parser.next_item() is None

    def test_iteration(self, registry: Registry) -> None:
        parser = Parser("+galaxy:planet=earth +galaxy:planet=mars", registry)
        assert [result.object.planet for result in parser] == ["earth", "mars"]
