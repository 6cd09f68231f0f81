# Copyright 2026 MarkerScan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for marker discovery in text and YAML documents."""

import logging

import pytest
from pydantic import BaseModel

from markerscan.inspect import InspectionError, Inspector, TransformError, YAMLResult
from markerscan.marker import Registry, define
from markerscan.parser import MarkerParseError
from markerscan.yamldoc import NodeKind

# ###############
# Test Helpers
# ###############


class Galaxy(BaseModel):
    planet: str


@pytest.fixture
def inspector() -> Inspector:
    registry = Registry()
    registry.add(define("+galaxy", Galaxy))
    return Inspector(registry)


def _planets(results: list[YAMLResult]) -> list[str]:
    return [result.object.planet for result in results]


# ###############
# Text
# ###############


class TestInspectText:
    def test_markers_in_source_comments(self, inspector: Inspector) -> None:
        results = inspector.inspect_text("// +galaxy:planet=earth\nfunc main() {}\n// +galaxy:planet=mars\n")
        assert [result.object.planet for result in results] == ["earth", "mars"]

    def test_invalid_marker_raises(self, inspector: Inspector) -> None:
        with pytest.raises(InspectionError, match="incorrect type") as excinfo:
            inspector.inspect_text("// +galaxy:planet=3")
        assert isinstance(excinfo.value.__cause__, MarkerParseError)

    def test_parse_keeps_error_results(self, inspector: Inspector) -> None:
        results = inspector.parse("// +galaxy:planet=3")
        assert len(results) == 1
        assert results[0].is_error


# ###############
# YAML Traversal
# ###############


class TestInspectYAML:
    def test_marker_in_line_comment_carries_key_and_value(self, inspector: Inspector) -> None:
        documents, results = inspector.inspect_yaml("name: value  # +galaxy:planet=earth\n")
        assert _planets(results) == ["earth"]
        key, value = results[0].nodes
        assert key is documents[0].content[0].content[0]
        assert value.value == "value"
        assert results[0].marker_text == "+galaxy:planet=earth"

    def test_head_and_line_comments_of_one_entry(self, inspector: Inspector) -> None:
        _, results = inspector.inspect_yaml("# +galaxy:planet=earth\nname: value  # +galaxy:planet=mars\n")
        assert _planets(results) == ["earth", "mars"]

    def test_nested_mapping_entries(self, inspector: Inspector) -> None:
        text = "spec:\n  # +galaxy:planet=deep\n  replicas: 3\n"
        _, results = inspector.inspect_yaml(text)
        assert _planets(results) == ["deep"]
        key, value = results[0].nodes
        assert key.value == "replicas"
        assert value.value == "3"

    def test_sequence_items(self, inspector: Inspector) -> None:
        _, results = inspector.inspect_yaml("items:\n  - one  # +galaxy:planet=venus\n  - two\n")
        assert _planets(results) == ["venus"]
        assert [node.value for node in results[0].nodes] == ["one"]

    def test_mappings_inside_sequences(self, inspector: Inspector) -> None:
        text = "items:\n  - name: a  # +galaxy:planet=first\n  - name: b  # +galaxy:planet=second\n"
        _, results = inspector.inspect_yaml(text)
        assert _planets(results) == ["first", "second"]

    def test_document_comment(self, inspector: Inspector) -> None:
        _, results = inspector.inspect_yaml("# +galaxy:planet=sun\n\nname: value\n")
        assert _planets(results) == ["sun"]
        assert results[0].nodes[0].kind == NodeKind.DOCUMENT

    def test_document_foot_comment(self, inspector: Inspector) -> None:
        documents, results = inspector.inspect_yaml("name: value\n\n# +galaxy:planet=moon\n")
        assert _planets(results) == ["moon"]
        assert results[0].nodes[0] is documents[0]

    def test_every_marker_in_a_comment_is_found(self, inspector: Inspector) -> None:
        _, results = inspector.inspect_yaml("a: 1  # +galaxy:planet=a +galaxy:planet=b\n")
        assert _planets(results) == ["a", "b"]

    def test_multiple_documents(self, inspector: Inspector) -> None:
        documents, results = inspector.inspect_yaml("a: 1  # +galaxy:planet=x\n---\nb: 2  # +galaxy:planet=y\n")
        assert len(documents) == 2
        assert _planets(results) == ["x", "y"]

    def test_unregistered_markers_are_ignored(self, inspector: Inspector) -> None:
        _, results = inspector.inspect_yaml("a: 1  # +kubebuilder:validation:Optional\n")
        assert results == []

    def test_invalid_marker_raises(self, inspector: Inspector) -> None:
        with pytest.raises(InspectionError) as excinfo:
            inspector.inspect_yaml("a: 1  # +galaxy:planet=3\n")
        assert isinstance(excinfo.value.__cause__, MarkerParseError)

    def test_invalid_yaml_raises(self, inspector: Inspector) -> None:
        with pytest.raises(InspectionError, match="error unmarshaling yaml"):
            inspector.inspect_yaml("a: [1, 2\n")


# ###############
# Transforms
# ###############


class TestTransforms:
    def test_transforms_run_in_order_over_all_results(self, inspector: Inspector) -> None:
        calls: list[tuple[str, int]] = []

        def first(results: list[YAMLResult]) -> None:
            calls.append(("first", len(results)))

        def second(results: list[YAMLResult]) -> None:
            calls.append(("second", len(results)))

        inspector.inspect_yaml("a: 1  # +galaxy:planet=x\nb: 2  # +galaxy:planet=y\n", first, second)
        assert calls == [("first", 2), ("second", 2)]

    def test_transform_may_rewrite_nodes(self, inspector: Inspector) -> None:
        def upper(results: list[YAMLResult]) -> None:
            for result in results:
                result.nodes[-1].value = result.nodes[-1].value.upper()

        documents, _ = inspector.inspect_yaml("name: value  # +galaxy:planet=x\n", upper)
        assert documents[0].content[0].get("name").value == "VALUE"

    def test_transform_failure_aborts(self, inspector: Inspector, caplog: pytest.LogCaptureFixture) -> None:
        def failing(results: list[YAMLResult]) -> None:
            raise TransformError("cannot rewrite")

        with caplog.at_level(logging.WARNING, logger="markerscan.inspect"):
            with pytest.raises(InspectionError, match="cannot rewrite"):
                inspector.inspect_yaml("a: 1  # +galaxy:planet=x\n", failing)
        assert "cannot rewrite" in caplog.text

    def test_transforms_do_not_run_when_a_marker_is_invalid(self, inspector: Inspector) -> None:
        calls: list[int] = []
        with pytest.raises(InspectionError):
            inspector.inspect_yaml("a: 1  # +galaxy:planet=3\n", lambda results: calls.append(len(results)))
        assert calls == []
