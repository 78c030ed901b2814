# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Unit tests for the predicate table and annotation mapping."""

from __future__ import annotations

import pytest

from pac_annotations_mapper.models import (
    ModelAnnotation,
    ModelPacMetadataAnnotation,
    ModelThing,
)
from pac_annotations_mapper.predicates import (
    PREDICATES,
    map_annotation,
    map_annotations,
)

EXPECTED_PREDICATES = {
    "http://www.ft.com/ontology/classification/isClassifiedBy": "isClassifiedBy",
    "http://www.ft.com/ontology/annotation/hasAuthor": "hasAuthor",
    "http://www.ft.com/ontology/annotation/hasContributor": "hasContributor",
    "http://www.ft.com/ontology/annotation/about": "about",
    "http://www.ft.com/ontology/annotation/hasDisplayTag": "hasDisplayTag",
    "http://www.ft.com/ontology/annotation/mentions": "mentions",
}


def _raw(concept_id: str, predicate: str) -> ModelPacMetadataAnnotation:
    return ModelPacMetadataAnnotation.model_validate(
        {"conceptId": concept_id, "predicate": predicate}
    )


@pytest.mark.unit
class TestPredicateTable:
    """The predicate table is fixed and read-only."""

    def test_has_the_six_known_predicates(self) -> None:
        assert dict(PREDICATES) == EXPECTED_PREDICATES

    def test_cannot_be_mutated(self) -> None:
        with pytest.raises(TypeError):
            PREDICATES["http://example.org/new"] = "new"  # type: ignore[index]


@pytest.mark.unit
class TestMapAnnotation:
    """Single annotation mapping."""

    @pytest.mark.parametrize(("uri", "short"), sorted(EXPECTED_PREDICATES.items()))
    def test_known_predicate_is_mapped(self, uri: str, short: str) -> None:
        result = map_annotation(_raw("concept-1", uri))
        assert result == ModelAnnotation(
            thing=ModelThing(id="concept-1", predicate=short)
        )

    def test_unknown_predicate_returns_none(self) -> None:
        assert map_annotation(_raw("concept-1", "http://unknown/x")) is None

    def test_lookup_is_case_sensitive(self) -> None:
        upper = "http://www.ft.com/ontology/annotation/About"
        assert map_annotation(_raw("concept-1", upper)) is None

    def test_lookup_does_not_strip_whitespace(self) -> None:
        padded = " http://www.ft.com/ontology/annotation/about"
        assert map_annotation(_raw("concept-1", padded)) is None

    def test_custom_table(self) -> None:
        table = {"urn:p": "p"}
        result = map_annotation(_raw("c", "urn:p"), table)
        assert result is not None
        assert result.thing.predicate == "p"


@pytest.mark.unit
class TestMapAnnotations:
    """Mapping a sequence keeps input order and drops unknown predicates."""

    def test_preserves_order_and_splits_unmapped(self) -> None:
        raw = [
            _raw("c1", "http://www.ft.com/ontology/annotation/mentions"),
            _raw("c2", "http://unknown/x"),
            _raw("c3", "http://www.ft.com/ontology/annotation/about"),
            _raw("c4", "http://unknown/y"),
            _raw("c5", "http://www.ft.com/ontology/annotation/hasAuthor"),
        ]

        result = map_annotations(raw)

        assert [a.thing.id for a in result.mapped] == ["c1", "c3", "c5"]
        assert [a.thing.predicate for a in result.mapped] == [
            "mentions",
            "about",
            "hasAuthor",
        ]
        assert [a.concept_id for a in result.unmapped] == ["c2", "c4"]
        assert len(result.mapped) == len(raw) - len(result.unmapped)

    def test_duplicates_are_each_mapped(self) -> None:
        about = "http://www.ft.com/ontology/annotation/about"
        result = map_annotations([_raw("c1", about), _raw("c1", about)])
        assert len(result.mapped) == 2

    def test_empty_input(self) -> None:
        result = map_annotations([])
        assert result.mapped == ()
        assert result.unmapped == ()
