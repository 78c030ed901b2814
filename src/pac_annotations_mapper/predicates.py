# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Predicate table and annotation mapping.

Maps full ontology predicate URIs to the short predicate names used by
concept annotations. Lookups are exact, case-sensitive string matches.
Annotations with a predicate outside of the table are not mapped.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import NamedTuple

from pac_annotations_mapper.models import (
    ModelAnnotation,
    ModelPacMetadataAnnotation,
    ModelThing,
)

PREDICATES: Mapping[str, str] = MappingProxyType(
    {
        "http://www.ft.com/ontology/classification/isClassifiedBy": "isClassifiedBy",
        "http://www.ft.com/ontology/annotation/hasAuthor": "hasAuthor",
        "http://www.ft.com/ontology/annotation/hasContributor": "hasContributor",
        "http://www.ft.com/ontology/annotation/about": "about",
        "http://www.ft.com/ontology/annotation/hasDisplayTag": "hasDisplayTag",
        "http://www.ft.com/ontology/annotation/mentions": "mentions",
    }
)


class MappingResult(NamedTuple):
    """Result of mapping a sequence of raw annotations."""

    mapped: tuple[ModelAnnotation, ...]
    unmapped: tuple[ModelPacMetadataAnnotation, ...]


def map_annotation(
    metadata: ModelPacMetadataAnnotation,
    predicates: Mapping[str, str] = PREDICATES,
) -> ModelAnnotation | None:
    """Map one raw annotation, or return None for an unsupported predicate."""
    predicate = predicates.get(metadata.predicate)
    if predicate is None:
        return None
    return ModelAnnotation(thing=ModelThing(id=metadata.concept_id, predicate=predicate))


def map_annotations(
    metadata: Iterable[ModelPacMetadataAnnotation],
    predicates: Mapping[str, str] = PREDICATES,
) -> MappingResult:
    """Map raw annotations in input order.

    Args:
        metadata: Raw annotations from the publish event.
        predicates: Predicate table to look up against.

    Returns:
        MappingResult with the mapped annotations and the raw annotations
        that were dropped, both in input order.
    """
    mapped: list[ModelAnnotation] = []
    unmapped: list[ModelPacMetadataAnnotation] = []
    for item in metadata:
        annotation = map_annotation(item, predicates)
        if annotation is None:
            unmapped.append(item)
        else:
            mapped.append(annotation)
    return MappingResult(mapped=tuple(mapped), unmapped=tuple(unmapped))


__all__ = [
    "MappingResult",
    "PREDICATES",
    "map_annotation",
    "map_annotations",
]
